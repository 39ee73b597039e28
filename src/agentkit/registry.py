"""
Tool Registry.

Maps namespaced keys ("github:get_pr") to zero-argument loaders. A loader is
only called when an agent asks for the tool, so tool modules that are never
used are never imported.

    registry = ToolRegistry("github")
    registry.register_lazy("github:get_pr", "agentkit.tools.github.pulls:get_pr_tool")
    tool = registry.get("github:get_pr")
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Iterator

from langchain_core.tools import BaseTool

from .tools.base import describe_tool

logger = logging.getLogger(__name__)

ToolLoader = Callable[[], BaseTool]


def import_loader(target: str, *args: Any) -> ToolLoader:
    """
    Build a loader for "package.module:attribute".

    The attribute may be a tool instance or a factory, called with args.
    """
    module_path, sep, attr = target.partition(":")
    if not sep or not module_path or not attr:
        raise ValueError(f"Loader target must look like 'module:attribute', got {target!r}")

    def _load() -> BaseTool:
        module = importlib.import_module(module_path)
        obj = getattr(module, attr)
        return obj if isinstance(obj, BaseTool) else obj(*args)

    return _load


class ToolRegistry:
    """
    Lazily-resolved catalog of tools for one domain (or a merge of several).

    With cache=True (the default) each loader runs at most once; with
    cache=False every get() re-runs the loader.
    """

    def __init__(self, name: str = "tools", cache: bool = True):
        self.name = name
        self.cache = cache
        self._loaders: dict[str, ToolLoader] = {}
        self._resolved: dict[str, BaseTool] = {}

    def register(self, key: str, loader: ToolLoader) -> None:
        if ":" not in key:
            raise ValueError(f"Tool key must be namespaced as 'domain:action', got {key!r}")
        if key in self._loaders:
            raise ValueError(f"Tool already registered in {self.name}: {key}")
        self._loaders[key] = loader
        logger.debug(f"Registered tool: {key} ({self.name})")

    def register_lazy(self, key: str, target: str, *args: Any) -> None:
        self.register(key, import_loader(target, *args))

    def get(self, key: str) -> BaseTool:
        if key not in self._loaders:
            raise KeyError(f"Tool '{key}' not found in {self.name}. Available: {self.keys()}")

        if self.cache and key in self._resolved:
            return self._resolved[key]

        tool = self._loaders[key]()
        if not isinstance(tool, BaseTool):
            raise TypeError(f"Loader for {key} returned {type(tool).__name__}, expected a tool")

        if self.cache:
            self._resolved[key] = tool
        logger.debug(f"Resolved tool: {key}")
        return tool

    def resolve(self, keys: list[str]) -> tuple[dict[str, BaseTool], list[str]]:
        """
        Resolve several keys at once.

        Returns: (resolved tools by key, missing keys)
        """
        resolved: dict[str, BaseTool] = {}
        missing: list[str] = []
        for key in keys:
            if key in self._loaders:
                resolved[key] = self.get(key)
            else:
                missing.append(key)
        return resolved, missing

    def is_loaded(self, key: str) -> bool:
        return key in self._resolved

    def keys(self) -> list[str]:
        return list(self._loaders.keys())

    def describe(self) -> str:
        """Prompt text describing every tool in the registry (resolves them all)."""
        return "\n\n".join(describe_tool(self.get(key)) for key in self.keys())

    @classmethod
    def merge(cls, *registries: ToolRegistry, name: str = "merged", cache: bool = True) -> ToolRegistry:
        """
        Combine registries into a new one sharing their loaders.

        Raises ValueError if two registries define the same key.
        """
        merged = cls(name, cache=cache)
        for registry in registries:
            for key, loader in registry._loaders.items():
                merged.register(key, loader)
        return merged

    def __contains__(self, key: object) -> bool:
        return key in self._loaders

    def __iter__(self) -> Iterator[str]:
        return iter(self._loaders)

    def __len__(self) -> int:
        return len(self._loaders)

    @property
    def count(self) -> int:
        return len(self._loaders)
