"""
HTTP fetch helper.

http_fetch() is the only place that talks HTTP. It distinguishes two kinds of
failure:

  - an HTTP error response (status known)   -> AppError("HTTP_ERROR", status)
  - anything else: timeout, transport, JSON -> AppError("HTTP_ERROR", status_code=None)

The timeout is enforced by cancelling the in-flight request from a timer;
the timer is always cancelled once the request settles.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from typing import Any

import httpx

from .errors import AppError

DEFAULT_TIMEOUT_MS = 30000


@dataclass
class HttpResponse:
    data: Any
    status: int
    headers: dict[str, str] = field(default_factory=dict)


async def http_fetch(
    url: str,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    body: Any = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    client: httpx.AsyncClient | None = None,
) -> HttpResponse:
    """
    Send a JSON request and decode the JSON response.

    Args:
        url: Absolute URL (or a path relative to the client's base_url).
        method: HTTP verb.
        headers: Extra headers; merged over the JSON content type.
        body: JSON-serializable request body, sent only when not None.
        timeout_ms: Hard deadline for the whole request.
        client: Optional AsyncClient to send with. It is not closed.

    Raises:
        AppError: code "HTTP_ERROR"; status_code is the response status for
            non-2xx responses and None for every other failure.
    """
    request_headers = {"Content-Type": "application/json", **(headers or {})}
    content = json.dumps(body) if body is not None else None

    loop = asyncio.get_running_loop()
    request = asyncio.ensure_future(
        _send(client, method.upper(), url, request_headers, content)
    )
    timed_out = False

    def _abort() -> None:
        nonlocal timed_out
        if not request.done():
            timed_out = True
            request.cancel()

    timer = loop.call_later(timeout_ms / 1000, _abort)
    try:
        response = await request
    except asyncio.CancelledError:
        if timed_out:
            raise AppError(
                f"HTTP request failed: timed out after {timeout_ms}ms",
                "HTTP_ERROR",
                status_code=None,
            )
        request.cancel()
        raise
    except AppError:
        raise
    except Exception as e:
        raise AppError(f"HTTP request failed: {e}", "HTTP_ERROR", status_code=None) from e
    finally:
        timer.cancel()

    if not response.is_success:
        raise AppError(
            f"HTTP request failed: {response.reason_phrase}",
            "HTTP_ERROR",
            response.status_code,
        )

    try:
        data = response.json() if response.content else None
    except ValueError as e:
        raise AppError(f"HTTP request failed: {e}", "HTTP_ERROR", status_code=None) from e

    return HttpResponse(
        data=data,
        status=response.status_code,
        headers=dict(response.headers),
    )


async def _send(
    client: httpx.AsyncClient | None,
    method: str,
    url: str,
    headers: dict[str, str],
    content: str | None,
) -> httpx.Response:
    if client is not None:
        response = await client.request(method, url, headers=headers, content=content)
        await response.aread()
        return response

    async with httpx.AsyncClient() as owned:
        response = await owned.request(method, url, headers=headers, content=content)
        await response.aread()
        return response
