from .code_review import code_review_agent
from .deployment import deployment_agent

__all__ = ["code_review_agent", "deployment_agent"]
