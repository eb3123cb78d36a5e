"""Tool layer: registry, descriptors, and the proxy invoker."""

from mdproxy.tools.invoker import ToolInvoker
from mdproxy.tools.models import ToolDescriptor, ToolParam, ToolRoute
from mdproxy.tools.registry import ToolRegistry, build_routes

__all__ = [
    "ToolDescriptor",
    "ToolInvoker",
    "ToolParam",
    "ToolRegistry",
    "ToolRoute",
    "build_routes",
]
