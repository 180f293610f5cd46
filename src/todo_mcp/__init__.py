"""todo-mcp — a tool-invocation server whose results render their own UI."""

from __future__ import annotations

__version__ = "0.1.0"
