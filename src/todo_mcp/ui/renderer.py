"""Dashboard renderer — record snapshot in, self-contained HTML document out.

:func:`render_dashboard` is a pure function of the snapshot: no I/O, no
clock, no store access, so the same records always give the same bytes.
The records are embedded twice: as autoescaped markup for display, and as
JSON inside ``<script type="application/json" id="todos-data">`` for the
page script.  The JSON goes through Jinja2's ``tojson`` filter, which
escapes ``<``, ``>``, ``&`` and ``'`` so a title such as ``</script>``
cannot terminate the block.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Sequence
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from todo_mcp.protocols.errors import RenderError
from todo_mcp.protocols.mcp.models import EmbeddedResource, UIResource

if TYPE_CHECKING:
    from todo_mcp.store.models import TodoRecord

DASHBOARD_URI = "ui://todo/dashboard"
DASHBOARD_TEMPLATE = "dashboard.html"
TEMPLATES_DIR = Path(__file__).parent / "templates"

_SNAPSHOT_RE = re.compile(
    r'<script type="application/json" id="todos-data">(?P<data>.*?)</script>',
    re.DOTALL,
)


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_dashboard(
    records: Sequence[TodoRecord],
    *,
    tools: Mapping[str, str] | None = None,
) -> UIResource:
    """Render *records* into the dashboard :class:`UIResource`.

    *tools* maps the dashboard's actions (``create``, ``list``, ``update``,
    ``delete``) to tool names; it defaults to the built-in todo tools.

    Raises:
        RenderError: If the snapshot cannot be serialised or the template fails.
    """
    if tools is None:
        from todo_mcp.tools.contracts import TOOL_NAMES

        tools = TOOL_NAMES

    todos = [record.to_wire() for record in records]
    try:
        text = _environment().get_template(DASHBOARD_TEMPLATE).render(
            todos=todos,
            done_count=sum(1 for todo in todos if todo["completed"]),
            tools=dict(tools),
        )
    except (TypeError, ValueError, TemplateError) as exc:
        raise RenderError(str(exc)) from exc
    return UIResource(uri=DASHBOARD_URI, mime_type="text/html", text=text)


def render_embedded(
    records: Sequence[TodoRecord],
    *,
    tools: Mapping[str, str] | None = None,
) -> EmbeddedResource:
    """Render and wrap as ``{"type": "resource", "resource": {...}}``."""
    return EmbeddedResource(resource=render_dashboard(records, tools=tools))


def read_snapshot(resource: UIResource | str) -> list[dict[str, Any]]:
    """Extract the embedded record list from a rendered dashboard.

    Raises:
        ValueError: If the document has no snapshot block.
    """
    text = resource if isinstance(resource, str) else resource.text
    match = _SNAPSHOT_RE.search(text)
    if match is None:
        msg = "Document has no embedded todos-data block"
        raise ValueError(msg)
    data: list[dict[str, Any]] = json.loads(match.group("data"))
    return data
