"""Tests for ``todo-mcp relay``."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from todo_mcp.cli import main
from todo_mcp.store.models import TodoRecord
from todo_mcp.ui import render_embedded, tool_action

URL = "ws://127.0.0.1:8080/mcp"


def _mock_client(mock_client_cls: MagicMock, result: dict[str, Any] | None = None) -> MagicMock:
    mock_instance = mock_client_cls.return_value
    mock_instance.__aenter__ = AsyncMock(return_value=mock_instance)
    mock_instance.__aexit__ = AsyncMock(return_value=False)
    mock_instance.call_tool = AsyncMock(return_value=result or {})
    return mock_instance


class TestRelayCommand:
    def test_tool_action_replaces(self, tmp_path: Path) -> None:
        record = TodoRecord(id="1", title="Buy milk")
        payload = {"todos": [record.to_wire()], "ui": render_embedded([record]).to_wire()}
        out = tmp_path / "ui.html"
        action = json.dumps(tool_action("todo_list").to_wire())

        with patch("todo_mcp.protocols.mcp.client.MCPClient") as mock_client_cls:
            client = _mock_client(mock_client_cls, payload)
            result = CliRunner().invoke(main, ["relay", URL, action, "--ui-out", str(out)])

        assert result.exit_code == 0
        assert "replaced" in result.output
        client.call_tool.assert_awaited_once_with("todo_list", {})
        assert "Buy milk" in out.read_text(encoding="utf-8")

    def test_notify_action(self) -> None:
        action = json.dumps({"type": "notify", "payload": {"message": "Title is required"}})

        with patch("todo_mcp.protocols.mcp.client.MCPClient") as mock_client_cls:
            client = _mock_client(mock_client_cls)
            result = CliRunner().invoke(main, ["relay", URL, action])

        assert result.exit_code == 0
        assert "notified" in result.output
        assert "Title is required" in result.output
        client.call_tool.assert_not_awaited()

    def test_unknown_action(self) -> None:
        with patch("todo_mcp.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls)
            result = CliRunner().invoke(main, ["relay", URL, "not json"])

        assert result.exit_code == 0
        assert "diagnostic" in result.output

    def test_connection_error(self) -> None:
        with patch("todo_mcp.protocols.mcp.client.MCPClient") as mock_client_cls:
            _mock_client(mock_client_cls).__aenter__ = AsyncMock(side_effect=OSError("refused"))
            result = CliRunner().invoke(main, ["relay", URL, "{}"])

        assert result.exit_code == 1
        assert "Connection error" in result.output
