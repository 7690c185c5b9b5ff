"""
Unit tests for command routing.
"""

import pytest

from token_vending.application.command_handler import (
    CommandHandler,
    CommandResponse,
    execute_session_command,
)
from token_vending.domain.session_registry import get_session_registry


def command(name, command_id=1, **data):
    """Build a command dictionary."""
    return {"command": name, "command_id": command_id, "data": data}


class TestCommandResponse:
    """Tests for CommandResponse."""

    def test_defaults(self):
        """Test a default response is unsuccessful."""
        assert CommandResponse(command_id=7).to_dict() == {
            "command_id": 7,
            "success": False,
            "message": None,
            "data": None,
        }


class TestCommandHandler:
    """Tests for CommandHandler."""

    @pytest.fixture
    def handler(self, registry):
        """Create a handler over a fresh registry."""
        return CommandHandler(registry)

    def test_available_commands(self, handler):
        """Test every event is exposed as a command."""
        names = {cmd["name"] for cmd in handler.get_available_commands()}
        assert {
            "open_session",
            "close_session",
            "session_status",
            "list_sessions",
            "insert_token",
            "eject_token",
            "press_select",
            "dispense_output",
        } <= names

    def test_unknown_command(self, handler):
        """Test unknown commands give an unsuccessful response."""
        response = handler.execute(command("kick_machine", command_id=3))
        assert response["success"] is False
        assert response["command_id"] == 3
        assert "Unknown command" in response["message"]

    def test_missing_arguments(self, handler):
        """Test missing required arguments are reported."""
        response = handler.execute(command("insert_token"))
        assert response["success"] is False
        assert "session_id" in response["message"]

    def test_open_session_with_id(self, handler, registry):
        """Test opening a session with an explicit id."""
        response = handler.execute(command("open_session", session_id="kiosk-1"))
        assert response["success"] is True
        assert response["data"]["state"] == "awaiting_input"
        assert "kiosk-1" in registry

    def test_open_session_generates_id(self, handler, registry):
        """Test opening a session without an id generates one."""
        response = handler.execute({"command": "open_session"})
        session_id = response["data"]["session_id"]
        assert response["success"] is True
        assert session_id in registry

    def test_open_duplicate_session(self, handler):
        """Test opening an already open session fails."""
        handler.execute(command("open_session", session_id="dup"))
        response = handler.execute(command("open_session", session_id="dup"))
        assert response["success"] is False
        assert response["data"]["error"] == "SessionExistsError"

    def test_event_on_unknown_session(self, handler):
        """Test events for unknown sessions fail cleanly."""
        response = handler.execute(command("insert_token", session_id="ghost"))
        assert response["success"] is False
        assert response["data"]["error"] == "UnknownSessionError"
        assert response["data"]["details"]["session_id"] == "ghost"

    def test_purchase_cycle(self, handler):
        """Test a full purchase cycle through commands."""
        handler.execute(command("open_session", session_id="s1"))

        states = []
        for name in ["insert_token", "press_select", "dispense_output"]:
            response = handler.execute(command(name, session_id="s1"))
            assert response["success"] is True
            assert response["data"]["effect"]["accepted"] is True
            states.append(response["data"]["state"])

        assert states == ["awaiting_selection", "dispensing", "awaiting_input"]

    def test_rejected_event_is_successful_command(self, handler):
        """Test a rejected event still executes successfully."""
        handler.execute(command("open_session", session_id="s1"))
        response = handler.execute(command("eject_token", session_id="s1"))

        assert response["success"] is True
        assert response["message"] == "No token to eject"
        assert response["data"]["effect"]["accepted"] is False
        assert response["data"]["effect"]["effect"] == "nothing_to_eject"

    def test_status_and_list(self, handler):
        """Test status and list commands."""
        handler.execute(command("open_session", session_id="a"))
        handler.execute(command("open_session", session_id="b"))
        handler.execute(command("insert_token", session_id="a"))

        status = handler.execute(command("session_status", session_id="a"))
        assert status["message"] == "awaiting_selection"
        assert status["data"]["tokens_accepted"] == 1

        listing = handler.execute(command("list_sessions"))
        assert sorted(listing["data"]) == ["a", "b"]

    def test_close_session(self, handler, registry):
        """Test closing a session removes it."""
        handler.execute(command("open_session", session_id="a"))
        response = handler.execute(command("close_session", session_id="a"))
        assert response["success"] is True
        assert "a" not in registry

        response = handler.execute(command("close_session", session_id="a"))
        assert response["success"] is False


class TestExecuteSessionCommand:
    """Tests for the module-level entry point."""

    def test_uses_shared_registry(self, shared_registry):
        """Test commands default to the process-wide registry."""
        response = execute_session_command(command("open_session", session_id="shared"))
        assert response["success"] is True
        assert "shared" in get_session_registry()
