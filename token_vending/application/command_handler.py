"""
Command Handler - Routes session commands to the session registry.

Provides clean command routing with validation and error handling.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..core.exceptions import CommandError, VendingError
from ..core.value_objects import SessionEvent
from ..domain.session_registry import SessionRegistry, get_session_registry
from ..loggers import logger


# Type alias for command handlers
CommandHandlerFunc = Callable[..., dict[str, Any]]


@dataclass
class CommandResponse:
    """
    Standardized response for command execution.

    Attributes:
        command_id: The ID of the executed command.
        success: Whether the command succeeded.
        message: Human-readable message.
        data: Optional response data.
    """

    command_id: Optional[int] = None
    success: bool = False
    message: Optional[str] = None
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Convert the response to a dictionary."""
        return {
            "command_id": self.command_id,
            "success": self.success,
            "message": self.message,
            "data": self.data,
        }


@dataclass
class CommandDefinition:
    """
    Definition of a command.

    Attributes:
        name: Command name.
        handler: Handler function.
        required_args: List of required argument names.
        optional_args: List of argument names passed only when present.
        description: Human-readable description.
    """

    name: str
    handler: CommandHandlerFunc
    required_args: list[str]
    optional_args: list[str] = field(default_factory=list)
    description: str = ""


class CommandHandler:
    """
    Routes commands to their appropriate handlers.

    Session events are accepted or rejected by the session's machine; a
    rejected event is still a successful command whose effect reports
    ``accepted: False``.
    """

    def __init__(self, registry: Optional[SessionRegistry] = None) -> None:
        """
        Initialize the command handler.

        Args:
            registry: Session registry, defaults to the process-wide one.
        """
        self._registry = registry if registry is not None else get_session_registry()
        self._commands: dict[str, CommandDefinition] = {}
        self._register_default_commands()

    def _register_default_commands(self) -> None:
        """Register all default command handlers."""
        # Session lifecycle
        self.register(
            "open_session",
            self.open_session,
            [],
            "Open a new vending session",
            optional_args=["session_id"],
        )
        self.register(
            "close_session",
            self.close_session,
            ["session_id"],
            "Close a vending session",
        )
        self.register(
            "session_status",
            self.session_status,
            ["session_id"],
            "Get session state and counters",
        )
        self.register(
            "list_sessions",
            self.list_sessions,
            [],
            "List open sessions",
        )

        # Session events
        for event in SessionEvent:
            self.register(
                event.value,
                self._event_handler(event),
                ["session_id"],
                f"Send '{event.value}' to a session",
            )

    def register(
        self,
        command_name: str,
        handler: CommandHandlerFunc,
        required_args: list[str],
        description: str = "",
        optional_args: Optional[list[str]] = None,
    ) -> None:
        """
        Register a command handler.

        Args:
            command_name: The name of the command.
            handler: The handler function.
            required_args: List of required argument names.
            description: Human-readable description.
            optional_args: Argument names passed only when present.
        """
        self._commands[command_name] = CommandDefinition(
            name=command_name,
            handler=handler,
            required_args=required_args,
            optional_args=optional_args or [],
            description=description,
        )

    def get_available_commands(self) -> list[dict[str, Any]]:
        """Get list of available commands with their descriptions."""
        return [
            {
                "name": cmd.name,
                "required_args": cmd.required_args,
                "description": cmd.description,
            }
            for cmd in self._commands.values()
        ]

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------

    def open_session(self, session_id: Optional[str] = None) -> dict[str, Any]:
        machine = self._registry.open(session_id)
        return {
            "success": True,
            "message": f"Session opened: {machine.session_id}",
            "data": machine.to_dict(),
        }

    def close_session(self, session_id: str) -> dict[str, Any]:
        machine = self._registry.close_session(session_id)
        return {
            "success": True,
            "message": f"Session closed: {session_id}",
            "data": machine.to_dict(),
        }

    def session_status(self, session_id: str) -> dict[str, Any]:
        machine = self._registry.get(session_id)
        return {
            "success": True,
            "message": machine.state.value,
            "data": machine.to_dict(),
        }

    def list_sessions(self) -> dict[str, Any]:
        session_ids = self._registry.session_ids()
        return {
            "success": True,
            "message": f"{len(session_ids)} open sessions",
            "data": session_ids,
        }

    def _event_handler(self, event: SessionEvent) -> CommandHandlerFunc:
        """Build a handler that sends ``event`` to a session."""

        def handler(session_id: str) -> dict[str, Any]:
            machine = self._registry.get(session_id)
            effect = machine.handle(event)
            return {
                "success": True,
                "message": effect.message,
                "data": {
                    "session_id": session_id,
                    "state": machine.state.value,
                    "effect": effect.to_dict(),
                },
            }

        return handler

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _resolve(
        self,
        command: Optional[str],
        data: dict[str, Any],
    ) -> tuple[CommandDefinition, dict[str, Any]]:
        """
        Find a command and collect its arguments.

        Raises:
            CommandError: If the command is unknown or arguments are missing.
        """
        definition = self._commands.get(command) if command else None
        if definition is None:
            raise CommandError(f"Unknown command: {command}")

        kwargs = {arg: data.get(arg) for arg in definition.required_args}
        missing = [arg for arg in definition.required_args if kwargs.get(arg) is None]
        if missing:
            raise CommandError(
                f"Missing required arguments: {missing}",
                details={"missing": missing},
            )

        for arg in definition.optional_args:
            if data.get(arg) is not None:
                kwargs[arg] = data[arg]

        return definition, kwargs

    def execute(self, command_data: dict[str, Any]) -> dict[str, Any]:
        """
        Execute a command based on command data.

        Args:
            command_data: Dictionary containing 'command', 'command_id', and 'data'.

        Returns:
            Response dictionary with execution result.
        """
        command = command_data.get("command")
        command_id = command_data.get("command_id")
        data = command_data.get("data", {}) or {}

        response = CommandResponse(command_id=command_id)

        try:
            definition, kwargs = self._resolve(command, data)
            result = definition.handler(**kwargs)

            response.success = result.get("success", False)
            response.message = result.get("message")
            response.data = result.get("data")

        except VendingError as e:
            logger.warning(f"Command '{command}' failed: {e.message}")
            response.success = False
            response.message = e.message
            response.data = e.to_dict()
        except Exception as e:
            logger.error(f"Error executing command '{command}': {e}")
            response.success = False
            response.message = f"Error: {e}"

        return response.to_dict()


def execute_session_command(
    command_data: dict[str, Any],
    registry: Optional[SessionRegistry] = None,
) -> dict[str, Any]:
    """
    Execute a command against a session registry.

    Args:
        command_data: Dictionary containing command name, ID, and data.
        registry: Session registry, defaults to the process-wide one.

    Returns:
        Response dictionary with execution result.
    """
    handler = CommandHandler(registry)
    return handler.execute(command_data)
