"""
Token Vending - Demonstration program.

Walks a vending session through the reference scenarios, then races
several threads on a fresh singleton accessor to show that the shared
instance is built exactly once.
"""

import threading
from typing import Any, Final

from .application.command_handler import CommandHandler
from .core.interfaces import NonCopyable
from .core.singleton import SingletonAccessor
from .domain.session_registry import get_session_registry, shutdown_session_registry
from .domain.session_state_machine import SessionMachine
from .infrastructure.settings import get_settings
from .loggers import logger


# =============================================================================
# Constants
# =============================================================================

settings = get_settings()
DEMO_SESSION_ID: Final[str] = settings.demo.session_id


# =============================================================================
# Session Scenarios
# =============================================================================


def run_session_scenarios(machine: SessionMachine, cycles: int) -> None:
    """
    Drive a machine through the reference scenarios.

    Args:
        machine: A machine in AWAITING_INPUT.
        cycles: Number of full purchase cycles to run.
    """
    logger.info("Scenario 1: eject with no token")
    machine.eject_token()

    logger.info("Scenario 2: insert then eject (refund)")
    machine.insert_token()
    machine.eject_token()

    logger.info(f"Scenario 3: full purchase cycle x{cycles}")
    for _ in range(cycles):
        machine.insert_token()
        machine.press_select()
        machine.dispense_output()

    logger.info("Scenario 4: insert while dispensing")
    machine.insert_token()
    machine.press_select()
    machine.insert_token()
    machine.dispense_output()

    logger.info(f"Session summary: {machine.to_dict()}")


def run_command_scenario(handler: CommandHandler, session_id: str) -> list[dict[str, Any]]:
    """
    Run one purchase cycle through the command handler.

    Returns:
        Responses in the order the commands were sent.
    """
    commands = ["insert_token", "press_select", "dispense_output", "session_status"]
    responses = []
    for command_id, command in enumerate(commands, start=1):
        response = handler.execute(
            {"command": command, "command_id": command_id, "data": {"session_id": session_id}}
        )
        logger.info(f"Command {command}: {response['message']}")
        responses.append(response)
    return responses


# =============================================================================
# Singleton Race
# =============================================================================


class DemoResource(NonCopyable):
    """Resource that counts how many times it has been constructed."""

    constructions = 0

    def __init__(self) -> None:
        DemoResource.constructions += 1
        logger.info(f"DemoResource constructed (#{DemoResource.constructions})")

    def close(self) -> None:
        logger.info("DemoResource released")


def race_singleton(threads: int) -> int:
    """
    Call ``get_instance()`` from several threads at once.

    Args:
        threads: Number of racing threads.

    Returns:
        Number of distinct instances observed (1 when the guard holds).
    """
    accessor = SingletonAccessor(DemoResource, name="demo_resource")
    barrier = threading.Barrier(threads)
    seen: list[DemoResource] = []
    seen_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        instance = accessor.get_instance()
        with seen_lock:
            seen.append(instance)

    workers = [threading.Thread(target=worker, name=f"racer-{i}") for i in range(threads)]
    for worker_thread in workers:
        worker_thread.start()
    for worker_thread in workers:
        worker_thread.join()

    distinct = len({id(instance) for instance in seen})
    logger.info(
        f"{threads} threads raced, {distinct} distinct instance(s), "
        f"{accessor.generation} construction(s)"
    )
    accessor.shutdown()
    return distinct


# =============================================================================
# Main Entry Point
# =============================================================================


def main() -> None:
    """Run the demonstration."""
    registry = get_session_registry()

    machine = registry.open(DEMO_SESSION_ID)
    run_session_scenarios(machine, settings.demo.happy_path_cycles)

    command_session = registry.open()
    run_command_scenario(CommandHandler(registry), command_session.session_id)

    race_singleton(settings.demo.racing_threads)

    shutdown_session_registry()


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Demo stopped by user")
