"""
Capability Probe

Checks whether an OS-level capability (screen recording) is granted. The
wizard only ever runs this as a detached, best-effort check whose result sets
a flag for the recorder; it never changes the wizard flow.
"""

import asyncio
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from dayflow_onboarding.wizard.exceptions import CapabilityUnavailableError
from dayflow_onboarding.wizard.logging_config import get_logger


logger = get_logger("capability")


@dataclass
class AppState:
    """Volatile application flags. Not persisted."""
    recording: bool = False


class CapabilityProbe(ABC):
    """Checks access to a capability."""

    name: str = "capability"

    @abstractmethod
    def preflight(self) -> bool:
        """Cheap synchronous check. True if access already looks granted."""

    @abstractmethod
    async def confirm(self):
        """Confirm access, possibly prompting the user.

        Raises:
            CapabilityUnavailableError: If access is not granted
        """


class StaticCapabilityProbe(CapabilityProbe):
    """Probe with fixed answers, for terminals without a capture backend and for tests."""

    def __init__(
        self,
        preflight_result: bool = False,
        confirm_error: Optional[Exception] = None,
        name: str = "screen recording",
        delay: float = 0.0
    ):
        self.preflight_result = preflight_result
        self.confirm_error = confirm_error
        self.name = name
        self.delay = delay
        self.confirm_calls = 0

    def preflight(self) -> bool:
        return self.preflight_result

    async def confirm(self):
        self.confirm_calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.confirm_error is not None:
            raise self.confirm_error
        if not self.preflight_result:
            raise CapabilityUnavailableError(
                f"{self.name.capitalize()} access not granted",
                capability=self.name
            )


async def _confirm_and_flag(probe: CapabilityProbe, app_state: AppState):
    try:
        await probe.confirm()
    except Exception as e:
        # Access is picked up again on the next app launch
        logger.debug("%s not confirmed, will retry after restart: %s", probe.name, e)
        return
    app_state.recording = True
    logger.info("%s confirmed, recording enabled", probe.name)


def spawn_capability_check(
    probe: CapabilityProbe,
    app_state: AppState
) -> Optional[Union[asyncio.Task, threading.Thread]]:
    """Start a detached capability check and return its handle.

    Nothing is spawned unless ``probe.preflight()`` passes. The check runs on
    the current event loop when one is running, otherwise on a daemon thread.
    There is no cancellation and no retry.

    Returns:
        The task or thread running the check, or None if nothing was spawned
    """
    try:
        if not probe.preflight():
            logger.debug("%s preflight failed, skipping check", probe.name)
            return None
    except Exception as e:
        logger.debug("%s preflight raised: %s", probe.name, e)
        return None

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        loop = None

    if loop is not None:
        return loop.create_task(_confirm_and_flag(probe, app_state))

    thread = threading.Thread(
        target=asyncio.run,
        args=(_confirm_and_flag(probe, app_state),),
        name=f"capability-check-{probe.name}",
        daemon=True,
    )
    thread.start()
    return thread
