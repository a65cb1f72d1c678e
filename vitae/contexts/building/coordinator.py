"""
Build Coordinator

Rebuild-coalescing guard for watch mode. Rapid change events never run the
pipeline twice in parallel; triggers that arrive during a run collapse into a
single follow-up run.

    IDLE --trigger--> RUNNING --trigger--> RUNNING_WITH_PENDING
    RUNNING --done--> IDLE
    RUNNING_WITH_PENDING --done--> IDLE, then trigger() after debounce_s

Every method must be called on the event loop thread.
"""

import asyncio
import os
from enum import Enum
from typing import Awaitable, Callable, Optional

from dotenv import load_dotenv

from vitae.contexts.building.logger import _log_debug, _log_error, _log_info

load_dotenv()
BUILD_DEBOUNCE_S = float(os.getenv("BUILD_DEBOUNCE_S", "0.1"))


class BuildState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    RUNNING_WITH_PENDING = "running_with_pending"


class BuildCoordinator:
    """
    Serializes pipeline runs and coalesces triggers.

    Args:
        pipeline: Zero-argument coroutine function running one full build
        debounce_s: Delay before the automatic follow-up run
    """

    def __init__(
        self,
        pipeline: Callable[[], Awaitable[object]],
        debounce_s: float = BUILD_DEBOUNCE_S,
    ):
        self.pipeline = pipeline
        self.debounce_s = debounce_s

        self.build_in_flight = False
        self.pending_build = False

        self.runs_started = 0
        self.runs_failed = 0
        self.last_error: Optional[BaseException] = None

        self._task: Optional[asyncio.Task] = None
        self._follow_up: Optional[asyncio.TimerHandle] = None
        self._idle = asyncio.Event()
        self._idle.set()

    @property
    def state(self) -> BuildState:
        if not self.build_in_flight:
            return BuildState.IDLE
        if self.pending_build:
            return BuildState.RUNNING_WITH_PENDING
        return BuildState.RUNNING

    def trigger(self) -> bool:
        """
        Request a build.

        Returns:
            True if this call started a run, False if it was coalesced into
            the pending follow-up
        """
        if self.build_in_flight:
            if not self.pending_build:
                _log_debug("Build in progress, queueing one follow-up build")
            self.pending_build = True
            return False

        loop = asyncio.get_running_loop()
        self.build_in_flight = True
        self.runs_started += 1
        self._idle.clear()
        self._task = loop.create_task(self._run())
        return True

    async def _run(self) -> None:
        try:
            await self.pipeline()
        except Exception as e:
            self.runs_failed += 1
            self.last_error = e
            _log_error(f"Build run {self.runs_started} failed: {type(e).__name__}: {e}")
        finally:
            self.build_in_flight = False
            if self.pending_build:
                self.pending_build = False
                # One scheduled follow-up covers every pending trigger
                if self._follow_up is None:
                    _log_info(f"Changes arrived during build, rebuilding in {self.debounce_s}s")
                    self._follow_up = asyncio.get_running_loop().call_later(
                        self.debounce_s, self._fire_follow_up
                    )
            elif self._follow_up is None:
                self._idle.set()

    def _fire_follow_up(self) -> None:
        self._follow_up = None
        self.trigger()

    async def wait_until_idle(self) -> None:
        """Wait until no run is in flight and no follow-up is scheduled."""
        while True:
            await self._idle.wait()
            if not self.build_in_flight and self._follow_up is None:
                return
            self._idle.clear()

    def cancel_follow_up(self) -> None:
        """Drop a scheduled follow-up run (used on shutdown)."""
        if self._follow_up is not None:
            self._follow_up.cancel()
            self._follow_up = None
            if not self.build_in_flight:
                self._idle.set()
