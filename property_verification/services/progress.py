"""Simulated progress for the verification request.

The verification endpoint answers a single multipart POST and emits no
progress events. SimulatedProgress is a local, timer-driven value that creeps
toward CEILING while the request is in flight and only reaches 100 when
complete() is called on the real response. It is a UX device, not a
progress protocol.
"""

import asyncio
import contextlib
import random

CEILING = 90.0
COMPLETE = 100.0


class SimulatedProgress:
    """Timer-driven progress value clamped below completion."""

    def __init__(
        self,
        interval: float = 0.3,
        max_step: float = 15.0,
        rng: random.Random | None = None,
    ) -> None:
        """
        Initialize the progress simulator.

        Args:
            interval (float): Seconds between ticks.
            max_step (float): Largest random increment per tick.
            rng (random.Random | None): Random source, injectable for tests.
        """
        self.interval = interval
        self.max_step = max_step
        self._rng = rng or random.Random()
        self._value = 0.0
        self._task: asyncio.Task[None] | None = None

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> float:
        """
        Advance the value by a random step, never past CEILING.

        Returns:
            float: The new value.
        """
        if self._value < CEILING:
            self._value = min(CEILING, self._value + self._rng.uniform(0, self.max_step))
        return self._value

    async def _run(self) -> None:
        while self._value < CEILING:
            await asyncio.sleep(self.interval)
            self.tick()

    def start(self) -> None:
        """Reset to zero and start ticking on the running loop."""
        self._value = 0.0
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop ticking, keeping the current value."""
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def complete(self) -> None:
        """Stop ticking and jump to 100 once the real response has arrived."""
        await self.stop()
        self._value = COMPLETE
