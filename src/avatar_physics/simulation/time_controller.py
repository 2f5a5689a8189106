"""Time controller turning frame timestamps into simulation steps."""

from typing import Callable, Optional

from avatar_physics.core.constants import DEFAULT_TIME_STEP, MAX_FRAME_DELTA


class TimeController:
    """Controls time progression for the simulation loop.

    Converts wall-clock frame timestamps into step sizes and tracks the
    accumulated simulation time. Large pauses between frames are clamped
    to ``max_delta`` so a stalled caller cannot produce a huge step.

    Attributes:
        time_step: Fixed step size in seconds
        max_delta: Upper bound for frame deltas in seconds
    """

    def __init__(
        self,
        time_step: float = DEFAULT_TIME_STEP,
        max_delta: float = MAX_FRAME_DELTA,
    ):
        """Initialize time controller.

        Args:
            time_step: Fixed step size in seconds
            max_delta: Upper bound for frame deltas in seconds
        """
        self.time_step = time_step
        self.max_delta = max_delta
        self._current_time = 0.0
        self._paused = False
        self._last_frame: Optional[float] = None

        self._on_time_tick: Optional[Callable[[float], None]] = None

    @property
    def current_time(self) -> float:
        """Accumulated simulation time in seconds."""
        return self._current_time

    @property
    def paused(self) -> bool:
        """Whether simulation is paused."""
        return self._paused

    def set_time(self, time: float) -> None:
        """Set current time.

        Args:
            time: New time value in seconds
        """
        self._current_time = max(0.0, time)

    def pause(self) -> None:
        """Pause simulation."""
        self._paused = True

    def resume(self) -> None:
        """Resume simulation."""
        self._paused = False

    def toggle_pause(self) -> bool:
        """Toggle pause state.

        Returns:
            New pause state
        """
        self._paused = not self._paused
        return self._paused

    def frame_delta(self, timestamp: float) -> float:
        """Step size for a frame arriving at ``timestamp``.

        The first frame after construction or ``reset`` yields 0. Later
        frames yield the time since the previous frame, clamped to
        ``max_delta``. A paused controller yields 0 but still records the
        timestamp.

        Args:
            timestamp: Wall-clock frame time in seconds

        Returns:
            Step size in seconds
        """
        last = self._last_frame
        self._last_frame = timestamp

        if last is None or self._paused:
            return 0.0
        return min(max(0.0, timestamp - last), self.max_delta)

    def tick(self, dt: Optional[float] = None) -> float:
        """Advance time by one step.

        Args:
            dt: Step size (``time_step`` if None)

        Returns:
            New current time
        """
        if not self._paused:
            self._current_time += self.time_step if dt is None else dt

            if self._on_time_tick:
                self._on_time_tick(self._current_time)

        return self._current_time

    def reset(self) -> None:
        """Reset time to zero and forget the last frame timestamp."""
        self._current_time = 0.0
        self._last_frame = None

    def set_time_tick_callback(self, callback: Optional[Callable[[float], None]]) -> None:
        """Set callback for time ticks.

        Args:
            callback: Function called on each tick with current time
        """
        self._on_time_tick = callback
