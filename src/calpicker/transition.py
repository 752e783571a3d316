"""Window transition state machine.

When the reference date changes, the visible window either snaps to the new
bounds or expands to the union of the old and new bounds while a slide
animation plays. After the settle delay the window is pruned down to the
target. Nothing rendered before or after the transition is unmounted during
it.

The state is an immutable WindowState and every transition goes through the
pure ``reduce`` function. WindowTransitionEngine owns the state and the
settle timer.
"""

import threading
from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Callable

from calpicker.bounds import DAYS_PER_WEEK, DisplayBounds, build_display_bounds
from calpicker.dates import days_apart
from calpicker.logging import get_logger
from calpicker.scheduler import DeferredTask, Scheduler, ThreadingScheduler

_log = get_logger(__name__)

# Shifts longer than this snap instead of animating.
ANIMATION_LIMIT = timedelta(days=365.25)


class SlideDirection(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class Phase(str, Enum):
    IDLE = "idle"
    EXPANDING = "expanding"
    SETTLING = "settling"


@dataclass(frozen=True)
class Slide:
    """Animation directive: which way the weeks move and by how many."""

    direction: SlideDirection
    weeks: float


@dataclass(frozen=True)
class WindowState:
    reference: date
    first_day_of_week: int
    animate: bool
    bounds: DisplayBounds
    target: DisplayBounds | None = None
    slide: Slide | None = None
    phase: Phase = Phase.IDLE
    generation: int = 0  # bumped each time a new target is set

    @property
    def animating(self) -> bool:
        return self.phase is not Phase.IDLE


@dataclass(frozen=True)
class ReferenceChanged:
    reference: date


@dataclass(frozen=True)
class FirstDayOfWeekChanged:
    first_day_of_week: int


@dataclass(frozen=True)
class AnimateChanged:
    animate: bool


@dataclass(frozen=True)
class SettleScheduled:
    generation: int


@dataclass(frozen=True)
class SettleElapsed:
    generation: int


Event = (
    ReferenceChanged
    | FirstDayOfWeekChanged
    | AnimateChanged
    | SettleScheduled
    | SettleElapsed
)


def initial_state(
    reference: date, first_day_of_week: int = 0, animate: bool = True
) -> WindowState:
    return WindowState(
        reference=reference,
        first_day_of_week=first_day_of_week,
        animate=animate,
        bounds=build_display_bounds(reference, first_day_of_week),
    )


def _exceeds_limit(current: DisplayBounds, nxt: DisplayBounds) -> bool:
    if nxt.start < current.start:
        return current.start - nxt.start > ANIMATION_LIMIT
    if nxt.end > current.end:
        return nxt.end - current.end > ANIMATION_LIMIT
    return False


def _snap(state: WindowState, bounds: DisplayBounds) -> WindowState:
    return replace(state, bounds=bounds, target=None, slide=None, phase=Phase.IDLE)


def _retarget(state: WindowState) -> WindowState:
    nxt = build_display_bounds(state.reference, state.first_day_of_week)
    current = state.bounds

    if not state.animate or _exceeds_limit(current, nxt) or nxt == current:
        return _snap(state, nxt)

    state = replace(state, target=nxt, generation=state.generation + 1)

    if nxt.start < current.start and current.start - nxt.start < ANIMATION_LIMIT:
        return replace(
            state,
            bounds=DisplayBounds(nxt.start, current.end),
            slide=Slide(
                SlideDirection.BACKWARD,
                days_apart(current.start, nxt.start) / DAYS_PER_WEEK,
            ),
            phase=Phase.EXPANDING,
        )
    if nxt.end > current.end and nxt.end - current.end < ANIMATION_LIMIT:
        return replace(
            state,
            bounds=DisplayBounds(current.start, nxt.end),
            slide=Slide(
                SlideDirection.FORWARD,
                days_apart(nxt.end, current.end) / DAYS_PER_WEEK,
            ),
            phase=Phase.EXPANDING,
        )
    # Target already inside the widened window: keep it mounted and re-settle.
    return replace(state, phase=Phase.EXPANDING)


def reduce(state: WindowState, event: Event) -> WindowState:
    """Return the state that follows event. Pure; never mutates state."""
    if isinstance(event, ReferenceChanged):
        return _retarget(replace(state, reference=event.reference))
    if isinstance(event, FirstDayOfWeekChanged):
        return _retarget(replace(state, first_day_of_week=event.first_day_of_week))
    if isinstance(event, AnimateChanged):
        return _retarget(replace(state, animate=event.animate))
    if isinstance(event, SettleScheduled):
        if state.phase is Phase.EXPANDING and event.generation == state.generation:
            return replace(state, phase=Phase.SETTLING)
        return state
    if isinstance(event, SettleElapsed):
        if state.target is None or event.generation != state.generation:
            return state
        return _snap(state, state.target)
    raise TypeError(f"Unknown event: {event!r}")


class WindowTransitionEngine:
    """Owns the window state and the settle timer.

    Retargeting while a transition is in flight cancels the pending settle
    and schedules a fresh one for the newest target.
    """

    def __init__(
        self,
        reference: date,
        first_day_of_week: int = 0,
        animate: bool = True,
        settle_delay: float = 0.4,
        scheduler: Scheduler | None = None,
        on_change: Callable[[WindowState], None] | None = None,
    ) -> None:
        self._state = initial_state(reference, first_day_of_week, animate)
        self._settle_delay = settle_delay
        self._task = DeferredTask(scheduler or ThreadingScheduler(), name="window_settle")
        self._on_change = on_change
        self._lock = threading.RLock()
        self._log = _log

    @property
    def state(self) -> WindowState:
        with self._lock:
            return self._state

    @property
    def settle_pending(self) -> bool:
        return self._task.pending

    def set_reference(self, reference: date) -> WindowState:
        return self.dispatch(ReferenceChanged(reference))

    def set_first_day_of_week(self, first_day_of_week: int) -> WindowState:
        return self.dispatch(FirstDayOfWeekChanged(first_day_of_week))

    def set_animate(self, animate: bool) -> WindowState:
        return self.dispatch(AnimateChanged(animate))

    def dispatch(self, event: Event) -> WindowState:
        """Apply event and run the timer effects its outcome requires."""
        with self._lock:
            previous = self._state
            state = reduce(previous, event)

            if state.phase is Phase.EXPANDING:
                generation = state.generation
                self._task.schedule(self._settle_delay, lambda: self._elapsed(generation))
                state = reduce(state, SettleScheduled(generation))
                self._log.debug(
                    "window_expanding",
                    reference=state.reference.isoformat(),
                    direction=state.slide.direction.value if state.slide else None,
                    weeks=state.slide.weeks if state.slide else None,
                    generation=generation,
                )
            elif state.phase is Phase.IDLE and previous.phase is not Phase.IDLE:
                if self._task.cancel():
                    self._log.debug("settle_cancelled", generation=previous.generation)

            if state.phase is Phase.IDLE and state.bounds != previous.bounds:
                self._log.debug(
                    "window_snapped" if not isinstance(event, SettleElapsed) else "window_settled",
                    start=state.bounds.start.isoformat(),
                    end=state.bounds.end.isoformat(),
                )
            self._state = state

        if state != previous and self._on_change is not None:
            self._on_change(state)
        return state

    def _elapsed(self, generation: int) -> None:
        self.dispatch(SettleElapsed(generation))

    def settle_now(self) -> WindowState:
        """Finish any in-flight transition immediately."""
        with self._lock:
            generation = self._state.generation
            self._task.cancel()
        return self.dispatch(SettleElapsed(generation))

    def cancel(self) -> None:
        """Drop the pending settle timer without changing the state."""
        if self._task.cancel():
            self._log.debug("settle_cancelled", generation=self.state.generation)
