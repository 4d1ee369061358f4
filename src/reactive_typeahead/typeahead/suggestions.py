"""
Suggestion querying and the pure helpers behind the suggestions dropdown.

:class:`SuggestionsController` owns the debounce/query lifecycle on the
asyncio loop. The widget only renders the :class:`SuggestionsSnapshot` it
reports, using :func:`build_options` and :func:`should_show_dropdown`.
"""

from __future__ import annotations

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, Protocol, TypeVar, Union

from rich.text import Text
from textual.widgets.option_list import Option

from reactive_typeahead.logger import get_logger

from .config import Direction, SuggestionsConfig

logger = get_logger("typeahead.suggestions")

__all__ = [
    "SuggestionsCallback",
    "ItemBuilder",
    "SuggestionsPhase",
    "SuggestionsSnapshot",
    "SuggestionsController",
    "SuggestionsBoxController",
    "STATUS_ROW",
    "build_options",
    "choose_direction",
    "should_show_dropdown",
]

V = TypeVar("V")

SuggestionsCallback = Callable[[str], Union[Iterable[V], Awaitable[Iterable[V]]]]
ItemBuilder = Callable[[V], Any]


class _StatusRow:
    def __repr__(self) -> str:
        return "STATUS_ROW"


# Item slot of loading, empty and error rows; never a real suggestion
STATUS_ROW: Any = _StatusRow()


class SuggestionsPhase(Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class SuggestionsSnapshot(Generic[V]):
    """What the dropdown should currently render."""

    phase: SuggestionsPhase = SuggestionsPhase.IDLE
    pattern: str = ""
    items: tuple[V, ...] = ()
    error: Optional[BaseException] = None


class SuggestionsController(Generic[V]):
    """
    Debounced, cancellable query runner.

    Each :meth:`request` cancels the previous one. Results of a request that
    was superseded while its callback was running are dropped.
    """

    def __init__(
        self,
        callback: SuggestionsCallback[V],
        *,
        debounce_duration: float,
        on_update: Callable[[SuggestionsSnapshot[V]], None],
        keep_suggestions_on_loading: bool = True,
    ) -> None:
        self._callback = callback
        self._debounce = debounce_duration
        self._on_update = on_update
        self._keep_on_loading = keep_suggestions_on_loading
        self._snapshot: SuggestionsSnapshot[V] = SuggestionsSnapshot()
        self._task: Optional[asyncio.Task[None]] = None
        self._generation = 0

    @property
    def snapshot(self) -> SuggestionsSnapshot[V]:
        return self._snapshot

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def request(self, pattern: str) -> asyncio.Task[None]:
        """Schedule a query for ``pattern`` after the debounce delay."""
        self.cancel()
        self._generation += 1
        self._task = asyncio.get_running_loop().create_task(self._run(pattern, self._generation))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def clear(self) -> None:
        """Cancel any pending query and go back to ``IDLE``."""
        self.cancel()
        self._generation += 1
        self._publish(SuggestionsSnapshot())

    async def wait(self) -> None:
        """Wait for the pending query, if any, to settle."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _run(self, pattern: str, generation: int) -> None:
        await asyncio.sleep(self._debounce)

        previous = self._snapshot.items if self._keep_on_loading else ()
        self._publish(SuggestionsSnapshot(SuggestionsPhase.LOADING, pattern, previous))
        logger.debug(f"Querying suggestions for pattern={pattern!r}")

        try:
            result = self._callback(pattern)
            if inspect.isawaitable(result):
                result = await result
            items = tuple(result or ())
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(f"Suggestions callback failed for pattern={pattern!r}: {exc!r}")
            if generation == self._generation:
                self._publish(SuggestionsSnapshot(SuggestionsPhase.ERROR, pattern, (), exc))
            return

        if generation != self._generation:
            logger.debug(f"Dropping stale suggestions for pattern={pattern!r}")
            return

        phase = SuggestionsPhase.LOADED if items else SuggestionsPhase.EMPTY
        logger.debug(f"Received {len(items)} suggestion(s) for pattern={pattern!r}")
        self._publish(SuggestionsSnapshot(phase, pattern, items))

    def _publish(self, snapshot: SuggestionsSnapshot[V]) -> None:
        self._snapshot = snapshot
        try:
            self._on_update(snapshot)
        except Exception:
            logger.exception(f"Rendering {snapshot.phase.value} suggestions failed for pattern={snapshot.pattern!r}")


class SuggestionsBoxLike(Protocol):
    """Surface of the dropdown widget driven by :class:`SuggestionsBoxController`."""

    @property
    def is_open(self) -> bool: ...

    def open(self) -> None: ...

    def close(self) -> None: ...

    def realign(self) -> None: ...


class SuggestionsBoxController:
    """Lets callers open, close or toggle the dropdown programmatically."""

    def __init__(self) -> None:
        self._box: Optional[SuggestionsBoxLike] = None

    @property
    def is_attached(self) -> bool:
        return self._box is not None

    @property
    def is_opened(self) -> bool:
        return self._box is not None and self._box.is_open

    def attach(self, box: SuggestionsBoxLike) -> None:
        self._box = box

    def detach(self, box: Optional[SuggestionsBoxLike] = None) -> None:
        if box is None or box is self._box:
            self._box = None

    def open(self) -> None:
        if self._box is not None:
            self._box.open()

    def close(self) -> None:
        if self._box is not None:
            self._box.close()

    def toggle(self) -> None:
        if self.is_opened:
            self.close()
        else:
            self.open()

    def resize(self) -> None:
        if self._box is not None:
            self._box.realign()


def _default_loading() -> Text:
    return Text("Loading...", style="italic")


def _default_no_items() -> Text:
    return Text("No Items Found!", style="dim")


def _default_error(error: BaseException) -> Text:
    return Text(f"Error: {error}", style="red")


def _status_option(prompt: Any) -> Option:
    return Option(prompt, disabled=True)


def _item_option(rendered: Any) -> Option:
    if isinstance(rendered, Option):
        return rendered
    return Option(rendered)


def build_options(
    snapshot: SuggestionsSnapshot[V],
    config: SuggestionsConfig,
    item_builder: ItemBuilder[V],
) -> list[tuple[Option, Any]]:
    """
    Render a snapshot into dropdown options.

    Returns ``(option, item)`` pairs; status rows (loading, empty, error) carry
    :data:`STATUS_ROW` and are disabled so they cannot be selected.
    """
    phase = snapshot.phase

    if phase == SuggestionsPhase.LOADING:
        if config.keep_suggestions_on_loading and snapshot.items:
            return [(_item_option(item_builder(item)), item) for item in snapshot.items]
        builder = config.loading_builder or _default_loading
        return [(_status_option(builder()), STATUS_ROW)]

    if phase == SuggestionsPhase.EMPTY:
        builder = config.no_items_found_builder or _default_no_items
        return [(_status_option(builder()), STATUS_ROW)]

    if phase == SuggestionsPhase.ERROR:
        error_builder = config.error_builder or _default_error
        error = snapshot.error if snapshot.error is not None else RuntimeError("unknown error")
        return [(_status_option(error_builder(error)), STATUS_ROW)]

    if phase == SuggestionsPhase.LOADED:
        return [(_item_option(item_builder(item)), item) for item in snapshot.items]

    return []


def should_show_dropdown(
    snapshot: SuggestionsSnapshot[Any],
    config: SuggestionsConfig,
    *,
    has_focus: bool,
) -> bool:
    """Decide dropdown visibility for the current snapshot."""
    if config.hide_suggestions_on_blur and not has_focus:
        return False

    phase = snapshot.phase
    if phase == SuggestionsPhase.LOADING:
        if config.keep_suggestions_on_loading and snapshot.items:
            return True
        return not config.hide_on_loading
    if phase == SuggestionsPhase.EMPTY:
        return not config.hide_on_empty
    if phase == SuggestionsPhase.ERROR:
        return not config.hide_on_error
    return phase == SuggestionsPhase.LOADED


def choose_direction(
    preferred: Direction,
    *,
    auto_flip: bool,
    box_height: int,
    space_above: int,
    space_below: int,
) -> Direction:
    """
    Pick the side to open on.

    Keeps ``preferred`` when it fits; with ``auto_flip`` falls back to the
    opposite side when that side has more room.
    """
    if not auto_flip:
        return preferred
    space = space_below if preferred is Direction.DOWN else space_above
    if space >= box_height:
        return preferred
    other = space_above if preferred is Direction.DOWN else space_below
    return preferred.opposite if other > space else preferred
