"""The date picker state machine.

``DatePickerEngine`` owns the picker context (selection, focused date,
visible range, field segments) and mutates it only in response to typed
events passed to ``send``. Events are processed one at a time to
completion; events sent from inside a listener are queued and run after the
current one finishes.
"""

import logging
from collections import deque
from dataclasses import dataclass, replace
from datetime import date, datetime, time
from typing import Any, Callable, Deque, FrozenSet, Optional, Union

from ..dates.formatting import DateFormatter, FormatterCache, SegmentType
from ..dates.utils import days_in_month, week_dates, with_month, with_year
from ..timezone import start_of_day, to_timezone, today_in
from ..utils.logging import VERBOSE
from .cells import CellState, as_date, resolve_cell_state, resolve_grid
from .config import PickerConfig
from .events import (
    ArrowDown,
    ArrowLeft,
    ArrowRight,
    ArrowUp,
    Backspace,
    BlurSegment,
    ClearValue,
    ClickCell,
    ClickNext,
    ClickPrev,
    ClickTrigger,
    End,
    Enter,
    Event,
    FocusCell,
    FocusSegment,
    HoverCell,
    Home,
    PageDown,
    PageUp,
    SetValue,
    TypeDigit,
)
from .navigation import GridNavigator
from .segments import (
    SegmentList,
    apply_backspace,
    apply_digit,
    clear_buffers,
    decompose,
    editable_types,
    first_editable,
    last_editable,
    move_focus,
    step_segment,
    to_date,
)
from .selection import select_date, selection_to_string
from .types import (
    Direction,
    FocusChangeDetails,
    FocusDirection,
    PageDirection,
    PickerState,
    RangeSelection,
    Selection,
    SelectionMode,
    ValueChangeDetails,
    VisibleRange,
    is_selection_complete,
)

logger = logging.getLogger(__name__)

ValueChangeListener = Callable[[ValueChangeDetails], None]
FocusChangeListener = Callable[[FocusChangeDetails], None]

_ARROW_DIRECTIONS = {
    ArrowLeft: Direction.LEFT,
    ArrowRight: Direction.RIGHT,
    ArrowUp: Direction.UP,
    ArrowDown: Direction.DOWN,
}

# Events that would change the selection; a readonly engine drops them
_SELECTION_EVENTS = (ClickCell, Enter, HoverCell, TypeDigit, Backspace)


@dataclass(frozen=True)
class PickerContext:
    """Snapshot of everything the engine tracks between events."""

    state: PickerState
    selection: Selection
    focused_value: date
    visible_range: VisibleRange
    segments: SegmentList
    valid_segments: FrozenSet[SegmentType]
    focused_segment: Optional[SegmentType] = None
    preview: Optional[date] = None


class DatePickerEngine:
    """Headless date picker: selection, grid navigation and segmented entry.

    Example:
        >>> engine = DatePickerEngine(PickerConfig(value=date(2024, 3, 15)))
        >>> engine.send(FocusCell(date(2024, 3, 15)))
        >>> engine.send(ArrowRight())
        >>> engine.focused_value
        datetime.date(2024, 3, 16)
    """

    def __init__(self, config: Optional[PickerConfig] = None, **options: Any) -> None:
        """Initialize the engine.

        Args:
            config: Validated configuration; built from ``options`` when omitted
            **options: ``PickerConfig`` fields, used only when ``config`` is None

        Raises:
            ConfigurationError: If the configuration is unusable (e.g. min > max)
        """
        self.config = config if config is not None else PickerConfig(**options)
        self._formatters = FormatterCache()
        self._navigator = GridNavigator(
            first_day_of_week=self.config.first_day_of_week,
            fixed_weeks=self.config.fixed_weeks,
        )
        self._value_listeners: list[ValueChangeListener] = []
        self._focus_listeners: list[FocusChangeListener] = []
        self._queue: Deque[Callable[[], None]] = deque()
        self._processing = False

        selection = self._coerce_selection(self.config.value)
        focused = self.config.focused_value or as_date(self._anchor(selection)) or self.today
        self._context = PickerContext(
            state=PickerState.IDLE,
            selection=selection,
            focused_value=focused,
            visible_range=self._navigator.visible_range_for(focused),
            segments=(),
            valid_segments=frozenset(),
        )
        self._context = self._with_segments_for(self._context, selection)

        logger.debug(
            f"Date picker engine initialized: mode={self.config.selection_mode.value}, "
            f"focused={focused}, visible={self._context.visible_range.month:%Y-%m}"
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def send(self, event: Event) -> None:
        """Process an event, or queue it when another event is in progress.

        Raises:
            TypeError: If ``event`` is not one of the engine's event types
        """
        self._enqueue(lambda: self._dispatch(event), repr(event))

    def set_month(self, month: int) -> None:
        """Move the selected date to ``month`` (1-12) of its year.

        The day is clamped to the new month's length. Nothing happens while
        no date is selected; in range mode the range start is moved and the
        result is handled like ``SetValue``.

        Raises:
            ValueError: If ``month`` is not between 1 and 12
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        self._enqueue(lambda: self._move_selected(with_month, month), f"set_month({month})")

    def set_year(self, year: int) -> None:
        """Move the selected date to ``year``, keeping month and day (Feb 29 clamps).

        Raises:
            ValueError: If ``year`` is outside 1-9999
        """
        if not 1 <= year <= 9999:
            raise ValueError(f"Year must be between 1 and 9999, got {year}")
        self._enqueue(lambda: self._move_selected(with_year, year), f"set_year({year})")

    def show_month(self, year: int, month: int) -> None:
        """Show ``month`` of ``year`` and move focus there, leaving the selection alone.

        Raises:
            ValueError: If the month or year is out of range
        """
        if not 1 <= month <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month}")
        if not 1 <= year <= 9999:
            raise ValueError(f"Year must be between 1 and 9999, got {year}")
        self._enqueue(lambda: self._jump_to(year, month), f"show_month({year}, {month})")

    def set_locale(self, locale: str) -> None:
        """Switch locale; cached formatters are dropped and segments rebuilt."""
        self._enqueue(lambda: self._reconfigure(locale=locale), f"set_locale({locale!r})")

    def set_time_zone(self, time_zone: Optional[str]) -> None:
        """Switch the zone used for "today" and aware values.

        Raises:
            ConfigurationError: If the zone is unknown
        """
        self.config.time_zone = time_zone
        self._enqueue(lambda: self._reconfigure(), f"set_time_zone({time_zone!r})")

    def on_value_change(self, listener: ValueChangeListener) -> None:
        """Register a listener called after a complete selection changes."""
        self._value_listeners.append(listener)
        logger.debug("Added value change listener")

    def on_focus_change(self, listener: FocusChangeListener) -> None:
        """Register a listener called when the focused date or visible range moves."""
        self._focus_listeners.append(listener)
        logger.debug("Added focus change listener")

    def remove_listener(self, listener: Callable[..., None]) -> None:
        """Unregister a value or focus listener."""
        for listeners in (self._value_listeners, self._focus_listeners):
            if listener in listeners:
                listeners.remove(listener)
                logger.debug("Removed listener")

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def context(self) -> PickerContext:
        return self._context

    @property
    def state(self) -> PickerState:
        return self._context.state

    @property
    def value(self) -> Selection:
        return self._context.selection

    @property
    def value_as_string(self) -> Optional[str]:
        """ISO text of the selection (``start/end`` for ranges)."""
        return selection_to_string(self._context.selection)

    @property
    def value_as_datetime(self) -> Optional[datetime]:
        """Selected value (range start in range mode) as an aware datetime.

        Plain dates become midnight in the configured zone.
        """
        anchor = self._anchor(self._context.selection)
        if anchor is None:
            return None
        if isinstance(anchor, datetime):
            return to_timezone(anchor, self.config.time_zone)
        return start_of_day(anchor, self.config.time_zone)

    @property
    def focused_value(self) -> date:
        return self._context.focused_value

    @property
    def focused_value_as_string(self) -> str:
        """Focused date rendered through the field pattern."""
        return self.formatter.format(self._context.focused_value)

    @property
    def visible_range(self) -> VisibleRange:
        return self._context.visible_range

    @property
    def visible_range_text(self) -> str:
        """Heading for the grid, e.g. ``March 2024``."""
        return self.formatter.format_month_year(self._context.visible_range.month)

    @property
    def weeks(self) -> list[list[date]]:
        return self._navigator.weeks(self._context.visible_range)

    @property
    def week_days(self) -> list[str]:
        """Short weekday labels in grid column order."""
        days = week_dates(self._context.visible_range.start, self.config.first_day_of_week)
        return [self.formatter.format_weekday(day) for day in days]

    @property
    def segments(self) -> SegmentList:
        return self._context.segments

    @property
    def focused_segment(self) -> Optional[SegmentType]:
        return self._context.focused_segment

    @property
    def valid_segments(self) -> FrozenSet[SegmentType]:
        return self._context.valid_segments

    @property
    def formatter(self) -> DateFormatter:
        return self._formatters.get(
            self.config.locale, self.config.time_zone, self.config.format_pattern
        )

    @property
    def today(self) -> date:
        """Today in the configured zone."""
        return today_in(self.config.time_zone)

    @property
    def is_prev_visible_range_valid(self) -> bool:
        """False when the previous month lies entirely before ``min``."""
        return not self._navigator.is_range_at_boundary(
            self._context.visible_range, self.config.bounds, PageDirection.PREV
        )

    @property
    def is_next_visible_range_valid(self) -> bool:
        """False when the next month lies entirely after ``max``."""
        return not self._navigator.is_range_at_boundary(
            self._context.visible_range, self.config.bounds, PageDirection.NEXT
        )

    @property
    def is_interactive(self) -> bool:
        return not self.config.disabled and not self.config.readonly

    def get_cell_state(self, value: date, disabled: bool = False) -> CellState:
        """Flags for the grid cell showing ``value``.

        Args:
            value: Date shown in the cell
            disabled: Extra caller-side disabled flag for this cell
        """
        context = self._context
        return resolve_cell_state(
            value,
            context.selection,
            self.config.bounds,
            self.config.is_date_unavailable,
            context.focused_value,
            context.visible_range,
            self.today,
            disabled=self.config.disabled or disabled,
            preview=context.preview,
        )

    def get_grid_states(self) -> dict[date, CellState]:
        """Flags for every cell of the visible grid."""
        context = self._context
        return resolve_grid(
            self.weeks,
            context.selection,
            self.config.bounds,
            self.config.is_date_unavailable,
            context.focused_value,
            context.visible_range,
            self.today,
            disabled=self.config.disabled,
            preview=context.preview,
        )

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def _enqueue(self, job: Callable[[], None], label: str) -> None:
        self._queue.append(lambda: self._run(job, label))
        if self._processing:
            logger.debug(f"Queued {label} behind the event in progress")
            return

        self._processing = True
        try:
            while self._queue:
                self._queue.popleft()()
        finally:
            self._processing = False
            self._queue.clear()

    def _run(self, job: Callable[[], None], label: str) -> None:
        before = self._context
        job()
        after = self._context
        logger.log(VERBOSE, f"Processed {label}: {before.state.value} -> {after.state.value}")

        if after.selection != before.selection and self._is_reportable(after.selection):
            self._notify_value_change()
        if (
            after.focused_value != before.focused_value
            or after.visible_range != before.visible_range
        ):
            self._notify_focus_change()

    def _dispatch(self, event: Event) -> None:
        if self.config.disabled:
            logger.debug(f"Engine disabled, ignoring {event!r}")
            return
        if self.config.readonly and isinstance(event, _SELECTION_EVENTS):
            logger.debug(f"Engine readonly, ignoring {event!r}")
            return

        editing = self._context.state == PickerState.EDITING_SEGMENT

        if isinstance(event, FocusCell):
            self._focus_cell(event.date)
        elif isinstance(event, ClickCell):
            self._click_cell(event.date)
        elif isinstance(event, HoverCell):
            self._hover_cell(event.date)
        elif isinstance(event, (ArrowLeft, ArrowRight)) and editing:
            direction = FocusDirection.PREV if isinstance(event, ArrowLeft) else FocusDirection.NEXT
            self._move_segment_focus(direction)
        elif isinstance(event, (ArrowUp, ArrowDown)) and editing:
            if self.config.readonly:
                logger.debug("Engine readonly, ignoring segment spin")
                return
            self._spin_segment(1 if isinstance(event, ArrowUp) else -1)
        elif isinstance(event, (ArrowLeft, ArrowRight, ArrowUp, ArrowDown)):
            self._move_focus(_ARROW_DIRECTIONS[type(event)])
        elif isinstance(event, PageUp):
            self._page(PageDirection.PREV, event.larger)
        elif isinstance(event, PageDown):
            self._page(PageDirection.NEXT, event.larger)
        elif isinstance(event, Home):
            self._home_end(first=True)
        elif isinstance(event, End):
            self._home_end(first=False)
        elif isinstance(event, Enter):
            self._enter()
        elif isinstance(event, ClickNext):
            self._page_visible(PageDirection.NEXT)
        elif isinstance(event, ClickPrev):
            self._page_visible(PageDirection.PREV)
        elif isinstance(event, ClickTrigger):
            self._toggle_open()
        elif isinstance(event, FocusSegment):
            self._focus_segment(event.segment)
        elif isinstance(event, BlurSegment):
            self._blur_segment()
        elif isinstance(event, TypeDigit):
            self._type_digit(event.digit)
        elif isinstance(event, Backspace):
            self._backspace()
        elif isinstance(event, SetValue):
            self._set_value(event.value)
        elif isinstance(event, ClearValue):
            self._clear_value()
        else:
            raise TypeError(f"Unsupported date picker event: {event!r}")

    # ------------------------------------------------------------------
    # Grid transitions
    # ------------------------------------------------------------------

    def _focus_cell(self, value: date) -> None:
        value = as_date(value)
        self._leave_segments()
        context = self._context
        self._context = replace(
            context,
            state=PickerState.FOCUSED,
            focused_value=value,
            visible_range=self._navigator.repage(value, context.visible_range),
        )

    def _click_cell(self, value: date) -> None:
        value = as_date(value)
        if not self.get_cell_state(value).is_selectable:
            logger.debug(f"Ignoring click on non-selectable date {value}")
            return

        self._leave_segments()
        context = self._context
        selection = select_date(
            context.selection, self._with_time(value), self.config.selection_mode
        )
        updated = replace(
            context,
            state=PickerState.FOCUSED,
            focused_value=value,
            visible_range=self._navigator.repage(value, context.visible_range),
            preview=None,
        )
        self._context = self._with_segments_for(updated, selection)

    def _hover_cell(self, value: date) -> None:
        selection = self._context.selection
        in_progress = (
            isinstance(selection, RangeSelection)
            and selection.start is not None
            and selection.end is None
        )
        preview = as_date(value) if in_progress else None
        if preview != self._context.preview:
            self._context = replace(self._context, preview=preview)

    def _move_focus(self, direction: Direction) -> None:
        context = self._context
        focused = self._navigator.move(context.focused_value, direction, self.config.bounds)
        self._context = replace(
            context,
            state=PickerState.FOCUSED,
            focused_value=focused,
            visible_range=self._navigator.repage(focused, context.visible_range),
        )

    def _page(self, direction: PageDirection, larger: bool) -> None:
        self._leave_segments()
        context = self._context
        focused = self._navigator.page(context.focused_value, direction, larger)
        self._context = replace(
            context,
            state=PickerState.FOCUSED,
            focused_value=focused,
            visible_range=self._navigator.visible_range_for(focused),
        )

    def _page_visible(self, direction: PageDirection) -> None:
        context = self._context
        if self._navigator.is_range_at_boundary(context.visible_range, self.config.bounds, direction):
            logger.info(
                f"Cannot page {direction.value}: {context.visible_range.month:%B %Y} is at the boundary"
            )
            return
        self._context = replace(
            context, visible_range=self._navigator.page_visible(context.visible_range, direction)
        )

    def _home_end(self, first: bool) -> None:
        context = self._context
        if context.state == PickerState.EDITING_SEGMENT:
            target = first_editable(context.segments) if first else last_editable(context.segments)
            self._context = replace(context, focused_segment=target)
            self._settle_segments(clear_buffers(context.segments))
            return

        current = context.focused_value
        focused = (
            self._navigator.start_of_week(current) if first else self._navigator.end_of_week(current)
        )
        self._context = replace(
            context,
            state=PickerState.FOCUSED,
            focused_value=focused,
            visible_range=self._navigator.repage(focused, context.visible_range),
        )

    def _enter(self) -> None:
        context = self._context
        if context.state == PickerState.EDITING_SEGMENT:
            self._settle_segments(clear_buffers(context.segments))
            return
        self._click_cell(context.focused_value)

    def _toggle_open(self) -> None:
        if self._context.state == PickerState.IDLE:
            self._context = replace(self._context, state=PickerState.FOCUSED)
            return
        self._leave_segments()
        self._context = replace(self._context, state=PickerState.IDLE, preview=None)

    def _jump_to(self, year: int, month: int) -> None:
        context = self._context
        day = min(context.focused_value.day, days_in_month(year, month))
        focused = date(year, month, day)
        self._context = replace(
            context,
            focused_value=focused,
            visible_range=self._navigator.visible_range_for(focused),
        )

    def _move_selected(self, change: Callable[[date, int], date], field_value: int) -> None:
        selected = self._anchor(self._context.selection)
        if selected is None:
            logger.debug("No selected date to move")
            return
        self._dispatch(SetValue(change(selected, field_value)))

    # ------------------------------------------------------------------
    # Segment transitions
    # ------------------------------------------------------------------

    def _focus_segment(self, segment_type: SegmentType) -> None:
        context = self._context
        if segment_type not in editable_types(context.segments):
            logger.debug(f"Ignoring focus on non-editable segment {segment_type.value}")
            return
        self._context = replace(
            context, state=PickerState.EDITING_SEGMENT, focused_segment=segment_type
        )
        self._settle_segments(clear_buffers(context.segments))

    def _blur_segment(self) -> None:
        if self._context.state != PickerState.EDITING_SEGMENT:
            return
        self._leave_segments()

    def _leave_segments(self) -> None:
        """Drop back to the grid, committing any half-typed segment."""
        context = self._context
        if context.state != PickerState.EDITING_SEGMENT:
            return
        self._context = replace(context, state=PickerState.FOCUSED, focused_segment=None)
        self._settle_segments(clear_buffers(context.segments))

    def _move_segment_focus(self, direction: FocusDirection) -> None:
        context = self._context
        target = move_focus(context.segments, context.focused_segment, direction)
        if target != context.focused_segment:
            self._context = replace(context, focused_segment=target)
            self._settle_segments(clear_buffers(context.segments))

    def _spin_segment(self, delta: int) -> None:
        context = self._context
        if context.focused_segment is None:
            return
        self._settle_segments(step_segment(context.segments, context.focused_segment, delta))

    def _type_digit(self, digit: str) -> None:
        context = self._context
        if context.state != PickerState.EDITING_SEGMENT or context.focused_segment is None:
            logger.debug(f"Ignoring digit {digit!r} outside segment editing")
            return

        result = apply_digit(
            context.segments, context.focused_segment, digit, self.config.advance_rules
        )
        if result.advance:
            target = move_focus(result.segments, context.focused_segment, FocusDirection.NEXT)
            self._context = replace(context, focused_segment=target)
        self._settle_segments(result.segments)

    def _backspace(self) -> None:
        context = self._context
        if context.state != PickerState.EDITING_SEGMENT or context.focused_segment is None:
            return

        segments = apply_backspace(context.segments, context.focused_segment)
        if segments == context.segments:
            # Nothing left to delete here; step back like a text field would
            target = move_focus(segments, context.focused_segment, FocusDirection.PREV)
            self._context = replace(context, focused_segment=target)
            return
        self._settle_segments(segments)

    def _settle_segments(self, segments: SegmentList) -> None:
        """Store edited segments and commit the date once every segment is settled.

        A segment counts as valid when it holds a value and no half-typed
        buffer, so "2" on the way to "2024" never commits year 2.
        """
        context = self._context
        valid = set(context.valid_segments)
        for segment in segments:
            if not segment.is_editable:
                continue
            if segment.value is not None and not segment.buffer:
                valid.add(segment.type)
            else:
                valid.discard(segment.type)

        self._context = replace(context, segments=segments, valid_segments=frozenset(valid))
        self._commit_segments()

    def _commit_segments(self) -> None:
        """Turn a fully entered field into the selection."""
        context = self._context
        typed = to_date(context.segments, context.valid_segments)
        if typed is None:
            return

        clamped = self._clamp_to_bounds(typed)
        if self.config.selection_mode == SelectionMode.RANGE:
            current = context.selection if isinstance(context.selection, RangeSelection) else None
            end = current.end if current is not None else None
            if end is not None and end < clamped:
                end = None
            selection: Selection = RangeSelection(start=clamped, end=end)
        else:
            selection = clamped

        if selection == context.selection:
            return

        focused = as_date(clamped)
        segments = context.segments
        if clamped != typed:
            logger.debug(f"Clamped typed date {typed} to {clamped}")
            segments = self._decompose(clamped, focused)

        self._context = replace(
            context,
            selection=selection,
            focused_value=focused,
            visible_range=self._navigator.repage(focused, context.visible_range),
            segments=segments,
        )

    # ------------------------------------------------------------------
    # Programmatic value changes
    # ------------------------------------------------------------------

    def _set_value(self, value: Union[date, RangeSelection]) -> None:
        selection = self._coerce_selection(value)
        focused = as_date(self._anchor(selection)) or self._context.focused_value
        updated = replace(
            self._context,
            state=PickerState.FOCUSED,
            focused_value=focused,
            visible_range=self._navigator.visible_range_for(focused),
            focused_segment=None,
            preview=None,
        )
        self._context = self._with_segments_for(updated, selection)

    def _clear_value(self) -> None:
        empty: Selection = RangeSelection() if self._is_range_mode else None
        updated = replace(
            self._context,
            state=PickerState.IDLE,
            focused_segment=None,
            preview=None,
        )
        self._context = self._with_segments_for(updated, empty)

    def _reconfigure(self, locale: Optional[str] = None) -> None:
        if locale is not None:
            self.config.locale = locale
        self._formatters.clear()
        context = replace(self._context, focused_segment=None)
        if context.state == PickerState.EDITING_SEGMENT:
            context = replace(context, state=PickerState.FOCUSED)
        self._context = self._with_segments_for(context, self._coerce_selection(context.selection))
        logger.info(
            f"Picker reconfigured: locale={self.config.locale}, time_zone={self.config.time_zone}"
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def _is_range_mode(self) -> bool:
        return self.config.selection_mode == SelectionMode.RANGE

    @property
    def _has_time(self) -> bool:
        return any(token.type == SegmentType.HOUR for token in self.formatter.tokens)

    def _all_segment_types(self) -> FrozenSet[SegmentType]:
        return frozenset(
            token.type
            for token in self.formatter.tokens
            if token.type not in (SegmentType.LITERAL, SegmentType.ERA)
        )

    def _anchor(self, selection: Selection) -> Optional[date]:
        """The value the field segments mirror (range start in range mode)."""
        if isinstance(selection, RangeSelection):
            return selection.start
        return selection

    def _coerce_selection(self, value: Union[date, RangeSelection, None]) -> Selection:
        if self._is_range_mode:
            if value is None:
                return RangeSelection()
            if isinstance(value, RangeSelection):
                return RangeSelection(
                    start=self._in_field_form(value.start),
                    end=self._in_field_form(value.end),
                )
            value = self._in_field_form(value)
            return RangeSelection(start=value, end=value)
        if isinstance(value, RangeSelection):
            value = value.start
        return self._in_field_form(value)

    def _in_field_form(self, value: Optional[date]) -> Optional[date]:
        """The value as the field holds it.

        Fields with time segments hold naive wall-clock datetimes in the
        configured zone; date-only fields hold plain dates. Aware datetimes
        are converted into the configured zone first, as ``decompose`` does.
        """
        if value is None:
            return None
        if isinstance(value, datetime) and value.tzinfo is not None:
            value = to_timezone(value, self.config.time_zone).replace(tzinfo=None)
        if self._has_time:
            if isinstance(value, datetime):
                return value
            return datetime.combine(value, time())
        return as_date(value)

    def _with_time(self, value: date) -> date:
        """Carry the current time of day onto a clicked date when the field has time segments."""
        if not self._has_time:
            return value
        anchor = self._anchor(self._context.selection)
        clock = anchor.time() if isinstance(anchor, datetime) else time()
        return datetime.combine(value, clock)

    def _clamp_to_bounds(self, value: date) -> date:
        bounds = self.config.bounds
        day = as_date(value)
        if bounds.min is not None and day < bounds.min:
            target = bounds.min
        elif bounds.max is not None and day > bounds.max:
            target = bounds.max
        else:
            return value
        if isinstance(value, datetime):
            return datetime.combine(target, value.time())
        return target

    def _decompose(self, value: Optional[date], placeholder: date) -> SegmentList:
        valid = self._all_segment_types() if value is not None else frozenset()
        return decompose(value, valid, self.formatter, self.config.time_zone, placeholder)

    def _with_segments_for(self, context: PickerContext, selection: Selection) -> PickerContext:
        """Context holding ``selection`` with segments re-derived from it."""
        anchor = self._anchor(selection)
        return replace(
            context,
            selection=selection,
            segments=self._decompose(anchor, context.focused_value),
            valid_segments=self._all_segment_types() if anchor is not None else frozenset(),
        )

    def _is_reportable(self, selection: Selection) -> bool:
        if isinstance(selection, RangeSelection) and selection.is_empty:
            return True
        return selection is None or is_selection_complete(selection)

    def _notify_value_change(self) -> None:
        details = ValueChangeDetails(value=self.value, value_as_string=self.value_as_string)
        for listener in list(self._value_listeners):
            try:
                listener(details)
            except Exception:
                logger.exception("Error in value change listener")

    def _notify_focus_change(self) -> None:
        details = FocusChangeDetails(
            focused_value=self._context.focused_value, visible_range=self._context.visible_range
        )
        for listener in list(self._focus_listeners):
            try:
                listener(details)
            except Exception:
                logger.exception("Error in focus change listener")

    def __repr__(self) -> str:
        return (
            f"DatePickerEngine(state={self.state.value!r}, value={self.value_as_string!r}, "
            f"focused={self.focused_value.isoformat()!r})"
        )
