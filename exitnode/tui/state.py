"""
Selection state machine for the picker.

The Textual layer translates key presses and widget messages into
events, feeds them to :func:`handle_event` and carries out the effects it
returns. Nothing in here touches the terminal or runs commands, so every
transition can be tested directly.
"""

from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple, Union

from exitnode.core.filters import filter_exit_nodes, find_by_location, group_by_country
from exitnode.core.models import AppliedChoice, DisplayShape, ExitNode, ViewState

CANCEL_MESSAGE = "Not interested? That's cool"


@dataclass(frozen=True)
class Choice:
    """One entry of a list or table view."""

    label: str
    node: Optional[ExitNode] = None


# Events


@dataclass(frozen=True)
class Confirm:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class ToggleFocus:
    pass


@dataclass(frozen=True)
class ClearSelection:
    pass


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class MoveCursor:
    delta: int


@dataclass(frozen=True)
class HighlightRow:
    index: int


@dataclass(frozen=True)
class FilterChanged:
    text: str


@dataclass(frozen=True)
class Resize:
    width: int


@dataclass(frozen=True)
class ApplyCompleted:
    """Result of running an :class:`ApplyExitNode` or :class:`ClearExitNode`."""

    target: str
    success: bool
    message: str = ""
    current: str = ""


Event = Union[
    Confirm, Quit, ToggleFocus, ClearSelection, Back,
    MoveCursor, HighlightRow, FilterChanged, Resize, ApplyCompleted,
]


# Effects


@dataclass(frozen=True)
class ApplyExitNode:
    target: str
    label: str


@dataclass(frozen=True)
class ClearExitNode:
    pass


@dataclass(frozen=True)
class QuitApp:
    delay: float


Effect = Union[ApplyExitNode, ClearExitNode, QuitApp]


def clamp_cursor(index: int, size: int) -> int:
    """Keep ``index`` inside ``[0, size - 1]``; 0 for an empty view."""
    if size <= 0:
        return 0
    return max(0, min(index, size - 1))


def primary_choices(shape: DisplayShape, rows: Sequence[ExitNode]) -> Tuple[Choice, ...]:
    """Top level entries for ``shape``."""
    if shape is DisplayShape.DRILL_DOWN:
        return tuple(Choice(country) for country in group_by_country(rows))
    if shape is DisplayShape.FLAT:
        return tuple(Choice(f"{node.hostname} ({node.label})", node) for node in rows)
    return tuple(Choice(node.label, node) for node in rows)


def secondary_choices(rows: Sequence[ExitNode], country: str) -> Tuple[Choice, ...]:
    """Cities of ``country``, each bound to its first exit node."""
    cities = group_by_country(rows).get(country, [])
    return tuple(Choice(city, find_by_location(rows, country, city)) for city in cities)


def status_for_current(current: str) -> str:
    if current:
        return f"Current selection is: {current}"
    return "No exit node selected"


@dataclass(frozen=True)
class PickerState:
    """Immutable snapshot of everything the picker displays."""

    shape: DisplayShape
    rows: Tuple[ExitNode, ...]
    primary: Tuple[Choice, ...]
    view_state: ViewState = ViewState.BROWSING_PRIMARY
    secondary: Tuple[Choice, ...] = ()
    group: Optional[str] = None
    cursor: int = 0
    filter_text: str = ""
    width: Optional[int] = None
    applied: Optional[AppliedChoice] = None
    pending: Optional[str] = None
    status: str = ""
    quit_delay: float = 1.0

    @classmethod
    def initial(
        cls,
        shape: DisplayShape,
        rows: Sequence[ExitNode],
        current: str = "",
        quit_delay: float = 1.0,
    ) -> "PickerState":
        rows = tuple(rows)
        return cls(
            shape=shape,
            rows=rows,
            primary=primary_choices(shape, rows),
            status=status_for_current(current) if shape is DisplayShape.TABLE else "",
            quit_delay=quit_delay,
        )

    @property
    def in_secondary(self) -> bool:
        return self.group is not None

    @property
    def view(self) -> Tuple[Choice, ...]:
        """Entries currently on screen."""
        return self.secondary if self.in_secondary else self.primary

    @property
    def highlighted(self) -> Optional[Choice]:
        view = self.view
        if not view:
            return None
        return view[clamp_cursor(self.cursor, len(view))]

    @property
    def table_focused(self) -> bool:
        return self.view_state is ViewState.BROWSING_PRIMARY

    @property
    def farewell(self) -> str:
        """Final frame text once the picker is finished."""
        if self.view_state is ViewState.CONFIRMED and self.applied:
            return f"{self.applied.label}? Sounds good to me."
        if self.view_state is ViewState.CANCELLED:
            return CANCEL_MESSAGE
        return ""

    def transition(self, **changes) -> "PickerState":
        return replace(self, **changes)


def _move_to(state: PickerState, index: int) -> PickerState:
    cursor = clamp_cursor(index, len(state.view))
    if cursor == state.cursor:
        return state
    return state.transition(cursor=cursor)


def _confirm(state: PickerState) -> Tuple[PickerState, Tuple[Effect, ...]]:
    choice = state.highlighted
    if choice is None or state.pending is not None:
        return state, ()

    if state.view_state is ViewState.FILTER_EDITING:
        return state, ()

    if state.shape is DisplayShape.DRILL_DOWN and not state.in_secondary:
        secondary = secondary_choices(state.rows, choice.label)
        return (
            state.transition(
                view_state=ViewState.BROWSING_SECONDARY,
                group=choice.label,
                secondary=secondary,
                cursor=0,
            ),
            (),
        )

    if choice.node is None:
        return state, ()

    return (
        state.transition(pending=choice.label, status=f"Setting exit node to {choice.label}..."),
        (ApplyExitNode(target=choice.node.target, label=choice.label),),
    )


def _back(state: PickerState) -> PickerState:
    if state.view_state is not ViewState.BROWSING_SECONDARY:
        return state
    cursor = next(
        (i for i, choice in enumerate(state.primary) if choice.label == state.group),
        0,
    )
    return state.transition(
        view_state=ViewState.BROWSING_PRIMARY,
        group=None,
        secondary=(),
        cursor=cursor,
    )


def _toggle_focus(state: PickerState) -> PickerState:
    if state.shape is not DisplayShape.TABLE:
        return state
    if state.view_state is ViewState.BROWSING_PRIMARY:
        return state.transition(view_state=ViewState.FILTER_EDITING)
    return state.transition(view_state=ViewState.BROWSING_PRIMARY)


def _clear(state: PickerState) -> Tuple[PickerState, Tuple[Effect, ...]]:
    if state.shape is not DisplayShape.TABLE or not state.table_focused or state.pending is not None:
        return state, ()
    return (
        state.transition(pending="", status="Clearing exit node..."),
        (ClearExitNode(),),
    )


def _filter(state: PickerState, text: str) -> PickerState:
    if state.shape is not DisplayShape.TABLE:
        return state
    primary = primary_choices(state.shape, filter_exit_nodes(state.rows, text))
    return state.transition(
        filter_text=text,
        primary=primary,
        cursor=clamp_cursor(state.cursor, len(primary)),
    )


def _apply_completed(state: PickerState, event: ApplyCompleted) -> Tuple[PickerState, Tuple[Effect, ...]]:
    label = state.pending
    if label is None:
        return state, ()

    if not event.success:
        return state.transition(pending=None, status=f"Error: {event.message}"), ()

    if not event.target:
        return state.transition(pending=None, applied=None, status=status_for_current(event.current)), ()

    if state.shape is DisplayShape.TABLE:
        shown = event.current or label
        applied = AppliedChoice(label=shown, success=True, message=event.message)
        return state.transition(pending=None, applied=applied, status=status_for_current(shown)), ()

    applied = AppliedChoice(label=label, success=True, message=event.message)
    return (
        state.transition(
            view_state=ViewState.CONFIRMED,
            pending=None,
            applied=applied,
            status=event.message,
        ),
        (QuitApp(state.quit_delay),),
    )


def handle_event(state: PickerState, event: Event) -> Tuple[PickerState, Tuple[Effect, ...]]:
    """
    Advance the picker by one event.

    Args:
        state: Current snapshot
        event: What happened

    Returns:
        The next snapshot and the side effects the caller must perform
    """
    if state.view_state.is_terminal:
        return state, ()

    if isinstance(event, Resize):
        return state.transition(width=event.width), ()

    if isinstance(event, Quit):
        return state.transition(view_state=ViewState.CANCELLED), (QuitApp(state.quit_delay),)

    if isinstance(event, Confirm):
        return _confirm(state)

    if isinstance(event, Back):
        return _back(state), ()

    if isinstance(event, ToggleFocus):
        return _toggle_focus(state), ()

    if isinstance(event, ClearSelection):
        return _clear(state)

    if isinstance(event, MoveCursor):
        return _move_to(state, state.cursor + event.delta), ()

    if isinstance(event, HighlightRow):
        return _move_to(state, event.index), ()

    if isinstance(event, FilterChanged):
        return _filter(state, event.text), ()

    if isinstance(event, ApplyCompleted):
        return _apply_completed(state, event)

    raise TypeError(f"Unknown picker event: {event!r}")
