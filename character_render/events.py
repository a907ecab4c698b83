"""Annual events that influence character visibility.

Whether an event is currently running is decided outside this package; it is
passed in as an ``EventPredicate``. Visibility is evaluated once, when a
character is constructed, and does not change for the rest of the session.
"""

from enum import StrEnum, auto
from typing import Optional, Tuple

from character_render.types import EventPredicate


class AnnualEvent(StrEnum):
    """Recurring calendar windows known to the catalog."""

    NEW_YEARS = auto()
    RAINY = auto()
    SPOOKTOBER = auto()
    CHRISTMAS_TIME = auto()
    GOLDEN_WEEK = auto()


def no_active_events(event: AnnualEvent) -> bool:
    """Predicate for sessions with no running event."""
    return False


def active_events(*events: AnnualEvent) -> EventPredicate:
    """Return a predicate reporting exactly ``events`` as running."""
    running = frozenset(events)

    def predicate(event: AnnualEvent) -> bool:
        return event in running

    return predicate


def resolve_visibility(
    hidden: bool,
    is_event: bool,
    hidden_during: Optional[AnnualEvent],
    predicate: EventPredicate,
) -> Tuple[bool, bool]:
    """Return ``(hidden, is_event)`` for the current session.

    On new year's every character is visible and none is flagged as an event
    character. Otherwise a seasonal character's visibility follows the
    activity of its ``hidden_during`` event, and everything else keeps its
    configured default.
    """
    if predicate(AnnualEvent.NEW_YEARS):
        return False, False
    if hidden_during is not None:
        return predicate(hidden_during), is_event
    return hidden, is_event
