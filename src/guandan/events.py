"""
Structured engine events and the sinks that receive them.

The engine never logs or prints by itself; it emits events to an injected
``EventSink``. ``LoggingSink`` forwards them to the standard ``logging``
module, ``RecordingSink`` keeps them in memory (handy in tests), and
``NullSink`` drops them.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Protocol, Tuple

from .deck import Card, Rank, format_cards

LOGGER_NAME = "guandan.engine"


@dataclass(frozen=True)
class GameEvent:
    """Base class; ``describe`` gives the one-line text used by LoggingSink."""

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class HandStarted(GameEvent):
    leader: int
    trump_rank: Rank
    levels: Tuple[int, int]

    def describe(self) -> str:
        return (
            f"hand started: leader=seat {self.leader}, trump={self.trump_rank.name}, "
            f"levels={self.levels[0]}/{self.levels[1]}"
        )


@dataclass(frozen=True)
class TurnChanged(GameEvent):
    seat: int

    def describe(self) -> str:
        return f"turn -> seat {self.seat}"


@dataclass(frozen=True)
class PlayAccepted(GameEvent):
    seat: int
    cards: Tuple[Card, ...]
    shape: str
    cards_left: int

    def describe(self) -> str:
        return f"seat {self.seat} plays {self.shape} [{format_cards(self.cards)}], {self.cards_left} left"


@dataclass(frozen=True)
class PlayRejected(GameEvent):
    seat: int
    cards: Tuple[Card, ...]
    reason: str

    def describe(self) -> str:
        return f"seat {self.seat} play rejected ({self.reason}): [{format_cards(self.cards)}]"


@dataclass(frozen=True)
class Passed(GameEvent):
    seat: int
    pass_count: int

    def describe(self) -> str:
        return f"seat {self.seat} passes ({self.pass_count} in a row)"


@dataclass(frozen=True)
class PassIgnored(GameEvent):
    seat: int
    reason: str

    def describe(self) -> str:
        return f"pass from seat {self.seat} ignored ({self.reason})"


@dataclass(frozen=True)
class TrickCleared(GameEvent):
    leader: int

    def describe(self) -> str:
        return f"everyone passed, seat {self.leader} leads freely"


@dataclass(frozen=True)
class HandEnded(GameEvent):
    first_out: int

    def describe(self) -> str:
        return f"hand over: seat {self.first_out} is out first"


@dataclass(frozen=True)
class HandScored(GameEvent):
    winning_partnership: int
    increment: int
    levels_before: Tuple[int, int]
    levels_after: Tuple[int, int]
    failed_top_rank: bool = False
    cleared_top_rank: bool = False

    def describe(self) -> str:
        text = (
            f"partnership {self.winning_partnership} wins +{self.increment}: "
            f"levels {self.levels_before[0]}/{self.levels_before[1]} -> "
            f"{self.levels_after[0]}/{self.levels_after[1]}"
        )
        if self.failed_top_rank:
            text += " (failed to clear the top rank)"
        if self.cleared_top_rank:
            text += " (top rank cleared)"
        return text


class EventSink(Protocol):
    """Anything that accepts engine events."""

    def emit(self, event: GameEvent) -> None:
        ...


class NullSink:
    def emit(self, event: GameEvent) -> None:
        return None


@dataclass
class RecordingSink:
    """Keeps every event in order."""

    events: List[GameEvent] = field(default_factory=list)

    def emit(self, event: GameEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> List[GameEvent]:
        return [e for e in self.events if isinstance(e, event_type)]


class LoggingSink:
    """
    Forward events to ``logging``. Rejections and ignored passes go out at
    WARNING, hand results at INFO, and the per-move chatter at DEBUG.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def emit(self, event: GameEvent) -> None:
        if isinstance(event, (PlayRejected, PassIgnored)):
            level = logging.WARNING
        elif isinstance(event, (HandStarted, HandEnded, HandScored)):
            level = logging.INFO
        else:
            level = logging.DEBUG
        if not self.logger.isEnabledFor(level):
            return
        self.logger.log(level, event.describe())


__all__ = [
    "GameEvent",
    "HandStarted",
    "TurnChanged",
    "PlayAccepted",
    "PlayRejected",
    "Passed",
    "PassIgnored",
    "TrickCleared",
    "HandEnded",
    "HandScored",
    "EventSink",
    "NullSink",
    "RecordingSink",
    "LoggingSink",
]
