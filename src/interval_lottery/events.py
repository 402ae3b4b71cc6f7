from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Type, TypeVar, Union

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntryRecorded:
    participant: str


@dataclass(frozen=True)
class RequestIssued:
    token: str


@dataclass(frozen=True)
class WinnerPicked:
    winner: str


Event = Union[EntryRecorded, RequestIssued, WinnerPicked]
E = TypeVar("E", EntryRecorded, RequestIssued, WinnerPicked)


class EventSink:
    """
    Append-only notification log.

    Carries no logic: components emit, observers read ``events``.
    Settlement uses ``mark`` / ``discard_after`` to drop notifications from an
    attempt that was rolled back.
    """

    def __init__(self) -> None:
        self.events: List[Event] = []

    def emit(self, event: Event) -> None:
        log.info("event %s", event)
        self.events.append(event)

    def of_type(self, kind: Type[E]) -> List[E]:
        return [e for e in self.events if isinstance(e, kind)]

    def mark(self) -> int:
        return len(self.events)

    def discard_after(self, mark: int) -> None:
        dropped = self.events[mark:]
        del self.events[mark:]
        if dropped:
            log.debug("discarded %d notification(s) from rolled-back attempt", len(dropped))
