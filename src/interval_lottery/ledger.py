from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple

from .errors import InsufficientFee, RoundNotOpen
from .events import EntryRecorded, EventSink

log = logging.getLogger(__name__)


class Phase(IntEnum):
    OPEN = 0
    CALCULATING = 1


@dataclass
class Round:
    last_closed_at: float
    phase: Phase = Phase.OPEN
    entrants: List[str] = field(default_factory=list)
    balance: int = 0
    pending_request: Optional[str] = None
    recent_winner: Optional[str] = None


@dataclass(frozen=True)
class RoundSnapshot:
    """Immutable copy of a Round, taken before a tentative settlement."""

    last_closed_at: float
    phase: Phase
    entrants: Tuple[str, ...]
    balance: int
    pending_request: Optional[str]
    recent_winner: Optional[str]


class RoundLedger:
    """
    Sole owner of the current round.

    Every mutation goes through a method here; callers get copies, never the
    live entrant list.
    """

    def __init__(self, entrance_fee: int, started_at: float, events: EventSink) -> None:
        self.entrance_fee = entrance_fee
        self.events = events
        self._round = Round(last_closed_at=started_at)
        # True while a payout is in flight; no new request may be issued then
        self.settling = False

    # ---- reads ----------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._round.phase

    @property
    def balance(self) -> int:
        return self._round.balance

    @property
    def entrant_count(self) -> int:
        return len(self._round.entrants)

    @property
    def entrants(self) -> List[str]:
        return list(self._round.entrants)

    @property
    def last_closed_at(self) -> float:
        return self._round.last_closed_at

    @property
    def pending_request(self) -> Optional[str]:
        return self._round.pending_request

    @property
    def recent_winner(self) -> Optional[str]:
        return self._round.recent_winner

    def entrant_at(self, index: int) -> str:
        if index < 0 or index >= len(self._round.entrants):
            raise IndexError(f"No entrant at index {index}")
        return self._round.entrants[index]

    # ---- entry ----------------------------------------------------------

    def enter(self, participant: str, paid_amount: int) -> None:
        if paid_amount < self.entrance_fee:
            log.debug("rejected entry from %s: paid %d < fee %d",
                      participant, paid_amount, self.entrance_fee)
            raise InsufficientFee(paid_amount, self.entrance_fee)
        if self._round.phase != Phase.OPEN:
            log.debug("rejected entry from %s: phase %s", participant, self._round.phase.name)
            raise RoundNotOpen(self._round.phase)

        self._round.entrants.append(participant)
        self._round.balance += paid_amount
        self.events.emit(EntryRecorded(participant))

    # ---- transitions (called by the request protocol and settlement) ----

    def begin_calculating(self) -> None:
        self._round.phase = Phase.CALCULATING

    def record_request(self, token: str) -> None:
        self._round.pending_request = token

    def reopen_after_payout(self, winner: str, now: float) -> None:
        r = self._round
        r.entrants = []
        r.balance = 0
        r.recent_winner = winner
        r.pending_request = None
        r.phase = Phase.OPEN
        r.last_closed_at = now

    def checkpoint(self) -> RoundSnapshot:
        r = self._round
        return RoundSnapshot(
            last_closed_at=r.last_closed_at,
            phase=r.phase,
            entrants=tuple(r.entrants),
            balance=r.balance,
            pending_request=r.pending_request,
            recent_winner=r.recent_winner,
        )

    def restore(self, snapshot: RoundSnapshot) -> None:
        self._round = Round(
            last_closed_at=snapshot.last_closed_at,
            phase=snapshot.phase,
            entrants=list(snapshot.entrants),
            balance=snapshot.balance,
            pending_request=snapshot.pending_request,
            recent_winner=snapshot.recent_winner,
        )
