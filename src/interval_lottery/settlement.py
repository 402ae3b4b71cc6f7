from __future__ import annotations

import logging
from typing import Sequence

from .clock import Clock
from .draw import DrawResult, pick_winner
from .errors import TransferFailed
from .events import EventSink, WinnerPicked
from .ledger import RoundLedger
from .treasury import Treasury

log = logging.getLogger(__name__)


class Settlement:
    """
    Pays the pot out and resets the round, as one unit.

    Ledger effects are committed before the transfer so that code running on
    the recipient side sees a round that is already reset. If the transfer
    fails, the ledger and notifications are put back exactly as they were,
    including anything reentrant calls changed in between.
    """

    def __init__(self, ledger: RoundLedger, treasury: Treasury, events: EventSink, clock: Clock) -> None:
        self.ledger = ledger
        self.treasury = treasury
        self.events = events
        self.clock = clock

    def settle(self, winner: str, amount: int) -> None:
        before = self.ledger.checkpoint()
        mark = self.events.mark()

        self.ledger.reopen_after_payout(winner, self.clock())
        self.ledger.settling = True
        try:
            self.treasury.transfer(winner, amount)
        except Exception as exc:
            self.ledger.restore(before)
            self.events.discard_after(mark)
            log.warning("Payout of %d to %s failed (%s); round rolled back", amount, winner, exc)
            raise TransferFailed(winner, amount) from exc
        finally:
            self.ledger.settling = False

        self.events.emit(WinnerPicked(winner))
        log.info("Paid %d to winner %s", amount, winner)


class WinnerResolver:
    """
    Oracle callback. The coordinator guarantees the token is the pending one
    and that it is delivered once; nothing is re-checked here.
    """

    def __init__(self, ledger: RoundLedger, settlement: Settlement) -> None:
        self.ledger = ledger
        self.settlement = settlement

    def fulfill(self, token: str, random_words: Sequence[int]) -> DrawResult:
        entrants = tuple(self.ledger.entrants)
        amount = self.ledger.balance
        idx, winner = pick_winner(random_words, entrants)
        log.debug("request %s: word %d -> index %d of %d", token, random_words[0], idx, len(entrants))

        self.settlement.settle(winner, amount)
        return DrawResult(
            token=token,
            random_word=random_words[0],
            winner_index=idx,
            winner=winner,
            amount=amount,
            entrants=entrants,
        )
