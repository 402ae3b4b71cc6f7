from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, Protocol, Set

log = logging.getLogger(__name__)


class PaymentRejected(RuntimeError):
    pass


class Treasury(Protocol):
    """Moves value out of lottery custody. Raises if the payment does not go through."""

    def transfer(self, recipient: str, amount: int) -> None: ...


class InMemoryTreasury:
    """
    Ledger of payouts made by the lottery.

    ``hooks`` run as recipient code while the transfer is in flight (before the
    credit lands), which is where a hostile winner would try to call back into
    the lottery. A hook that raises makes the transfer fail.
    """

    def __init__(self) -> None:
        self.paid_out: Dict[str, int] = defaultdict(int)
        self.rejecting: Set[str] = set()
        self.hooks: Dict[str, Callable[[int], None]] = {}

    @property
    def total_paid(self) -> int:
        return sum(self.paid_out.values())

    def reject(self, recipient: str) -> None:
        self.rejecting.add(recipient)

    def accept(self, recipient: str) -> None:
        self.rejecting.discard(recipient)

    def on_receive(self, recipient: str, hook: Callable[[int], None]) -> None:
        self.hooks[recipient] = hook

    def transfer(self, recipient: str, amount: int) -> None:
        hook = self.hooks.get(recipient)
        if hook is not None:
            hook(amount)
        if recipient in self.rejecting:
            raise PaymentRejected(f"{recipient} rejected payment of {amount}")
        self.paid_out[recipient] += amount
        log.debug("paid %d to %s", amount, recipient)
