from __future__ import annotations

import logging

from .clock import Clock
from .config import OracleConfig
from .eligibility import check_upkeep
from .errors import UpkeepNotNeeded
from .events import EventSink, RequestIssued
from .ledger import RoundLedger
from .oracle import FulfillCallback, RandomnessOracle

log = logging.getLogger(__name__)


class RandomnessRequestProtocol:
    """Closes entry and issues the single outstanding oracle request."""

    def __init__(
        self,
        ledger: RoundLedger,
        oracle: RandomnessOracle,
        config: OracleConfig,
        callback: FulfillCallback,
        events: EventSink,
        clock: Clock,
    ) -> None:
        self.ledger = ledger
        self.oracle = oracle
        self.config = config
        self.callback = callback
        self.events = events
        self.clock = clock

    def close(self) -> str:
        # Never trust an earlier check: time moved, and the caller may be anyone.
        eligible, diag = check_upkeep(self.ledger, self.clock(), self.config.interval)
        if not eligible or self.ledger.settling:
            log.debug("close rejected: %s settling=%s", diag, self.ledger.settling)
            raise UpkeepNotNeeded(diag.balance, diag.entrant_count, diag.phase)

        before = self.ledger.checkpoint()
        self.ledger.begin_calculating()
        try:
            token = self.oracle.request_random_words(self.config, self.callback)
        except Exception:
            log.warning("oracle request failed, round stays open")
            self.ledger.restore(before)
            raise
        self.ledger.record_request(token)
        self.events.emit(RequestIssued(token))
        log.info("Round closed with %d entrant(s), balance %d, request %s",
                 diag.entrant_count, diag.balance, token)
        return token
