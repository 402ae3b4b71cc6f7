from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .clock import Clock, wall_clock
from .config import OracleConfig
from .draw import DrawResult
from .eligibility import UpkeepDiagnostics, check_upkeep
from .events import EventSink
from .ledger import Phase, RoundLedger
from .oracle import RandomnessOracle
from .settlement import Settlement, WinnerResolver
from .treasury import Treasury
from .upkeep import RandomnessRequestProtocol


class Lottery:
    """
    One recurring lottery: the round ledger plus the components allowed to
    touch it, wired to an oracle and a treasury.
    """

    def __init__(
        self,
        config: OracleConfig,
        oracle: RandomnessOracle,
        treasury: Treasury,
        clock: Clock = wall_clock,
        events: Optional[EventSink] = None,
    ) -> None:
        self.config = config
        self.clock = clock
        self.events = events if events is not None else EventSink()
        self.ledger = RoundLedger(config.entrance_fee, clock(), self.events)
        self.settlement = Settlement(self.ledger, treasury, self.events, clock)
        self.resolver = WinnerResolver(self.ledger, self.settlement)
        self.upkeep = RandomnessRequestProtocol(
            self.ledger, oracle, config, self.fulfill_random_words, self.events, clock
        )

    # ---- operations -----------------------------------------------------

    def enter(self, participant: str, paid_amount: int) -> None:
        self.ledger.enter(participant, paid_amount)

    def check_upkeep(self) -> Tuple[bool, UpkeepDiagnostics]:
        return check_upkeep(self.ledger, self.clock(), self.config.interval)

    def perform_upkeep(self) -> str:
        return self.upkeep.close()

    def fulfill_random_words(self, token: str, random_words: Sequence[int]) -> DrawResult:
        """Oracle callback; registered with the coordinator by ``perform_upkeep``."""
        return self.resolver.fulfill(token, random_words)

    # ---- accessors ------------------------------------------------------

    @property
    def entrance_fee(self) -> int:
        return self.config.entrance_fee

    @property
    def phase(self) -> Phase:
        return self.ledger.phase

    def get_entrant(self, index: int) -> str:
        return self.ledger.entrant_at(index)

    @property
    def number_of_entrants(self) -> int:
        return self.ledger.entrant_count

    @property
    def balance(self) -> int:
        return self.ledger.balance

    @property
    def recent_winner(self) -> Optional[str]:
        return self.ledger.recent_winner

    @property
    def last_closed_at(self) -> float:
        return self.ledger.last_closed_at

    @property
    def pending_request(self) -> Optional[str]:
        return self.ledger.pending_request

    @property
    def interval(self) -> int:
        return self.config.interval

    @property
    def request_confirmations(self) -> int:
        return self.config.request_confirmations

    @property
    def num_words(self) -> int:
        return self.config.num_words
