from __future__ import annotations

from typing import NamedTuple, Tuple

from .ledger import Phase, RoundLedger


class UpkeepDiagnostics(NamedTuple):
    balance: int
    entrant_count: int
    phase: Phase


def check_upkeep(ledger: RoundLedger, now: float, interval: float) -> Tuple[bool, UpkeepDiagnostics]:
    """
    Decide whether the current round may be closed.

    Pure: reads the ledger, never mutates it. The diagnostics triple is the
    same payload that ``UpkeepNotNeeded`` carries when closing is refused.
    """
    diagnostics = UpkeepDiagnostics(ledger.balance, ledger.entrant_count, ledger.phase)
    is_open = ledger.phase == Phase.OPEN
    time_passed = (now - ledger.last_closed_at) >= interval
    has_balance = ledger.balance > 0
    has_players = ledger.entrant_count > 0
    return is_open and time_passed and has_balance and has_players, diagnostics
