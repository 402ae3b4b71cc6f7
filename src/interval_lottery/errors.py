from __future__ import annotations

from typing import Any


class LotteryError(RuntimeError):
    """Base class for every error raised by the lottery."""


class ConfigError(LotteryError):
    pass


# Validation: caller-correctable, nothing changed.


class InsufficientFee(LotteryError):
    def __init__(self, paid: int, fee: int) -> None:
        self.paid = paid
        self.fee = fee
        super().__init__(f"Insufficient fee: paid={paid} required={fee}")


class RoundNotOpen(LotteryError):
    def __init__(self, phase: Any) -> None:
        self.phase = phase
        super().__init__(f"Round is not open (phase={getattr(phase, 'name', phase)})")


# Eligibility: tells the automation caller which precondition failed.


class UpkeepNotNeeded(LotteryError):
    def __init__(self, balance: int, entrant_count: int, phase: Any) -> None:
        self.balance = balance
        self.entrant_count = entrant_count
        self.phase = phase
        super().__init__(
            f"Upkeep not needed: balance={balance} entrants={entrant_count} "
            f"phase={getattr(phase, 'name', phase)}"
        )

    @property
    def diagnostics(self) -> tuple:
        return (self.balance, self.entrant_count, self.phase)


# Settlement: fatal to one fulfillment attempt, fully rolled back.


class TransferFailed(LotteryError):
    def __init__(self, winner: str, amount: int) -> None:
        self.winner = winner
        self.amount = amount
        super().__init__(f"Transfer of {amount} to {winner} failed")


# Oracle integration (trust boundary, outside the round core).


class OracleError(LotteryError):
    pass


class UnknownRequest(OracleError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown or already fulfilled request: {token}")
