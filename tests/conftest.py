import pytest

from interval_lottery.clock import ManualClock
from interval_lottery.config import OracleConfig
from interval_lottery.lottery import Lottery
from interval_lottery.oracle import LocalCoordinator
from interval_lottery.treasury import InMemoryTreasury

FEE = 1
INTERVAL = 30


@pytest.fixture
def config() -> OracleConfig:
    return OracleConfig(
        entrance_fee=FEE,
        interval=INTERVAL,
        subscription_id=1,
        gas_lane="0xlane",
        request_confirmations=3,
        callback_gas_limit=500_000,
        num_words=1,
    )


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=1_000.0)


@pytest.fixture
def oracle() -> LocalCoordinator:
    return LocalCoordinator(seed="tests")


@pytest.fixture
def treasury() -> InMemoryTreasury:
    return InMemoryTreasury()


@pytest.fixture
def lottery(config, oracle, treasury, clock) -> Lottery:
    return Lottery(config, oracle, treasury, clock=clock)


@pytest.fixture
def closed_lottery(lottery, clock):
    """Four entrants A..D, interval elapsed, request issued."""
    for who in ("A", "B", "C", "D"):
        lottery.enter(who, FEE)
    clock.advance(INTERVAL + 1)
    token = lottery.perform_upkeep()
    return lottery, token
