import pytest

from conftest import FEE, INTERVAL
from interval_lottery.errors import RoundNotOpen, UpkeepNotNeeded
from interval_lottery.events import RequestIssued
from interval_lottery.ledger import Phase
from interval_lottery.lottery import Lottery


class BrokenOracle:
    def request_random_words(self, config, callback):
        raise ConnectionError("coordinator unreachable")


def test_check_false_right_after_entry(lottery):
    lottery.enter("A", FEE)
    eligible, diag = lottery.check_upkeep()
    assert eligible is False
    assert diag == (FEE, 1, Phase.OPEN)


def test_close_after_interval_issues_one_request(lottery, clock, oracle):
    lottery.enter("A", FEE)
    clock.advance(INTERVAL + 1)
    assert lottery.check_upkeep()[0] is True

    token = lottery.perform_upkeep()

    assert lottery.phase == Phase.CALCULATING
    assert lottery.pending_request == token
    assert oracle.issued == [token]
    assert oracle.pending == [token]
    assert lottery.events.of_type(RequestIssued) == [RequestIssued(token)]


def test_close_rejected_before_interval_carries_diagnostics(lottery, clock):
    lottery.enter("A", FEE)
    lottery.enter("B", FEE)
    clock.advance(INTERVAL - 1)

    with pytest.raises(UpkeepNotNeeded) as exc:
        lottery.perform_upkeep()

    assert exc.value.diagnostics == (2 * FEE, 2, Phase.OPEN)
    assert lottery.phase == Phase.OPEN
    assert lottery.pending_request is None


def test_close_rejected_with_no_entrants(lottery, clock):
    clock.advance(INTERVAL * 10)
    with pytest.raises(UpkeepNotNeeded) as exc:
        lottery.perform_upkeep()
    assert (exc.value.balance, exc.value.entrant_count, exc.value.phase) == (0, 0, Phase.OPEN)


def test_second_close_while_calculating_is_ineligible(closed_lottery, oracle):
    lottery, token = closed_lottery

    with pytest.raises(UpkeepNotNeeded) as exc:
        lottery.perform_upkeep()

    assert exc.value.phase == Phase.CALCULATING
    assert exc.value.entrant_count == 4
    assert lottery.pending_request == token
    assert oracle.issued == [token]


def test_entry_rejected_while_calculating(closed_lottery):
    lottery, _ = closed_lottery
    with pytest.raises(RoundNotOpen):
        lottery.enter("E", FEE)
    assert lottery.number_of_entrants == 4


def test_failed_oracle_request_leaves_round_open(config, treasury, clock):
    lottery = Lottery(config, BrokenOracle(), treasury, clock=clock)
    lottery.enter("A", FEE)
    clock.advance(INTERVAL + 1)

    with pytest.raises(ConnectionError):
        lottery.perform_upkeep()

    assert lottery.phase == Phase.OPEN
    assert lottery.pending_request is None
    assert lottery.events.of_type(RequestIssued) == []
    lottery.enter("B", FEE)
    assert lottery.number_of_entrants == 2


def test_accessors_expose_config(lottery, config):
    assert lottery.entrance_fee == config.entrance_fee
    assert lottery.interval == config.interval
    assert lottery.request_confirmations == config.request_confirmations
    assert lottery.num_words == config.num_words
