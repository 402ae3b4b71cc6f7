import pytest

from interval_lottery.errors import InsufficientFee, RoundNotOpen
from interval_lottery.events import EntryRecorded, EventSink
from interval_lottery.ledger import Phase, RoundLedger


def make_ledger(fee: int = 10) -> RoundLedger:
    return RoundLedger(entrance_fee=fee, started_at=0.0, events=EventSink())


def test_round_starts_open_and_empty(lottery, clock):
    assert lottery.phase == Phase.OPEN
    assert lottery.number_of_entrants == 0
    assert lottery.balance == 0
    assert lottery.recent_winner is None
    assert lottery.pending_request is None
    assert lottery.last_closed_at == clock.now


@pytest.mark.parametrize("paid", [0, 1, 5, 9])
def test_underpaying_is_rejected_without_state_change(paid):
    ledger = make_ledger(fee=10)
    ledger.enter("A", 10)

    with pytest.raises(InsufficientFee) as exc:
        ledger.enter("B", paid)

    assert exc.value.paid == paid
    assert exc.value.fee == 10
    assert ledger.entrants == ["A"]
    assert ledger.balance == 10
    assert ledger.events.of_type(EntryRecorded) == [EntryRecorded("A")]


def test_entry_appends_in_order_and_accumulates_balance():
    ledger = make_ledger(fee=10)
    ledger.enter("A", 10)
    ledger.enter("B", 15)
    ledger.enter("A", 10)

    # duplicates are separate slots; overpayment stays in the pot
    assert ledger.entrants == ["A", "B", "A"]
    assert ledger.balance == 35
    assert ledger.entrant_at(2) == "A"
    assert [e.participant for e in ledger.events.of_type(EntryRecorded)] == ["A", "B", "A"]


def test_entry_rejected_while_calculating():
    ledger = make_ledger(fee=10)
    ledger.enter("A", 10)
    ledger.begin_calculating()
    ledger.record_request("T1")

    with pytest.raises(RoundNotOpen) as exc:
        ledger.enter("B", 10)

    assert exc.value.phase == Phase.CALCULATING
    assert ledger.entrants == ["A"]
    assert ledger.balance == 10


def test_fee_is_checked_before_phase():
    ledger = make_ledger(fee=10)
    ledger.enter("A", 10)
    ledger.begin_calculating()

    with pytest.raises(InsufficientFee):
        ledger.enter("B", 1)


def test_entrant_at_out_of_range():
    ledger = make_ledger()
    with pytest.raises(IndexError):
        ledger.entrant_at(0)


def test_entrants_returns_a_copy():
    ledger = make_ledger()
    ledger.enter("A", 10)
    ledger.entrants.append("X")
    assert ledger.entrants == ["A"]


def test_checkpoint_restore_roundtrip():
    ledger = make_ledger()
    ledger.enter("A", 10)
    ledger.enter("B", 10)
    ledger.begin_calculating()
    ledger.record_request("T1")
    snap = ledger.checkpoint()

    ledger.reopen_after_payout("B", now=99.0)
    assert ledger.phase == Phase.OPEN
    assert ledger.entrants == []

    ledger.restore(snap)
    assert ledger.phase == Phase.CALCULATING
    assert ledger.entrants == ["A", "B"]
    assert ledger.balance == 20
    assert ledger.pending_request == "T1"
    assert ledger.recent_winner is None
    assert ledger.last_closed_at == 0.0
