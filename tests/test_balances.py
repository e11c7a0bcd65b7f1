"""
Tests for compute_balances.
"""
from decimal import Decimal

import pytest

from conftest import make_expense, make_participants
from tripsplit.balances import compute_balances
from tripsplit.errors import InvalidInput
from tripsplit.schemas import Expense


def _nets(balances):
    return {b.participant.id: b.balance for b in balances}


def test_two_people_one_payer():
    people = make_participants("A", "B")
    balances = compute_balances(people, [make_expense("e1", "a", "100")])

    assert _nets(balances) == {"a": Decimal("50.00"), "b": Decimal("-50.00")}
    assert [b.share for b in balances] == [Decimal("50.00"), Decimal("50.00")]
    assert balances[0].total_paid == Decimal("100.00")
    assert balances[1].total_paid == Decimal("0.00")


def test_three_people_one_payer():
    people = make_participants("A", "B", "C")
    balances = compute_balances(people, [make_expense("e1", "a", "90")])
    assert _nets(balances) == {"a": Decimal("60"), "b": Decimal("-30"), "c": Decimal("-30")}


def test_three_people_uneven_payers():
    people = make_participants("A", "B", "C")
    expenses = [
        make_expense("e1", "a", "60"),
        make_expense("e2", "b", "30"),
        make_expense("e3", "c", "30"),
    ]
    balances = compute_balances(people, expenses)
    assert _nets(balances) == {"a": Decimal("20"), "b": Decimal("-10"), "c": Decimal("-10")}
    assert all(b.share == Decimal("40.00") for b in balances)


def test_equal_payers_are_settled():
    people = make_participants("A", "B")
    balances = compute_balances(
        people, [make_expense("e1", "a", "50"), make_expense("e2", "b", "50")]
    )
    assert all(b.balance == 0 for b in balances)


def test_single_participant_always_zero():
    people = make_participants("Solo")
    balances = compute_balances(
        people, [make_expense("e1", "solo", "1234.56"), make_expense("e2", "solo", "0.01")]
    )
    assert len(balances) == 1
    assert balances[0].balance == 0
    assert balances[0].share == Decimal("1234.57")


def test_no_expenses(trio):
    balances = compute_balances(trio, [])
    assert [b.balance for b in balances] == [0, 0, 0]
    assert [b.total_paid for b in balances] == [0, 0, 0]


def test_output_follows_participant_order():
    people = make_participants("Zed", "Amy", "Max")
    balances = compute_balances(people, [make_expense("e1", "max", "30")])
    assert [b.participant.id for b in balances] == ["zed", "amy", "max"]


def test_zero_amount_expense_is_a_no_op(trio):
    balances = compute_balances(trio, [make_expense("e1", "bob", "0")])
    assert all(b.balance == 0 for b in balances)


def test_indivisible_total_rounds_each_balance(trio):
    balances = compute_balances(trio, [make_expense("e1", "alice", "100")])

    assert [b.share for b in balances] == [Decimal("33.33")] * 3
    assert _nets(balances) == {
        "alice": Decimal("66.67"), "bob": Decimal("-33.33"), "carol": Decimal("-33.33"),
    }
    assert abs(sum(b.balance for b in balances)) <= Decimal("0.01") * len(trio)


def test_half_paisa_rounds_away_from_zero():
    people = make_participants("A", "B")
    balances = compute_balances(people, [make_expense("e1", "a", "0.01")])
    assert _nets(balances) == {"a": Decimal("0.01"), "b": Decimal("-0.01")}
    assert balances[0].share == Decimal("0.01")


def test_balances_do_not_depend_on_participant_order():
    people = make_participants("A", "B", "C", "D", "E", "F", "G")
    expenses = [make_expense("e1", "a", "100"), make_expense("e2", "c", "1.00")]

    forward = _nets(compute_balances(people, expenses))
    backward = _nets(compute_balances(list(reversed(people)), expenses))
    rotated = _nets(compute_balances(people[3:] + people[:3], expenses))
    assert forward == backward == rotated


def test_float_amounts_are_accepted(trio):
    expenses = [Expense(id="e1", paid_by="bob", amount=0.1), Expense(id="e2", paid_by="bob", amount=0.2)]
    balances = compute_balances(trio, expenses)
    assert balances[1].total_paid == Decimal("0.30")
    assert sum(b.balance for b in balances) == 0


def test_inputs_are_not_mutated(trio):
    expenses = [make_expense("e1", "alice", "10")]
    before = [p.model_dump() for p in trio], [e.model_dump() for e in expenses]
    compute_balances(trio, expenses)
    assert ([p.model_dump() for p in trio], [e.model_dump() for e in expenses]) == before


def test_empty_participants_rejected():
    with pytest.raises(InvalidInput):
        compute_balances([], [])


def test_unknown_payer_rejected(trio):
    expenses = [make_expense("e1", "alice", "10"), make_expense("e2", "mallory", "5")]
    with pytest.raises(InvalidInput, match="mallory"):
        compute_balances(trio, expenses)


def test_negative_amount_rejected(trio):
    with pytest.raises(InvalidInput, match="negative"):
        compute_balances(trio, [make_expense("e1", "alice", "-5")])


def test_duplicate_participants_rejected():
    people = make_participants("A", "B") + make_participants("A")
    with pytest.raises(InvalidInput, match="Duplicate"):
        compute_balances(people, [])


def test_tiny_negative_amount_rejected(trio):
    with pytest.raises(InvalidInput, match="negative"):
        compute_balances(trio, [make_expense("e1", "alice", "-0.004")])


def test_sub_paisa_amounts_are_summed_before_rounding():
    people = make_participants("A", "B")
    expenses = [make_expense(f"e{i}", "a", "0.005") for i in range(3)]
    balances = compute_balances(people, expenses)

    # 0.015 in total, not three rounded 0.01s
    assert balances[0].total_paid == Decimal("0.02")
    assert balances[0].share == Decimal("0.01")
    assert _nets(balances) == {"a": Decimal("0.01"), "b": Decimal("-0.01")}
