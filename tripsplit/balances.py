"""Balance computation and debt simplification.

Expense amounts are summed as raw Decimals and each balance is rounded once,
half away from zero. Debt simplification then runs in integer minor units.
"""

import logging
from decimal import Decimal

from tripsplit.errors import InvalidInput, RoundingInconsistency
from tripsplit.money import EPSILON_MINOR, from_minor, round2, to_minor
from tripsplit.schemas import (
    Balance, Expense, Participant, Settlement, SettlementSummary, Transaction,
)

logger = logging.getLogger("tripsplit")


def _index_participants(participants: list[Participant]) -> dict[str, Participant]:
    if not participants:
        raise InvalidInput("At least 1 participant required")

    by_id: dict[str, Participant] = {}
    for p in participants:
        if p.id in by_id:
            raise InvalidInput(f"Duplicate participant {p.id}")
        by_id[p.id] = p
    return by_id


def _paid_by_participant(
    by_id: dict[str, Participant],
    expenses: list[Expense],
) -> dict[str, Decimal]:
    """Sum unrounded expense amounts per payer. Validates every expense first."""
    paid = {pid: Decimal(0) for pid in by_id}
    for expense in expenses:
        if expense.paid_by not in by_id:
            raise InvalidInput(
                f"Expense {expense.id} paid by {expense.paid_by}, who is not a participant"
            )
        if not expense.amount.is_finite():
            raise InvalidInput(f"Expense {expense.id} has no valid amount")
        if expense.amount < 0:
            raise InvalidInput(f"Expense {expense.id} has a negative amount")
        paid[expense.paid_by] += expense.amount
    return paid


def compute_balances(
    participants: list[Participant],
    expenses: list[Expense],
) -> list[Balance]:
    """Compute each participant's net position (paid minus equal share).

    Every participant carries the same share, total / n. Each balance is
    round2(paid - share), so the balances sum to zero only within one minor unit
    per participant. Returns one Balance per participant, in input order.
    Participant ids must be unique and every expense must be paid by one of the
    participants.
    """
    by_id = _index_participants(participants)
    paid = _paid_by_participant(by_id, expenses)

    total = sum(paid.values(), Decimal(0))
    per_person_share = total / len(participants)
    share = round2(per_person_share)

    return [
        Balance(
            participant=p,
            total_paid=round2(paid[p.id]),
            share=share,
            balance=round2(paid[p.id] - per_person_share),
        )
        for p in participants
    ]


def _greedy_simplify(creditors: list[dict], debtors: list[dict]) -> list[Transaction]:
    """Match the largest debtor with the largest creditor until one side runs out.

    Entries are working copies; their "amount" is decremented in place.
    """
    creditors.sort(key=lambda x: x["amount"], reverse=True)
    debtors.sort(key=lambda x: x["amount"], reverse=True)

    transactions = []
    ci = 0
    di = 0

    while ci < len(creditors) and di < len(debtors):
        creditor = creditors[ci]
        debtor = debtors[di]
        transfer = min(creditor["amount"], debtor["amount"])
        if transfer > EPSILON_MINOR:
            transactions.append(Transaction(
                from_participant=debtor["participant"],
                to_participant=creditor["participant"],
                amount=from_minor(transfer),
            ))
        creditor["amount"] -= transfer
        debtor["amount"] -= transfer
        if creditor["amount"] <= EPSILON_MINOR:
            ci += 1
        if debtor["amount"] <= EPSILON_MINOR:
            di += 1

    return transactions


def _leftovers(creditors: list[dict], debtors: list[dict]) -> dict[str, int]:
    residuals: dict[str, int] = {}
    for c in creditors:
        if c["amount"] > EPSILON_MINOR:
            residuals[c["participant"].id] = c["amount"]
    for d in debtors:
        if d["amount"] > EPSILON_MINOR:
            residuals[d["participant"].id] = -d["amount"]
    return residuals


def simplify_debts(balances: list[Balance], *, strict: bool = False) -> list[Transaction]:
    """Produce directed payments that bring every balance to zero.

    Greedy largest-to-largest matching: at most creditors + debtors - 1
    transactions, deterministic for a given input order. Balances within one
    minor unit of zero count as settled.

    Whatever cannot be matched is a rounding residual. An entry left with at
    most one minor unit is dropped silently; any larger one is logged, or raised
    as RoundingInconsistency when strict is set. No transaction is ever
    invented to absorb it.
    """
    creditors = []
    debtors = []

    for b in balances:
        amount = to_minor(b.balance)
        if amount > EPSILON_MINOR:
            creditors.append({"participant": b.participant, "amount": amount})
        elif amount < -EPSILON_MINOR:
            debtors.append({"participant": b.participant, "amount": -amount})

    transactions = _greedy_simplify(creditors, debtors)

    residuals = _leftovers(creditors, debtors)
    if residuals:
        error = RoundingInconsistency({pid: from_minor(v) for pid, v in residuals.items()})
        if strict:
            raise error
        logger.error(
            "Unsettled residual after debt simplification",
            extra={"extra_data": {
                "residuals": {pid: str(amount) for pid, amount in error.residuals.items()},
            }},
        )

    return transactions


def apply_transactions(
    balances: list[Balance],
    transactions: list[Transaction],
) -> dict[str, Decimal]:
    """Return what is left of each balance once every transaction is paid."""
    remaining = {b.participant.id: b.balance for b in balances}
    for t in transactions:
        remaining[t.from_participant.id] += t.amount
        remaining[t.to_participant.id] -= t.amount
    return remaining


def settle(
    participants: list[Participant],
    expenses: list[Expense],
    *,
    strict: bool = False,
) -> Settlement:
    """Full settlement plan for a trip snapshot: balances, transactions and a summary."""
    balances = compute_balances(participants, expenses)
    transactions = simplify_debts(balances, strict=strict)

    total = sum((e.amount for e in expenses), Decimal(0))
    summary = SettlementSummary(
        total_expenses=round2(total),
        per_person_share=balances[0].share,
        member_count=len(participants),
        total_transactions=len(transactions),
    )

    logger.info(
        "Settlement computed",
        extra={"extra_data": {
            "member_count": summary.member_count,
            "expense_count": len(expenses),
            "transaction_count": summary.total_transactions,
        }},
    )
    return Settlement(summary=summary, balances=balances, transactions=transactions)
