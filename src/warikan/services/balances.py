from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from warikan.models import Amount, Expense, Participant


@dataclass(slots=True, frozen=True)
class CalculatedBalance:
    participant: Participant
    paid: int
    should_pay: int
    diff: int

    @property
    def settlement_diff(self) -> Amount:
        return self.diff


@dataclass(slots=True)
class _LedgerEntry:
    participant: Participant
    paid: Amount = 0
    should_pay: Amount = 0


def round_half_up(value: Amount) -> int:
    if not math.isfinite(value):
        return 0
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def calculate_balances(
    participants: Sequence[Participant],
    expenses: Iterable[Expense],
) -> list[CalculatedBalance]:
    ledger: dict[str, _LedgerEntry] = {}
    for participant in participants:
        ledger[participant.id] = _LedgerEntry(participant=participant)

    for expense in expenses:
        if expense.amount <= 0:
            continue

        payer = ledger.get(expense.payer_id)
        if payer is not None:
            payer.paid += expense.amount

        for share in expense.shares:
            holder = ledger.get(share.participant_id)
            if holder is None:
                continue
            holder.should_pay += share.amount

    balances: list[CalculatedBalance] = []
    for entry in ledger.values():
        paid = round_half_up(entry.paid)
        should_pay = round_half_up(entry.should_pay)
        balances.append(
            CalculatedBalance(
                participant=entry.participant,
                paid=paid,
                should_pay=should_pay,
                diff=paid - should_pay,
            )
        )
    return balances


def total_spent(expenses: Iterable[Expense]) -> Amount:
    return sum((expense.amount for expense in expenses if expense.amount > 0), 0)
