from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from warikan.logging import get_logger
from warikan.models import Amount
from warikan.services.balances import CalculatedBalance


@dataclass(slots=True, frozen=True)
class SettlementEntry:
    from_id: str
    to_id: str
    amount: Amount


@dataclass(slots=True, frozen=True)
class SettlementPlan:
    entries: List[SettlementEntry] = field(default_factory=list)
    unmatched_credit: Amount = 0
    unmatched_debt: Amount = 0

    @property
    def balanced(self) -> bool:
        return self.unmatched_credit == 0 and self.unmatched_debt == 0


@dataclass(slots=True)
class _Position:
    participant_id: str
    remaining: Amount


def plan_settlement(balances: Sequence[CalculatedBalance]) -> SettlementPlan:
    creditors: list[_Position] = []
    debtors: list[_Position] = []

    for balance in balances:
        diff = balance.settlement_diff
        if diff > 0:
            creditors.append(_Position(balance.participant.id, diff))
        elif diff < 0:
            debtors.append(_Position(balance.participant.id, -diff))

    entries: list[SettlementEntry] = []
    i, j = 0, 0

    while i < len(debtors) and j < len(creditors):
        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(debtor.remaining, creditor.remaining)
        if amount > 0:
            entries.append(SettlementEntry(from_id=debtor.participant_id, to_id=creditor.participant_id, amount=amount))

        debtor.remaining -= amount
        creditor.remaining -= amount

        if debtor.remaining == 0:
            i += 1
        if creditor.remaining == 0:
            j += 1

    plan = SettlementPlan(
        entries=entries,
        unmatched_credit=sum((c.remaining for c in creditors[j:]), 0),
        unmatched_debt=sum((d.remaining for d in debtors[i:]), 0),
    )
    if not plan.balanced:
        get_logger(__name__).warning(
            "settlement.unbalanced",
            unmatched_credit=plan.unmatched_credit,
            unmatched_debt=plan.unmatched_debt,
        )
    return plan


def build_settlement_plan(balances: Sequence[CalculatedBalance]) -> List[SettlementEntry]:
    return plan_settlement(balances).entries
