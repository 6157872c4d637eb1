from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from warikan.config import get_settings
from warikan.logging import get_logger
from warikan.models import Amount, Expense, Participant
from warikan.services.balances import CalculatedBalance, calculate_balances, total_spent
from warikan.services.rounding import round_balances_to_unit
from warikan.services.settlement import SettlementPlan, plan_settlement


@dataclass(slots=True, frozen=True)
class SettlementSummary:
    balances: list[CalculatedBalance]
    plan: SettlementPlan
    total_spent: Amount
    rounding_unit: int | None = None


def summarize(
    participants: Sequence[Participant],
    expenses: Sequence[Expense],
    unit: int | None = None,
    round_settlements: bool | None = None,
) -> SettlementSummary:
    settings = get_settings()
    if round_settlements is None:
        round_settlements = settings.round_settlements

    balances: list[CalculatedBalance] = calculate_balances(participants, expenses)
    rounding_unit: int | None = None
    if round_settlements:
        rounding_unit = unit if unit is not None else settings.rounding_unit
        balances = list(round_balances_to_unit(balances, rounding_unit))

    plan = plan_settlement(balances)

    get_logger(__name__).info(
        "settlement.summary",
        participants=len(participants),
        expenses=len(expenses),
        entries=len(plan.entries),
        rounding_unit=rounding_unit,
        balanced=plan.balanced,
    )
    return SettlementSummary(
        balances=balances,
        plan=plan,
        total_spent=total_spent(expenses),
        rounding_unit=rounding_unit,
    )
