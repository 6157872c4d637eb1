from __future__ import annotations

import secrets
from typing import Mapping, Sequence

from warikan.models import Expense, ExpenseShare


class AllocationError(ValueError):
    pass


def split_evenly(amount: int, participant_ids: Sequence[str]) -> dict[str, int]:
    if amount < 0:
        raise AllocationError("amount must be non-negative")
    if not participant_ids:
        raise AllocationError("participant_ids must not be empty")

    n = len(participant_ids)
    base_share = amount // n
    extra = amount - base_share * n

    shares: dict[str, int] = {}
    for participant_id in participant_ids:
        share = base_share
        if extra > 0:
            share += 1
            extra -= 1
        shares[participant_id] = share
    return shares


def allocate_shares(
    amount: int,
    participant_ids: Sequence[str],
    fixed_amounts: Mapping[str, int] | None = None,
) -> list[ExpenseShare]:
    if amount <= 0:
        raise AllocationError("amount must be positive")
    if not participant_ids:
        raise AllocationError("at least one participant must share the expense")

    fixed_amounts = fixed_amounts or {}
    allocated: dict[str, int] = {}
    flexible: list[str] = []

    for participant_id in participant_ids:
        fixed = max(0, fixed_amounts.get(participant_id, 0))
        if fixed > 0:
            allocated[participant_id] = fixed
        else:
            flexible.append(participant_id)

    remainder = amount - sum(allocated.values())
    if remainder < 0:
        raise AllocationError("fixed amounts exceed the expense amount")

    if flexible:
        allocated.update(split_evenly(remainder, flexible))
    elif remainder != 0:
        raise AllocationError("fixed amounts do not add up to the expense amount")

    return [ExpenseShare(participant_id=pid, amount=allocated[pid]) for pid in participant_ids]


def build_expense(
    title: str,
    amount: int,
    payer_id: str,
    participant_ids: Sequence[str],
    fixed_amounts: Mapping[str, int] | None = None,
    expense_id: str | None = None,
) -> Expense:
    shares = allocate_shares(amount, participant_ids, fixed_amounts)
    return Expense(
        id=expense_id or secrets.token_hex(8),
        title=title,
        amount=amount,
        payer_id=payer_id,
        shares=tuple(shares),
    )
