from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence


Amount = int | float


@dataclass(slots=True, frozen=True)
class Participant:
    id: str
    name: str


@dataclass(slots=True, frozen=True)
class ExpenseShare:
    participant_id: str
    amount: Amount


@dataclass(slots=True, frozen=True)
class Expense:
    id: str
    title: str
    amount: Amount
    payer_id: str
    shares: Sequence[ExpenseShare] = field(default_factory=tuple)
