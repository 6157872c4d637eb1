from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from warikan.logging import get_logger
from warikan.models import Amount
from warikan.services.balances import CalculatedBalance, round_half_up


ROUNDING_UNIT = 100


@dataclass(slots=True, frozen=True)
class RoundedBalance(CalculatedBalance):
    rounded_diff: Amount

    @property
    def settlement_diff(self) -> Amount:
        return self.rounded_diff


def round_to_unit(value: Amount, unit: Amount = ROUNDING_UNIT) -> Amount:
    if unit <= 0:
        raise ValueError("unit must be positive")
    if not math.isfinite(value):
        return 0
    return round_half_up(value / unit) * unit


def _drift_target(values: Sequence[Amount], drift: Amount) -> int:
    target = 0
    for index, value in enumerate(values):
        if drift > 0 and value > values[target]:
            target = index
        elif drift < 0 and value < values[target]:
            target = index
    return target


def round_balances_to_unit(
    balances: Sequence[CalculatedBalance],
    unit: Amount = ROUNDING_UNIT,
) -> list[RoundedBalance]:
    rounded = [round_to_unit(balance.diff, unit) for balance in balances]

    drift = sum(rounded)
    if drift != 0 and rounded:
        target = _drift_target(rounded, drift)
        rounded[target] -= drift
        get_logger(__name__).debug(
            "rounding.drift_corrected",
            participant_id=balances[target].participant.id,
            drift=drift,
            unit=unit,
        )

    return [
        RoundedBalance(
            participant=balance.participant,
            paid=balance.paid,
            should_pay=balance.should_pay,
            diff=balance.diff,
            rounded_diff=value,
        )
        for balance, value in zip(balances, rounded)
    ]
