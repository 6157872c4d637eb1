from structlog.testing import capture_logs

from warikan.models import Participant
from warikan.services.balances import CalculatedBalance
from warikan.services.rounding import RoundedBalance
from warikan.services.settlement import SettlementEntry, build_settlement_plan, plan_settlement


def _balance(participant_id: str, diff: int) -> CalculatedBalance:
    return CalculatedBalance(
        participant=Participant(id=participant_id, name=participant_id.upper()),
        paid=max(diff, 0),
        should_pay=max(-diff, 0),
        diff=diff,
    )


def _apply(balances, entries):
    after = {b.participant.id: b.settlement_diff for b in balances}
    for entry in entries:
        after[entry.from_id] += entry.amount
        after[entry.to_id] -= entry.amount
    return after


def test_settle_single_creditor():
    balances = [_balance("a", 2000), _balance("b", -1000), _balance("c", -1000)]

    entries = build_settlement_plan(balances)

    assert entries == [
        SettlementEntry(from_id="b", to_id="a", amount=1000),
        SettlementEntry(from_id="c", to_id="a", amount=1000),
    ]
    assert all(value == 0 for value in _apply(balances, entries).values())


def test_settle_keeps_input_order_and_bound():
    balances = [_balance("a", 100), _balance("b", 200), _balance("c", -150), _balance("d", -150)]

    entries = build_settlement_plan(balances)

    assert entries == [
        SettlementEntry(from_id="c", to_id="a", amount=100),
        SettlementEntry(from_id="c", to_id="b", amount=50),
        SettlementEntry(from_id="d", to_id="b", amount=150),
    ]
    assert len(entries) <= 2 + 2 - 1
    assert all(entry.from_id != entry.to_id for entry in entries)
    assert all(value == 0 for value in _apply(balances, entries).values())


def test_settle_uses_rounded_diff():
    participants = [Participant(id="a", name="A"), Participant(id="b", name="B")]
    balances = [
        RoundedBalance(participant=participants[0], paid=150, should_pay=0, diff=150, rounded_diff=200),
        RoundedBalance(participant=participants[1], paid=0, should_pay=150, diff=-150, rounded_diff=-200),
    ]

    assert build_settlement_plan(balances) == [SettlementEntry(from_id="b", to_id="a", amount=200)]


def test_settled_balances_give_empty_plan():
    plan = plan_settlement([_balance("a", 0), _balance("b", 0)])
    assert plan.entries == []
    assert plan.balanced
    assert build_settlement_plan([]) == []


def test_unbalanced_input_reports_leftover():
    with capture_logs() as logs:
        plan = plan_settlement([_balance("a", 500), _balance("b", -300)])

    assert plan.entries == [SettlementEntry(from_id="b", to_id="a", amount=300)]
    assert plan.unmatched_credit == 200
    assert plan.unmatched_debt == 0
    assert not plan.balanced
    assert logs == [
        {"event": "settlement.unbalanced", "log_level": "warning", "unmatched_credit": 200, "unmatched_debt": 0},
    ]


def test_unbalanced_debt_reports_leftover():
    plan = plan_settlement([_balance("a", 100), _balance("b", -300), _balance("c", -50)])

    assert plan.entries == [SettlementEntry(from_id="b", to_id="a", amount=100)]
    assert plan.unmatched_debt == 250
    assert plan.unmatched_credit == 0


def test_balanced_input_logs_nothing():
    with capture_logs() as logs:
        plan_settlement([_balance("a", 300), _balance("b", -300)])
    assert logs == []
