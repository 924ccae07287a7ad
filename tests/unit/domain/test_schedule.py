"""Unit tests for the Schedule Builder"""

from datetime import date, datetime

import pytest

from src.domain.obligation import ObligationStatus
from src.domain.payment import PaymentProvider, PaymentStatus
from src.domain.schedule import build_schedule, find_payment_for_bucket


@pytest.fixture
def plan(make_plan):
    return make_plan(price_cents=10000)


class TestBuildScheduleWithoutPayments:
    """Schedules of subscriptions without any payment"""

    @pytest.mark.parametrize("now", [
        datetime(2025, 6, 1, 9, 0),
        datetime(2026, 7, 20, 12, 0),
        datetime(2027, 1, 1, 0, 0),
    ])
    def test_returns_twelve_unpaid_obligations_at_plan_price(self, make_subscription, plan, now):
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [], now)

        assert len(schedule) == 12
        assert all(o.status in (ObligationStatus.PENDING, ObligationStatus.LATE) for o in schedule)
        assert all(o.amount_cents == 10000 for o in schedule)
        assert all(o.provider == PaymentProvider.SCHEDULE for o in schedule)
        assert all(o.matched_payment_id is None for o in schedule)

    def test_obligations_are_sorted_by_due_date(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2026, 1, 1))

        due_dates = [o.due_date for o in schedule]
        assert due_dates == sorted(due_dates)
        assert due_dates[0] == date(2026, 1, 5)
        assert due_dates[-1] == date(2026, 12, 5)

    def test_year_defaults_to_anchor_year(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2025, 8, 10), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2026, 1, 1))

        assert {o.due_date.year for o in schedule} == {2025}

    def test_explicit_year_overrides_anchor_year(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2025, 8, 10), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2026, 1, 1), year=2027)

        assert {o.due_date.year for o in schedule} == {2027}
        assert all(o.due_date.day == 10 for o in schedule)

    def test_missing_plan_yields_empty_schedule(self, make_subscription):
        subscription = make_subscription(plan=None)

        assert build_schedule(subscription, None, [], datetime(2026, 3, 10)) == []


class TestDayOfMonthClamping:
    """Anchor days that do not exist in every month"""

    def test_day_31_is_clamped_to_last_day_of_shorter_months(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2026, 1, 31), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2026, 1, 1))

        by_month = {o.due_date.month: o.due_date for o in schedule}
        assert by_month[2] == date(2026, 2, 28)
        assert by_month[4] == date(2026, 4, 30)
        assert by_month[3] == date(2026, 3, 31)
        assert len(by_month) == 12

    def test_leap_year_february(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2028, 1, 30), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2028, 1, 1))

        assert schedule[1].due_date == date(2028, 2, 29)


class TestStatusDerivation:
    """PAID / LATE / PENDING derivation"""

    def test_documented_scenario(self, make_subscription, make_payment, plan):
        payment = make_payment(paid_at=datetime(2026, 3, 5, 12, 0), payment_id=7)
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)
        now = datetime(2026, 4, 10, 12, 0)

        schedule = build_schedule(subscription, plan, [payment], now)

        assert schedule[2].status == ObligationStatus.PAID
        assert schedule[2].amount_cents == 10000
        assert schedule[2].matched_payment_id == 7
        assert schedule[2].paid_at == datetime(2026, 3, 5, 12, 0)
        assert schedule[2].provider == PaymentProvider.STRIPE
        assert schedule[0].status == ObligationStatus.LATE
        assert schedule[1].status == ObligationStatus.LATE
        assert schedule[3].status == ObligationStatus.LATE
        assert all(o.status == ObligationStatus.PENDING for o in schedule[4:])

    def test_due_today_is_late(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2026, 3, 5, 12, 0))

        assert schedule[2].status == ObligationStatus.LATE
        assert schedule[3].status == ObligationStatus.PENDING

    def test_due_date_is_pending_until_its_day_starts(self, make_subscription, plan):
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [], datetime(2026, 3, 4, 23, 59))

        assert schedule[1].status == ObligationStatus.LATE
        assert schedule[2].status == ObligationStatus.PENDING

    def test_unpaid_payment_in_bucket_is_matched_but_not_paid(self, make_subscription, make_payment, plan):
        payment = make_payment(
            created_at=datetime(2026, 2, 3, 10, 0), status=PaymentStatus.FAILED, payment_id=3
        )
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [payment], datetime(2026, 6, 1))

        assert schedule[1].status == ObligationStatus.LATE
        assert schedule[1].matched_payment_id == 3

    def test_created_at_is_used_when_paid_at_is_missing(self, make_subscription, make_payment, plan):
        payment = make_payment(paid_at=None, created_at=datetime(2026, 6, 20, 12, 0))
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [payment], datetime(2026, 1, 1))

        assert schedule[5].status == ObligationStatus.PAID

    def test_payment_of_another_year_is_not_matched(self, make_subscription, make_payment, plan):
        payment = make_payment(paid_at=datetime(2025, 3, 5, 12, 0))
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [payment], datetime(2026, 1, 1))

        assert all(o.status != ObligationStatus.PAID for o in schedule)

    def test_paid_iff_paid_payment_in_bucket(self, make_subscription, make_payment, plan):
        payments = [
            make_payment(paid_at=datetime(2026, 1, 10), payment_id=1),
            make_payment(paid_at=datetime(2026, 4, 1), payment_id=2, status=PaymentStatus.PENDING),
            make_payment(paid_at=datetime(2026, 9, 30), payment_id=3),
        ]
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, payments, datetime(2026, 12, 31))

        paid_months = {o.due_date.month for o in schedule if o.status == ObligationStatus.PAID}
        assert paid_months == {1, 9}

    def test_pinned_bucket_wins_over_paid_at(self, make_subscription, make_payment, plan):
        payment = make_payment(paid_at=datetime(2026, 4, 2, 12, 0))
        payment.pin_bucket(2026, 3)
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)

        schedule = build_schedule(subscription, plan, [payment], datetime(2026, 12, 1))

        assert schedule[2].status == ObligationStatus.PAID
        assert schedule[3].status == ObligationStatus.LATE

    def test_late_month_turns_paid_when_payment_arrives(self, make_subscription, make_payment, plan):
        subscription = make_subscription(anchor=date(2026, 1, 5), plan=plan)
        now = datetime(2026, 3, 1)

        before = build_schedule(subscription, plan, [], now)
        after = build_schedule(
            subscription, plan, [make_payment(paid_at=datetime(2026, 1, 28))], now
        )

        assert before[0].status == ObligationStatus.LATE
        assert after[0].status == ObligationStatus.PAID


class TestFindPaymentForBucket:
    def test_first_match_in_input_order(self, make_payment):
        first = make_payment(paid_at=datetime(2026, 3, 1), payment_id=1)
        second = make_payment(paid_at=datetime(2026, 3, 20), payment_id=2)

        assert find_payment_for_bucket([first, second], 2026, 3) is first

    def test_no_match(self, make_payment):
        payment = make_payment(paid_at=datetime(2026, 3, 1))

        assert find_payment_for_bucket([payment], 2026, 4) is None
