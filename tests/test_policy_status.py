"""
Tests for policy status derivation.
"""

from datetime import date, datetime, timedelta, timezone

from django.test import SimpleTestCase

from apps.core.rules import (
    PolicyStatus,
    evaluate_status,
    policy_number,
    record_status,
    resolve_renewal_date,
)
from apps.core.utils import add_years

NOW = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


class EvaluateStatusTests(SimpleTestCase):
    """Test evaluate_status() boundaries and fallbacks."""

    def test_active(self):
        status = evaluate_status('2024-01-01', '2024-12-31', NOW)
        self.assertIs(status, PolicyStatus.ACTIVE)

    def test_expiring_soon(self):
        renewal = NOW + timedelta(days=10)
        self.assertIs(evaluate_status('2023-06-20', renewal, NOW), PolicyStatus.EXPIRING_SOON)

    def test_expired(self):
        self.assertIs(evaluate_status('2023-01-01', '2024-01-01', NOW), PolicyStatus.EXPIRED)

    def test_renewal_equal_to_now_is_expired(self):
        self.assertIs(evaluate_status('2023-06-01', NOW, NOW), PolicyStatus.EXPIRED)

    def test_renewal_one_second_after_now_is_expiring(self):
        renewal = NOW + timedelta(seconds=1)
        self.assertIs(evaluate_status('2023-06-01', renewal, NOW), PolicyStatus.EXPIRING_SOON)

    def test_renewal_exactly_thirty_days_out_is_expiring(self):
        renewal = NOW + timedelta(days=30)
        self.assertIs(evaluate_status('2023-07-01', renewal, NOW), PolicyStatus.EXPIRING_SOON)

    def test_renewal_just_past_window_is_active(self):
        renewal = NOW + timedelta(days=30, seconds=1)
        self.assertIs(evaluate_status('2023-07-01', renewal, NOW), PolicyStatus.ACTIVE)

    def test_derived_renewal_from_start_date(self):
        """Without a renewal date, the policy renews one year after start."""
        # Renews 2024-06-20, 19 days out
        self.assertIs(evaluate_status('2023-06-20', None, NOW), PolicyStatus.EXPIRING_SOON)
        self.assertIs(evaluate_status('2023-06-20', '', NOW), PolicyStatus.EXPIRING_SOON)
        # Renews 2024-05-01, already past
        self.assertIs(evaluate_status('2023-05-01', None, NOW), PolicyStatus.EXPIRED)
        # Renews 2025-01-01
        self.assertIs(evaluate_status('2024-01-01', None, NOW), PolicyStatus.ACTIVE)

    def test_renewal_thirty_one_days_out_is_active(self):
        renewal = NOW + timedelta(days=31)
        self.assertIs(evaluate_status('2023-07-01', renewal, NOW), PolicyStatus.ACTIVE)

    def test_derived_matches_explicit(self):
        """Omitting the renewal date is the same as passing start + 1 year."""
        for start in ('2023-05-01', '2023-06-20', '2024-01-01', '2024-02-29', '2023-06-01T09:00:00Z'):
            with self.subTest(start=start):
                self.assertIs(
                    evaluate_status(start, None, NOW),
                    evaluate_status(start, add_years(start, 1), NOW),
                )

    def test_explicit_renewal_overrides_start(self):
        """Start date is ignored entirely when a renewal date is given."""
        self.assertIs(
            evaluate_status('garbage', '2024-12-31', NOW),
            PolicyStatus.ACTIVE,
        )

    def test_unparseable_start_without_renewal(self):
        self.assertIs(evaluate_status('not-a-date', None, NOW), PolicyStatus.DATE_ERROR)

    def test_unparseable_explicit_renewal_does_not_fall_back(self):
        self.assertIs(
            evaluate_status('2024-01-01', 'not-a-date', NOW),
            PolicyStatus.DATE_ERROR,
        )

    def test_unparseable_now(self):
        self.assertIs(evaluate_status('2024-01-01', None, 'nope'), PolicyStatus.DATE_ERROR)

    def test_deterministic(self):
        results = {evaluate_status('2023-06-20', None, NOW) for _ in range(5)}
        self.assertEqual(results, {PolicyStatus.EXPIRING_SOON})


class MonotonicityTests(SimpleTestCase):
    """Status only moves forward as time passes."""

    ORDER = {
        PolicyStatus.ACTIVE: 0,
        PolicyStatus.EXPIRING_SOON: 1,
        PolicyStatus.EXPIRED: 2,
    }

    def test_status_never_regresses(self):
        renewal = datetime(2024, 7, 15, tzinfo=timezone.utc)
        previous = -1
        for offset in range(0, 120, 3):
            now = datetime(2024, 5, 1, tzinfo=timezone.utc) + timedelta(days=offset)
            rank = self.ORDER[evaluate_status('2023-07-15', renewal, now)]
            self.assertGreaterEqual(rank, previous)
            previous = rank
        self.assertEqual(previous, self.ORDER[PolicyStatus.EXPIRED])


class ResolveRenewalDateTests(SimpleTestCase):

    def test_leap_day_start(self):
        self.assertEqual(
            resolve_renewal_date(date(2024, 2, 29)),
            datetime(2025, 2, 28, tzinfo=timezone.utc),
        )

    def test_explicit_wins(self):
        self.assertEqual(
            resolve_renewal_date('2024-01-01', '2024-09-30'),
            datetime(2024, 9, 30, tzinfo=timezone.utc),
        )


class RecordStatusTests(SimpleTestCase):
    """record_status() reads both mappings and objects."""

    def test_mapping(self):
        record = {'start_date': '2024-01-01', 'renewal_date': None}
        self.assertIs(record_status(record, NOW), PolicyStatus.ACTIVE)

    def test_object(self):
        class Record:
            start_date = date(2023, 1, 1)
            renewal_date = None

        self.assertIs(record_status(Record(), NOW), PolicyStatus.EXPIRED)

    def test_labels(self):
        self.assertEqual(PolicyStatus.EXPIRING_SOON.label, 'Expiring Soon')
        self.assertEqual(PolicyStatus.DATE_ERROR.label, 'Date Error')
        self.assertTrue(PolicyStatus.DATE_ERROR.is_lapsed)
        self.assertFalse(PolicyStatus.EXPIRING_SOON.is_lapsed)


class PolicyNumberTests(SimpleTestCase):

    def test_last_two_characters(self):
        self.assertEqual(policy_number('KCA 123X'), 'POL 3X')

    def test_blank(self):
        self.assertEqual(policy_number(''), 'N/A')
        self.assertEqual(policy_number(None), 'N/A')
