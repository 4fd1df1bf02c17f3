"""
Tests for client record validation.
"""

from django.test import SimpleTestCase

from apps.core.rules import (
    KENYAN_MOBILE_PATTERN,
    InvalidReason,
    validate_client,
)


def make_candidate(**overrides):
    candidate = {
        'full_name': 'John Kamau',
        'phone': '0712345678',
        'email': 'john@example.co.ke',
        'address': 'Moi Avenue, Mombasa',
        'vehicle_number': 'KCA 123X',
        'policy_type': 'Comprehensive',
        'start_date': '2024-01-01',
        'renewal_date': '',
        'premium': '25000',
        'earned': '0',
        'commission': '2500',
    }
    candidate.update(overrides)
    return candidate


class ValidateClientTests(SimpleTestCase):
    """Test validate_client()."""

    def assertInvalid(self, candidate, reason, **kwargs):
        result = validate_client(candidate, **kwargs)
        self.assertFalse(result.is_valid)
        self.assertIs(result.reason, reason)
        self.assertEqual(result.message, reason.message)

    def test_valid(self):
        result = validate_client(make_candidate())
        self.assertTrue(result.is_valid)
        self.assertIsNone(result.reason)
        self.assertEqual(result.message, '')

    def test_required_text_fields(self):
        self.assertInvalid(make_candidate(full_name='  '), InvalidReason.FULL_NAME_REQUIRED)
        self.assertInvalid(make_candidate(phone=''), InvalidReason.PHONE_REQUIRED)
        self.assertInvalid(make_candidate(vehicle_number=None), InvalidReason.VEHICLE_NUMBER_REQUIRED)
        self.assertInvalid(make_candidate(start_date=''), InvalidReason.START_DATE_REQUIRED)
        self.assertInvalid(make_candidate(policy_type=''), InvalidReason.POLICY_TYPE_REQUIRED)

    def test_accepted_phone_formats(self):
        for phone in ('0712345678', '+254712345678', '0112345678', '0712 345 678', ' +254 712 345678 '):
            with self.subTest(phone=phone):
                self.assertTrue(validate_client(make_candidate(phone=phone)).is_valid)

    def test_rejected_phone_formats(self):
        for phone in ('12345', '254712345678', '07123456789', '071234567a', '+2540712345678'):
            with self.subTest(phone=phone):
                self.assertInvalid(make_candidate(phone=phone), InvalidReason.PHONE_INVALID)

    def test_strict_mobile_pattern(self):
        """The strict pattern only takes 07xx and 01xx numbers."""
        self.assertTrue(
            validate_client(make_candidate(phone='0712345678'), phone_pattern=KENYAN_MOBILE_PATTERN).is_valid
        )
        self.assertInvalid(
            make_candidate(phone='0212345678'),
            InvalidReason.PHONE_INVALID,
            phone_pattern=KENYAN_MOBILE_PATTERN,
        )

    def test_email_optional(self):
        self.assertTrue(validate_client(make_candidate(email='')).is_valid)
        self.assertTrue(validate_client(make_candidate(email=None)).is_valid)

    def test_email_invalid(self):
        for email in ('john', 'john@example', 'jo hn@example.com', '@example.com'):
            with self.subTest(email=email):
                self.assertInvalid(make_candidate(email=email), InvalidReason.EMAIL_INVALID)

    def test_dates(self):
        self.assertInvalid(make_candidate(start_date='01/01/2024x'), InvalidReason.START_DATE_INVALID)
        self.assertInvalid(make_candidate(renewal_date='soon'), InvalidReason.RENEWAL_DATE_INVALID)
        self.assertTrue(validate_client(make_candidate(renewal_date='2024-12-31')).is_valid)

    def test_renewal_date_required_when_configured(self):
        self.assertInvalid(
            make_candidate(renewal_date=None),
            InvalidReason.RENEWAL_DATE_REQUIRED,
            require_renewal_date=True,
        )

    def test_policy_type_must_be_known(self):
        self.assertInvalid(make_candidate(policy_type='Life'), InvalidReason.POLICY_TYPE_INVALID)
        for policy_type in ('Comprehensive', 'Third-Party', 'Act-Only'):
            with self.subTest(policy_type=policy_type):
                self.assertTrue(validate_client(make_candidate(policy_type=policy_type)).is_valid)

    def test_negative_amounts(self):
        self.assertInvalid(make_candidate(premium='-1'), InvalidReason.PREMIUM_NEGATIVE)
        self.assertInvalid(make_candidate(commission=-0.01), InvalidReason.COMMISSION_NEGATIVE)

    def test_amounts_must_fit_column(self):
        """Amounts are rounded to cents and must fit DECIMAL(12, 2)."""
        self.assertTrue(validate_client(make_candidate(premium='100.555')).is_valid)
        self.assertTrue(validate_client(make_candidate(premium='9999999999.99')).is_valid)
        self.assertInvalid(make_candidate(premium='1e15'), InvalidReason.PREMIUM_OUT_OF_RANGE)
        self.assertInvalid(make_candidate(premium='9999999999.995'), InvalidReason.PREMIUM_OUT_OF_RANGE)
        self.assertInvalid(make_candidate(commission='1e40'), InvalidReason.COMMISSION_OUT_OF_RANGE)
        self.assertInvalid(make_candidate(earned='-1e12'), InvalidReason.EARNED_OUT_OF_RANGE)

    def test_text_fields_must_fit_column(self):
        cases = (
            ('full_name', 'A' * 201, InvalidReason.FULL_NAME_TOO_LONG),
            ('email', 'a' * 250 + '@x.co', InvalidReason.EMAIL_TOO_LONG),
            ('vehicle_number', 'K' * 30, InvalidReason.VEHICLE_NUMBER_TOO_LONG),
            ('address', 'x' * 256, InvalidReason.ADDRESS_TOO_LONG),
        )
        for field_name, value, reason in cases:
            with self.subTest(field=field_name):
                self.assertInvalid(make_candidate(**{field_name: value}), reason)

        self.assertTrue(validate_client(make_candidate(vehicle_number='K' * 20)).is_valid)
        self.assertTrue(validate_client(make_candidate(address='x' * 255)).is_valid)

    def test_spaced_phone_too_long_for_column(self):
        """The phone is stored with its inner spaces, so those count too."""
        self.assertTrue(validate_client(make_candidate(phone='0 7 1 2 3 4 5 6 7 8 ')).is_valid)
        self.assertInvalid(
            make_candidate(phone='0 7 1 2   3 4 5   6 7 8'),
            InvalidReason.PHONE_TOO_LONG,
        )

    def test_missing_amounts_are_zero(self):
        self.assertTrue(validate_client(make_candidate(premium=None, commission='')).is_valid)

    def test_first_failure_wins(self):
        """Reasons are reported in a fixed order."""
        candidate = make_candidate(
            full_name='',
            phone='bad',
            email='bad',
            premium='-5',
        )
        self.assertInvalid(candidate, InvalidReason.FULL_NAME_REQUIRED)

        candidate['full_name'] = 'John'
        self.assertInvalid(candidate, InvalidReason.PHONE_INVALID)

        candidate['phone'] = '0712345678'
        self.assertInvalid(candidate, InvalidReason.EMAIL_INVALID)

        candidate['email'] = ''
        self.assertInvalid(candidate, InvalidReason.PREMIUM_NEGATIVE)

    def test_candidate_not_modified(self):
        candidate = make_candidate(full_name='  John  ', phone=' 0712 345 678 ')
        snapshot = dict(candidate)
        validate_client(candidate)
        self.assertEqual(candidate, snapshot)

    def test_missing_keys(self):
        self.assertInvalid({}, InvalidReason.FULL_NAME_REQUIRED)
