"""
Policy lifecycle and profile-gating rules.

Pure functions shared by every page-level view: policy status
derivation, profile completeness, client record validation and
dashboard stats. Nothing here touches the database or reads the
system clock: "now" is always passed in by the caller.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional

from apps.core.utils import add_years, to_amount, to_datetime, to_money

RENEWAL_WINDOW = timedelta(days=30)

# Any digit after the prefix: 0712345678, +254212345678
KENYAN_PHONE_PATTERN = re.compile(r'^(\+254|0)[0-9]{9}$')
# Mobile prefixes only (07xx / 01xx)
KENYAN_MOBILE_PATTERN = re.compile(r'^(\+254|0)[17]\d{8}$')

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

REQUIRED_PROFILE_FIELDS = ('name', 'phone', 'address')

# Column sizes of the client_records table
MAX_LENGTHS = {
    'full_name': 200,
    'phone': 20,
    'email': 254,
    'address': 255,
    'vehicle_number': 20,
}

# Largest value a DECIMAL(12, 2) column holds
MAX_AMOUNT = Decimal('9999999999.99')


class PolicyStatus(str, Enum):
    """Lifecycle state of a policy, derived from its renewal date."""

    ACTIVE = 'active'
    EXPIRING_SOON = 'expiring'
    EXPIRED = 'expired'
    DATE_ERROR = 'date_error'

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def is_lapsed(self) -> bool:
        return self in (PolicyStatus.EXPIRED, PolicyStatus.DATE_ERROR)


_STATUS_LABELS = {
    PolicyStatus.ACTIVE: 'Active',
    PolicyStatus.EXPIRING_SOON: 'Expiring Soon',
    PolicyStatus.EXPIRED: 'Expired',
    PolicyStatus.DATE_ERROR: 'Date Error',
}


class PolicyType(str, Enum):
    COMPREHENSIVE = 'Comprehensive'
    THIRD_PARTY = 'Third-Party'
    ACT_ONLY = 'Act-Only'


class InvalidReason(str, Enum):
    """Why a client record failed validation. Values are API codes."""

    FULL_NAME_REQUIRED = 'full_name_required'
    FULL_NAME_TOO_LONG = 'full_name_too_long'
    PHONE_REQUIRED = 'phone_required'
    PHONE_INVALID = 'phone_invalid'
    PHONE_TOO_LONG = 'phone_too_long'
    EMAIL_INVALID = 'email_invalid'
    EMAIL_TOO_LONG = 'email_too_long'
    VEHICLE_NUMBER_REQUIRED = 'vehicle_number_required'
    VEHICLE_NUMBER_TOO_LONG = 'vehicle_number_too_long'
    ADDRESS_TOO_LONG = 'address_too_long'
    START_DATE_REQUIRED = 'start_date_required'
    START_DATE_INVALID = 'start_date_invalid'
    RENEWAL_DATE_REQUIRED = 'renewal_date_required'
    RENEWAL_DATE_INVALID = 'renewal_date_invalid'
    POLICY_TYPE_REQUIRED = 'policy_type_required'
    POLICY_TYPE_INVALID = 'policy_type_invalid'
    PREMIUM_NEGATIVE = 'premium_negative'
    PREMIUM_OUT_OF_RANGE = 'premium_out_of_range'
    COMMISSION_NEGATIVE = 'commission_negative'
    COMMISSION_OUT_OF_RANGE = 'commission_out_of_range'
    EARNED_OUT_OF_RANGE = 'earned_out_of_range'

    @property
    def message(self) -> str:
        return _REASON_MESSAGES[self]


_REASON_MESSAGES = {
    InvalidReason.FULL_NAME_REQUIRED: 'Full name is required.',
    InvalidReason.PHONE_REQUIRED: 'Phone number is required.',
    InvalidReason.PHONE_INVALID: 'Please enter a valid phone number.',
    InvalidReason.PHONE_TOO_LONG: 'Phone number must be at most 20 characters.',
    InvalidReason.EMAIL_INVALID: 'Please enter a valid email address.',
    InvalidReason.EMAIL_TOO_LONG: 'Email address must be at most 254 characters.',
    InvalidReason.VEHICLE_NUMBER_REQUIRED: 'Vehicle registration number is required.',
    InvalidReason.VEHICLE_NUMBER_TOO_LONG: 'Vehicle registration number must be at most 20 characters.',
    InvalidReason.ADDRESS_TOO_LONG: 'Address must be at most 255 characters.',
    InvalidReason.START_DATE_REQUIRED: 'Start date is required.',
    InvalidReason.START_DATE_INVALID: 'Start date is not a valid date.',
    InvalidReason.RENEWAL_DATE_REQUIRED: 'Renewal date is required.',
    InvalidReason.RENEWAL_DATE_INVALID: 'Renewal date is not a valid date.',
    InvalidReason.POLICY_TYPE_REQUIRED: 'Policy type is required.',
    InvalidReason.POLICY_TYPE_INVALID: 'Policy type is not recognised.',
    InvalidReason.PREMIUM_NEGATIVE: 'Premium must be a positive number.',
    InvalidReason.PREMIUM_OUT_OF_RANGE: 'Premium is too large.',
    InvalidReason.COMMISSION_NEGATIVE: 'Commission must be a positive number.',
    InvalidReason.COMMISSION_OUT_OF_RANGE: 'Commission is too large.',
    InvalidReason.EARNED_OUT_OF_RANGE: 'Earned amount is out of range.',
}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_client(): valid, or invalid with one reason."""

    reason: Optional[InvalidReason] = None

    @classmethod
    def valid(cls) -> 'ValidationResult':
        return cls()

    @classmethod
    def invalid(cls, reason: InvalidReason) -> 'ValidationResult':
        return cls(reason=reason)

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    @property
    def message(self) -> str:
        return '' if self.reason is None else self.reason.message


@dataclass(frozen=True)
class Stats:
    """Dashboard summary counters."""

    total: int = 0
    active: int = 0
    commission_sum: Decimal = Decimal('0')
    expiring_soon: int = 0
    expired: int = 0
    premium_sum: Decimal = Decimal('0')


def _field(record, name, default=None):
    """Read a field from a mapping or an attribute-style object."""
    if record is None:
        return default
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


def _text(record, name) -> str:
    value = _field(record, name)
    if value is None:
        return ''
    return str(value).strip()


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# Policy status


def resolve_renewal_date(start_date, explicit_renewal_date=None) -> Optional[datetime]:
    """
    Return the effective renewal date of a policy.

    An explicit renewal date wins when supplied; a supplied but
    unparseable one yields None (it never falls back to the start date).
    Without one, the renewal is start_date + 1 year.
    """
    if not _is_blank(explicit_renewal_date):
        return to_datetime(explicit_renewal_date)
    return add_years(start_date, 1)


def evaluate_status(start_date, explicit_renewal_date, now) -> PolicyStatus:
    """
    Derive the lifecycle status of a policy at time `now`.

    Boundaries are inclusive on both sides:
        renewal <= now                → EXPIRED
        renewal <= now + 30 days      → EXPIRING_SOON
        otherwise                     → ACTIVE
    Any unparseable date input gives DATE_ERROR.
    """
    renewal = resolve_renewal_date(start_date, explicit_renewal_date)
    current = to_datetime(now)
    if renewal is None or current is None:
        return PolicyStatus.DATE_ERROR

    if renewal <= current:
        return PolicyStatus.EXPIRED
    if renewal <= current + RENEWAL_WINDOW:
        return PolicyStatus.EXPIRING_SOON
    return PolicyStatus.ACTIVE


def record_status(record, now) -> PolicyStatus:
    """evaluate_status() over a client record (mapping or model instance)."""
    return evaluate_status(
        _field(record, 'start_date'),
        _field(record, 'renewal_date'),
        now,
    )


def policy_number(vehicle_number) -> str:
    """Display policy number: 'POL ' + last two characters of the plate."""
    plate = '' if vehicle_number is None else str(vehicle_number).strip()
    if not plate:
        return 'N/A'
    return f'POL {plate[-2:]}'


# Profile gate


def is_profile_complete(profile) -> bool:
    """
    Whether an agent has finished onboarding.

    Requires an existing profile with non-blank name, phone and address,
    and no pending forced password change.
    """
    if profile is None:
        return False

    for field_name in REQUIRED_PROFILE_FIELDS:
        value = _field(profile, field_name)
        if not isinstance(value, str) or not value.strip():
            return False

    return _field(profile, 'must_change_password') is not True


# Client record validation


def _too_long(record, name) -> bool:
    return len(_text(record, name)) > MAX_LENGTHS[name]


def _out_of_range(value) -> bool:
    amount = to_money(value)
    return amount is None or abs(amount) > MAX_AMOUNT


def validate_client(
    candidate,
    *,
    require_renewal_date: bool = False,
    phone_pattern=KENYAN_PHONE_PATTERN,
) -> ValidationResult:
    """
    Validate a candidate client record.

    Checks run in a fixed order and the first failure is reported:
    full name, phone, email, vehicle number, address, start date,
    renewal date, policy type, premium, commission, earned. String
    fields are stripped before checking and must fit their column;
    amounts must fit DECIMAL(12, 2) once rounded to cents. The
    candidate itself is never modified.

    Args:
        candidate: Mapping or object with snake_case client fields.
        require_renewal_date: Reject records without an explicit renewal date.
        phone_pattern: Compiled regex the whitespace-free phone must match.

    Returns:
        ValidationResult.
    """
    if not _text(candidate, 'full_name'):
        return ValidationResult.invalid(InvalidReason.FULL_NAME_REQUIRED)
    if _too_long(candidate, 'full_name'):
        return ValidationResult.invalid(InvalidReason.FULL_NAME_TOO_LONG)

    phone = _text(candidate, 'phone')
    if not phone:
        return ValidationResult.invalid(InvalidReason.PHONE_REQUIRED)
    if not phone_pattern.match(re.sub(r'\s', '', phone)):
        return ValidationResult.invalid(InvalidReason.PHONE_INVALID)
    if _too_long(candidate, 'phone'):
        return ValidationResult.invalid(InvalidReason.PHONE_TOO_LONG)

    email = _text(candidate, 'email')
    if email and not EMAIL_PATTERN.match(email):
        return ValidationResult.invalid(InvalidReason.EMAIL_INVALID)
    if _too_long(candidate, 'email'):
        return ValidationResult.invalid(InvalidReason.EMAIL_TOO_LONG)

    if not _text(candidate, 'vehicle_number'):
        return ValidationResult.invalid(InvalidReason.VEHICLE_NUMBER_REQUIRED)
    if _too_long(candidate, 'vehicle_number'):
        return ValidationResult.invalid(InvalidReason.VEHICLE_NUMBER_TOO_LONG)

    if _too_long(candidate, 'address'):
        return ValidationResult.invalid(InvalidReason.ADDRESS_TOO_LONG)

    start_date = _field(candidate, 'start_date')
    if _is_blank(start_date):
        return ValidationResult.invalid(InvalidReason.START_DATE_REQUIRED)
    if to_datetime(start_date) is None:
        return ValidationResult.invalid(InvalidReason.START_DATE_INVALID)

    renewal_date = _field(candidate, 'renewal_date')
    if _is_blank(renewal_date):
        if require_renewal_date:
            return ValidationResult.invalid(InvalidReason.RENEWAL_DATE_REQUIRED)
    elif to_datetime(renewal_date) is None:
        return ValidationResult.invalid(InvalidReason.RENEWAL_DATE_INVALID)

    policy_type = _text(candidate, 'policy_type')
    if not policy_type:
        return ValidationResult.invalid(InvalidReason.POLICY_TYPE_REQUIRED)
    if policy_type not in {choice.value for choice in PolicyType}:
        return ValidationResult.invalid(InvalidReason.POLICY_TYPE_INVALID)

    if to_amount(_field(candidate, 'premium')) < 0:
        return ValidationResult.invalid(InvalidReason.PREMIUM_NEGATIVE)
    if _out_of_range(_field(candidate, 'premium')):
        return ValidationResult.invalid(InvalidReason.PREMIUM_OUT_OF_RANGE)

    if to_amount(_field(candidate, 'commission')) < 0:
        return ValidationResult.invalid(InvalidReason.COMMISSION_NEGATIVE)
    if _out_of_range(_field(candidate, 'commission')):
        return ValidationResult.invalid(InvalidReason.COMMISSION_OUT_OF_RANGE)

    if _out_of_range(_field(candidate, 'earned')):
        return ValidationResult.invalid(InvalidReason.EARNED_OUT_OF_RANGE)

    return ValidationResult.valid()


# Stats


def aggregate(records: Iterable, now) -> Stats:
    """
    Fold client records into dashboard counters.

    `active` counts every policy that has not lapsed (ACTIVE and
    EXPIRING_SOON), which is what the dashboard's "Active Policies"
    card shows. Sums use Decimal so the result does not depend on
    record order.
    """
    total = active = expiring_soon = expired = 0
    commission_sum = Decimal('0')
    premium_sum = Decimal('0')

    for record in records:
        total += 1
        status = record_status(record, now)
        if not status.is_lapsed:
            active += 1
        if status is PolicyStatus.EXPIRING_SOON:
            expiring_soon += 1
        elif status is PolicyStatus.EXPIRED:
            expired += 1
        commission_sum += to_amount(_field(record, 'commission'))
        premium_sum += to_amount(_field(record, 'premium'))

    return Stats(
        total=total,
        active=active,
        commission_sum=commission_sum,
        expiring_soon=expiring_soon,
        expired=expired,
        premium_sum=premium_sum,
    )


# Search / filter

SEARCH_FIELDS = ('full_name', 'phone', 'email', 'vehicle_number')

STATUS_FILTERS = ('all', 'active', 'expiring', 'expired')


def matches_search(record, term) -> bool:
    """Case-insensitive substring match over name, phone, email and plate."""
    needle = '' if term is None else str(term).strip().lower()
    if not needle:
        return True
    return any(needle in _text(record, name).lower() for name in SEARCH_FIELDS)


def matches_status_filter(status: PolicyStatus, status_filter) -> bool:
    """Whether a status passes one of the clients page filter buttons."""
    if not status_filter or status_filter == 'all':
        return True
    return status.value == status_filter
