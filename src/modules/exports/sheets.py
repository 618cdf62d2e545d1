"""Sheet builders for the data export workbook.

Each builder is a pure function from fetched records to a grid: the first row
is the fixed header, every following row comes from one source record (or one
derived relationship for Referrals and Benefits Usage). Input order is kept.
"""

from datetime import date, datetime

from src.core.config import settings
from src.modules.benefits.schemas import BenefitClaimRecord, BenefitRecord
from src.modules.bookings.models import BookingStatus
from src.modules.bookings.schemas import BookingRecord
from src.modules.exports.formatters import days_remaining, format_currency, format_date
from src.modules.exports.joins import Index, count_by
from src.modules.exports.schemas import ExportDataset, Grid
from src.modules.members.models import MemberStatus, MembershipTier
from src.modules.members.schemas import MemberRecord
from src.modules.patients.models import PatientSource
from src.modules.patients.schemas import PatientRecordRow
from src.modules.transactions.models import TransactionPaymentStatus
from src.modules.transactions.schemas import TransactionRecord
from src.shared.utils.money import sum_money

# Sheet labels, in workbook order.
SUMMARY_SHEET = "Summary Dashboard"
BOOKINGS_SHEET = "Bookings"
MEMBERS_SHEET = "Members"
PATIENT_RECORDS_SHEET = "Patient Records"
TRANSACTIONS_SHEET = "Transactions"
REFERRALS_SHEET = "Referrals"
BENEFITS_USAGE_SHEET = "Benefits Usage"

SHEET_ORDER = (
    SUMMARY_SHEET,
    BOOKINGS_SHEET,
    MEMBERS_SHEET,
    PATIENT_RECORDS_SHEET,
    TRANSACTIONS_SHEET,
    REFERRALS_SHEET,
    BENEFITS_USAGE_SHEET,
)

BOOKINGS_HEADERS = [
    "Booking Number", "Name", "Email", "Phone", "Membership Status",
    "Appointment Date", "Appointment Time", "Service/Message", "Status",
    "Created Date", "Last Updated",
]
MEMBERS_HEADERS = [
    "Member ID", "Name", "Email", "Phone", "Membership Tier",
    "Status", "Join Date", "Expiration Date", "Days Remaining",
    "Referral Code", "Referred By", "Referral Count", "Payment Method", "Amount Paid",
]
PATIENT_RECORDS_HEADERS = [
    "Patient ID", "Name", "Email", "Phone", "Date of Birth", "Age", "Gender",
    "Emergency Contact", "Membership Tier", "Membership Status",
    "Source", "Notes (Summary)", "Created Date", "Last Updated",
]
TRANSACTIONS_HEADERS = [
    "Transaction ID", "Member Name", "Description", "Amount", "Currency",
    "Payment Method", "Payment Status", "Transaction Type", "Transaction Date", "Notes",
]
REFERRALS_HEADERS = [
    "Referrer Name", "Referrer Code", "Referred Member Name", "Referred Member Email",
    "Referral Date", "Referral Status", "Referrer's Total Referrals",
]
BENEFITS_USAGE_HEADERS = [
    "Member Name", "Membership Tier", "Benefit Name", "Used", "Total Available", "Usage Status",
]

NON_MEMBER = "Non-member"
NOTES_SUMMARY_LENGTH = 200

REFERRAL_CONVERTED = "Converted"
REFERRAL_PENDING = "Pending"
BENEFIT_FULLY_USED = "Fully Used"
BENEFIT_AVAILABLE = "Available"


def display_id(prefix: str, position: int) -> str:
    """Presentation-only row id: display_id('BK', 1) -> 'BK-0001'."""
    return f"{prefix}-{position:04d}"


def _text(value: str | None) -> str:
    return value if value else ""


def _tier_key(tier: str | None) -> str | None:
    return tier.lower() if tier else None


def build_bookings_sheet(bookings: list[BookingRecord]) -> Grid:
    rows: Grid = [list(BOOKINGS_HEADERS)]
    for i, b in enumerate(bookings, start=1):
        rows.append([
            display_id("BK", i),
            b.name,
            b.email,
            b.contact_number,
            b.membership or NON_MEMBER,
            format_date(b.preferred_date),
            b.preferred_time,
            _text(b.message),
            b.status,
            format_date(b.created_at),
            format_date(b.updated_at),
        ])
    return rows


def build_members_sheet(members: list[MemberRecord], now: datetime | None = None) -> Grid:
    rows: Grid = [list(MEMBERS_HEADERS)]
    for i, m in enumerate(members, start=1):
        rows.append([
            display_id("MEM", i),
            m.name,
            m.email,
            _text(m.phone),
            m.membership_type,
            m.status,
            format_date(m.membership_start_date),
            format_date(m.membership_expiry_date),
            days_remaining(m.membership_expiry_date, now=now),
            _text(m.referral_code),
            _text(m.referred_by),
            m.referral_count or 0,
            _text(m.payment_method),
            format_currency(m.amount_paid),
        ])
    return rows


def build_patient_records_sheet(records: list[PatientRecordRow]) -> Grid:
    rows: Grid = [list(PATIENT_RECORDS_HEADERS)]
    for i, p in enumerate(records, start=1):
        rows.append([
            display_id("PT", i),
            p.name,
            p.email,
            _text(p.contact_number),
            format_date(p.date_of_birth),
            p.age if p.age is not None else "",
            _text(p.gender),
            _text(p.emergency_contact),
            p.membership or NON_MEMBER,
            _text(p.membership_status),
            p.source,
            p.notes[:NOTES_SUMMARY_LENGTH] if p.notes else "",
            format_date(p.created_at),
            format_date(p.updated_at),
        ])
    return rows


def build_transactions_sheet(
    transactions: list[TransactionRecord],
    members: list[MemberRecord],
) -> Grid:
    """Member Name comes from an id index over members; dangling ids render UNKNOWN."""
    members_by_id: Index[int, MemberRecord] = Index(members, key=lambda m: m.id)
    rows: Grid = [list(TRANSACTIONS_HEADERS)]
    for i, t in enumerate(transactions, start=1):
        rows.append([
            display_id("TXN", i),
            members_by_id.label(t.member_id, lambda m: m.name),
            _text(t.description),
            format_currency(t.amount),
            t.currency or settings.default_currency,
            t.payment_method,
            t.payment_status,
            t.transaction_type,
            format_date(t.created_at),
            f"Stripe: {t.stripe_payment_intent_id}" if t.stripe_payment_intent_id else "",
        ])
    return rows


def build_referrals_sheet(members: list[MemberRecord]) -> Grid:
    """
    One row per referred member (non-empty referred_by).

    The referrer is resolved through a referral_code index; an unmatched code
    (e.g. referrer deleted) shows UNKNOWN and a referral count of 0. Status is
    Converted only when the referred member is active.
    """
    by_code: Index[str, MemberRecord] = Index(members, key=lambda m: m.referral_code)
    rows: Grid = [list(REFERRALS_HEADERS)]
    for m in members:
        if not m.referred_by:
            continue
        referrer = by_code.get(m.referred_by)
        rows.append([
            by_code.label(m.referred_by, lambda r: r.name),
            m.referred_by,
            m.name,
            m.email,
            format_date(m.created_at),
            REFERRAL_CONVERTED if m.status == MemberStatus.ACTIVE.value else REFERRAL_PENDING,
            (referrer.referral_count if referrer else 0) or 0,
        ])
    return rows


def build_benefits_usage_sheet(
    members: list[MemberRecord],
    benefits: list[BenefitRecord],
    claims: list[BenefitClaimRecord],
) -> Grid:
    """
    Active members x benefits of their tier (case-insensitive).

    Used = claims with exactly this (member_id, benefit_id); Fully Used once
    used >= total_quantity.
    """
    used_counts = count_by(claims, key=lambda c: (c.member_id, c.benefit_id))
    benefits_by_tier: dict[str, list[BenefitRecord]] = {}
    for benefit in benefits:
        benefits_by_tier.setdefault(benefit.membership_type.lower(), []).append(benefit)

    rows: Grid = [list(BENEFITS_USAGE_HEADERS)]
    for member in members:
        if member.status != MemberStatus.ACTIVE.value:
            continue
        for benefit in benefits_by_tier.get(_tier_key(member.membership_type), []):
            used = used_counts[(member.id, benefit.id)]
            rows.append([
                member.name,
                member.membership_type,
                benefit.benefit_name,
                used,
                benefit.total_quantity,
                BENEFIT_FULLY_USED if used >= benefit.total_quantity else BENEFIT_AVAILABLE,
            ])
    return rows


def _count(items, predicate) -> int:
    return sum(1 for item in items if predicate(item))


def build_summary_sheet(
    data: ExportDataset,
    generated_on: date,
    clinic_name: str | None = None,
) -> Grid:
    """Fixed key/value report. Row layout must not change between releases."""
    members = data.members
    active = [m for m in members if m.status == MemberStatus.ACTIVE.value]

    def active_in_tier(tier: MembershipTier) -> int:
        return _count(active, lambda m: _tier_key(m.membership_type) == tier.value.lower())

    def bookings_with(status: BookingStatus) -> int:
        return _count(data.bookings, lambda b: b.status == status.value)

    def records_from(source: PatientSource) -> int:
        return _count(data.patient_records, lambda p: p.source == source.value)

    total_revenue = sum_money(
        t.amount for t in data.transactions
        if t.payment_status == TransactionPaymentStatus.COMPLETED.value
    )
    total_referrals = sum(m.referral_count or 0 for m in members)
    title = f"{(clinic_name or settings.clinic_name).upper()} - DATA EXPORT SUMMARY"

    return [
        [title],
        ["Generated Date", format_date(generated_on)],
        [""],
        ["=== BOOKINGS OVERVIEW ==="],
        ["Total Bookings", len(data.bookings)],
        ["Pending Bookings", bookings_with(BookingStatus.PENDING)],
        ["Completed Bookings", bookings_with(BookingStatus.COMPLETED)],
        ["Cancelled Bookings", bookings_with(BookingStatus.CANCELLED)],
        ["No-Show Bookings", bookings_with(BookingStatus.NO_SHOW)],
        [""],
        ["=== MEMBERS OVERVIEW ==="],
        ["Total Members", len(members)],
        ["Active Members", len(active)],
        ["Expired Members", _count(members, lambda m: m.status == MemberStatus.EXPIRED.value)],
        ["Pending Applications", _count(members, lambda m: m.status == MemberStatus.PENDING.value)],
        [""],
        ["=== MEMBERSHIP BY TIER ==="],
        ["Green Members", active_in_tier(MembershipTier.GREEN)],
        ["Gold Members", active_in_tier(MembershipTier.GOLD)],
        ["Platinum Members", active_in_tier(MembershipTier.PLATINUM)],
        [""],
        ["=== FINANCIAL OVERVIEW ==="],
        ["Total Revenue", format_currency(total_revenue)],
        ["Total Transactions", len(data.transactions)],
        [""],
        ["=== REFERRAL PROGRAM ==="],
        ["Total Referrals Made", total_referrals],
        ["Members with Referrals", _count(members, lambda m: (m.referral_count or 0) > 0)],
        [""],
        ["=== PATIENT RECORDS ==="],
        ["Total Patient Records", len(data.patient_records)],
        ["Records from Bookings", records_from(PatientSource.BOOKING)],
        ["Records from Membership", records_from(PatientSource.MEMBERSHIP)],
        ["Manual Records", records_from(PatientSource.MANUAL)],
    ]


def build_all_sheets(data: ExportDataset, now: datetime) -> dict[str, Grid]:
    """All seven grids keyed by sheet label, in workbook order."""
    sheets = {
        SUMMARY_SHEET: build_summary_sheet(data, generated_on=now.date()),
        BOOKINGS_SHEET: build_bookings_sheet(data.bookings),
        MEMBERS_SHEET: build_members_sheet(data.members, now=now),
        PATIENT_RECORDS_SHEET: build_patient_records_sheet(data.patient_records),
        TRANSACTIONS_SHEET: build_transactions_sheet(data.transactions, data.members),
        REFERRALS_SHEET: build_referrals_sheet(data.members),
        BENEFITS_USAGE_SHEET: build_benefits_usage_sheet(
            data.members, data.benefits, data.benefit_claims
        ),
    }
    return {name: sheets[name] for name in SHEET_ORDER}
