"""Tests for the export sheet builders (pure functions over records)."""

from datetime import date, datetime, timezone
from decimal import Decimal

from src.modules.benefits.schemas import BenefitClaimRecord, BenefitRecord
from src.modules.bookings.schemas import BookingRecord
from src.modules.exports.joins import UNKNOWN
from src.modules.exports.schemas import ExportDataset
from src.modules.exports.sheets import (
    BENEFITS_USAGE_HEADERS,
    BENEFITS_USAGE_SHEET,
    BOOKINGS_HEADERS,
    MEMBERS_HEADERS,
    NON_MEMBER,
    NOTES_SUMMARY_LENGTH,
    REFERRALS_SHEET,
    SHEET_ORDER,
    SUMMARY_SHEET,
    TRANSACTIONS_HEADERS,
    build_all_sheets,
    build_benefits_usage_sheet,
    build_bookings_sheet,
    build_members_sheet,
    build_patient_records_sheet,
    build_referrals_sheet,
    build_summary_sheet,
    build_transactions_sheet,
    display_id,
)
from src.modules.members.schemas import MemberRecord
from src.modules.patients.schemas import PatientRecordRow
from src.modules.transactions.schemas import TransactionRecord

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
CREATED = "2026-02-01T08:00:00Z"


def _member(id: int, name: str, **kwargs) -> MemberRecord:
    defaults = dict(
        email=f"{name.lower().replace(' ', '.')}@example.com",
        membership_type="Gold",
        status="active",
        created_at=CREATED,
        updated_at=CREATED,
    )
    defaults.update(kwargs)
    return MemberRecord(id=id, name=name, **defaults)


def _booking(id: int, **kwargs) -> BookingRecord:
    defaults = dict(
        name=f"Guest {id}",
        email=f"guest{id}@example.com",
        contact_number="+639170000000",
        preferred_date="2026-03-10",
        preferred_time="10:00 AM",
        status="pending",
        created_at=CREATED,
        updated_at=CREATED,
    )
    defaults.update(kwargs)
    return BookingRecord(id=id, **defaults)


def _transaction(id: int, **kwargs) -> TransactionRecord:
    defaults = dict(
        amount=Decimal("100.00"),
        payment_method="card",
        payment_status="completed",
        transaction_type="membership",
        created_at=CREATED,
    )
    defaults.update(kwargs)
    return TransactionRecord(id=id, **defaults)


def _patient(id: int, **kwargs) -> PatientRecordRow:
    defaults = dict(
        name=f"Patient {id}",
        email=f"patient{id}@example.com",
        source="manual",
        created_at=CREATED,
        updated_at=CREATED,
    )
    defaults.update(kwargs)
    return PatientRecordRow(id=id, **defaults)


class TestDisplayId:
    def test_zero_padded(self):
        assert display_id("BK", 1) == "BK-0001"
        assert display_id("TXN", 12345) == "TXN-12345"


class TestBookingsSheet:
    def test_header_and_rows(self):
        rows = build_bookings_sheet([
            _booking(1, membership="Gold", message="Facial please"),
            _booking(2, status="no-show"),
        ])
        assert rows[0] == BOOKINGS_HEADERS
        assert len(rows) == 3
        assert rows[1][0] == "BK-0001"
        assert rows[1][4] == "Gold"
        assert rows[1][5] == "2026-03-10"
        assert rows[1][7] == "Facial please"
        assert rows[2][0] == "BK-0002"
        assert rows[2][4] == NON_MEMBER
        assert rows[2][7] == ""
        assert rows[2][8] == "no-show"
        assert rows[2][9] == "2026-02-01"

    def test_empty_collection_is_header_only(self):
        assert build_bookings_sheet([]) == [BOOKINGS_HEADERS]


class TestMembersSheet:
    def test_days_remaining_and_amount(self):
        rows = build_members_sheet(
            [
                _member(
                    1, "Maria Santos",
                    membership_expiry_date=date(2026, 3, 11),
                    amount_paid=Decimal("19999"),
                    referral_code="MARIA01",
                    referral_count=2,
                ),
                _member(2, "Liza Garcia", status="pending"),
            ],
            now=NOW,
        )
        assert rows[0] == MEMBERS_HEADERS
        maria = rows[1]
        assert maria[0] == "MEM-0001"
        assert maria[7] == "2026-03-11"
        assert maria[8] == 10
        assert maria[9] == "MARIA01"
        assert maria[11] == 2
        assert maria[13] == "₱19,999.00"
        liza = rows[2]
        assert liza[8] == ""
        assert liza[10] == ""
        assert liza[11] == 0
        assert liza[13] == ""


class TestPatientRecordsSheet:
    def test_notes_truncated_and_age_zero_kept(self):
        rows = build_patient_records_sheet([
            _patient(1, notes="x" * 500, age=0, membership="Platinum"),
            _patient(2),
        ])
        first, second = rows[1], rows[2]
        assert first[0] == "PT-0001"
        assert len(first[11]) == NOTES_SUMMARY_LENGTH
        assert first[5] == 0
        assert first[8] == "Platinum"
        assert second[5] == ""
        assert second[8] == NON_MEMBER
        assert second[11] == ""


class TestTransactionsSheet:
    def test_member_name_resolution(self):
        members = [_member(1, "Ana Cruz")]
        rows = build_transactions_sheet(
            [
                _transaction(1, member_id=1, stripe_payment_intent_id="pi_123", currency="USD"),
                _transaction(2, member_id=99),
                _transaction(3, member_id=None, amount=Decimal("1500")),
            ],
            members,
        )
        assert rows[0] == TRANSACTIONS_HEADERS
        assert rows[1][0] == "TXN-0001"
        assert rows[1][1] == "Ana Cruz"
        assert rows[1][4] == "USD"
        assert rows[1][9] == "Stripe: pi_123"
        # Member deleted: the row is kept with an unknown name
        assert rows[2][1] == UNKNOWN
        assert rows[2][4] == "PHP"
        assert rows[2][9] == ""
        assert rows[3][1] == UNKNOWN
        assert rows[3][3] == "₱1,500.00"


class TestReferralsSheet:
    def test_converted_pending_and_dangling_code(self):
        members = [
            _member(1, "Maria", referral_code="MARIA01", referral_count=2),
            _member(2, "Jose", referral_code="JOSE02", referred_by="MARIA01"),
            _member(3, "Liza", status="pending", referred_by="MARIA01"),
            _member(4, "Paolo", referred_by="GONE99"),
        ]
        rows = build_referrals_sheet(members)
        assert len(rows) == 4
        jose, liza, paolo = rows[1], rows[2], rows[3]
        assert jose[:4] == ["Maria", "MARIA01", "Jose", "jose@example.com"]
        assert jose[4] == "2026-02-01"
        assert jose[5] == "Converted"
        assert jose[6] == 2
        assert liza[5] == "Pending"
        assert paolo[0] == UNKNOWN
        assert paolo[1] == "GONE99"
        assert paolo[6] == 0

    def test_no_referrals(self):
        rows = build_referrals_sheet([_member(1, "Solo", referral_code="SOLO")])
        assert len(rows) == 1


class TestBenefitsUsageSheet:
    def test_active_members_by_tier(self):
        members = [
            _member(1, "Gold Active", membership_type="gold"),
            _member(2, "Gold Expired", status="expired"),
            _member(3, "Green Active", membership_type="Green"),
        ]
        benefits = [
            BenefitRecord(id=10, membership_type="Gold", benefit_name="Hydrafacial", total_quantity=2),
            BenefitRecord(id=11, membership_type="Gold", benefit_name="Consult", total_quantity=3),
            BenefitRecord(id=12, membership_type="Platinum", benefit_name="Laser", total_quantity=8),
        ]
        claims = [
            BenefitClaimRecord(id=1, member_id=1, benefit_id=10, claimed_at=CREATED),
            BenefitClaimRecord(id=2, member_id=1, benefit_id=10, claimed_at=CREATED),
            BenefitClaimRecord(id=3, member_id=1, benefit_id=11, claimed_at=CREATED),
            BenefitClaimRecord(id=4, member_id=2, benefit_id=11, claimed_at=CREATED),
        ]
        rows = build_benefits_usage_sheet(members, benefits, claims)
        assert rows[0] == BENEFITS_USAGE_HEADERS
        # Expired member and Green tier (no benefits) produce no rows
        assert rows[1:] == [
            ["Gold Active", "gold", "Hydrafacial", 2, 2, "Fully Used"],
            ["Gold Active", "gold", "Consult", 1, 3, "Available"],
        ]


class TestSummarySheet:
    def _dataset(self) -> ExportDataset:
        return ExportDataset(
            bookings=[
                _booking(1),
                _booking(2, status="completed"),
                _booking(3, status="cancelled"),
                _booking(4, status="no-show"),
                _booking(5),
            ],
            members=[
                _member(1, "A", membership_type="Green", referral_count=2),
                _member(2, "B", membership_type="gold"),
                _member(3, "C", membership_type="Platinum", status="expired", referral_count=1),
                _member(4, "D", membership_type="Green", status="pending"),
            ],
            transactions=[
                _transaction(1, amount=Decimal("1000.50")),
                _transaction(2, amount=Decimal("250"), payment_status="failed"),
                _transaction(3, amount=Decimal("2000"), member_id=77),
            ],
            patient_records=[
                _patient(1, source="booking"),
                _patient(2, source="membership"),
                _patient(3),
            ],
        )

    def test_fixed_layout(self):
        rows = build_summary_sheet(self._dataset(), generated_on=date(2026, 3, 1), clinic_name="Hilomè Clinic")
        assert rows == [
            ["HILOMÈ CLINIC - DATA EXPORT SUMMARY"],
            ["Generated Date", "2026-03-01"],
            [""],
            ["=== BOOKINGS OVERVIEW ==="],
            ["Total Bookings", 5],
            ["Pending Bookings", 2],
            ["Completed Bookings", 1],
            ["Cancelled Bookings", 1],
            ["No-Show Bookings", 1],
            [""],
            ["=== MEMBERS OVERVIEW ==="],
            ["Total Members", 4],
            ["Active Members", 2],
            ["Expired Members", 1],
            ["Pending Applications", 1],
            [""],
            ["=== MEMBERSHIP BY TIER ==="],
            ["Green Members", 1],
            ["Gold Members", 1],
            ["Platinum Members", 0],
            [""],
            ["=== FINANCIAL OVERVIEW ==="],
            ["Total Revenue", "₱3,000.50"],
            ["Total Transactions", 3],
            [""],
            ["=== REFERRAL PROGRAM ==="],
            ["Total Referrals Made", 3],
            ["Members with Referrals", 2],
            [""],
            ["=== PATIENT RECORDS ==="],
            ["Total Patient Records", 3],
            ["Records from Bookings", 1],
            ["Records from Membership", 1],
            ["Manual Records", 1],
        ]

    def test_empty_dataset(self):
        rows = build_summary_sheet(ExportDataset(), generated_on=date(2026, 3, 1))
        values = dict(row for row in rows if len(row) == 2)
        assert values["Total Bookings"] == 0
        assert values["Total Revenue"] == "₱0.00"
        assert values["Total Members"] == 0


class TestBuildAllSheets:
    def test_order_and_idempotence(self):
        data = ExportDataset(
            members=[_member(1, "A", referral_code="A1"), _member(2, "B", referred_by="A1")],
            bookings=[_booking(1)],
        )
        first = build_all_sheets(data, now=NOW)
        second = build_all_sheets(data, now=NOW)
        assert tuple(first) == SHEET_ORDER
        assert next(iter(first)) == SUMMARY_SHEET
        assert first == second
        assert len(first[REFERRALS_SHEET]) == 2
        assert len(first[BENEFITS_USAGE_SHEET]) == 1


class TestScenarios:
    def test_booking_status_counts(self):
        data = ExportDataset(bookings=[
            _booking(1, status="pending"),
            _booking(2, status="completed"),
            _booking(3, status="no-show"),
        ])
        values = dict(row for row in build_summary_sheet(data, generated_on=NOW.date()) if len(row) == 2)
        assert [
            values["Pending Bookings"],
            values["Completed Bookings"],
            values["Cancelled Bookings"],
            values["No-Show Bookings"],
        ] == [1, 1, 0, 1]

    def test_single_converted_referral(self):
        members = [
            _member(1, "A", membership_type="Gold", referral_code="ABC123", referral_count=1),
            _member(2, "B", referred_by="ABC123"),
        ]
        rows = build_referrals_sheet(members)
        assert len(rows) == 2
        assert rows[1][0] == "A"
        assert rows[1][5] == "Converted"

    def test_row_counts_match_inputs(self):
        bookings = [_booking(i) for i in range(1, 6)]
        members = [_member(i, f"M{i}") for i in range(1, 4)]
        patients = [_patient(i) for i in range(1, 8)]
        assert len(build_bookings_sheet(bookings)) == len(bookings) + 1
        assert len(build_members_sheet(members, now=NOW)) == len(members) + 1
        assert len(build_patient_records_sheet(patients)) == len(patients) + 1
