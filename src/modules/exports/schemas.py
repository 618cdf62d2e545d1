"""Schemas for the data export engine."""

from enum import StrEnum
from typing import Any, Union

from pydantic import ConfigDict

from src.modules.benefits.schemas import BenefitClaimRecord, BenefitRecord
from src.modules.bookings.schemas import BookingRecord
from src.modules.members.schemas import MemberRecord
from src.modules.patients.schemas import PatientRecordRow
from src.modules.referrals.schemas import ReferralRewardRecord
from src.modules.transactions.schemas import TransactionRecord
from src.shared.schemas.base import BaseSchema

CellValue = Union[str, int, float, None]
Grid = list[list[CellValue]]

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class CollectionSpec(BaseSchema):
    """One collection to fetch: table model, record schema and its named ordering."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    model: Any  # SQLAlchemy mapped class
    record: type[BaseSchema]
    order_by: str
    direction: SortDirection

    @property
    def ordering(self) -> str:
        """Human-readable ordering, e.g. 'bookings: created_at desc'."""
        return f"{self.name}: {self.order_by} {self.direction.value}"


class ExportDataset(BaseSchema):
    """Snapshot of all seven collections for one export run."""

    bookings: list[BookingRecord] = []
    members: list[MemberRecord] = []
    patient_records: list[PatientRecordRow] = []
    transactions: list[TransactionRecord] = []
    benefits: list[BenefitRecord] = []
    benefit_claims: list[BenefitClaimRecord] = []
    referral_rewards: list[ReferralRewardRecord] = []


class ExportState(StrEnum):
    """Orchestrator states."""

    IDLE = "idle"
    FETCHING = "fetching"
    BUILDING = "building"
    DELIVERING = "delivering"
    FAILED = "failed"


class ExportFailure(StrEnum):
    """Which fatal stage aborted the run."""

    FETCH = "fetch"
    DELIVERY = "delivery"


class ExportResult(BaseSchema):
    """Outcome of trigger_export(). Failures carry a generic message only."""

    ok: bool
    filename: str | None = None
    failure: ExportFailure | None = None
    message: str | None = None


class ExportArtifact(BaseSchema):
    """Serialized workbook ready for delivery."""

    filename: str
    content: bytes
    content_type: str = XLSX_CONTENT_TYPE


class ExportResponse(BaseSchema):
    """API payload for a completed export."""

    filename: str
    download_url: str


class ExportStatusResponse(BaseSchema):
    state: ExportState
    is_running: bool
