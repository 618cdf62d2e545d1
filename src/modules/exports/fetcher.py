"""Fetch full snapshots of every collection the export needs."""

import asyncio
from typing import Protocol

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core.exceptions import ExportFetchError
from src.modules.benefits.models import MemberBenefitClaim, MembershipBenefit
from src.modules.benefits.schemas import BenefitClaimRecord, BenefitRecord
from src.modules.bookings.models import Booking
from src.modules.bookings.schemas import BookingRecord
from src.modules.exports.schemas import CollectionSpec, ExportDataset, SortDirection
from src.modules.members.models import Member
from src.modules.members.schemas import MemberRecord
from src.modules.patients.models import PatientRecord
from src.modules.patients.schemas import PatientRecordRow
from src.modules.referrals.models import ReferralReward
from src.modules.referrals.schemas import ReferralRewardRecord
from src.modules.transactions.models import Transaction
from src.modules.transactions.schemas import TransactionRecord

# Activity logs newest first, reference tables ascending. Names match ExportDataset fields.
COLLECTIONS: tuple[CollectionSpec, ...] = (
    CollectionSpec(
        name="bookings", model=Booking, record=BookingRecord,
        order_by="created_at", direction=SortDirection.DESC,
    ),
    CollectionSpec(
        name="members", model=Member, record=MemberRecord,
        order_by="created_at", direction=SortDirection.DESC,
    ),
    CollectionSpec(
        name="patient_records", model=PatientRecord, record=PatientRecordRow,
        order_by="created_at", direction=SortDirection.DESC,
    ),
    CollectionSpec(
        name="transactions", model=Transaction, record=TransactionRecord,
        order_by="created_at", direction=SortDirection.DESC,
    ),
    CollectionSpec(
        name="benefits", model=MembershipBenefit, record=BenefitRecord,
        order_by="membership_type", direction=SortDirection.ASC,
    ),
    CollectionSpec(
        name="benefit_claims", model=MemberBenefitClaim, record=BenefitClaimRecord,
        order_by="claimed_at", direction=SortDirection.DESC,
    ),
    CollectionSpec(
        name="referral_rewards", model=ReferralReward, record=ReferralRewardRecord,
        order_by="created_at", direction=SortDirection.DESC,
    ),
)


class RecordStore(Protocol):
    async def fetch(self, spec: CollectionSpec) -> list: ...


class SqlAlchemyRecordStore:
    """Read-only store over the application database.

    Each fetch opens its own session so collections can be read concurrently.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def fetch(self, spec: CollectionSpec) -> list:
        column = getattr(spec.model, spec.order_by)
        # id breaks ties so equal timestamps keep a stable order
        if spec.direction == SortDirection.DESC:
            order = (column.desc(), spec.model.id.desc())
        else:
            order = (column.asc(), spec.model.id.asc())
        async with self._session_factory() as session:
            result = await session.execute(select(spec.model).order_by(*order))
            rows = result.scalars().all()
        return [spec.record.model_validate(row) for row in rows]


class RecordFetcher:
    """Fan out one unfiltered query per collection and join them into one dataset.

    Any single failure fails the whole fetch: no partial dataset is returned.
    """

    def __init__(self, store: RecordStore, collections: tuple[CollectionSpec, ...] = COLLECTIONS):
        self.store = store
        self.collections = collections

    async def _fetch(self, spec: CollectionSpec) -> list:
        try:
            records = await self.store.fetch(spec)
        except Exception as e:
            logger.error("Export fetch failed for {} ({}): {!r}", spec.name, spec.ordering, e)
            raise ExportFetchError(spec.name) from e
        return list(records or [])

    async def fetch_all(self) -> ExportDataset:
        # TaskGroup cancels the remaining queries as soon as one fails
        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(self._fetch(spec)) for spec in self.collections]
        except ExceptionGroup as eg:
            raise eg.exceptions[0]
        data = {spec.name: task.result() for spec, task in zip(self.collections, tasks)}
        logger.debug(
            "Fetched export collections: {}",
            ", ".join(f"{name}={len(records)}" for name, records in data.items()),
        )
        return ExportDataset(**data)
