#!/usr/bin/env python3
"""
Seed the database with realistic clinic demo data.

The data is not random: names, tiers, benefits, referral chains and payments
are chosen so that every export sheet (and the summary dashboard) has
something meaningful to show, including a dangling referral code and a
transaction whose member no longer exists.

Usage:
    python scripts/seed_demo_data.py --dry-run   # no writes
    python scripts/seed_demo_data.py --confirm   # commit to the DB

Requirements: migrations applied (alembic upgrade head), DB reachable.
"""

import asyncio
import sys
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.core.database.session import async_session
from src.core.logging import configure_logging
from src.modules.benefits.models import MemberBenefitClaim, MembershipBenefit
from src.modules.bookings.models import Booking, BookingStatus
from src.modules.members.models import Member, MemberStatus, MembershipTier
from src.modules.patients.models import PatientRecord, PatientSource
from src.modules.referrals.models import ReferralReward
from src.modules.transactions.models import (
    Transaction,
    TransactionPaymentStatus,
    TransactionType,
)
from src.shared.utils.money import round_money

TODAY = date.today()

# Tier prices (PHP)
TIER_PRICES = {
    MembershipTier.GREEN: Decimal("4999.00"),
    MembershipTier.GOLD: Decimal("9999.00"),
    MembershipTier.PLATINUM: Decimal("19999.00"),
}

# name, email, phone, tier, status, own code, referred_by, payment method
MEMBERS_DATA = [
    ("Maria Santos", "maria.santos@example.com", "+639171234501", MembershipTier.PLATINUM, MemberStatus.ACTIVE, "MARIA01", None, "card"),
    ("Jose Reyes", "jose.reyes@example.com", "+639181234502", MembershipTier.GOLD, MemberStatus.ACTIVE, "JOSE02", "MARIA01", "gcash"),
    ("Ana Cruz", "ana.cruz@example.com", "+639191234503", MembershipTier.GREEN, MemberStatus.ACTIVE, "ANA03", "MARIA01", "card"),
    ("Carlo Bautista", "carlo.bautista@example.com", "+639201234504", MembershipTier.GOLD, MemberStatus.EXPIRED, "CARLO04", None, "cash"),
    ("Liza Garcia", "liza.garcia@example.com", "+639211234505", MembershipTier.GREEN, MemberStatus.PENDING, "LIZA05", "JOSE02", None),
    ("Paolo Mendoza", "paolo.mendoza@example.com", None, MembershipTier.PLATINUM, MemberStatus.ACTIVE, "PAOLO06", "GONE99", "card"),
]

# tier, benefit, description, quantity
BENEFITS_DATA = [
    (MembershipTier.GREEN, "Basic Facial", "Monthly cleansing facial", 4),
    (MembershipTier.GOLD, "Hydrafacial", "Deep hydration treatment", 6),
    (MembershipTier.GOLD, "Skin Consultation", "One-on-one with the dermatologist", 2),
    (MembershipTier.PLATINUM, "Laser Session", "Pigmentation laser session", 8),
    (MembershipTier.PLATINUM, "Hydrafacial", "Deep hydration treatment", 12),
]

# name, email, phone, membership, days from today, time, status, message
BOOKINGS_DATA = [
    ("Maria Santos", "maria.santos@example.com", "+639171234501", "Platinum", 3, "10:00 AM", BookingStatus.PENDING, "Follow-up on laser session"),
    ("Rica Dizon", "rica.dizon@example.com", "+639221234506", None, 5, "2:00 PM", BookingStatus.PENDING, None),
    ("Jose Reyes", "jose.reyes@example.com", "+639181234502", "Gold", -7, "11:30 AM", BookingStatus.COMPLETED, "Hydrafacial"),
    ("Mark Villanueva", "mark.v@example.com", "+639231234507", None, -2, "4:00 PM", BookingStatus.NO_SHOW, None),
    ("Ana Cruz", "ana.cruz@example.com", "+639191234503", "Green", -14, "9:00 AM", BookingStatus.CANCELLED, "Rescheduling"),
]


async def seed_members(session: AsyncSession) -> dict[str, Member]:
    """Create members. Returns them keyed by referral code."""
    result = await session.execute(select(Member).where(Member.email == MEMBERS_DATA[0][1]))
    if result.scalar_one_or_none():
        logger.info("  Members already exist, skip.")
        rows = (await session.execute(select(Member))).scalars().all()
        return {m.referral_code: m for m in rows if m.referral_code}

    members: dict[str, Member] = {}
    for i, (name, email, phone, tier, status, code, referred_by, method) in enumerate(MEMBERS_DATA):
        start = TODAY - timedelta(days=30 * (i + 1))
        expiry = start + timedelta(days=365)
        if status == MemberStatus.EXPIRED:
            expiry = TODAY - timedelta(days=10)
        member = Member(
            name=name,
            email=email,
            phone=phone,
            membership_type=tier.value,
            status=status.value,
            membership_start_date=start if status != MemberStatus.PENDING else None,
            membership_expiry_date=expiry if status != MemberStatus.PENDING else None,
            referral_code=code,
            referred_by=referred_by,
            payment_method=method,
            amount_paid=TIER_PRICES[tier] if method else None,
        )
        session.add(member)
        members[code] = member
    await session.flush()

    for member in members.values():
        if member.referred_by in members:
            members[member.referred_by].referral_count += 1
    await session.flush()
    logger.info("  Members: {}", len(members))
    return members


async def seed_transactions(session: AsyncSession, members: dict[str, Member]) -> None:
    count = 0
    for member in members.values():
        if member.amount_paid is None:
            continue
        session.add(
            Transaction(
                member_id=member.id,
                description=f"{member.membership_type} membership",
                amount=round_money(member.amount_paid),
                currency="PHP",
                payment_method=member.payment_method or "card",
                payment_status=TransactionPaymentStatus.COMPLETED.value,
                transaction_type=TransactionType.MEMBERSHIP.value,
                stripe_payment_intent_id=f"pi_demo_{member.referral_code.lower()}"
                if member.payment_method == "card"
                else None,
            )
        )
        count += 1
    # Failed retry and an orphaned payment (member deleted later)
    session.add(
        Transaction(
            member_id=members["JOSE02"].id,
            description="Renewal attempt",
            amount=TIER_PRICES[MembershipTier.GOLD],
            currency="PHP",
            payment_method="card",
            payment_status=TransactionPaymentStatus.FAILED.value,
            transaction_type=TransactionType.RENEWAL.value,
        )
    )
    session.add(
        Transaction(
            member_id=None,
            description="Walk-in service",
            amount=Decimal("1500.00"),
            currency=None,
            payment_method="cash",
            payment_status=TransactionPaymentStatus.COMPLETED.value,
            transaction_type=TransactionType.SERVICE.value,
        )
    )
    await session.flush()
    logger.info("  Transactions: {}", count + 2)


async def seed_benefits(session: AsyncSession, members: dict[str, Member]) -> None:
    benefits: list[MembershipBenefit] = []
    for tier, name, description, quantity in BENEFITS_DATA:
        benefit = MembershipBenefit(
            membership_type=tier.value,
            benefit_name=name,
            description=description,
            total_quantity=quantity,
        )
        session.add(benefit)
        benefits.append(benefit)
    await session.flush()

    claims = 0
    now = datetime.now(timezone.utc)
    for member in members.values():
        if member.status != MemberStatus.ACTIVE.value:
            continue
        tier_benefits = [b for b in benefits if b.membership_type == member.membership_type]
        for n, benefit in enumerate(tier_benefits):
            for k in range(min(n + 1, benefit.total_quantity)):
                session.add(
                    MemberBenefitClaim(
                        member_id=member.id,
                        benefit_id=benefit.id,
                        claimed_at=now - timedelta(days=7 * (k + 1)),
                        notes=None if k else "First claim",
                    )
                )
                claims += 1
    await session.flush()
    logger.info("  Benefits: {}, claims: {}", len(benefits), claims)


async def seed_referral_rewards(session: AsyncSession, members: dict[str, Member]) -> None:
    referrer = members["MARIA01"]
    for code in ("JOSE02", "ANA03"):
        session.add(
            ReferralReward(
                referrer_id=referrer.id,
                referred_member_id=members[code].id,
                reward_type="free_facial",
                status="granted",
            )
        )
    await session.flush()


async def seed_bookings_and_patients(session: AsyncSession) -> None:
    for name, email, phone, membership, offset, time_slot, status, message in BOOKINGS_DATA:
        session.add(
            Booking(
                name=name,
                email=email,
                contact_number=phone,
                membership=membership,
                preferred_date=TODAY + timedelta(days=offset),
                preferred_time=time_slot,
                message=message,
                status=status.value,
            )
        )
    session.add_all(
        [
            PatientRecord(
                name="Maria Santos",
                email="maria.santos@example.com",
                contact_number="+639171234501",
                date_of_birth=date(1988, 4, 12),
                age=38,
                gender="Female",
                emergency_contact="Pedro Santos +639171234599",
                membership="Platinum",
                membership_status="active",
                source=PatientSource.MEMBERSHIP.value,
                notes="Sensitive to retinoids. " * 12,
            ),
            PatientRecord(
                name="Rica Dizon",
                email="rica.dizon@example.com",
                contact_number="+639221234506",
                source=PatientSource.BOOKING.value,
            ),
            PatientRecord(
                name="Walk-in Guest",
                email="guest@example.com",
                age=0,
                source=PatientSource.MANUAL.value,
                notes="Infant accompanying parent",
            ),
        ]
    )
    await session.flush()
    logger.info("  Bookings: {}, patient records: 3", len(BOOKINGS_DATA))


async def run_seed(session: AsyncSession, dry_run: bool) -> None:
    members = await seed_members(session)
    await seed_transactions(session, members)
    await seed_benefits(session, members)
    await seed_referral_rewards(session, members)
    await seed_bookings_and_patients(session)

    if dry_run:
        await session.rollback()
        logger.info("[DRY-RUN] Rolled back, no data written.")
    else:
        await session.commit()
        logger.info("Seed completed successfully.")


async def main() -> None:
    import argparse
    parser = argparse.ArgumentParser(description="Seed database with realistic clinic demo data")
    parser.add_argument("--dry-run", action="store_true", help="Do not commit")
    parser.add_argument("--confirm", action="store_true", help="Commit changes")
    args = parser.parse_args()
    if not args.dry_run and not args.confirm:
        print("Use --dry-run or --confirm")
        sys.exit(1)

    configure_logging()
    logger.info(
        "Database: {}",
        settings.database_url.split("@")[-1] if "@" in settings.database_url else "?",
    )
    logger.info("Mode: {}", "DRY-RUN" if args.dry_run else "CONFIRM")
    async with async_session() as session:
        await run_seed(session, dry_run=args.dry_run)
    logger.info("Done.")


if __name__ == "__main__":
    asyncio.run(main())
