"""
Reusable seed data functions for database initialization.

The membership tiers are reference data: every profile points at one of them,
so they must exist before any profile can be stored.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import MemberTypes
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_MEMBER_TYPES: tuple[dict[str, object], ...] = (
    {"id": "BASIC", "discount": 2.3, "posts_limit_per_month": 20},
    {"id": "BUSINESS", "discount": 7.7, "posts_limit_per_month": 100},
)


async def ensure_member_types(db: AsyncSession) -> list[str]:
    """
    Ensure the BASIC and BUSINESS membership tiers exist.

    Existing rows are left untouched, so the function is safe to run repeatedly.

    Args:
        db: Database session (the caller commits)

    Returns:
        IDs of the tiers that were inserted by this call
    """
    result = await db.execute(select(MemberTypes.id))
    existing = set(result.scalars().all())

    created: list[str] = []
    for values in DEFAULT_MEMBER_TYPES:
        if values["id"] in existing:
            continue
        db.add(MemberTypes(**values))
        created.append(str(values["id"]))

    if created:
        await db.flush()
        logger.info("Seeded member types", member_types=created)
    else:
        logger.debug("Member types already present")

    return created
