"""
Seed data created at startup.
"""

from logging import Logger
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.logging import ensure_logger
from blogapi.models.role import Role


async def seed_default_roles(
    session: AsyncSession,
    roles: Dict[str, str],
    logger: Optional[Logger] = None,
) -> int:
    """
    Create the given roles when they do not exist yet.

    Running it again is a no-op.

    Args:
        session: Open database session
        roles: Mapping of role name to description
        logger: Optional logger

    Returns:
        Number of roles created
    """
    log = ensure_logger(logger, __name__)

    result = await session.execute(select(Role.name).where(Role.name.in_(list(roles))))
    existing = set(result.scalars().all())

    created = 0
    for name, description in roles.items():
        if name in existing:
            continue
        session.add(Role(name=name, description=description))
        created += 1

    if created:
        await session.commit()
        log.info("Seeded %d default role(s)", created)
    return created
