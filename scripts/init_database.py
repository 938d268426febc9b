#!/usr/bin/env python3
"""Initialize database tables and seed the VIP catalog and bonus rules."""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger

from app.config.business_constants import (
    DEFAULT_REFERRAL_RULES,
    DEFAULT_VIP_PACKAGES,
)
from app.config.database import create_engine, create_session_maker
from app.config.logging import setup_logging
from app.config.settings import settings
from app.models import Base
from app.repositories.vip_package_repository import VipPackageRepository
from app.services.referral.bonus_rules_service import BonusRulesService


async def init_database() -> None:
    """Create all database tables and insert missing defaults."""
    engine = create_engine(settings)

    async with engine.begin() as conn:
        logger.info("Creating tables (checkfirst=True)...")
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)

    session_maker = create_session_maker(engine)
    async with session_maker() as session:
        package_repo = VipPackageRepository(session)
        for level, (name, investment, daily_profit) in DEFAULT_VIP_PACKAGES.items():
            if await package_repo.get_by_level(level):
                continue
            await package_repo.create(
                level=level,
                name=name,
                investment_bs=investment,
                daily_profit_bs=daily_profit,
                is_enabled=True,
            )
            logger.info(f"VIP package seeded: {name}")
        await session.commit()

        rules_service = BonusRulesService(session)
        if await rules_service.max_level() == 0:
            for level, percentage in DEFAULT_REFERRAL_RULES.items():
                await rules_service.upsert_rule(level, percentage)
        else:
            logger.info("Referral bonus rules already configured, skipping")

    await engine.dispose()
    logger.success("Database initialized successfully!")


if __name__ == "__main__":
    setup_logging(settings)
    asyncio.run(init_database())
