"""
Delete ALL hardware logs from the configured database.

Lots are left alone. Requires DATABASE_URL (memory mode has nothing to reset).

  PYTHONPATH=backend python backend/scripts/reset_hardware_logs.py
"""

from __future__ import annotations

import asyncio
import sys

from sqlalchemy import delete

from core.config import settings
from db.database import create_engine
from db.hardware_log import HardwareLog


async def main() -> int:
    if not settings.use_database:
        print("DATABASE_URL is not set; nothing to reset")
        return 1

    engine = create_engine(settings)
    try:
        async with engine.begin() as conn:
            res = await conn.execute(delete(HardwareLog.__table__))
        deleted = int(getattr(res, "rowcount", 0) or 0)
        print(f"Deleted hardware_logs: {deleted}")
    finally:
        await engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
