#!/usr/bin/env python3
"""
Run one guest maintenance sweep: delete expired guests, then refill the pool.

Useful when the API is not running (the in-process scheduler normally does
this every hour).

Usage:
    ENV=staging uv run python scripts/run_guest_maintenance.py
    ENV=staging uv run python scripts/run_guest_maintenance.py --status
"""

import argparse
import asyncio
import os
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment before importing app modules
from dotenv import load_dotenv

env = os.getenv("ENV", "local")
load_dotenv(f".env.{env}")

print(f"Environment: {env}")


async def show_status():
    from app.services.guest_pool import guest_pool_service

    pooled = await guest_pool_service.count_pooled_accounts()
    print(f"Pooled guest accounts: {pooled}/{guest_pool_service.pool_target_size}")


async def run_sweep():
    from app.services.guest_pool import guest_pool_service

    ran = await guest_pool_service.run_maintenance_sweep_once()
    if ran:
        print("Sweep completed")
    else:
        print("Sweep skipped: another sweep is already running")

    await show_status()


def main():
    parser = argparse.ArgumentParser(description="Guest account maintenance")
    parser.add_argument("--status", action="store_true", help="Only show pool status")
    args = parser.parse_args()

    if args.status:
        asyncio.run(show_status())
    else:
        asyncio.run(run_sweep())


if __name__ == "__main__":
    main()
