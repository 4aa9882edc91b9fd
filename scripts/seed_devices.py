#!/usr/bin/env python3
"""Seed a starter device catalogue, skipping names that already exist."""

import asyncio

from sqlalchemy import select

from dshop.database import AsyncSessionLocal
from dshop.models.device import NOT_SPECIFIED, Device

STARTER_DEVICES = [
    {"name": "Raspberry Pi", "category": "Computers", "model": "4B", "ram": "4 GB", "os": "Raspbian"},
    {"name": "iPhone 12", "category": "Phones", "model": "A2403", "ram": "4 GB", "os": "iOS"},
    {"name": "Galaxy Tab S7", "category": "Tablets", "model": "SM-T870", "ram": "6 GB", "os": "Android"},
    {"name": "Oculus Quest 2", "category": "VR Headsets", "model": "KW49CM", "ram": "6 GB", "os": NOT_SPECIFIED},
]


async def seed_devices() -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Device.name))
        existing = set(result.scalars().all())

        added = 0
        for data in STARTER_DEVICES:
            if data["name"] in existing:
                print(f"Skipping existing device: {data['name']}")
                continue
            session.add(Device(**data))
            added += 1

        await session.commit()
        print(f"Added {added} device(s)")


if __name__ == "__main__":
    asyncio.run(seed_devices())
