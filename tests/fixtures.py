"""Database fixtures for listql tests (shared).

Ten live inventory_log rows, three of them for the "Hex Bolt M8" item, plus
one soft-deleted bolt row that must never be listed or counted.
"""

import pytest
from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Supplier, Item, InventoryLog


async def create_sample_suppliers(session: AsyncSession):
    suppliers = [
        Supplier(name="Acme Fasteners", code="ACME"),
        Supplier(name="Northwind Hardware", code="NWH"),
    ]
    session.add_all(suppliers)
    await session.flush()
    await session.commit()
    return suppliers


@pytest.fixture(scope="function")
async def sample_suppliers(db_session: AsyncSession):
    return await create_sample_suppliers(db_session)


async def create_sample_items(session: AsyncSession, suppliers):
    acme, northwind = suppliers
    items = [
        Item(barcode="4800001", name="Hex Bolt M8", price=0.35, supplier_id=acme.id),
        Item(barcode="4800002", name="Flat Washer", price=0.05, supplier_id=acme.id),
        Item(barcode="4800003", name="Lock Nut", price=0.12, supplier_id=northwind.id),
        Item(barcode="4800004", name="Wood Screw", price=0.08, supplier_id=None),
    ]
    session.add_all(items)
    await session.flush()
    await session.commit()
    return items


@pytest.fixture(scope="function")
async def sample_items(db_session: AsyncSession, sample_suppliers):
    return await create_sample_items(db_session, sample_suppliers)


async def create_sample_logs(session: AsyncSession, items):
    bolt, washer, nut, _screw = items
    logs = [
        InventoryLog(item_id=bolt.id, quantity=10, type="in"),
        InventoryLog(item_id=washer.id, quantity=5, type="in"),
        InventoryLog(item_id=bolt.id, quantity=3, type="out", swap_item_id=washer.id),
        InventoryLog(item_id=nut.id, quantity=7, type="in"),
        InventoryLog(item_id=washer.id, quantity=2, type="out"),
        InventoryLog(item_id=bolt.id, quantity=1, type="adjust"),
        InventoryLog(item_id=nut.id, quantity=4, type="out", swap_item_id=bolt.id),
        InventoryLog(item_id=washer.id, quantity=6, type="in"),
        InventoryLog(item_id=nut.id, quantity=8, type="adjust"),
        InventoryLog(item_id=None, quantity=9, type="in"),
        InventoryLog(
            item_id=bolt.id,
            quantity=12,
            type="in",
            deleted_at=datetime.now(timezone.utc).replace(tzinfo=None),
        ),
    ]
    session.add_all(logs)
    await session.flush()
    await session.commit()
    return logs


@pytest.fixture(scope="function")
async def sample_logs(db_session: AsyncSession, sample_items):
    return await create_sample_logs(db_session, sample_items)


async def seed_populated_db(session: AsyncSession):
    """Seed suppliers, items and inventory logs and return them by table."""
    suppliers = await create_sample_suppliers(session)
    items = await create_sample_items(session, suppliers)
    logs = await create_sample_logs(session, items)
    return {
        'supplier': suppliers,
        'item': items,
        'inventory_log': logs,
    }


@pytest.fixture(scope="function")
async def populated_db(db_session: AsyncSession):
    return await seed_populated_db(db_session)
