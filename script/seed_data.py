#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Events - two demo events owned by the demo organizer
2. Create Tickets - two price tiers per event through CreateTicketsUseCase

Notes:
- Users live in the upstream identity service; the IDs below are what the
  auth gateway forwards in X-User-Id
- Run `python script/reset_database.py` first for a clean schema
"""

import asyncio
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork
from src.service.ticket_reservation.app.command.create_tickets_use_case import (
    CreateTicketsUseCase,
)
from src.service.ticket_reservation.domain.entity.principal import Principal
from src.service.ticket_reservation.domain.enum.user_role import UserRole
from src.service.ticket_reservation.driven_adapter.model import EventModel, TicketModel


ORGANIZER_ID = 1
CUSTOMER_ID = 2


@dataclass
class TierConfig:
    price: Decimal
    count: int


@dataclass
class EventConfig:
    name: str
    tiers: list[TierConfig]


TEST_EVENTS = [
    EventConfig(
        name='Concert Event',
        tiers=[TierConfig(Decimal('99.99'), 20), TierConfig(Decimal('149.99'), 10)],
    ),
    EventConfig(
        name='Theatre Night',
        tiers=[TierConfig(Decimal('49.50'), 30), TierConfig(Decimal('89.00'), 5)],
    ),
]


async def create_event(database: Database, config: EventConfig) -> int:
    async with database.session_maker() as session:
        event = EventModel(name=config.name, organizer_id=ORGANIZER_ID)
        session.add(event)
        await session.commit()
        print(f'   ✅ Created event: ID={event.id}, Name={event.name}')
        return event.id


async def create_tickets(database: Database, event_id: int, tiers: list[TierConfig]) -> None:
    organizer = Principal(user_id=ORGANIZER_ID, role=UserRole.ORGANIZER)
    for tier in tiers:
        use_case = CreateTicketsUseCase(uow=SqlAlchemyUnitOfWork(database.session_maker))
        tickets = await use_case.execute(
            principal=organizer, event_id=event_id, price=tier.price, count=tier.count
        )
        print(f'   ✅ Created {len(tickets)} tickets at {tier.price} (first ID={tickets[0].id})')


async def verify_data(database: Database) -> None:
    print('🔍 Verifying seeded data...')
    async with database.session() as session:
        for model in (EventModel, TicketModel):
            count = await session.scalar(select(func.count()).select_from(model))
            print(f'   {model.__tablename__.capitalize()} count: {count}')


async def main() -> None:
    print('🌱 Starting data seeding...')
    print('=' * 50)

    database = Database()
    try:
        await database.create_tables()
        for config in TEST_EVENTS:
            print(f'🎫 Creating {config.name}...')
            event_id = await create_event(database, config)
            await create_tickets(database, event_id, config.tiers)
            print()

        await verify_data(database)

        print()
        print('=' * 50)
        print('🌱 Data seeding completed!')
        print('📋 Demo identities (send with Authorization: Bearer <any>):')
        print(f'   Organizer: X-User-Id={ORGANIZER_ID} X-User-Role=organizer')
        print(f'   Customer:  X-User-Id={CUSTOMER_ID} X-User-Role=customer')

    except Exception as e:
        print(f'❌ Seeding failed: {e}')
        raise SystemExit(1) from e

    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
