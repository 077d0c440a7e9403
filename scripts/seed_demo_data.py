#!/usr/bin/env python3
"""Seed a demo user, farmers, farms and a year of daily milk production.

Usage::

    python scripts/seed_demo_data.py --year 2024 --farmers 3 --with-payments
"""
from __future__ import annotations

import argparse
import random
import sys
from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Iterator

from faker import Faker

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from dairy.core.config import get_settings  # noqa: E402
from dairy.core.errors import ConflictError  # noqa: E402
from dairy.core.log import configure_logging, get_logger, log_context, timeit  # noqa: E402
from dairy.core.security import SecurityProvider  # noqa: E402
from dairy.db import create_sync_engine, get_sessionmaker, init_db, session_scope  # noqa: E402
from dairy.repositories import FarmerRepository, FarmRepository, ProductionRepository  # noqa: E402
from dairy.services import AuthService, PaymentService  # noqa: E402

logger = get_logger(__name__)

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "demo-pass"
# Rough bounding box of the Minas Gerais dairy belt
LAT_RANGE = (-21.5, -18.0)
LNG_RANGE = (-46.0, -42.0)
# Spread across both cost-per-km tiers
DISTANCE_RANGE_KM = (5.0, 90.0)
DAILY_VOLUME_RANGE = (150.0, 520.0)


def _daily_volumes(year: int, rng: random.Random) -> Iterator[tuple[datetime, Decimal]]:
    current = date(year, 1, 1)
    while current.year == year:
        volume = Decimal(str(round(rng.uniform(*DAILY_VOLUME_RANGE), 1)))
        yield datetime(current.year, current.month, current.day, 6, 0), volume
        current += timedelta(days=1)


def seed(year: int, *, farmers: int, farms_per_farmer: int, with_payments: bool, seed_value: int) -> None:
    settings = get_settings()
    engine = create_sync_engine(settings.database.sqlalchemy_url)
    init_db(engine)
    factory = get_sessionmaker(engine=engine)
    rng = random.Random(seed_value)
    faker = Faker("pt_BR")
    faker.seed_instance(seed_value)

    with session_scope(factory) as session:
        try:
            AuthService(session, SecurityProvider(settings.auth)).register(
                "Demo Operator", DEMO_EMAIL, DEMO_PASSWORD
            )
        except ConflictError:
            logger.info("Demo user %s already exists", DEMO_EMAIL)

        farmer_repo = FarmerRepository(session)
        farm_repo = FarmRepository(session)
        production_repo = ProductionRepository(session)
        farm_ids: list[str] = []

        for _ in range(farmers):
            farmer = farmer_repo.create_farmer(
                {
                    "name": faker.name(),
                    "email": faker.unique.email(),
                    "phone": faker.phone_number(),
                }
            )
            for _ in range(farms_per_farmer):
                farm = farm_repo.create_farm(
                    {
                        "farmer_id": farmer.id,
                        "name": f"Fazenda {faker.last_name()}",
                        "location_lat": round(rng.uniform(*LAT_RANGE), 5),
                        "location_lng": round(rng.uniform(*LNG_RANGE), 5),
                        "distance_to_factory_km": Decimal(str(round(rng.uniform(*DISTANCE_RANGE_KM), 1))),
                    }
                )
                farm_ids.append(farm.id)
                with timeit(f"Seeding production for {farm.name}", logger=logger, unit="records") as timer:
                    records = 0
                    for day, volume in _daily_volumes(year, rng):
                        production_repo.create_production(
                            {
                                "farm_id": farm.id,
                                "farmer_id": farmer.id,
                                "date": day,
                                "volume_liters": volume,
                            }
                        )
                        records += 1
                    timer.set_total(records)

        if with_payments:
            # Creating snapshots never converts currencies.
            payments = PaymentService(session, converter=None)  # type: ignore[arg-type]
            for farm_id in farm_ids:
                for month in range(1, 13):
                    payments.create_payment(farm_id, year, month)

    logger.info("Seeded %d farmers and %d farms for %d", farmers, len(farm_ids), year)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed demo dairy data")
    parser.add_argument("--year", type=int, default=date.today().year - 1)
    parser.add_argument("--farmers", type=int, default=2)
    parser.add_argument("--farms-per-farmer", type=int, default=2)
    parser.add_argument("--with-payments", action="store_true")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    configure_logging(get_settings(), app_name="seed-demo-data")
    log_context.bind(job="seed_demo_data", year=args.year)
    seed(
        args.year,
        farmers=args.farmers,
        farms_per_farmer=args.farms_per_farmer,
        with_payments=args.with_payments,
        seed_value=args.seed,
    )


if __name__ == "__main__":
    main()
