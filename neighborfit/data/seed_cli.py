"""CLI for loading the neighborhood dataset.

Usage:
    python -m neighborfit.data.seed_cli data/neighborfit_city_dataset.json
    python -m neighborfit.data.seed_cli data/neighborfit_city_dataset.json --write
"""

import argparse
import asyncio
import logging
from collections import Counter

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from neighborfit.config import settings
from neighborfit.data.dataset import load_dataset
from neighborfit.models.area import Area
from neighborfit.models.db import AreaRecord, Base

logger = logging.getLogger(__name__)


def to_record(area: Area) -> AreaRecord:
    return AreaRecord(
        id=area.id,
        city=area.city,
        name=area.name,
        type=area.type.value,
        population=area.population,
        violent_crime_count=area.violent_crime_count,
        violent_crime_rate=area.violent_crime_rate,
        chargesheeting_rate=area.chargesheeting_rate,
        public_transport_access=area.public_transport_access,
        park_count=area.park_count,
        school_count=area.school_count,
        pet_friendly=area.pet_friendly,
        walkability=area.walkability.value,
        average_rent=area.average_rent,
        average_home_price=area.average_home_price,
    )


def print_summary(areas: list[Area]) -> None:
    print(f"\n{'=' * 60}")
    print(f"  Dataset: {len(areas)} areas")
    print(f"{'=' * 60}")
    for city, count in sorted(Counter(a.city for a in areas).items()):
        print(f"  {city:<32} {count:>4}")
    print()
    print("  Sample:")
    for area in areas[:5]:
        print(f"  - {area.full_location}")
        print(f"    Rent: Rs {area.average_rent:,.0f}/month   Home: Rs {area.average_home_price / 100_000:.1f}L")
        print(f"    Safety: {area.safety_score}   Lifestyle: {area.lifestyle_score}")
    print()


async def write_areas(areas: list[Area], database_url: str) -> None:
    """Insert or update the dataset areas; ids are stable so favorites survive a reload."""
    engine = create_async_engine(database_url)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        async with async_sessionmaker(engine)() as session:
            async with session.begin():
                for area in areas:
                    await session.merge(to_record(area))
        logger.info("Wrote %d areas to the database", len(areas))
    finally:
        await engine.dispose()


async def main() -> None:
    parser = argparse.ArgumentParser(description="Neighborhood dataset loader")
    parser.add_argument("dataset", help="Path to the dataset JSON file")
    parser.add_argument("--write", action="store_true", help="Upsert the areas into the configured database")
    parser.add_argument("--db", default=settings.database_url, help="Database URL (default: from settings)")

    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level)

    areas = load_dataset(args.dataset)
    print_summary(areas)
    if args.write:
        await write_areas(areas, args.db)


if __name__ == "__main__":
    asyncio.run(main())
