"""Load the city neighborhood dataset (JSON) into Area records.

Each record carries the published crime statistics and amenity counts:

    {"City": "Bengaluru (Karnataka)", "Neighborhood": "Koramangala",
     "Type": "Urban", "Population (Lakhs)": 3.5,
     "Violent Crimes (2022)": 70, "Rate of Violent Crimes": 20.0,
     "Chargesheeting Rate": 60.0, "Public Transport Access": "Yes",
     "Parks": 3, "Schools": 2, "Pet-Friendly": "No", "Walkable": "High"}

The dataset has no cost figures; rent and home price are filled with the
midpoint of the city's typical range.
"""

import json
import logging
import re
import uuid
from decimal import Decimal, InvalidOperation
from pathlib import Path

from neighborfit.errors import ValidationError
from neighborfit.models.area import Area
from neighborfit.models.attributes import AreaType, Walkability

logger = logging.getLogger(__name__)

# Monthly rent and home price ranges (INR) by dataset city label
CITY_RENT_RANGES: dict[str, tuple[int, int]] = {
    "Ahmedabad (Gujarat)": (12_000, 22_000),
    "Bengaluru (Karnataka)": (20_000, 35_000),
    "Chennai (Tamil Nadu)": (15_000, 30_000),
    "Delhi City": (25_000, 45_000),
    "Hyderabad (Telangana)": (18_000, 32_000),
    "Indore (Madhya Pradesh)": (9_000, 18_000),
    "Kolkata (West Bengal)": (15_000, 28_000),
    "Mumbai (Maharashtra)": (30_000, 60_000),
    "Patna (Bihar)": (8_000, 15_000),
    "Chandigarh (Chandigarh)": (15_000, 28_000),
    "Amritsar (Punjab)": (10_000, 18_000),
}
CITY_HOME_PRICE_RANGES: dict[str, tuple[int, int]] = {
    "Ahmedabad (Gujarat)": (3_000_000, 8_000_000),
    "Bengaluru (Karnataka)": (5_000_000, 15_000_000),
    "Chennai (Tamil Nadu)": (4_000_000, 12_000_000),
    "Delhi City": (6_000_000, 20_000_000),
    "Hyderabad (Telangana)": (4_000_000, 12_000_000),
    "Indore (Madhya Pradesh)": (2_000_000, 6_000_000),
    "Kolkata (West Bengal)": (3_500_000, 10_000_000),
    "Mumbai (Maharashtra)": (8_000_000, 30_000_000),
    "Patna (Bihar)": (1_500_000, 5_000_000),
    "Chandigarh (Chandigarh)": (4_000_000, 12_000_000),
    "Amritsar (Punjab)": (2_500_000, 7_000_000),
}
DEFAULT_RENT_RANGE = (15_000, 30_000)
DEFAULT_HOME_PRICE_RANGE = (4_000_000, 10_000_000)

LAKH = 100_000
_AREA_NAMESPACE = uuid.UUID("6f1c2b0e-5d4a-4f0e-9a57-3c2f8e1d7b44")


def _midpoint(bounds: tuple[int, int]) -> Decimal:
    low, high = bounds
    return Decimal(low + high) / 2


def _yes(value) -> bool:
    return str(value).strip().lower() == "yes"


def area_id_for(city: str, name: str) -> str:
    """Stable id so reloading the dataset keeps favorites pointing at the same rows."""
    key = re.sub(r"\s+", " ", f"{city}/{name}".strip().lower())
    return str(uuid.uuid5(_AREA_NAMESPACE, key))


def parse_record(item: dict) -> Area:
    try:
        city = item["City"]
        name = item["Neighborhood"]
        return Area(
            id=area_id_for(city, name),
            city=city,
            name=name,
            type=AreaType(item["Type"]),
            population=int(Decimal(str(item["Population (Lakhs)"])) * LAKH),
            violent_crime_count=int(item["Violent Crimes (2022)"]),
            violent_crime_rate=Decimal(str(item["Rate of Violent Crimes"])),
            chargesheeting_rate=Decimal(str(item["Chargesheeting Rate"])),
            public_transport_access=_yes(item["Public Transport Access"]),
            park_count=int(item["Parks"]),
            school_count=int(item["Schools"]),
            pet_friendly=_yes(item["Pet-Friendly"]),
            walkability=Walkability(item["Walkable"]),
            average_rent=_midpoint(CITY_RENT_RANGES.get(city, DEFAULT_RENT_RANGE)),
            average_home_price=_midpoint(CITY_HOME_PRICE_RANGES.get(city, DEFAULT_HOME_PRICE_RANGE)),
        )
    except KeyError as e:
        raise ValidationError(f"Dataset record missing field {e.args[0]!r}") from e
    except (TypeError, ValueError, InvalidOperation) as e:
        raise ValidationError(f"Invalid dataset record {item.get('Neighborhood')!r}: {e}") from e


def load_dataset(path: str | Path) -> list[Area]:
    records = json.loads(Path(path).read_text(encoding="utf-8"))
    areas = [parse_record(item) for item in records]
    logger.info("Loaded %d areas from %s", len(areas), path)
    return areas
