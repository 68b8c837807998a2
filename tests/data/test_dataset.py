"""Tests for parsing the neighborhood dataset."""

import json
from decimal import Decimal

import pytest

from neighborfit.data.dataset import area_id_for, load_dataset, parse_record
from neighborfit.errors import ValidationError
from neighborfit.models.attributes import AreaType, Walkability


def _record(**overrides) -> dict:
    item = {
        "City": "Bengaluru (Karnataka)",
        "Neighborhood": "Koramangala",
        "Type": "Urban",
        "Population (Lakhs)": 3.5,
        "Violent Crimes (2022)": 70,
        "Rate of Violent Crimes": 20.0,
        "Chargesheeting Rate": 60.0,
        "Public Transport Access": "Yes",
        "Parks": 3,
        "Schools": 2,
        "Pet-Friendly": "No",
        "Walkable": "High",
    }
    item.update(overrides)
    return item


class TestParseRecord:
    def test_reference_record(self):
        area = parse_record(_record())
        assert area.type == AreaType.URBAN
        assert area.walkability == Walkability.HIGH
        assert area.population == 350_000
        assert area.public_transport_access is True
        assert area.pet_friendly is False
        assert area.safety_score == 70
        assert area.lifestyle_score == 65

    def test_city_cost_midpoints(self):
        area = parse_record(_record())
        assert area.average_rent == Decimal("27500")
        assert area.average_home_price == Decimal("10000000")

    def test_unknown_city_uses_default_ranges(self):
        area = parse_record(_record(City="Shimla"))
        assert area.average_rent == Decimal("22500")
        assert area.average_home_price == Decimal("7000000")

    def test_missing_field(self):
        item = _record()
        del item["Parks"]
        with pytest.raises(ValidationError, match="Parks"):
            parse_record(item)

    def test_bad_walkability(self):
        with pytest.raises(ValidationError):
            parse_record(_record(Walkable="Extreme"))

    def test_bad_number(self):
        with pytest.raises(ValidationError):
            parse_record(_record(**{"Rate of Violent Crimes": "n/a"}))

    def test_out_of_range_attributes(self):
        item = _record(**{"Rate of Violent Crimes": 0, "Chargesheeting Rate": 150, "Parks": -10})
        with pytest.raises(ValidationError):
            parse_record(item)


class TestAreaIds:
    def test_stable_across_spacing_and_case(self):
        assert area_id_for("Delhi City", "Hauz Khas") == area_id_for("delhi city", "Hauz  Khas ")

    def test_distinct_per_city(self):
        assert area_id_for("Delhi City", "Civil Lines") != area_id_for("Amritsar (Punjab)", "Civil Lines")


def test_load_dataset(tmp_path):
    path = tmp_path / "dataset.json"
    path.write_text(json.dumps([_record(), _record(Neighborhood="Indiranagar")]), encoding="utf-8")
    areas = load_dataset(path)
    assert [a.name for a in areas] == ["Koramangala", "Indiranagar"]
    assert areas[0].id != areas[1].id
