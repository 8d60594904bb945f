"""
Shared test fixtures — sample assessment rows, validated rooms, API client.
"""

import pytest
from fastapi.testclient import TestClient

from damagescan.main import app
from damagescan.row_validator import RowValidator
from damagescan.schemas import RateConfiguration


def _base_row():
    """One complete 41-column assessment row — 400 sf grey-water bedroom."""
    return {
        "claim_id": "CLM-1001",
        "site_name": "Maple Street Residence",
        "address": "12 Maple St",
        "city": "Denver",
        "state": "CO",
        "structure": "Single family",
        "damage_date": "2025-03-01",
        "assessment_date": "2025-03-02",
        "damage_description": "Supply line failure",
        "generator_needed": "No",
        "outdoor_temp_f": "48",
        "outdoor_humidity": "40",
        "outdoor_gpp": "32",
        "loss_source": "Plumbing",
        "water_category": "2",
        "water_class": "2",
        "room_id": "R-1",
        "room_name": "Bedroom",
        "room_temp_f": "75",
        "room_humidity": "55",
        "room_gpp": "71",
        "dew_point_f": "58",
        "wet_bulb_f": "64",
        "ceiling_damage": "No",
        "ceiling_materials": "",
        "ceiling_damage_moisture": "",
        "wall_damage": "Yes",
        "wall_materials": "Drywall",
        "wall_damage_moisture_bottom": "0.6",
        "wall_damage_moisture_middle": "0.4",
        "wall_damage_moisture_top": "0.2",
        "wall_damage_sf": "120",
        "floor_materials": "Carpet",
        "floor_materials_moisture": "0.5",
        "floor_damage_sf": "400",
        "room_sf": "400",
        "length_ft": "20",
        "width_ft": "20",
        "height_ft": "8",
        "volume_ft": "3200",
        "room_damage": "Moderate",
    }


@pytest.fixture
def row_factory():
    """Build a raw row, overriding any column."""
    def make(**overrides):
        row = _base_row()
        row.update(overrides)
        return row
    return make


@pytest.fixture
def room_factory(row_factory):
    """Build a ValidatedRoomInput through the real validator."""
    validator = RowValidator()

    def make(**overrides):
        room, errors = validator.validate_row(row_factory(**overrides), 1)
        assert not errors, "Sample row should validate: %s" % errors
        return room
    return make


@pytest.fixture
def default_rates():
    return RateConfiguration()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)
