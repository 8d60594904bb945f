"""
Room calculator tests — equipment, timeline, costs, materials, electrical.

Tests:
1-4.   Equipment sizing — standard vs LGR breakpoint, contamination, injection, desiccant
5-6.   Timeline — class multipliers, ceil
7-9.   Reference room costs (400 sf grey water, class 2)
10-12. Material treatment — fallback, clean water, ceiling, wall flags
13-14. Wall moisture / removal factor, volumes
15-16. Electrical load for a contaminated 2000 sf room
17-19. Rollup invariants, idempotence, rate limits enforced
20.    Engineered hardwood floors are not solid hardwood
21.    ValidatedRoomInput rejects out-of-range values
22.    An explicitly empty material library is honored
"""

import pytest
from pydantic import ValidationError

from damagescan.calculators.material_lookup import FALLBACK_SPEC, MaterialLookup
from damagescan.calculators.room_calculator import RoomCalculator
from damagescan.models import DehumidifierType, MaterialFamily
from damagescan.rates import ConfigurationOutOfRangeError
from damagescan.schemas import RateConfiguration, ValidatedRoomInput


calc = RoomCalculator()


def _contaminated_overrides():
    """2000 sf black-water room, wet hardwood, generator on site."""
    return {
        "water_category": "3",
        "water_class": "3",
        "room_sf": "2000",
        "length_ft": "40",
        "width_ft": "50",
        "floor_materials": "Hardwood floors",
        "floor_damage_sf": "500",
        "generator_needed": "Yes",
    }


# ============================================================
# Equipment sizing
# ============================================================

def test_small_room_gets_standard_dehumidifier(room_factory, default_rates):
    result = calc.calculate(room_factory(), default_rates)
    eq = result.equipment
    assert eq.standard_units == 1
    assert eq.large_units == 0
    assert eq.air_movers == 1
    assert eq.heaters == 0
    assert eq.air_scrubbers == 0
    assert eq.injection_systems == 0
    assert eq.generator_required == 0
    assert eq.total_units == 2
    assert eq.recommended_dehumidifier_type == DehumidifierType.STANDARD


def test_lgr_breakpoint_is_exclusive(room_factory, default_rates):
    """1500 sf still uses standard units; 1501 sf switches to LGR."""
    at_break = calc.calculate(room_factory(room_sf="1500"), default_rates).equipment
    assert at_break.standard_units == 2
    assert at_break.large_units == 0

    above = calc.calculate(room_factory(room_sf="1501"), default_rates).equipment
    assert above.large_units == 1
    assert above.standard_units == 0
    assert above.recommended_dehumidifier_type == DehumidifierType.LGR


def test_contaminated_room_equipment(room_factory, default_rates):
    result = calc.calculate(room_factory(**_contaminated_overrides()), default_rates)
    eq = result.equipment
    assert eq.large_units == 1
    assert eq.air_movers == 5
    assert eq.heaters == 1
    assert eq.air_scrubbers == 1
    assert eq.injection_systems == 1
    assert eq.generator_required == 1
    # Generator is not counted as a drying unit
    assert eq.total_units == 9


def test_class_4_recommends_desiccant(room_factory, default_rates):
    result = calc.calculate(room_factory(water_class="4"), default_rates)
    assert result.equipment.recommended_dehumidifier_type == DehumidifierType.DESICCANT


def test_injection_needs_wet_hardwood(room_factory, default_rates):
    dry_hardwood = room_factory(floor_materials="Hardwood", floor_damage_sf="0")
    assert calc.calculate(dry_hardwood, default_rates).equipment.injection_systems == 0

    wet_tile = room_factory(floor_materials="Tile", floor_damage_sf="300")
    assert calc.calculate(wet_tile, default_rates).equipment.injection_systems == 0


# ============================================================
# Timeline
# ============================================================

def test_timeline_by_class(room_factory, default_rates):
    expected = {"1": 3, "2": 4, "3": 5, "4": 6}
    for water_class, days in expected.items():
        result = calc.calculate(room_factory(water_class=water_class), default_rates)
        assert result.timeline.estimated_days == days, (
            "Class %s: expected %d days, got %d"
            % (water_class, days, result.timeline.estimated_days)
        )


def test_timeline_detail(room_factory, default_rates):
    timeline = calc.calculate(room_factory(), default_rates).timeline
    assert timeline.base_days == 3
    assert timeline.class_multiplier == 1.3
    assert timeline.daily_monitoring_hours == 2.0
    assert timeline.complexity_factors == {"category": 2, "class": 2}


# ============================================================
# Reference room costs
# ============================================================

def test_reference_room_labor(room_factory, default_rates):
    labor = calc.calculate(room_factory(), default_rates).costs.labor
    assert labor.tech_hours == 2.5
    assert labor.tech_cost == 137.5
    assert labor.supervisor_hours == 8.0
    assert labor.supervisor_cost == 600.0
    assert labor.specialist_hours == 0.0
    assert labor.specialist_cost == 0.0
    assert labor.project_management == 200.0
    assert labor.total_labor == 937.5


def test_reference_room_equipment_and_materials(room_factory, default_rates):
    costs = calc.calculate(room_factory(), default_rates).costs
    assert costs.equipment.daily_cost == 23.0
    assert costs.equipment.total_days == 4
    assert costs.equipment.total_equipment == 92.0

    assert costs.materials.floor_treatment == 500.0     # 400 sf carpet @ 1.25
    assert costs.materials.wall_treatment == 270.0      # 120 sf drywall @ 2.25
    assert costs.materials.ceiling_treatment == 0.0
    assert costs.materials.disposal == 100.0
    assert costs.materials.antimicrobial == 0.0
    assert costs.materials.total_materials == 870.0


def test_reference_room_rollup(room_factory, default_rates):
    costs = calc.calculate(room_factory(), default_rates).costs
    assert costs.subtotal == 1899.5
    assert costs.commercial_markup == pytest.approx(284.925)
    assert costs.total_room_cost == pytest.approx(2184.425)
    assert costs.cost_per_sqft == pytest.approx(5.4610625)


def test_contaminated_room_labor_and_fees(room_factory, default_rates):
    costs = calc.calculate(room_factory(**_contaminated_overrides()), default_rates).costs
    assert costs.labor.tech_hours == 11.25
    assert costs.labor.supervisor_hours == 10.0
    assert costs.labor.supervisor_cost == 750.0
    assert costs.labor.specialist_hours == 4.0
    assert costs.labor.specialist_cost == 480.0
    assert costs.materials.antimicrobial == 200.0
    # 25 + 5×8 + 12 + 35 + 25 + 45 (generator)
    assert costs.equipment.daily_cost == 182.0
    assert costs.equipment.total_equipment == 910.0


# ============================================================
# Material treatment
# ============================================================

def test_unknown_floor_material_uses_fallback(room_factory, default_rates):
    result = calc.calculate(room_factory(floor_materials="Unobtainium"), default_rates)
    floor = result.materials.floor
    assert floor.material.matched is False
    assert floor.material.spec == FALLBACK_SPEC
    assert result.costs.materials.floor_treatment == 900.0


def test_clean_water_has_no_contamination_extras(room_factory, default_rates):
    result = calc.calculate(room_factory(water_category="1"), default_rates)
    assert result.costs.materials.antimicrobial == 0.0
    assert result.equipment.heaters == 0
    assert result.equipment.air_scrubbers == 0
    assert result.costs.labor.specialist_hours == 0.0


def test_damaged_ceiling_uses_room_footprint(room_factory, default_rates):
    room = room_factory(ceiling_damage="Yes", ceiling_materials="Drywall")
    result = calc.calculate(room, default_rates)
    assert result.materials.ceiling.affected_sqft == 400.0
    assert result.costs.materials.ceiling_treatment == 900.0
    assert result.materials.ceiling.material.family == MaterialFamily.DRYWALL


def test_undamaged_wall_is_not_priced(room_factory, default_rates):
    result = calc.calculate(room_factory(wall_damage="No"), default_rates)
    assert result.costs.materials.wall_treatment == 0.0
    assert result.materials.wall.affected_sqft == 0.0


# ============================================================
# Wall moisture and volumes
# ============================================================

def test_wall_moisture_weighting(room_factory, default_rates):
    wall = calc.calculate(room_factory(), default_rates).materials.wall
    assert wall.moisture_weighted == pytest.approx(0.46)
    assert wall.removal_factor == 1.0

    drier = room_factory(
        wall_damage_moisture_bottom="0.3",
        wall_damage_moisture_middle="0.3",
        wall_damage_moisture_top="0.3",
    )
    wall = calc.calculate(drier, default_rates).materials.wall
    assert wall.moisture_weighted == pytest.approx(0.3)
    assert wall.removal_factor == 0.6


def test_removal_factor_does_not_change_cost(room_factory, default_rates):
    wet = calc.calculate(room_factory(), default_rates)
    drier = calc.calculate(room_factory(wall_damage_moisture_bottom="0.1"), default_rates)
    assert drier.materials.wall.removal_factor == 0.6
    assert wet.costs.materials.wall_treatment == drier.costs.materials.wall_treatment


def test_material_volumes(room_factory, default_rates):
    materials = calc.calculate(room_factory(), default_rates).materials
    assert materials.floor.volume_cuft == pytest.approx(12.5)    # 400 × 0.375 / 12
    assert materials.wall.volume_cuft == pytest.approx(5.0)      # 120 × 0.5 / 12
    assert materials.ceiling.volume_cuft == 0.0
    assert materials.total_volume == pytest.approx(17.5)
    assert materials.disposal_volume == pytest.approx(20.125)


# ============================================================
# Electrical
# ============================================================

def test_reference_room_electrical(room_factory, default_rates):
    power = calc.calculate(room_factory(), default_rates).electrical
    assert power.total_amperage == 9.0
    assert power.circuits_20a_required == 1
    assert power.circuits_15a_required == 1
    assert power.daily_kwh == pytest.approx(25.92)
    assert power.voltage == "120V"
    assert power.generator_needed == 0


def test_contaminated_room_electrical(room_factory, default_rates):
    power = calc.calculate(room_factory(**_contaminated_overrides()), default_rates).electrical
    assert power.total_amperage == pytest.approx(43.0)
    assert power.circuits_20a_required == 3
    assert power.circuits_15a_required == 4
    assert power.daily_kwh == pytest.approx(105.84)
    assert power.generator_needed == 1


# ============================================================
# Invariants
# ============================================================

def test_markup_identity_across_rooms(room_factory, default_rates):
    variants = [
        {},
        _contaminated_overrides(),
        {"water_class": "4", "room_sf": "3200", "floor_materials": "Laminate"},
        {"ceiling_damage": "Yes", "ceiling_materials": "Plaster"},
    ]
    for overrides in variants:
        room = room_factory(**overrides)
        costs = calc.calculate(room, default_rates).costs
        assert costs.total_room_cost == costs.subtotal * 1.15
        assert costs.cost_per_sqft == pytest.approx(costs.total_room_cost / room.room_sf, rel=1e-9)
        assert costs.subtotal == pytest.approx(
            costs.labor.total_labor
            + costs.equipment.total_equipment
            + costs.materials.total_materials
        )


def test_calculation_is_idempotent(room_factory, default_rates):
    room = room_factory(**_contaminated_overrides())
    assert calc.calculate(room, default_rates) == calc.calculate(room, default_rates)


def test_custom_rates_flow_through(room_factory):
    rates = RateConfiguration(tech_base=100, air_mover_daily=10)
    costs = calc.calculate(room_factory(), rates).costs
    assert costs.labor.tech_cost == 250.0
    assert costs.equipment.daily_cost == 25.0


def test_out_of_range_rates_raise(room_factory):
    rates = RateConfiguration(tech_base=10)
    with pytest.raises(ConfigurationOutOfRangeError) as exc:
        calc.calculate(room_factory(), rates)
    assert "tech_base must be between $25-150" in exc.value.errors


def test_engineered_hardwood_floors_get_no_injection(room_factory, default_rates):
    room = room_factory(floor_materials="Engineered hardwood floors", floor_damage_sf="300")
    result = calc.calculate(room, default_rates)
    assert result.materials.floor.material.family == MaterialFamily.ENGINEERED
    assert result.equipment.injection_systems == 0
    assert result.costs.materials.floor_treatment == 975.0   # 300 sf @ 3.25


# ============================================================
# Input model limits
# ============================================================

def test_room_input_rejects_out_of_range_values(room_factory):
    """Values outside the published ranges never reach the calculator."""
    base = room_factory().model_dump()
    bad_values = [
        {"room_sf": 0},
        {"room_sf": 5001},
        {"water_class": 5},
        {"water_category": 0},
        {"room_humidity": 95},
        {"floor_damage_sf": -1},
        {"wall_damage_moisture_top": 0.99},
        {"floor_materials_moisture": 0.02},
        {"room_id": ""},
    ]
    for change in bad_values:
        with pytest.raises(ValidationError):
            ValidatedRoomInput(**{**base, **change})

    # 0 moisture means not measured
    room = ValidatedRoomInput(**{**base, "floor_materials_moisture": 0.0})
    assert room.floor_materials_moisture == 0.0


def test_explicit_empty_library_is_used(room_factory, default_rates):
    """An empty library resolves everything to the fallback spec."""
    empty = MaterialLookup(library={}, families={})
    result = calc.calculate(room_factory(), default_rates, empty)
    assert result.materials.floor.material.matched is False
    assert result.costs.materials.floor_treatment == 900.0   # 400 sf @ fallback 2.25
