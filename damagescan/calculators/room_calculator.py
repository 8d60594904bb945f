"""
Room calculator — the CDMv23 per-room estimate.

Pure Python math. Given one validated room, a rate snapshot and a material
library, produce equipment sizing, a drying timeline, labor / equipment /
material costs with the 15% commercial markup, and the electrical load.

Stages run in order: equipment -> timeline -> labor -> equipment cost ->
materials -> rollup -> electrical. Nothing here mutates its inputs.
"""

import logging
import math

from ..models import DehumidifierType, EquipmentKind, MaterialFamily, WaterCategory, WaterClass
from ..rates import ensure_rates_in_range
from ..schemas import (
    CeilingMaterial,
    ElectricalRequirements,
    EquipmentCosts,
    EquipmentRequirements,
    FloorMaterial,
    LaborCosts,
    MaterialCosts,
    RateConfiguration,
    RoomCosts,
    RoomMaterials,
    RoomResult,
    RoomTimeline,
    ValidatedRoomInput,
    WallMaterial,
)
from . import electrical
from .base import BaseCalculator
from .material_lookup import MaterialLookup

logger = logging.getLogger(__name__)


class RoomCalculator(BaseCalculator):
    """Turns a ValidatedRoomInput into a RoomResult."""

    # --- Equipment sizing ---
    LGR_BREAKPOINT_SF = 1500        # rooms above this get LGR units
    LGR_COVERAGE_SF = 2500
    STANDARD_DEHU_COVERAGE_SF = 1200
    AIR_MOVER_COVERAGE_SF = 400
    CONTAMINATED_CATEGORY = WaterCategory.BLACK
    DESICCANT_CLASS = WaterClass.SPECIALTY

    # --- Timeline ---
    BASE_DAYS = 3
    CLASS_MULTIPLIERS = {1: 1.0, 2: 1.3, 3: 1.6, 4: 1.9}
    DAILY_MONITORING_HOURS = 2.0

    # --- Labor ---
    TECH_SETUP_HOURS_PER_UNIT = 0.5
    TECH_BREAKDOWN_HOURS_PER_UNIT = 0.25
    TECH_MONITORING_HOURS_PER_UNIT = 0.5
    SPECIALIST_HOURS_CONTAMINATED = 4.0

    # --- Materials ---
    DISPOSAL_FEE = 100.00
    ANTIMICROBIAL_FEE = 200.00
    WALL_MOISTURE_WEIGHTS = (0.5, 0.3, 0.2)   # bottom, middle, top
    FULL_REMOVAL_MOISTURE = 0.40
    PARTIAL_REMOVAL_FACTOR = 0.6
    DISPOSAL_WASTE_FACTOR = 0.15

    # --- Rollup ---
    COMMERCIAL_MARKUP_RATE = 0.15

    def calculate(self, room: ValidatedRoomInput, rates: RateConfiguration,
                  library: MaterialLookup = None) -> RoomResult:
        """
        Full estimate for one room.

        Raises ConfigurationOutOfRangeError if the rate snapshot is outside
        the published limits. Never raises for a validated room.
        """
        ensure_rates_in_range(rates)
        if library is None:
            library = MaterialLookup()

        floor = library.resolve(room.floor_materials, rates)
        wall = library.resolve(room.wall_materials, rates)
        ceiling = library.resolve(room.ceiling_materials, rates)

        equipment = self.size_equipment(room, floor.family)
        timeline = self.build_timeline(room)
        labor = self.labor_costs(room, equipment, timeline, rates)
        equipment_costs = self.equipment_costs(equipment, timeline, rates)
        materials, material_costs = self.material_costs(room, floor, wall, ceiling)
        costs = self.rollup(room, labor, equipment_costs, material_costs)
        power = self.electrical_requirements(equipment)

        logger.debug(
            "Room %s (%s): %d units, %d days, $%.2f",
            room.room_id, room.room_name, equipment.total_units,
            timeline.estimated_days, costs.total_room_cost,
        )

        return RoomResult(
            room_id=room.room_id,
            room_name=room.room_name,
            room_sf=room.room_sf,
            equipment=equipment,
            costs=costs,
            timeline=timeline,
            electrical=power,
            materials=materials,
        )

    # --- Stages ---

    def is_contaminated(self, room: ValidatedRoomInput) -> bool:
        return room.water_category >= self.CONTAMINATED_CATEGORY

    def size_equipment(self, room: ValidatedRoomInput,
                       floor_family: MaterialFamily) -> EquipmentRequirements:
        if room.room_sf > self.LGR_BREAKPOINT_SF:
            large_units = self.units_for_area(room.room_sf, self.LGR_COVERAGE_SF)
            standard_units = 0
        else:
            large_units = 0
            standard_units = self.units_for_area(room.room_sf, self.STANDARD_DEHU_COVERAGE_SF)

        air_movers = self.units_for_area(room.room_sf, self.AIR_MOVER_COVERAGE_SF)

        contaminated = self.is_contaminated(room)
        heaters = 1 if contaminated else 0
        air_scrubbers = 1 if contaminated else 0

        # Hardwood needs panel injection drying when the floor is wet
        injection_systems = 1 if (
            floor_family == MaterialFamily.HARDWOOD and room.floor_damage_sf > 0
        ) else 0

        generator_required = 1 if room.generator_needed else 0

        total_units = (large_units + standard_units + air_movers + heaters
                       + air_scrubbers + injection_systems)

        if room.water_class >= self.DESICCANT_CLASS:
            recommended = DehumidifierType.DESICCANT
        elif large_units:
            recommended = DehumidifierType.LGR
        else:
            recommended = DehumidifierType.STANDARD

        return EquipmentRequirements(
            large_units=large_units,
            standard_units=standard_units,
            air_movers=air_movers,
            heaters=heaters,
            air_scrubbers=air_scrubbers,
            injection_systems=injection_systems,
            generator_required=generator_required,
            total_units=total_units,
            recommended_dehumidifier_type=recommended,
        )

    def class_multiplier(self, water_class: int) -> float:
        return self.CLASS_MULTIPLIERS[water_class]

    def build_timeline(self, room: ValidatedRoomInput) -> RoomTimeline:
        multiplier = self.class_multiplier(room.water_class)
        # round() strips float noise before ceil (3 × 1.3 == 3.9000000000000004)
        estimated_days = math.ceil(round(self.BASE_DAYS * multiplier, 9))
        return RoomTimeline(
            estimated_days=estimated_days,
            daily_monitoring_hours=self.DAILY_MONITORING_HOURS,
            base_days=self.BASE_DAYS,
            class_multiplier=multiplier,
            complexity_factors={
                "category": room.water_category,
                "class": room.water_class,
            },
        )

    def tech_hours_per_unit(self) -> float:
        return (self.TECH_SETUP_HOURS_PER_UNIT
                + self.TECH_BREAKDOWN_HOURS_PER_UNIT
                + self.TECH_MONITORING_HOURS_PER_UNIT)

    def labor_costs(self, room: ValidatedRoomInput, equipment: EquipmentRequirements,
                    timeline: RoomTimeline, rates: RateConfiguration) -> LaborCosts:
        tech_hours = equipment.total_units * self.tech_hours_per_unit()
        tech_cost = tech_hours * rates.tech_base

        supervisor_hours = timeline.daily_monitoring_hours * timeline.estimated_days
        supervisor_cost = supervisor_hours * rates.supervisor_base

        specialist_hours = self.SPECIALIST_HOURS_CONTAMINATED if self.is_contaminated(room) else 0.0
        specialist_cost = specialist_hours * rates.specialist_base

        project_management = rates.project_management_base

        return LaborCosts(
            tech_hours=tech_hours,
            tech_cost=tech_cost,
            supervisor_hours=supervisor_hours,
            supervisor_cost=supervisor_cost,
            specialist_hours=specialist_hours,
            specialist_cost=specialist_cost,
            project_management=project_management,
            total_labor=tech_cost + supervisor_cost + specialist_cost + project_management,
        )

    def equipment_costs(self, equipment: EquipmentRequirements, timeline: RoomTimeline,
                        rates: RateConfiguration) -> EquipmentCosts:
        daily_rates = rates.equipment_rates()
        counts = equipment.counts()
        daily_cost = math.fsum(counts[kind] * daily_rates[kind] for kind in EquipmentKind)
        return EquipmentCosts(
            daily_cost=daily_cost,
            total_days=timeline.estimated_days,
            total_equipment=daily_cost * timeline.estimated_days,
        )

    def ceiling_area(self, room: ValidatedRoomInput) -> float:
        if not room.ceiling_damage:
            return 0.0
        if room.ceiling_damage_sf > 0:
            return room.ceiling_damage_sf
        if room.length_ft > 0 and room.width_ft > 0:
            return self.sq_ft_from_dimensions(room.length_ft, room.width_ft)
        return room.room_sf

    def wall_moisture(self, room: ValidatedRoomInput) -> float:
        """Weighted wall reading — reporting only, never priced."""
        return self.weighted_average(
            [room.wall_damage_moisture_bottom,
             room.wall_damage_moisture_middle,
             room.wall_damage_moisture_top],
            list(self.WALL_MOISTURE_WEIGHTS),
        )

    def material_costs(self, room: ValidatedRoomInput, floor, wall, ceiling):
        floor_sf = room.floor_damage_sf
        wall_sf = room.wall_damage_sf if room.wall_damage else 0.0
        ceiling_sf = self.ceiling_area(room)

        floor_treatment = floor_sf * floor.spec.cost
        wall_treatment = wall_sf * wall.spec.cost
        ceiling_treatment = ceiling_sf * ceiling.spec.cost
        antimicrobial = self.ANTIMICROBIAL_FEE if self.is_contaminated(room) else 0.0

        costs = MaterialCosts(
            floor_treatment=floor_treatment,
            wall_treatment=wall_treatment,
            ceiling_treatment=ceiling_treatment,
            disposal=self.DISPOSAL_FEE,
            antimicrobial=antimicrobial,
            total_materials=(floor_treatment + wall_treatment + ceiling_treatment
                             + self.DISPOSAL_FEE + antimicrobial),
        )

        moisture_weighted = self.wall_moisture(room)
        removal_factor = (1.0 if moisture_weighted >= self.FULL_REMOVAL_MOISTURE
                          else self.PARTIAL_REMOVAL_FACTOR)

        floor_volume = self.volume_cuft(floor_sf, floor.spec.thickness)
        wall_volume = self.volume_cuft(wall_sf, wall.spec.thickness)
        ceiling_volume = self.volume_cuft(ceiling_sf, ceiling.spec.thickness)
        total_volume = floor_volume + wall_volume + ceiling_volume

        detail = RoomMaterials(
            floor=FloorMaterial(
                material=floor,
                affected_sqft=floor_sf,
                moisture_content=room.floor_materials_moisture,
                volume_cuft=floor_volume,
                length_ft=room.length_ft,
                width_ft=room.width_ft,
            ),
            wall=WallMaterial(
                material=wall,
                affected_sqft=wall_sf,
                moisture_weighted=moisture_weighted,
                removal_factor=removal_factor,
                volume_cuft=wall_volume,
            ),
            ceiling=CeilingMaterial(
                material=ceiling,
                affected_sqft=ceiling_sf,
                moisture_content=room.ceiling_damage_moisture,
                volume_cuft=ceiling_volume,
            ),
            total_volume=total_volume,
            disposal_volume=total_volume * (1 + self.DISPOSAL_WASTE_FACTOR),
        )
        return detail, costs

    def rollup(self, room: ValidatedRoomInput, labor: LaborCosts,
               equipment_costs: EquipmentCosts, material_costs: MaterialCosts) -> RoomCosts:
        subtotal = labor.total_labor + equipment_costs.total_equipment + material_costs.total_materials
        total_room_cost = subtotal * (1 + self.COMMERCIAL_MARKUP_RATE)
        return RoomCosts(
            labor=labor,
            equipment=equipment_costs,
            materials=material_costs,
            subtotal=subtotal,
            commercial_markup=subtotal * self.COMMERCIAL_MARKUP_RATE,
            total_room_cost=total_room_cost,
            cost_per_sqft=total_room_cost / room.room_sf,
        )

    def electrical_requirements(self, equipment: EquipmentRequirements) -> ElectricalRequirements:
        plan = electrical.plan_circuits(equipment.counts())
        return ElectricalRequirements(
            total_amperage=plan["total_amperage"],
            circuits_20a_required=plan["circuits_20a_required"],
            circuits_15a_required=plan["circuits_15a_required"],
            daily_kwh=plan["daily_kwh"],
            voltage="120V",
            generator_needed=equipment.generator_required,
        )
