from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from .models import DehumidifierType, EquipmentKind, MaterialFamily


# --- Rate configuration (16 knobs) ---

class RateConfiguration(BaseModel):
    # Labor rates in $/hour, project management is a flat fee
    tech_base: float = 55.0
    supervisor_base: float = 75.0
    specialist_base: float = 120.0
    project_management_base: float = 200.0

    # Equipment daily rates in $/day per unit
    large_dehumidifier_daily: float = 25.0
    standard_dehumidifier_daily: float = 15.0
    air_mover_daily: float = 8.0
    heater_daily: float = 12.0
    air_scrubber_daily: float = 35.0
    injection_system_daily: float = 25.0
    generator_daily: float = 45.0

    # Target moisture content, percent
    hardwood_target_mc: float = 8.0
    paneling_target_mc: float = 10.0
    vinyl_target_mc: float = 2.0
    drywall_target_mc: float = 12.0
    carpet_target_mc: float = 5.0

    class Config:
        frozen = True

    def equipment_rates(self) -> Dict[EquipmentKind, float]:
        return {
            EquipmentKind.LARGE_DEHUMIDIFIER: self.large_dehumidifier_daily,
            EquipmentKind.STANDARD_DEHUMIDIFIER: self.standard_dehumidifier_daily,
            EquipmentKind.AIR_MOVER: self.air_mover_daily,
            EquipmentKind.HEATER: self.heater_daily,
            EquipmentKind.AIR_SCRUBBER: self.air_scrubber_daily,
            EquipmentKind.INJECTION_SYSTEM: self.injection_system_daily,
            EquipmentKind.GENERATOR: self.generator_daily,
        }

    def moisture_targets(self) -> Dict[MaterialFamily, float]:
        return {
            MaterialFamily.HARDWOOD: self.hardwood_target_mc,
            MaterialFamily.PANELING: self.paneling_target_mc,
            MaterialFamily.VINYL: self.vinyl_target_mc,
            MaterialFamily.DRYWALL: self.drywall_target_mc,
            MaterialFamily.CARPET: self.carpet_target_mc,
        }


# --- Materials ---

class MaterialSpecification(BaseModel):
    thickness: float   # inches
    cost: float        # treatment cost, $/sqft
    target_mc: float   # percent

    class Config:
        frozen = True


class ResolvedMaterial(BaseModel):
    material_type: str                     # raw name as entered
    canonical_name: Optional[str] = None   # None when the fallback was used
    family: Optional[MaterialFamily] = None
    spec: MaterialSpecification
    matched: bool = True

    class Config:
        frozen = True


# --- Row input ---

class ValidatedRoomInput(BaseModel):
    # Site information
    claim_id: str = Field(min_length=1)
    site_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    structure: str = ""
    damage_date: str = ""

    # Assessment details
    assessment_date: str = ""
    damage_description: str = ""
    generator_needed: bool = False
    outdoor_temp_f: float = 0.0
    outdoor_humidity: float = 0.0
    outdoor_gpp: float = 0.0
    loss_source: str = ""

    # Water classification
    water_category: int = Field(ge=1, le=3)
    water_class: int = Field(ge=1, le=4)

    # Room identification
    room_id: str = Field(min_length=1)
    room_name: str = Field(min_length=1)

    # Room environmental
    room_temp_f: float = Field(ge=60, le=100)
    room_humidity: float = Field(ge=20, le=90)
    room_gpp: float = 0.0
    dew_point_f: float = 0.0
    wet_bulb_f: float = 0.0

    # Ceiling
    ceiling_damage: bool = False
    ceiling_materials: str = ""
    ceiling_damage_moisture: float = 0.0
    ceiling_damage_sf: float = Field(default=0.0, ge=0)

    # Walls
    wall_damage: bool = False
    wall_materials: str = ""
    wall_damage_moisture_bottom: float = 0.0
    wall_damage_moisture_middle: float = 0.0
    wall_damage_moisture_top: float = 0.0
    wall_damage_sf: float = Field(default=0.0, ge=0)

    # Floor
    floor_materials: str = ""
    floor_materials_moisture: float = 0.0
    floor_damage_sf: float = Field(default=0.0, ge=0)

    # Dimensions
    room_sf: float = Field(ge=50, le=5000)
    length_ft: float = Field(default=0.0, ge=0)
    width_ft: float = Field(default=0.0, ge=0)
    height_ft: float = Field(default=0.0, ge=0)
    volume_ft: float = Field(default=0.0, ge=0)

    room_damage: str = ""

    class Config:
        frozen = True

    @field_validator(
        "ceiling_damage_moisture",
        "wall_damage_moisture_bottom",
        "wall_damage_moisture_middle",
        "wall_damage_moisture_top",
        "floor_materials_moisture",
    )
    @classmethod
    def moisture_fraction(cls, v: float) -> float:
        # 0 means not measured
        if v != 0 and not (0.05 <= v <= 0.95):
            raise ValueError("moisture must be 0 or between 0.05-0.95")
        return v


class RowError(BaseModel):
    row: int
    field: str
    message: str
    value: Any = None


# --- Room result ---

class EquipmentRequirements(BaseModel):
    large_units: int
    standard_units: int
    air_movers: int
    heaters: int
    air_scrubbers: int
    injection_systems: int
    generator_required: int
    total_units: int
    recommended_dehumidifier_type: DehumidifierType

    class Config:
        frozen = True

    def counts(self) -> Dict[EquipmentKind, int]:
        return {
            EquipmentKind.LARGE_DEHUMIDIFIER: self.large_units,
            EquipmentKind.STANDARD_DEHUMIDIFIER: self.standard_units,
            EquipmentKind.AIR_MOVER: self.air_movers,
            EquipmentKind.HEATER: self.heaters,
            EquipmentKind.AIR_SCRUBBER: self.air_scrubbers,
            EquipmentKind.INJECTION_SYSTEM: self.injection_systems,
            EquipmentKind.GENERATOR: self.generator_required,
        }


class LaborCosts(BaseModel):
    tech_hours: float
    tech_cost: float
    supervisor_hours: float
    supervisor_cost: float
    specialist_hours: float
    specialist_cost: float
    project_management: float
    total_labor: float

    class Config:
        frozen = True


class EquipmentCosts(BaseModel):
    daily_cost: float
    total_days: int
    total_equipment: float

    class Config:
        frozen = True


class MaterialCosts(BaseModel):
    floor_treatment: float
    wall_treatment: float
    ceiling_treatment: float
    disposal: float
    antimicrobial: float
    total_materials: float

    class Config:
        frozen = True


class RoomCosts(BaseModel):
    labor: LaborCosts
    equipment: EquipmentCosts
    materials: MaterialCosts
    subtotal: float
    commercial_markup: float
    total_room_cost: float
    cost_per_sqft: float

    class Config:
        frozen = True


class RoomTimeline(BaseModel):
    estimated_days: int
    daily_monitoring_hours: float
    base_days: int
    class_multiplier: float
    complexity_factors: Dict[str, int]

    class Config:
        frozen = True


class ElectricalRequirements(BaseModel):
    total_amperage: float
    circuits_20a_required: int
    circuits_15a_required: int
    daily_kwh: float
    voltage: str = "120V"
    generator_needed: int

    class Config:
        frozen = True


class FloorMaterial(BaseModel):
    material: ResolvedMaterial
    affected_sqft: float
    moisture_content: float
    volume_cuft: float
    length_ft: float
    width_ft: float

    class Config:
        frozen = True


class WallMaterial(BaseModel):
    material: ResolvedMaterial
    affected_sqft: float
    moisture_weighted: float
    removal_factor: float
    volume_cuft: float

    class Config:
        frozen = True


class CeilingMaterial(BaseModel):
    material: ResolvedMaterial
    affected_sqft: float
    moisture_content: float
    volume_cuft: float

    class Config:
        frozen = True


class RoomMaterials(BaseModel):
    floor: FloorMaterial
    wall: WallMaterial
    ceiling: CeilingMaterial
    total_volume: float
    disposal_volume: float

    class Config:
        frozen = True


class RoomResult(BaseModel):
    room_id: str = Field(min_length=1)
    room_name: str = Field(min_length=1)
    room_sf: float = Field(ge=50, le=5000)
    equipment: EquipmentRequirements
    costs: RoomCosts
    timeline: RoomTimeline
    electrical: ElectricalRequirements
    materials: RoomMaterials

    class Config:
        frozen = True


# --- Project summary ---

class FleetRequirements(BaseModel):
    large_dehumidifiers: int = 0
    standard_dehumidifiers: int = 0
    air_movers: int = 0
    heaters: int = 0
    air_scrubbers: int = 0
    injection_systems: int = 0
    generators: int = 0
    total_equipment_units: int = 0

    class Config:
        frozen = True


class ElectricalSummary(BaseModel):
    total_circuits_20a: int = 0
    total_circuits_15a: int = 0
    daily_kwh: float = 0.0
    total_kwh_project: float = 0.0
    peak_amperage: float = 0.0
    voltage_standard: str = "120V"

    class Config:
        frozen = True


class OptimizationDetail(BaseModel):
    timeline: int
    room_count: int
    original_cost: float
    optimized_cost: float
    savings: float
    room_names: str

    class Config:
        frozen = True


class LaborOptimization(BaseModel):
    savings: float = 0.0
    supervision_savings: float = 0.0
    setup_breakdown_savings: float = 0.0
    details: List[OptimizationDetail] = []

    class Config:
        frozen = True


class ProjectSummary(BaseModel):
    room_count: int
    total_cost: float
    optimized_total_cost: float
    total_affected_sf: float
    total_equipment_units: int
    total_amperage: float
    longest_timeline: int
    average_cost_per_sf: float
    fleet_requirements: FleetRequirements
    electrical_summary: ElectricalSummary
    labor_optimization: LaborOptimization

    class Config:
        frozen = True


class CalculationResults(BaseModel):
    rooms: List[RoomResult] = []
    project: ProjectSummary


# --- Request / response envelopes ---

class ProcessRequest(BaseModel):
    rows: List[Dict[str, Any]]
    config: Optional[Dict[str, float]] = None


class BatchResponse(BaseModel):
    success: bool
    results: CalculationResults
    errors: List[RowError] = []
    skipped: int = 0


class ConfigValidationResponse(BaseModel):
    valid: bool
    errors: List[str] = []
