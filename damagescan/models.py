import enum


# --- Enums shared by the calculators, schemas and routers ---

class WaterCategory(int, enum.Enum):
    CLEAN = 1
    GREY = 2
    BLACK = 3


class WaterClass(int, enum.Enum):
    MINIMAL = 1
    SIGNIFICANT = 2
    MAJOR = 3
    SPECIALTY = 4


class EquipmentKind(str, enum.Enum):
    LARGE_DEHUMIDIFIER = "large_dehumidifier"
    STANDARD_DEHUMIDIFIER = "standard_dehumidifier"
    AIR_MOVER = "air_mover"
    HEATER = "heater"
    AIR_SCRUBBER = "air_scrubber"
    INJECTION_SYSTEM = "injection_system"
    GENERATOR = "generator"


# Equipment that draws power on site. The generator supplies it.
POWERED_EQUIPMENT = [
    EquipmentKind.LARGE_DEHUMIDIFIER,
    EquipmentKind.STANDARD_DEHUMIDIFIER,
    EquipmentKind.AIR_MOVER,
    EquipmentKind.HEATER,
    EquipmentKind.AIR_SCRUBBER,
    EquipmentKind.INJECTION_SYSTEM,
]


class MaterialFamily(str, enum.Enum):
    DRYWALL = "drywall"
    HARDWOOD = "hardwood"
    PANELING = "paneling"
    VINYL = "vinyl"
    CARPET = "carpet"
    ENGINEERED = "engineered"
    STONE_TILE = "stone_tile"
    CONCRETE = "concrete"
    INSULATION = "insulation"
    ENGINEERED_WOOD_PRODUCTS = "engineered_wood_products"
    OTHER = "other"


class DehumidifierType(str, enum.Enum):
    STANDARD = "Standard"
    LGR = "LGR"
    DESICCANT = "Desiccant"


# --- Assessment columns (41) ---
# Rows arriving from the intake layer are keyed by these names.

ASSESSMENT_COLUMNS = [
    # Site information
    "claim_id", "site_name", "address", "city", "state", "structure", "damage_date",
    # Assessment details
    "assessment_date", "damage_description", "generator_needed",
    "outdoor_temp_f", "outdoor_humidity", "outdoor_gpp", "loss_source",
    # Water classification
    "water_category", "water_class",
    # Room identification
    "room_id", "room_name",
    # Room environmental
    "room_temp_f", "room_humidity", "room_gpp", "dew_point_f", "wet_bulb_f",
    # Ceiling damage
    "ceiling_damage", "ceiling_materials", "ceiling_damage_moisture",
    # Wall damage
    "wall_damage", "wall_materials", "wall_damage_moisture_bottom",
    "wall_damage_moisture_middle", "wall_damage_moisture_top", "wall_damage_sf",
    # Floor damage
    "floor_materials", "floor_materials_moisture", "floor_damage_sf",
    # Room dimensions
    "room_sf", "length_ft", "width_ft", "height_ft", "volume_ft",
    # Overall
    "room_damage",
]
