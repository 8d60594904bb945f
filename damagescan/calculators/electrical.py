"""
Electrical load planning for drying equipment on 120V circuits.

Every powered unit has a nameplate draw. Circuits are loaded to 80% of
their breaker rating (continuous-load derate), so a 20A circuit carries
16A and a 15A circuit carries 12A. The 20A and 15A counts are two
alternative plans for the same equipment, not a combined requirement.
"""

import math

from ..models import EquipmentKind, POWERED_EQUIPMENT

VOLTAGE = 120
CIRCUIT_DERATE = 0.80

# Nameplate amps per unit
EQUIPMENT_AMPERAGE = {
    EquipmentKind.LARGE_DEHUMIDIFIER: 8.0,
    EquipmentKind.STANDARD_DEHUMIDIFIER: 6.0,
    EquipmentKind.AIR_MOVER: 3.0,
    EquipmentKind.HEATER: 12.5,          # 1500W space heater
    EquipmentKind.AIR_SCRUBBER: 3.5,
    EquipmentKind.INJECTION_SYSTEM: 4.0,
}

# Hours per day each unit actually runs. Heaters cycle on thermostat.
EQUIPMENT_RUNTIME_HOURS = {
    EquipmentKind.LARGE_DEHUMIDIFIER: 24.0,
    EquipmentKind.STANDARD_DEHUMIDIFIER: 24.0,
    EquipmentKind.AIR_MOVER: 24.0,
    EquipmentKind.HEATER: 12.0,
    EquipmentKind.AIR_SCRUBBER: 24.0,
    EquipmentKind.INJECTION_SYSTEM: 24.0,
}


def usable_capacity(breaker_amps: float) -> float:
    return breaker_amps * CIRCUIT_DERATE


def unit_loads(counts: dict) -> list:
    """Flatten {kind: count} into one amperage entry per powered unit."""
    loads = []
    for kind in POWERED_EQUIPMENT:
        loads.extend([EQUIPMENT_AMPERAGE[kind]] * int(counts.get(kind, 0)))
    return loads


def pack_circuits(loads: list, breaker_amps: float) -> int:
    """
    First-fit-decreasing bin packing of unit loads onto circuits.

    A unit can't be split across circuits. A unit whose draw exceeds the
    derated capacity still needs a circuit of its own, so it gets a
    dedicated one.
    """
    capacity = usable_capacity(breaker_amps)
    circuits = []  # remaining headroom per circuit
    for load in sorted(loads, reverse=True):
        if load > capacity:
            circuits.append(0.0)
            continue
        for i, headroom in enumerate(circuits):
            if load <= headroom + 1e-9:
                circuits[i] = headroom - load
                break
        else:
            circuits.append(capacity - load)
    return len(circuits)


def total_amperage(counts: dict) -> float:
    return math.fsum(
        EQUIPMENT_AMPERAGE[kind] * int(counts.get(kind, 0))
        for kind in POWERED_EQUIPMENT
    )


def daily_kwh(counts: dict) -> float:
    """Sum of amps × 120V × runtime hours / 1000 over every powered unit."""
    return math.fsum(
        EQUIPMENT_AMPERAGE[kind] * VOLTAGE * EQUIPMENT_RUNTIME_HOURS[kind]
        * int(counts.get(kind, 0)) / 1000.0
        for kind in POWERED_EQUIPMENT
    )


def plan_circuits(counts: dict) -> dict:
    loads = unit_loads(counts)
    return {
        "total_amperage": total_amperage(counts),
        "circuits_20a_required": pack_circuits(loads, 20),
        "circuits_15a_required": pack_circuits(loads, 15),
        "daily_kwh": daily_kwh(counts),
    }
