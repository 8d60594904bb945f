"""
Project Aggregator — combines per-room results into the project summary.

Straight sums / max / ratios over the RoomResults, plus the labor
optimization pass: rooms that dry on the same timeline are on site
concurrently, so one supervisor and one project-management fee cover the
whole group instead of one per room.

Sums use math.fsum so the summary is identical for any ordering of rooms.
"""

import math
from collections import defaultdict
from typing import List, Sequence

from .schemas import (
    ElectricalSummary,
    FleetRequirements,
    LaborOptimization,
    OptimizationDetail,
    ProjectSummary,
    RoomResult,
)


class ProjectAggregator:
    """Builds a ProjectSummary from an ordered sequence of RoomResults."""

    VOLTAGE_STANDARD = "120V"

    def aggregate(self, rooms: Sequence[RoomResult]) -> ProjectSummary:
        rooms = list(rooms)

        total_cost = math.fsum(r.costs.total_room_cost for r in rooms)
        total_affected_sf = math.fsum(r.room_sf for r in rooms)
        total_units = sum(r.equipment.total_units for r in rooms)

        optimization = self.optimize_labor(rooms)

        return ProjectSummary(
            room_count=len(rooms),
            total_cost=total_cost,
            optimized_total_cost=total_cost - optimization.savings,
            total_affected_sf=total_affected_sf,
            total_equipment_units=total_units,
            total_amperage=math.fsum(r.electrical.total_amperage for r in rooms),
            longest_timeline=max((r.timeline.estimated_days for r in rooms), default=0),
            average_cost_per_sf=total_cost / total_affected_sf if total_affected_sf > 0 else 0.0,
            fleet_requirements=self._fleet_requirements(rooms),
            electrical_summary=self._electrical_summary(rooms),
            labor_optimization=optimization,
        )

    def _fleet_requirements(self, rooms: List[RoomResult]) -> FleetRequirements:
        """Per-equipment-type totals across every room."""
        return FleetRequirements(
            large_dehumidifiers=sum(r.equipment.large_units for r in rooms),
            standard_dehumidifiers=sum(r.equipment.standard_units for r in rooms),
            air_movers=sum(r.equipment.air_movers for r in rooms),
            heaters=sum(r.equipment.heaters for r in rooms),
            air_scrubbers=sum(r.equipment.air_scrubbers for r in rooms),
            injection_systems=sum(r.equipment.injection_systems for r in rooms),
            generators=sum(r.equipment.generator_required for r in rooms),
            total_equipment_units=sum(r.equipment.total_units for r in rooms),
        )

    def _electrical_summary(self, rooms: List[RoomResult]) -> ElectricalSummary:
        return ElectricalSummary(
            total_circuits_20a=sum(r.electrical.circuits_20a_required for r in rooms),
            total_circuits_15a=sum(r.electrical.circuits_15a_required for r in rooms),
            daily_kwh=math.fsum(r.electrical.daily_kwh for r in rooms),
            total_kwh_project=math.fsum(
                r.electrical.daily_kwh * r.timeline.estimated_days for r in rooms
            ),
            peak_amperage=max((r.electrical.total_amperage for r in rooms), default=0.0),
            voltage_standard=self.VOLTAGE_STANDARD,
        )

    def optimize_labor(self, rooms: Sequence[RoomResult]) -> LaborOptimization:
        """
        Group rooms by estimated_days. In each group of two or more rooms:

            original  = Σ supervisor_cost + Σ project_management
            optimized = max supervisor_cost + max project_management
            supervision_savings     = Σ supervisor_cost − max supervisor_cost
            setup_breakdown_savings = Σ project_management − max project_management
            savings = supervision_savings + setup_breakdown_savings

        Single-room groups have nothing to share and produce no detail entry.
        """
        buckets = defaultdict(list)
        for room in rooms:
            buckets[room.timeline.estimated_days].append(room)

        details = []
        supervision_total = []
        setup_total = []

        for days in sorted(buckets):
            group = buckets[days]
            if len(group) < 2:
                continue

            supervisor_costs = [r.costs.labor.supervisor_cost for r in group]
            pm_fees = [r.costs.labor.project_management for r in group]

            supervision_savings = math.fsum(supervisor_costs) - max(supervisor_costs)
            setup_savings = math.fsum(pm_fees) - max(pm_fees)

            original_cost = math.fsum(supervisor_costs) + math.fsum(pm_fees)
            optimized_cost = max(supervisor_costs) + max(pm_fees)

            supervision_total.append(supervision_savings)
            setup_total.append(setup_savings)

            names = sorted((r.room_name, r.room_id) for r in group)
            details.append(OptimizationDetail(
                timeline=days,
                room_count=len(group),
                original_cost=original_cost,
                optimized_cost=optimized_cost,
                savings=supervision_savings + setup_savings,
                room_names=", ".join(name for name, _ in names),
            ))

        supervision = math.fsum(supervision_total)
        setup = math.fsum(setup_total)
        return LaborOptimization(
            savings=supervision + setup,
            supervision_savings=supervision,
            setup_breakdown_savings=setup,
            details=details,
        )
