"""
Abstract base class for the estimating calculators.

Input: ValidatedRoomInput + RateConfiguration snapshot + MaterialLookup
Output: an immutable result model from schemas.py
"""

import math
from abc import ABC, abstractmethod


class BaseCalculator(ABC):
    """Shared unit math for the room calculators."""

    @abstractmethod
    def calculate(self, room, rates, library):
        """Return a frozen result for one validated room."""
        pass

    # --- Helper methods ---

    def units_for_area(self, area_sf: float, coverage_sf: float) -> int:
        """
        Number of units needed to cover an area.
        Always rounds UP — a partial unit is a whole unit on site.
        """
        if area_sf <= 0:
            return 0
        return math.ceil(area_sf / coverage_sf)

    def sq_ft_from_dimensions(self, length_ft: float, width_ft: float) -> float:
        """Floor area in sq ft from dimensions in feet."""
        return length_ft * width_ft

    def volume_cuft(self, area_sf: float, thickness_in: float) -> float:
        """Material volume in cubic feet from area and thickness in inches."""
        return area_sf * thickness_in / 12.0

    def weighted_average(self, values: list, weights: list) -> float:
        return math.fsum(v * w for v, w in zip(values, weights))
