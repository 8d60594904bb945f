"""
Estimate pipeline — one request from raw rows to a project estimate.

validate rows -> calculate each valid room -> aggregate project

Input: raw assessment rows (dicts) + an optional RateConfiguration
Output: BatchResponse with every valid room, the project summary, the full
error list and the skipped count. Zero valid rows is a normal response
with success=False, never an exception.
"""

import logging

from .calculators.material_lookup import MaterialLookup
from .calculators.room_calculator import RoomCalculator
from .config import settings
from .project_aggregator import ProjectAggregator
from .rates import ensure_rates_in_range
from .row_validator import RowValidator
from .schemas import BatchResponse, CalculationResults, RateConfiguration

logger = logging.getLogger(__name__)


class BatchTooLargeError(ValueError):
    """More rows than a single request may carry."""


class EstimatePipeline:
    """Composes validator, calculator and aggregator for one request."""

    def __init__(self, library: MaterialLookup = None, max_rooms: int = None):
        self.library = library if library is not None else MaterialLookup()
        self.max_rooms = max_rooms if max_rooms is not None else settings.MAX_ROOMS_PER_BATCH
        self.validator = RowValidator()
        self.calculator = RoomCalculator()
        self.aggregator = ProjectAggregator()

    def process(self, rows: list, rates: RateConfiguration = None,
                start_row: int = 1) -> BatchResponse:
        """
        Run the full estimate.

        Raises BatchTooLargeError past max_rooms and
        ConfigurationOutOfRangeError for a bad rate snapshot — both before
        any row is touched.
        """
        if len(rows) > self.max_rooms:
            raise BatchTooLargeError(
                f"Batch has {len(rows)} rows — maximum is {self.max_rooms} rooms per request"
            )

        rates = rates or RateConfiguration()
        ensure_rates_in_range(rates)

        valid, errors, skipped = self.validator.validate_rows(rows, start_row=start_row)

        rooms = [self.calculator.calculate(room, rates, self.library) for room in valid]
        project = self.aggregator.aggregate(rooms)

        if not rooms:
            logger.info("No valid rows in batch of %d (%d errors)", len(rows), len(errors))
        else:
            logger.info(
                "Estimated %d rooms, total $%.2f (optimized $%.2f)",
                project.room_count, project.total_cost, project.optimized_total_cost,
            )

        return BatchResponse(
            success=bool(rooms),
            results=CalculationResults(rooms=rooms, project=project),
            errors=errors,
            skipped=skipped,
        )
