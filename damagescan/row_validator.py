"""
Row Validator — checks one raw assessment record against domain limits.

Input: a dict keyed by the 41 assessment columns (values already split out
of the source file, but possibly still strings and not range-checked).
Output: a frozen ValidatedRoomInput, or the list of field-level RowErrors.

Partial success is the contract: a row with any error is skipped and its
errors are reported, the rest of the batch carries on.
"""

import logging
import math

from .schemas import RowError, ValidatedRoomInput

logger = logging.getLogger(__name__)


class RowValidator:
    """Validates assessment rows one at a time. Collects every error in a row."""

    REQUIRED_TEXT_FIELDS = ["claim_id", "room_id", "room_name"]

    OPTIONAL_TEXT_FIELDS = [
        "site_name", "address", "city", "state", "structure", "damage_date",
        "assessment_date", "damage_description", "loss_source",
        "ceiling_materials", "wall_materials", "floor_materials", "room_damage",
    ]

    # field: (min, max, message)
    INTEGER_RANGES = {
        "water_category": (1, 3, "water_category must be between 1-3 (Clean, Grey, Black)"),
        "water_class": (1, 4, "water_class must be between 1-4 (Minimal, Significant, Major, Specialty)"),
    }

    REQUIRED_RANGES = {
        "room_sf": (50, 5000, "room_sf must be between 50-5000 square feet"),
        "room_temp_f": (60, 100, "room_temp_f must be between 60-100°F"),
        "room_humidity": (20, 90, "room_humidity must be between 20-90%"),
    }

    MOISTURE_FIELDS = [
        "ceiling_damage_moisture",
        "wall_damage_moisture_bottom",
        "wall_damage_moisture_middle",
        "wall_damage_moisture_top",
        "floor_materials_moisture",
    ]
    MOISTURE_MIN = 0.05
    MOISTURE_MAX = 0.95

    NON_NEGATIVE_FIELDS = [
        "wall_damage_sf", "floor_damage_sf",
        "length_ft", "width_ft", "height_ft", "volume_ft",
    ]

    # Informational readings: numeric, no published range
    READING_FIELDS = [
        "outdoor_temp_f", "outdoor_humidity", "outdoor_gpp",
        "room_gpp", "dew_point_f", "wet_bulb_f",
    ]

    BOOLEAN_FIELDS = ["generator_needed", "ceiling_damage", "wall_damage"]
    TRUE_VALUES = ("yes",)
    FALSE_VALUES = ("no",)

    def validate_rows(self, rows: list, start_row: int = 1):
        """
        Validate a batch.

        Returns (valid_inputs, errors, skipped). Row numbers start at
        start_row and follow the order rows were given in.
        """
        valid = []
        errors = []
        skipped = 0
        for offset, raw in enumerate(rows):
            room, row_errors = self.validate_row(raw, start_row + offset)
            if row_errors:
                errors.extend(row_errors)
                skipped += 1
            else:
                valid.append(room)

        if skipped:
            logger.info("Skipped %d of %d rows with validation errors", skipped, len(rows))
        return valid, errors, skipped

    def validate_row(self, raw, row_number: int):
        """Returns (ValidatedRoomInput, []) or (None, [RowError, ...])."""
        if not isinstance(raw, dict):
            return None, [RowError(
                row=row_number,
                field="row",
                message="Row must map column names to values",
                value=raw,
            )]

        errors = []
        values = {}

        def fail(field, message, value=None):
            errors.append(RowError(row=row_number, field=field, message=message, value=value))

        # --- Identifiers and text ---
        for field in self.REQUIRED_TEXT_FIELDS:
            text = self._text(raw.get(field))
            if not text:
                fail(field, f"{field} is required and cannot be empty")
            values[field] = text

        for field in self.OPTIONAL_TEXT_FIELDS:
            values[field] = self._text(raw.get(field))

        # --- Water classification ---
        for field, (low, high, message) in self.INTEGER_RANGES.items():
            value = raw.get(field)
            if self._is_missing(value):
                fail(field, f"{field} is required")
                continue
            number = self._number(value)
            if number is None:
                fail(field, f"{field} must be a number", value)
            elif not number.is_integer():
                fail(field, f"{field} must be a whole number", value)
            elif number < low or number > high:
                fail(field, message, value)
            else:
                values[field] = int(number)

        # --- Room size and environment ---
        for field, (low, high, message) in self.REQUIRED_RANGES.items():
            value = raw.get(field)
            if self._is_missing(value):
                fail(field, f"{field} is required")
                continue
            number = self._number(value)
            if number is None:
                fail(field, f"{field} must be a number", value)
            elif number < low or number > high:
                fail(field, message, value)
            else:
                values[field] = number

        # --- Moisture fractions (0 = not measured) ---
        for field in self.MOISTURE_FIELDS:
            value = raw.get(field)
            if self._is_missing(value):
                values[field] = 0.0
                continue
            number = self._number(value)
            if number is None:
                fail(field, f"{field} must be a number", value)
            elif number != 0 and (number < self.MOISTURE_MIN or number > self.MOISTURE_MAX):
                fail(field, f"{field} must be between 0.05-0.95 (5%-95%)", value)
            else:
                values[field] = number

        # --- Areas and dimensions ---
        for field in self.NON_NEGATIVE_FIELDS:
            value = raw.get(field)
            if self._is_missing(value):
                values[field] = 0.0
                continue
            number = self._number(value)
            if number is None:
                fail(field, f"{field} must be a number", value)
            elif number < 0:
                fail(field, f"{field} cannot be negative", value)
            else:
                values[field] = number

        for field in self.READING_FIELDS:
            value = raw.get(field)
            if self._is_missing(value):
                values[field] = 0.0
                continue
            number = self._number(value)
            if number is None:
                fail(field, f"{field} must be a number", value)
            else:
                values[field] = number

        # --- Yes/No flags ---
        for field in self.BOOLEAN_FIELDS:
            value = raw.get(field)
            flag = self.parse_bool(value)
            if flag is None:
                fail(field, f"{field} must be Yes or No", value)
            else:
                values[field] = flag

        if errors:
            return None, errors

        values["ceiling_damage_sf"] = self.ceiling_damage_sf(values)
        return ValidatedRoomInput(**values), []

    # --- Coercion helpers ---

    def _is_missing(self, value) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    def _text(self, value) -> str:
        if value is None:
            return ""
        return str(value).strip()

    def _number(self, value):
        """Parse a finite float, or None. Booleans are not numbers here."""
        if isinstance(value, bool):
            return None
        try:
            number = float(str(value).strip()) if isinstance(value, str) else float(value)
        except (ValueError, TypeError):
            return None
        if not math.isfinite(number):
            return None
        return number

    def parse_bool(self, value):
        """Yes/No, case-insensitive. Missing means No. Anything else is None."""
        if isinstance(value, bool):
            return value
        if self._is_missing(value):
            return False
        text = str(value).strip().lower()
        if text in self.TRUE_VALUES:
            return True
        if text in self.FALSE_VALUES:
            return False
        return None

    def ceiling_damage_sf(self, values: dict) -> float:
        """Ceiling area follows the room footprint when the ceiling is damaged."""
        if not values.get("ceiling_damage"):
            return 0.0
        length = values.get("length_ft", 0.0)
        width = values.get("width_ft", 0.0)
        if length > 0 and width > 0:
            return length * width
        return values["room_sf"]
