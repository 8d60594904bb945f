from typing import Dict

from fastapi import APIRouter

from ..rates import DEFAULT_RATES, rate_limits_table, validate_rate_values
from ..schemas import ConfigValidationResponse

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/defaults")
def get_defaults():
    """Default rates and the published min/max for each of the 16 knobs."""
    return {
        "config": DEFAULT_RATES,
        "limits": rate_limits_table(),
    }


@router.post("/validate", response_model=ConfigValidationResponse)
def validate_config(values: Dict[str, float]):
    """Check a full or partial rate configuration. Nothing is stored."""
    errors = validate_rate_values(values)
    return ConfigValidationResponse(valid=not errors, errors=errors)
