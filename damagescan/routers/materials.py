from fastapi import APIRouter, HTTPException, Query

from ..calculators.material_lookup import FALLBACK_SPEC, MaterialLookup, normalize_material_name
from ..schemas import MaterialSpecification, ResolvedMaterial

router = APIRouter(prefix="/materials", tags=["materials"])

_lookup = MaterialLookup()


@router.get("/")
def list_materials():
    """All 39 canonical materials with family and treatment spec."""
    return {
        "materials": _lookup.catalog(),
        "fallback": FALLBACK_SPEC.model_dump(),
    }


@router.get("/resolve", response_model=ResolvedMaterial)
def resolve_material(name: str = Query("", description="Material name as surveyed")):
    """Resolve a surveyed material name — unmatched names get the fallback spec."""
    return _lookup.resolve(name)


@router.get("/{name}", response_model=MaterialSpecification)
def get_material(name: str):
    """Treatment spec for an exact canonical name. No fuzzy matching here."""
    if name not in _lookup:
        raise HTTPException(
            status_code=404,
            detail=f"'{normalize_material_name(name)}' is not a canonical material — try /materials/resolve",
        )
    return _lookup.get_spec(name)
