"""
Material resolver — maps a surveyed material name to a treatment spec.

Resolution chain:
1. Exact canonical name (39 names across 11 families)
2. Canonical name contained in the input as whole words. The leftmost
   match wins, the longest one at that position breaks ties, so a leading
   modifier decides the family ("engineered hardwood floors" -> engineered,
   "oak hardwood strip" -> hardwood, "engineered wood planks" -> engineered wood)
3. FALLBACK_SPEC — an unmatched name never fails the row

Each family carries a baseline thickness / cost / target MC. Named entries
override the baseline where the material differs from its family.
Thickness is inches, cost is treatment $/sqft, target MC is percent.
"""

import logging
import re

from ..models import MaterialFamily
from ..schemas import MaterialSpecification, RateConfiguration, ResolvedMaterial

logger = logging.getLogger(__name__)


class UnresolvedMaterialError(LookupError):
    """A canonical name has no spec — the library tables are inconsistent."""


# Family baselines: (thickness_in, cost_per_sqft, target_mc)
FAMILY_BASELINES = {
    MaterialFamily.DRYWALL: (0.5, 2.25, 12.0),
    MaterialFamily.HARDWOOD: (0.75, 4.50, 8.0),
    MaterialFamily.PANELING: (0.25, 2.00, 10.0),
    MaterialFamily.VINYL: (0.125, 1.50, 2.0),
    MaterialFamily.CARPET: (0.375, 1.25, 5.0),
    MaterialFamily.ENGINEERED: (0.5, 3.25, 9.0),
    MaterialFamily.STONE_TILE: (0.375, 3.50, 1.0),
    MaterialFamily.CONCRETE: (4.0, 1.75, 4.0),
    MaterialFamily.INSULATION: (3.5, 1.10, 5.0),
    MaterialFamily.ENGINEERED_WOOD_PRODUCTS: (0.75, 2.50, 12.0),
    MaterialFamily.OTHER: (0.5, 2.25, 12.0),
}

# Canonical name -> family
MATERIAL_FAMILIES = {
    # Drywall
    "drywall": MaterialFamily.DRYWALL,
    "gypsum": MaterialFamily.DRYWALL,
    "gypsum board": MaterialFamily.DRYWALL,
    "gypsum wallboard": MaterialFamily.DRYWALL,
    "wallboard": MaterialFamily.DRYWALL,
    # Hardwood
    "hardwood": MaterialFamily.HARDWOOD,
    "hardwood floors": MaterialFamily.HARDWOOD,
    "wood": MaterialFamily.HARDWOOD,
    # Paneling
    "paneling": MaterialFamily.PANELING,
    "wood paneling": MaterialFamily.PANELING,
    # Vinyl
    "vinyl": MaterialFamily.VINYL,
    "vinyl sheet": MaterialFamily.VINYL,
    "vct": MaterialFamily.VINYL,
    # Carpet
    "carpet": MaterialFamily.CARPET,
    "carpet cushion": MaterialFamily.CARPET,
    "carpet pad": MaterialFamily.CARPET,
    # Engineered flooring
    "engineered": MaterialFamily.ENGINEERED,
    "engineered wood": MaterialFamily.ENGINEERED,
    "engineered floors": MaterialFamily.ENGINEERED,
    "laminate": MaterialFamily.ENGINEERED,
    "bamboo": MaterialFamily.ENGINEERED,
    "cork": MaterialFamily.ENGINEERED,
    "parquet": MaterialFamily.ENGINEERED,
    # Stone / tile
    "tile": MaterialFamily.STONE_TILE,
    "stone": MaterialFamily.STONE_TILE,
    "granite": MaterialFamily.STONE_TILE,
    "slate": MaterialFamily.STONE_TILE,
    "engineered marble": MaterialFamily.STONE_TILE,
    # Concrete
    "concrete": MaterialFamily.CONCRETE,
    # Insulation
    "insulation": MaterialFamily.INSULATION,
    "fiberglass": MaterialFamily.INSULATION,
    "mineral wool": MaterialFamily.INSULATION,
    "cellulose": MaterialFamily.INSULATION,
    # Engineered wood products
    "plywood": MaterialFamily.ENGINEERED_WOOD_PRODUCTS,
    "osb": MaterialFamily.ENGINEERED_WOOD_PRODUCTS,
    "particleboard": MaterialFamily.ENGINEERED_WOOD_PRODUCTS,
    "mdf": MaterialFamily.ENGINEERED_WOOD_PRODUCTS,
    # Other
    "brick": MaterialFamily.OTHER,
    "wallpaper": MaterialFamily.OTHER,
}

# Named exceptions to the family baseline
MATERIAL_OVERRIDES = {
    "wood paneling": {"thickness": 0.375},
    "vinyl sheet": {"thickness": 0.08, "cost": 1.25},
    "vct": {"cost": 1.75},
    "carpet cushion": {"thickness": 0.4375, "cost": 0.85},
    "carpet pad": {"thickness": 0.4375, "cost": 0.85},
    "laminate": {"thickness": 0.3125, "cost": 2.25},
    "bamboo": {"thickness": 0.5625, "cost": 3.75},
    "cork": {"thickness": 0.25, "cost": 3.00},
    "parquet": {"thickness": 0.3125, "cost": 4.25, "target_mc": 8.0},
    "stone": {"thickness": 0.75, "cost": 4.00},
    "granite": {"thickness": 1.25, "cost": 5.50},
    "slate": {"thickness": 0.5, "cost": 4.25},
    "engineered marble": {"thickness": 0.75, "cost": 4.75},
    "mineral wool": {"cost": 1.40},
    "cellulose": {"cost": 1.25},
    "osb": {"thickness": 0.4375, "cost": 2.25},
    "particleboard": {"thickness": 0.625, "cost": 2.00},
    "brick": {"thickness": 3.625, "cost": 3.25, "target_mc": 5.0},
    "wallpaper": {"thickness": 0.01, "cost": 1.00},
}

# Used for any name that matches nothing. Same as a standard 1/2" drywall treatment
FALLBACK_SPEC = MaterialSpecification(thickness=0.5, cost=2.25, target_mc=12.0)


def _build_library() -> dict:
    library = {}
    for name, family in MATERIAL_FAMILIES.items():
        thickness, cost, target_mc = FAMILY_BASELINES[family]
        spec = {"thickness": thickness, "cost": cost, "target_mc": target_mc}
        spec.update(MATERIAL_OVERRIDES.get(name, {}))
        library[name] = MaterialSpecification(**spec)
    return library


MATERIAL_LIBRARY = _build_library()


def normalize_material_name(name) -> str:
    """Lowercase, treat _ and - as spaces, collapse whitespace."""
    if name is None:
        return ""
    text = str(name).lower().replace("_", " ").replace("-", " ")
    return " ".join(text.split())


def _singular(name: str) -> str:
    """'oak floors' -> 'oak floor'. Only strips a plain trailing s."""
    return " ".join(
        w[:-1] if len(w) > 3 and w.endswith("s") and not w.endswith("ss") else w
        for w in name.split()
    )


class MaterialLookup:
    """
    Immutable material library snapshot.

    library: canonical name -> MaterialSpecification
    families: canonical name -> MaterialFamily
    """

    def __init__(self, library: dict = None, families: dict = None):
        self._library = dict(library if library is not None else MATERIAL_LIBRARY)
        self._families = dict(families if families is not None else MATERIAL_FAMILIES)
        self._patterns = [
            (alias, re.compile(r"\b" + re.escape(alias) + r"\b"))
            for alias in sorted(self._families)
        ]

    def __len__(self):
        return len(self._library)

    def __contains__(self, name):
        return normalize_material_name(name) in self._library

    def match(self, name) -> str:
        """Return the canonical name for an input, or None if nothing matches."""
        normalized = normalize_material_name(name)
        if not normalized:
            return None
        if normalized in self._families:
            return normalized
        for candidate in (normalized, _singular(normalized)):
            if candidate in self._families:
                return candidate
            alias = self._leftmost_alias(candidate)
            if alias:
                return alias
        return None

    def _leftmost_alias(self, text: str) -> str:
        """Earliest whole-word alias in text; longest wins at the same position."""
        best = None
        for alias, pattern in self._patterns:
            found = pattern.search(text)
            if found is None:
                continue
            rank = (found.start(), -len(alias), alias)
            if best is None or rank < best:
                best = rank
        return best[2] if best else None

    def family_of(self, name) -> MaterialFamily:
        canonical = self.match(name)
        return self._families[canonical] if canonical else None

    def resolve(self, name, rates: RateConfiguration = None) -> ResolvedMaterial:
        """
        Resolve a raw material name. Never raises for user input — unmatched
        or empty names get FALLBACK_SPEC with matched=False.

        When rates are given, their target-MC knobs replace the family target
        for hardwood, paneling, vinyl, drywall and carpet.
        """
        raw = "" if name is None else str(name).strip()
        canonical = self.match(raw)

        if canonical is None:
            if raw:
                logger.warning("No material match for %r — using fallback spec", raw)
            return ResolvedMaterial(
                material_type=raw,
                canonical_name=None,
                family=None,
                spec=FALLBACK_SPEC,
                matched=False,
            )

        spec = self._library.get(canonical)
        if spec is None:
            raise UnresolvedMaterialError(
                f"Material '{canonical}' has a family but no specification"
            )
        family = self._families[canonical]

        if rates is not None:
            target = rates.moisture_targets().get(family)
            if target is not None and target != spec.target_mc:
                spec = spec.model_copy(update={"target_mc": target})

        return ResolvedMaterial(
            material_type=raw,
            canonical_name=canonical,
            family=family,
            spec=spec,
            matched=True,
        )

    def get_spec(self, name) -> MaterialSpecification:
        """Spec for an exact canonical name, or None."""
        return self._library.get(normalize_material_name(name))

    def catalog(self) -> list:
        """All canonical materials, grouped in family order."""
        family_order = list(MaterialFamily)
        names = sorted(
            self._library,
            key=lambda n: (family_order.index(self._families[n]), n),
        )
        return [
            {
                "name": n,
                "family": self._families[n].value,
                "thickness": self._library[n].thickness,
                "cost": self._library[n].cost,
                "target_mc": self._library[n].target_mc,
            }
            for n in names
        ]
