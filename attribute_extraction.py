"""Furniture attribute extraction from free-text product copy.

These helpers run ordered regex and keyword searches on the French (and
occasionally English) product title and description to derive a structured
specification record. Every extractor is total: on no match it returns ``None``
or an empty list and the aggregator leaves the key out.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, List, Optional, Tuple

from keyword_matcher import contains_any, first_label, matching_labels
from pattern_tables import (
    BED_HINTS,
    CARE_RULES,
    CHAIR_HINTS,
    CM_PER_UNIT,
    COLOR_RULES,
    KG_M3_PER_UNIT,
    KG_PER_UNIT,
    MATERIAL_RULES,
    MATTRESS_DEFAULT_DENSITY,
    MATTRESS_FALLBACK_DENSITY,
    MATTRESS_HINTS,
    SOFA_HINTS,
    STYLE_RULES,
)

logger = logging.getLogger(__name__)

_NUMBER = r"(\d+(?:[.,]\d+)?)"
_METRIC_UNIT = r"(mm|cm|m)\b"
_ANY_UNIT = r"(mm|cm|m|in|ft)\b"

# Labelled axes, French first then English. Applied in this order.
AXIS_PATTERNS: Tuple[Tuple[str, re.Pattern[str]], ...] = (
    ("longueur", re.compile(rf"\b(?:longueur|long|l)\s*:?\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE)),
    ("largeur", re.compile(rf"\b(?:largeur|larg|large)\s*:?\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE)),
    ("hauteur", re.compile(rf"\b(?:hauteur|haut|h)\s*:?\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE)),
    ("profondeur", re.compile(rf"\b(?:profondeur|prof|p)\s*:?\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE)),
    ("diametre", re.compile(rf"(?:\b(?:diamètre|diametre|diam)|ø)\s*:?\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE)),
    ("longueur", re.compile(rf"\b(?:length|len)\s*:?\s*{_NUMBER}\s*{_ANY_UNIT}", re.IGNORECASE)),
    ("largeur", re.compile(rf"\b(?:width|w)\s*:?\s*{_NUMBER}\s*{_ANY_UNIT}", re.IGNORECASE)),
    ("hauteur", re.compile(rf"\b(?:height|h)\s*:?\s*{_NUMBER}\s*{_ANY_UNIT}", re.IGNORECASE)),
    ("profondeur", re.compile(rf"\b(?:depth|d)\s*:?\s*{_NUMBER}\s*{_ANY_UNIT}", re.IGNORECASE)),
    ("diametre", re.compile(rf"\b(?:diameter|diam)\s*:?\s*{_NUMBER}\s*{_ANY_UNIT}", re.IGNORECASE)),
)
TRIPLE_DIMENSION_PATTERN = re.compile(
    rf"{_NUMBER}\s*[x×]\s*{_NUMBER}\s*[x×]\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE
)
PAIR_DIMENSION_PATTERN = re.compile(rf"{_NUMBER}\s*[x×]\s*{_NUMBER}\s*{_METRIC_UNIT}", re.IGNORECASE)

WEIGHT_PATTERN = re.compile(
    rf"(?:poids|weight|pèse)\s*:?\s*{_NUMBER}\s*(kg|g|lbs?)\b", re.IGNORECASE
)
DENSITY_PATTERN = re.compile(
    rf"(?:densité|density)\s*:?\s*{_NUMBER}\s*(kg/m3|kg/m³|g/cm3|g/cm³)", re.IGNORECASE
)
SEATS_PATTERN = re.compile(r"(\d+)\s*(?:places?|seats?|personnes?)\b", re.IGNORECASE)
DRAWERS_PATTERN = re.compile(r"(\d+)\s*(?:tiroirs?|drawers?)\b", re.IGNORECASE)
SHELVES_PATTERN = re.compile(r"(\d+)\s*(?:étagères?|shelves|shelf|tablettes?)\b", re.IGNORECASE)
COUCHAGE_PATTERN = re.compile(r"(?:couchage|sleeping)\s*:?\s*(\d+\s*[x×]\s*\d+)", re.IGNORECASE)
ORIGIN_PATTERN = re.compile(
    r"(?:fabriqué\s+en|made\s+in|origine)\s*:?\s*([^\W\d_]+(?:[ \t]+[^\W\d_]+)*)", re.IGNORECASE
)
WARRANTY_PATTERN = re.compile(
    r"(?:garantie|warranty)\s*:?\s*(\d+)\s*(ans?|years?|mois|months?)\b", re.IGNORECASE
)


def _to_float(raw: str) -> float:
    return float(raw.replace(",", "."))


def _normalize(value: float, ratio: float, digits: int = 2) -> float:
    return round(value * ratio, digits)


def _haystack(*parts: Optional[str]) -> str:
    return " ".join(part for part in parts if part).lower()


def _pair_matches(text: str, taken: List[Tuple[int, int]]) -> Iterator[re.Match[str]]:
    for match in PAIR_DIMENSION_PATTERN.finditer(text):
        start, end = match.span()
        if any(start < t_end and end > t_start for t_start, t_end in taken):
            continue
        yield match


def extract_dimensions(text: str) -> Optional[Dict[str, Any]]:
    """Return axis values in centimetres.

    Labelled axes are applied first; ``LxWxH`` then ``LxW`` forms run afterwards
    and overwrite the axes they cover. Each value is converted with the unit
    written next to it.
    """

    dimensions: Dict[str, Any] = {}
    for axis, pattern in AXIS_PATTERNS:
        for match in pattern.finditer(text):
            dimensions[axis] = _normalize(_to_float(match.group(1)), CM_PER_UNIT[match.group(2).lower()])

    triple_spans: List[Tuple[int, int]] = []
    for match in TRIPLE_DIMENSION_PATTERN.finditer(text):
        ratio = CM_PER_UNIT[match.group(4).lower()]
        dimensions["longueur"] = _normalize(_to_float(match.group(1)), ratio)
        dimensions["largeur"] = _normalize(_to_float(match.group(2)), ratio)
        dimensions["hauteur"] = _normalize(_to_float(match.group(3)), ratio)
        triple_spans.append(match.span())

    for match in _pair_matches(text, triple_spans):
        ratio = CM_PER_UNIT[match.group(3).lower()]
        dimensions["longueur"] = _normalize(_to_float(match.group(1)), ratio)
        dimensions["largeur"] = _normalize(_to_float(match.group(2)), ratio)

    if not dimensions:
        return None
    dimensions["unit"] = "cm"
    return dimensions


def extract_materials(text: str) -> List[str]:
    return matching_labels(MATERIAL_RULES, text)


def extract_colors(text: str) -> List[str]:
    return matching_labels(COLOR_RULES, text)


def extract_weight(text: str) -> Optional[Dict[str, Any]]:
    match = WEIGHT_PATTERN.search(text)
    if not match:
        return None
    ratio = KG_PER_UNIT[match.group(2).lower()]
    return {"value": _normalize(_to_float(match.group(1)), ratio, digits=3), "unit": "kg"}


def extract_density(text: str) -> Optional[Dict[str, Any]]:
    match = DENSITY_PATTERN.search(text)
    if not match:
        return None
    ratio = KG_M3_PER_UNIT[match.group(2).lower()]
    return {"value": _normalize(_to_float(match.group(1)), ratio, digits=1), "unit": "kg/m³"}


def extract_style(text: str) -> Optional[str]:
    return first_label(STYLE_RULES, text)


def extract_capacity(text: str) -> Optional[Dict[str, int]]:
    capacity: Dict[str, int] = {}
    for key, pattern in (
        ("seats", SEATS_PATTERN),
        ("drawers", DRAWERS_PATTERN),
        ("shelves", SHELVES_PATTERN),
    ):
        match = pattern.search(text)
        if match:
            capacity[key] = int(match.group(1))
    return capacity or None


def _sofa_specs(text: str) -> Dict[str, Any]:
    specs: Dict[str, Any] = {}
    if contains_any(text, r"canapé[\s-]+lit", r"sofa\s+bed", "convertible"):
        specs["canapeType"] = "convertible"
        if contains_any(text, "fermé", "ferme", "closed"):
            specs["canapeState"] = "ferme"
        elif contains_any(text, "ouvert", "open", "déplié"):
            specs["canapeState"] = "ouvert"
        couchage = COUCHAGE_PATTERN.search(text)
        if couchage:
            specs["couchageSize"] = re.sub(r"\s+", "", couchage.group(1)).replace("×", "x")
    elif contains_any(text, "angle", "corner"):
        specs["canapeType"] = "angle"
    elif contains_any(text, "couchage"):
        specs["canapeType"] = "couchage"
    else:
        specs["canapeType"] = "fixe"
    return specs


def _bed_specs(text: str) -> Dict[str, Any]:
    specs: Dict[str, Any] = {}
    for bed_type, triggers in (
        ("simple", ("simple", "single")),
        ("double", ("double",)),
        ("queen", ("queen",)),
        ("king", ("king",)),
    ):
        if contains_any(text, *triggers):
            specs["litType"] = bed_type
            break
    specs["teteDeLit"] = contains_any(text, r"tête\s+de\s+lit", "headboard")
    specs["cadreDeLit"] = contains_any(text, r"cadre\s+de\s+lit", r"bed\s+frame")
    return specs


def _mattress_specs(text: str) -> Dict[str, Any]:
    specs: Dict[str, Any] = {}
    if contains_any(text, "ressorts?", "springs?"):
        specs["matelasType"] = "ressort"
        specs["ressort"] = True
    elif contains_any(text, "mousse", "foam"):
        specs["matelasType"] = "mousse"
        specs["ressort"] = False
        if contains_any(text, r"mémoire\s+de\s+forme", r"memory\s+foam"):
            specs["mousseType"] = "mémoire de forme"
        elif contains_any(text, "polyuréthane", "polyurethane"):
            specs["mousseType"] = "polyuréthane"
    elif contains_any(text, "latex"):
        specs["matelasType"] = "latex"
        specs["ressort"] = False
    elif contains_any(text, "hybride", "hybrid"):
        specs["matelasType"] = "hybride"
        specs["ressort"] = True

    if contains_any(text, r"très\s+ferme", r"extra\s+firm"):
        specs["fermete"] = "tres-ferme"
    elif contains_any(text, "ferme", "firm"):
        specs["fermete"] = "ferme"
    elif contains_any(text, "medium", "moyen"):
        specs["fermete"] = "medium"
    elif contains_any(text, "souple", "soft"):
        specs["fermete"] = "souple"

    if specs.get("matelasType") == "mousse" and extract_density(text) is None:
        density = MATTRESS_DEFAULT_DENSITY.get(specs.get("fermete", ""), MATTRESS_FALLBACK_DENSITY)
        specs["defaultDensity"] = {"value": density, "unit": "kg/m³"}
    return specs


def _chair_specs(text: str) -> Dict[str, Any]:
    specs: Dict[str, Any] = {}
    if contains_any(text, "fauteuils?", "armchairs?"):
        specs["chaiseType"] = "fauteuil"
        specs["accoudoirs"] = True
    elif contains_any(text, "tabourets?", "stools?"):
        specs["chaiseType"] = "tabouret"
        specs["accoudoirs"] = False
    elif contains_any(text, "bureau", "office"):
        specs["chaiseType"] = "bureau"
    else:
        specs["chaiseType"] = "chaise"

    if "accoudoirs" not in specs:
        specs["accoudoirs"] = contains_any(text, "accoudoirs?", "armrests?")
    specs["pivotant"] = contains_any(text, "pivotante?", "swivel", "rotatif")
    specs["reglableHauteur"] = contains_any(text, "réglable", "adjustable", r"hauteur\s+variable")
    return specs


def extract_category_specs(text: str, product_type: str = "") -> Optional[Dict[str, Any]]:
    """Family-specific fields selected by the category hint.

    A hint that names several families (``"canapé lit"``) merges their fields;
    nothing is cross-checked.
    """

    hint = (product_type or "").lower()
    specs: Dict[str, Any] = {}
    if any(family in hint for family in SOFA_HINTS):
        specs.update(_sofa_specs(text))
    if any(family in hint for family in BED_HINTS):
        specs.update(_bed_specs(text))
    if any(family in hint for family in MATTRESS_HINTS):
        specs.update(_mattress_specs(text))
    if any(family in hint for family in CHAIR_HINTS):
        specs.update(_chair_specs(text))
    return specs or None


def extract_care_instructions(text: str) -> List[str]:
    return matching_labels(CARE_RULES, text)


def extract_origin(text: str) -> Optional[str]:
    match = ORIGIN_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_warranty(text: str) -> Optional[str]:
    match = WARRANTY_PATTERN.search(text)
    if not match:
        return None
    unit = match.group(2).lower()
    unit_fr = "ans" if unit.startswith(("an", "year")) else "mois"
    return f"{match.group(1)} {unit_fr}"


def extract_specifications(
    description: str, title: str = "", product_type: str = ""
) -> Dict[str, Any]:
    """Run every extractor on ``title + description`` and merge the results.

    Keys whose extractor found nothing are omitted, so the output of two calls
    on the same text is identical.
    """

    text = _haystack(title, description)
    candidates: Dict[str, Any] = {
        "dimensions": extract_dimensions(text),
        "materials": extract_materials(text),
        "colors": extract_colors(text),
        "weight": extract_weight(text),
        "density": extract_density(text),
        "style": extract_style(text),
        "capacity": extract_capacity(text),
        "categorySpecs": extract_category_specs(text, product_type),
        "care": extract_care_instructions(text),
        "origin": extract_origin(text),
        "warranty": extract_warranty(text),
    }
    specs = {key: value for key, value in candidates.items() if value}
    logger.debug("Extracted %d specification groups from %d chars", len(specs), len(text))
    return specs


def build_specifications(title: str, description: str, product_type: str = "") -> Dict[str, Any]:
    return extract_specifications(description, title=title, product_type=product_type)


def _snake(name: str) -> str:
    return re.sub(r"(?<!^)([A-Z])", r"_\1", name).lower()


def flatten_specifications(specs: Dict[str, Any]) -> Dict[str, Any]:
    """Map a specification record onto flat ``attr_*`` fields for indexing."""

    flat: Dict[str, Any] = {}
    for axis, value in (specs.get("dimensions") or {}).items():
        if axis != "unit":
            flat[f"attr_{axis}_cm"] = value
    if specs.get("materials"):
        flat["attr_materials"] = list(specs["materials"])
    if specs.get("colors"):
        flat["attr_colors"] = list(specs["colors"])
    if specs.get("weight"):
        flat["attr_weight_kg"] = specs["weight"]["value"]
    if specs.get("density"):
        flat["attr_density_kg_m3"] = specs["density"]["value"]
    if specs.get("style"):
        flat["attr_style"] = specs["style"]
    for key, value in (specs.get("capacity") or {}).items():
        flat[f"attr_{key}"] = value
    for key, value in (specs.get("categorySpecs") or {}).items():
        if key == "defaultDensity":
            flat["attr_default_density_kg_m3"] = value["value"]
        else:
            flat[f"attr_{_snake(key)}"] = value
    if specs.get("care"):
        flat["attr_care"] = list(specs["care"])
    if specs.get("origin"):
        flat["attr_origin"] = specs["origin"]
    if specs.get("warranty"):
        flat["attr_warranty"] = specs["warranty"]
    return flat
