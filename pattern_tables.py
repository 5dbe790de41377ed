"""Pattern dictionaries for furniture catalog enrichment.

Every table is ordered: for single-valued attributes the first matching rule
wins, so reordering entries changes results. Bump ``TABLES_VERSION`` whenever a
table changes so stored enrichments can be traced back to the rules that
produced them.
"""
from __future__ import annotations

from typing import Dict, Tuple

from keyword_matcher import PatternRule, rule

TABLES_VERSION = "2025.1"

# Bois
WOOD_RULES: Tuple[PatternRule, ...] = (
    rule("chêne", "chênes?", "oak"),
    rule("hêtre", "hêtres?", "beech"),
    rule("pin", "pin", "pine"),
    rule("teck", "teck", "teak"),
    rule("noyer", "noyer", "walnut"),
    rule("érable", "érable", "maple"),
    rule("acajou", "acajou", "mahogany"),
    rule("bambou", "bambou", "bamboo"),
    rule("bois massif", r"bois\s+massif", r"solid\s+wood"),
    rule("contreplaqué", "contreplaqué", "plywood"),
    rule("MDF", "mdf", r"medium\s+density\s+fiberboard"),
)

# Métaux
METAL_RULES: Tuple[PatternRule, ...] = (
    rule("acier", "acier", "steel"),
    rule("inox", "inox", r"stainless\s+steel"),
    rule("aluminium", "aluminium", "aluminum"),
    rule("fer", "fer", "iron"),
    rule("laiton", "laiton", "brass"),
    rule("cuivre", "cuivre", "copper"),
    rule("chrome", "chrome", "chromée?s?"),
)

# Pierres
STONE_RULES: Tuple[PatternRule, ...] = (
    rule("marbre", "marbre", "marble"),
    rule("travertin", "travertin", "travertine"),
    rule("granit", "granit", "granite"),
    rule("ardoise", "ardoise", "slate"),
    rule("grès", "grès", "sandstone"),
    rule("pierre naturelle", r"pierre\s+naturelle", r"natural\s+stone"),
)

# Textiles
TEXTILE_RULES: Tuple[PatternRule, ...] = (
    rule("coton", "coton", "cotton"),
    rule("lin", "lin", "linen"),
    rule("velours", "velours", "velvet", "côtelé"),
    rule("chenille", "chenille"),
    rule("cuir", "cuir", "leather"),
    rule("simili cuir", r"simili\s+cuir", r"faux\s+leather"),
    rule("tissu", "tissus?", "fabric"),
    rule("polyester", "polyester"),
)

# Autres
OTHER_MATERIAL_RULES: Tuple[PatternRule, ...] = (
    rule("verre", "verre", "glass"),
    rule("céramique", "céramique", "ceramic"),
    rule("plastique", "plastique", "plastic"),
    rule("résine", "résine", "resin"),
    rule("rotin", "rotin", "rattan"),
    rule("osier", "osier", "wicker"),
)

MATERIAL_RULES: Tuple[PatternRule, ...] = (
    WOOD_RULES + METAL_RULES + STONE_RULES + TEXTILE_RULES + OTHER_MATERIAL_RULES
)

COLOR_RULES: Tuple[PatternRule, ...] = (
    rule("blanc", "blancs?", "blanches?", "white"),
    rule("noir", "noire?s?", "black"),
    rule("gris", "grise?s?", "grey", "gray"),
    rule("beige", "beiges?"),
    rule("marron", "marron", "brown"),
    rule("rouge", "rouges?", "red"),
    rule("bleu", "bleue?s?", "blue"),
    rule("vert", "verte?s?", "green"),
    rule("jaune", "jaunes?", "yellow"),
    rule("orange", "orange"),
    rule("rose", "roses?", "pink"),
    rule("violet", "violette?s?", "purple"),
    rule("crème", "crème", "cream"),
    rule("naturel", "naturel", "natural"),
    rule("anthracite", "anthracite"),
    rule("taupe", "taupe"),
    rule("ivoire", "ivoire", "ivory"),
)

# Order is part of the contract: the first matching style is returned.
STYLE_RULES: Tuple[PatternRule, ...] = (
    rule("moderne", "moderne", "modern"),
    rule("contemporain", "contemporaine?", "contemporary"),
    rule("vintage", "vintage"),
    rule("industriel", "industrielle?", "industrial"),
    rule("scandinave", "scandinave", "scandinavian"),
    rule("rustique", "rustique", "rustic"),
    rule("classique", "classique", "classic"),
    rule("minimaliste", "minimaliste", "minimalist"),
    rule("baroque", "baroque"),
    rule("art déco", r"art\s+déco", r"art\s+deco"),
)

CARE_RULES: Tuple[PatternRule, ...] = (
    rule("nettoyage à sec", r"nettoyage\s+à\s+sec", r"dry\s+clean"),
    rule("lavable en machine", r"lavable\s+en\s+machine", r"machine\s+washable"),
    rule("dépoussiérage régulier", "dépoussiérage", "dusting"),
    rule("éviter l'humidité", r"éviter\s+l['’]humidité", r"avoid\s+moisture"),
    rule("protection solaire", r"protection\s+solaire", r"sun\s+protection"),
)

ROOM_RULES: Tuple[PatternRule, ...] = (
    rule("salon", "salon", r"living(?:\s+room)?"),
    rule("chambre", "chambre", "bedroom"),
    rule("cuisine", "cuisine", "kitchen"),
    rule("bureau", "bureau", "office"),
    rule("salle à manger", r"salle\s+à\s+manger", "dining"),
    rule("entrée", "entrée", "entrance"),
    rule("terrasse", "terrasse", "terrace"),
)

CATEGORY_RULES: Tuple[PatternRule, ...] = (
    rule("Fauteuil", "fauteuils?", "armchairs?"),
    rule("Canapé", "canapés?", "sofas?"),
    rule("Table", "tables?"),
    rule("Chaise", "chaises?", "chairs?"),
    rule("Lit", "lits?", "beds?", "matelas"),
    rule("Rangement", "armoires?", "commodes?"),
    rule("Meuble TV", r"meuble\s+tv"),
)

DEFAULT_CATEGORY = "Mobilier"

SUBCATEGORY_RULES: Tuple[PatternRule, ...] = (
    rule("Fauteuil design moderne", r"fauteuils?\b[\s\S]*\bdesign", r"design\b[\s\S]*\bfauteuils?"),
    rule("Canapé d'angle", "angle"),
    rule("Canapé convertible", "convertible"),
    rule("Table basse", "basse"),
    rule("Table à manger", "manger"),
    rule("Chaise de bureau", "bureau"),
)

GOOGLE_CATEGORIES: Dict[str, str] = {
    "Fauteuil": "Furniture > Living Room Furniture > Chairs",
    "Canapé": "Furniture > Living Room Furniture > Sofas",
    "Table": "Furniture > Tables",
    "Chaise": "Furniture > Chairs",
    "Lit": "Furniture > Bedroom Furniture > Beds",
    "Rangement": "Furniture > Storage Furniture",
    "Meuble TV": "Furniture > Entertainment Centers",
    "Décoration": "Home & Garden > Decor",
}
DEFAULT_GOOGLE_CATEGORY = "Furniture"

# Category hint families for category-specific specifications.
SOFA_HINTS = ("canapé", "sofa")
BED_HINTS = ("lit", "bed")
MATTRESS_HINTS = ("matelas", "mattress")
CHAIR_HINTS = ("chaise", "chair", "fauteuil", "tabouret")

# Average market densities for foam mattresses, in kg/m³.
MATTRESS_DEFAULT_DENSITY: Dict[str, int] = {
    "souple": 25,
    "medium": 35,
    "ferme": 45,
    "tres-ferme": 55,
}
MATTRESS_FALLBACK_DENSITY = 35

CM_PER_UNIT: Dict[str, float] = {
    "cm": 1.0,
    "m": 100.0,
    "mm": 0.1,
    "in": 2.54,
    "ft": 30.48,
}
KG_PER_UNIT: Dict[str, float] = {
    "kg": 1.0,
    "g": 0.001,
    "lb": 0.453592,
    "lbs": 0.453592,
}
KG_M3_PER_UNIT: Dict[str, float] = {
    "kg/m3": 1.0,
    "kg/m³": 1.0,
    "g/cm3": 1000.0,
    "g/cm³": 1000.0,
}

# Keyword families used by the Smart-AI confidence heuristics. The weight is the
# number of points a family contributes when it is mentioned. These tables match
# substrings, so inflected forms (``blanche``, ``tissus``) and a bare ``cm`` count.
CONFIDENCE_KEYWORD_RULES: Tuple[PatternRule, ...] = (
    rule("dimensions", "dimensions", "cm", weight=15, whole_word=False),
    rule("matériau", "matériau", "tissu", "bois", weight=10, whole_word=False),
    rule("couleur", "couleur", "coloris", weight=10, whole_word=False),
)

ATTRIBUTE_CONFIDENCE_RULES: Tuple[PatternRule, ...] = (
    rule("mesure", "cm", "×", weight=15, whole_word=False),
    rule("couleur", "blanc", "noir", "gris", "beige", "marron", "bleu", weight=15, whole_word=False),
    rule("matériau", "bois", "métal", "verre", "tissu", "cuir", weight=20, whole_word=False),
)
