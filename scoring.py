"""Weighted-checklist scores for generated marketing text.

Three heuristics live here: the SEO tab score, the Google Ads score and the
Smart-AI confidence score. They check similar things with different
thresholds and weights and are kept as separate tables on purpose; none of
them shares values with another.

Each heuristic is a tuple of :class:`Check` entries summed and clamped to
``[0, 100]``, plus a tuple of :class:`Suggestion` entries evaluated in order.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from keyword_matcher import weighted_score
from pattern_tables import ATTRIBUTE_CONFIDENCE_RULES, CONFIDENCE_KEYWORD_RULES

logger = logging.getLogger(__name__)

MAX_SCORE = 100


def as_float(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class ScoringContext:
    headline: str
    description: str
    product: Mapping[str, Any]

    def lowered(self, key: str) -> str:
        value = self.product.get(key)
        return str(value).strip().lower() if value else ""

    def number(self, key: str) -> float:
        return as_float(self.product.get(key))


@dataclass(frozen=True)
class Check:
    name: str
    points: int
    predicate: Callable[[ScoringContext], bool]

    def award(self, ctx: ScoringContext) -> int:
        return self.points if self.predicate(ctx) else 0


@dataclass(frozen=True)
class DiscountCheck(Check):
    """Awards the discount percentage itself, capped at ``points``."""

    predicate: Callable[[ScoringContext], bool] = field(default=lambda ctx: True)

    def award(self, ctx: ScoringContext) -> int:
        return min(discount_percentage(ctx.number("price"), ctx.number("compare_at_price")), self.points)


@dataclass(frozen=True)
class Suggestion:
    message: str
    applies: Callable[[Mapping[str, Any], int], bool]


@dataclass
class ScoreResult:
    score: int
    suggestions: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "suggestions": list(self.suggestions)}


def clamp_score(value: float) -> int:
    return int(max(0, min(round(value), MAX_SCORE)))


def discount_percentage(price: float, compare_at_price: Optional[float]) -> int:
    if not compare_at_price or compare_at_price <= price:
        return 0
    return round((compare_at_price - price) / compare_at_price * 100)


def evaluate(checks: Sequence[Check], ctx: ScoringContext) -> int:
    return clamp_score(sum(check.award(ctx) for check in checks))


def breakdown(checks: Sequence[Check], ctx: ScoringContext) -> Dict[str, int]:
    """Points awarded per check, for dashboards that explain a score."""

    return {check.name: check.award(ctx) for check in checks}


def collect_suggestions(
    table: Sequence[Suggestion], product: Mapping[str, Any], score: int
) -> List[str]:
    return [entry.message for entry in table if entry.applies(product, score)]


def _length_between(text: str, low: int, high: int) -> bool:
    return low <= len(text) <= high


def _mentions(text: str, needle: str) -> bool:
    return bool(needle) and needle in text.lower()


def _has(product: Mapping[str, Any], key: str) -> bool:
    return bool(product.get(key))


# SEO tab: title 30-70 chars, meta description 120-155 chars.
SEO_CHECKS: Tuple[Check, ...] = (
    Check("title_length", 20, lambda c: _length_between(c.headline, 30, 70)),
    Check("title_category", 10, lambda c: _mentions(c.headline, c.lowered("category"))),
    Check("title_color", 5, lambda c: _mentions(c.headline, c.lowered("color"))),
    Check("title_brand", 5, lambda c: _mentions(c.headline, c.lowered("brand"))),
    Check("description_length", 15, lambda c: _length_between(c.description, 120, 155)),
    Check("description_delivery", 5, lambda c: _mentions(c.description, "livraison")),
    Check("description_warranty", 5, lambda c: _mentions(c.description, "garantie")),
    Check("description_material", 5, lambda c: _mentions(c.description, c.lowered("material"))),
    Check("has_color", 5, lambda c: _has(c.product, "color")),
    Check("has_material", 5, lambda c: _has(c.product, "material")),
    Check("has_style", 5, lambda c: _has(c.product, "style")),
    Check("has_dimensions", 5, lambda c: _has(c.product, "dimensions")),
    Check("has_google_category", 10, lambda c: _has(c.product, "google_product_category")),
)

SEO_SUGGESTIONS: Tuple[Suggestion, ...] = (
    Suggestion("Titre SEO trop court ou trop long", lambda p, s: s < 50),
    Suggestion(
        "Ajouter une meta description complète",
        lambda p, s: len(p.get("seo_description") or "") < 120,
    ),
    Suggestion(
        "Définir la catégorie Google Shopping",
        lambda p, s: not _has(p, "google_product_category"),
    ),
    Suggestion(
        "Spécifier la couleur pour améliorer la recherche",
        lambda p, s: not _has(p, "color"),
    ),
    Suggestion("Préciser le matériau principal", lambda p, s: not _has(p, "material")),
)

# Google Ads: headline 15-30 chars, ad description 60-90 chars.
ADS_CHECKS: Tuple[Check, ...] = (
    Check("headline_length", 20, lambda c: _length_between(c.headline, 15, 30)),
    Check("headline_category", 10, lambda c: _mentions(c.headline, c.lowered("category"))),
    Check("description_length", 15, lambda c: _length_between(c.description, 60, 90)),
    Check("description_delivery", 5, lambda c: _mentions(c.description, "livraison")),
    Check("description_color", 5, lambda c: _mentions(c.description, c.lowered("color"))),
    Check("description_material", 5, lambda c: _mentions(c.description, c.lowered("material"))),
    DiscountCheck("promotion", 20),
    Check("has_color", 5, lambda c: _has(c.product, "color")),
    Check("has_material", 5, lambda c: _has(c.product, "material")),
    Check("has_image", 10, lambda c: _has(c.product, "image_url")),
)

ADS_SUGGESTIONS: Tuple[Suggestion, ...] = (
    Suggestion("Titre d'annonce trop court ou trop long (15 à 30 caractères)", lambda p, s: s < 50),
    Suggestion(
        "Rédiger une description d'annonce de 60 à 90 caractères",
        lambda p, s: not _length_between(p.get("ad_description") or "", 60, 90),
    ),
    Suggestion(
        "Ajouter une image produit pour Google Shopping",
        lambda p, s: not _has(p, "image_url"),
    ),
    Suggestion(
        "Ajouter un prix barré pour activer le badge promo",
        lambda p, s: discount_percentage(as_float(p.get("price")), as_float(p.get("compare_at_price"))) == 0,
    ),
    Suggestion(
        "Définir la catégorie Google Shopping",
        lambda p, s: not _has(p, "google_product_category"),
    ),
)

# Smart-AI confidence starts from a base and only adds.
AI_CONFIDENCE_BASE = 30
AI_CHECKS: Tuple[Check, ...] = (
    Check("title_detail", 15, lambda c: len(c.headline) > 10),
    Check("description_detail", 20, lambda c: len(c.description) > 50),
    Check("has_price", 10, lambda c: c.number("price") > 0),
)

AI_SUGGESTIONS: Tuple[Suggestion, ...] = (
    Suggestion("Enrichir la fiche produit avant publication", lambda p, s: s < 60),
    Suggestion(
        "Allonger le titre (plus de 10 caractères)",
        lambda p, s: len(p.get("title") or "") <= 10,
    ),
    Suggestion(
        "Ajouter une description d'au moins 50 caractères",
        lambda p, s: len(p.get("description") or "") <= 50,
    ),
    Suggestion("Renseigner le prix de vente", lambda p, s: as_float(p.get("price")) <= 0),
    Suggestion("Indiquer les dimensions en cm", lambda p, s: not _has(p, "dimensions")),
)


def calculate_seo_score(title: str, description: str, product: Mapping[str, Any]) -> int:
    return evaluate(SEO_CHECKS, ScoringContext(title or "", description or "", product))


def generate_seo_suggestions(product: Mapping[str, Any], score: int) -> List[str]:
    return collect_suggestions(SEO_SUGGESTIONS, product, score)


def calculate_ads_score(headline: str, description: str, product: Mapping[str, Any]) -> int:
    return evaluate(ADS_CHECKS, ScoringContext(headline or "", description or "", product))


def generate_ads_suggestions(product: Mapping[str, Any], score: int) -> List[str]:
    return collect_suggestions(ADS_SUGGESTIONS, product, score)


def calculate_ai_confidence(title: str, description: str, product: Mapping[str, Any]) -> int:
    ctx = ScoringContext(title or "", description or "", product)
    text = f"{ctx.headline} {ctx.description}".lower()
    total = AI_CONFIDENCE_BASE + sum(check.award(ctx) for check in AI_CHECKS)
    total += weighted_score(CONFIDENCE_KEYWORD_RULES, text)
    return clamp_score(total)


def generate_ai_suggestions(product: Mapping[str, Any], score: int) -> List[str]:
    return collect_suggestions(AI_SUGGESTIONS, product, score)


def score_seo(product: Mapping[str, Any]) -> ScoreResult:
    title = product.get("seo_title") or product.get("title") or ""
    score = calculate_seo_score(title, product.get("seo_description") or "", product)
    return ScoreResult(score, generate_seo_suggestions(product, score))


def score_ads(product: Mapping[str, Any]) -> ScoreResult:
    headline = product.get("ad_headline") or ""
    score = calculate_ads_score(headline, product.get("ad_description") or "", product)
    return ScoreResult(score, generate_ads_suggestions(product, score))


def score_ai_confidence(product: Mapping[str, Any]) -> ScoreResult:
    score = calculate_ai_confidence(
        product.get("title") or "", product.get("description") or "", product
    )
    return ScoreResult(score, generate_ai_suggestions(product, score))


def calculate_attribute_confidence(text: str) -> int:
    """Confidence of the local attribute pass over raw product text."""

    lowered = (text or "").lower()
    confidence = 30
    if len(lowered) > 50:
        confidence += 20
    confidence += weighted_score(ATTRIBUTE_CONFIDENCE_RULES, lowered)
    return clamp_score(confidence)


def calculate_pmax_score(
    price: float,
    compare_at_price: Optional[float] = None,
    color: Optional[str] = None,
    material: Optional[str] = None,
) -> int:
    score = 50
    if compare_at_price and compare_at_price > price:
        score += min((compare_at_price - price) / compare_at_price * 100, 30)
    if color:
        score += 10
    if material:
        score += 10
    return clamp_score(score)


def calculate_matching_score(color: Optional[str], material: Optional[str], style: Optional[str]) -> int:
    score = 0
    if color:
        score += 30
    if material:
        score += 30
    if style:
        score += 25
    return clamp_score(score)


HEURISTICS: Dict[str, Callable[[Mapping[str, Any]], ScoreResult]] = {
    "seo": score_seo,
    "ads": score_ads,
    "confidence": score_ai_confidence,
}


def score(kind: str, product: Mapping[str, Any]) -> ScoreResult:
    """Dispatch to a named heuristic; raises ``ValueError`` for unknown names."""

    try:
        heuristic = HEURISTICS[kind]
    except KeyError as exc:
        raise ValueError(f"Unknown score heuristic: {kind}") from exc
    result = heuristic(product)
    logger.debug("Score %s for product %s: %d", kind, product.get("id"), result.score)
    return result
