"""Turn a raw catalog product into an enriched, scored record.

The enriched record is flat so it can be stored as one Elasticsearch document
and exported to CSV: identity and pricing fields copied from the source row,
detected attributes, the nested ``specifications`` record and its ``attr_*``
projection, generated SEO/ads copy, and the heuristic scores.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

from attribute_extraction import (
    build_specifications,
    extract_colors,
    extract_materials,
    extract_style,
    flatten_specifications,
)
from keyword_matcher import first_label
from pattern_tables import (
    CATEGORY_RULES,
    DEFAULT_CATEGORY,
    DEFAULT_GOOGLE_CATEGORY,
    GOOGLE_CATEGORIES,
    ROOM_RULES,
    SUBCATEGORY_RULES,
    TABLES_VERSION,
)
from scoring import (
    as_float,
    calculate_ads_score,
    calculate_ai_confidence,
    calculate_attribute_confidence,
    calculate_matching_score,
    calculate_pmax_score,
    calculate_seo_score,
    generate_seo_suggestions,
)
from seo_content import (
    generate_handle,
    generate_optimized_description,
    generate_optimized_title,
    generate_seo_content,
)
from settings import get_settings

logger = logging.getLogger(__name__)

SHORT_DESCRIPTION_MAX = 200
DEFAULT_CURRENCY = "EUR"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def detect_category(text: str) -> str:
    return first_label(CATEGORY_RULES, text) or DEFAULT_CATEGORY


def detect_subcategory(text: str) -> str:
    return first_label(SUBCATEGORY_RULES, text) or ""


def detect_room(text: str) -> str:
    return first_label(ROOM_RULES, text) or ""


def google_category_for(category: str) -> str:
    return GOOGLE_CATEGORIES.get(category, DEFAULT_GOOGLE_CATEGORY)


def format_dimensions(dimensions: Optional[Mapping[str, Any]]) -> str:
    """Human readable dimensions, e.g. ``"200 x 100 x 75 cm"`` or ``"Ø 50 cm"``."""

    if not dimensions:
        return ""
    axes = [
        dimensions[axis]
        for axis in ("longueur", "largeur", "hauteur", "profondeur")
        if dimensions.get(axis) is not None
    ]
    if axes:
        return " x ".join(f"{value:g}" for value in axes) + " cm"
    if dimensions.get("diametre") is not None:
        return f"Ø {dimensions['diametre']:g} cm"
    return ""


def _product_text(product: Mapping[str, Any]) -> str:
    parts = (
        product.get("title") or product.get("name"),
        product.get("description"),
        product.get("product_type") or product.get("category"),
    )
    return " ".join(str(part) for part in parts if part).lower()


def _stock(product: Mapping[str, Any]) -> int:
    for key in ("stock_quantity", "stock", "inventory_quantity"):
        value = product.get(key)
        if value not in (None, ""):
            return int(as_float(value))
    return 0


def _source_tags(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return [str(tag) for tag in value]


def enrich_product(product: Mapping[str, Any], retailer_id: str) -> Dict[str, Any]:
    """Build the enriched record for one catalog product of ``retailer_id``.

    Raises:
        ValueError: if the product has neither an ``id`` nor a ``handle``.
    """

    if not retailer_id:
        raise ValueError("retailer_id is required")
    title = str(product.get("title") or product.get("name") or "").strip() or "Produit sans nom"
    handle = str(product.get("handle") or "").strip() or generate_handle(title)
    product_id = str(product.get("id") or handle or "").strip()
    if not product_id:
        raise ValueError("Product needs an id or a handle")

    description = str(product.get("description") or "")
    product_type = str(product.get("product_type") or product.get("category") or "")
    text = _product_text(product)

    specs = build_specifications(title, description, product_type)
    colors = extract_colors(text)
    materials = extract_materials(text)
    style = extract_style(text) or ""
    category = detect_category(text)
    brand = str(product.get("vendor") or product.get("brand") or "").strip() or get_settings().ui.default_brand
    price = as_float(product.get("price"))
    compare_at_price = as_float(product.get("compare_at_price")) or None
    stock = _stock(product)

    enriched: Dict[str, Any] = {
        "retailer_id": retailer_id,
        "product_id": product_id,
        "handle": handle,
        "title": title,
        "description": description,
        "short_description": (description or title)[:SHORT_DESCRIPTION_MAX],
        "vendor": brand,
        "brand": brand,
        "product_type": product_type,
        "category": category,
        "subcategory": detect_subcategory(text),
        "color": colors[0] if colors else "",
        "material": materials[0] if materials else "",
        "style": style,
        "room": detect_room(text),
        "dimensions": format_dimensions(specs.get("dimensions")),
        "specifications": specs,
        "price": price,
        "compare_at_price": compare_at_price,
        "currency": DEFAULT_CURRENCY,
        "stock_quantity": stock,
        "availability": "Disponible" if stock > 0 else "Rupture de stock",
        "image_url": product.get("image_url") or "",
        "image_alt": title,
        "product_url": get_settings().product_url_for(retailer_id, handle),
        "google_product_category": google_category_for(category),
        "source_tags": _source_tags(product.get("tags")),
    }
    enriched.update(flatten_specifications(specs))
    enriched.update(generate_seo_content(enriched))

    enriched["seo_score"] = calculate_seo_score(
        enriched["seo_title"], enriched["seo_description"], enriched
    )
    enriched["ads_score"] = calculate_ads_score(
        enriched["ad_headline"], enriched["ad_description"], enriched
    )
    enriched["confidence_score"] = calculate_ai_confidence(title, description, enriched)
    enriched["attribute_confidence"] = calculate_attribute_confidence(text)
    enriched["pmax_score"] = calculate_pmax_score(
        price, compare_at_price, enriched["color"], enriched["material"]
    )
    enriched["matching_score"] = calculate_matching_score(
        enriched["color"], enriched["material"], style
    )
    enriched["enrichment_source"] = "auto"
    enriched["tables_version"] = TABLES_VERSION
    enriched["enriched_at"] = _now_iso()
    logger.debug(
        "Enriched %s/%s as %s (seo=%d ads=%d)",
        retailer_id,
        product_id,
        category,
        enriched["seo_score"],
        enriched["ads_score"],
    )
    return enriched


def find_missing_keywords(product: Mapping[str, Any]) -> List[str]:
    missing: List[str] = []
    for key, label in (
        ("color", "couleur"),
        ("material", "matériau"),
        ("style", "style"),
        ("dimensions", "dimensions"),
        ("room", "pièce destination"),
    ):
        if not product.get(key):
            missing.append(label)
    return missing


def analyze_seo_product(product: Mapping[str, Any]) -> Dict[str, Any]:
    """SEO review row for one enriched product.

    ``search_volume`` and ``competition`` need a keyword data provider and are
    left as ``None``.
    """

    title = product.get("seo_title") or product.get("title") or ""
    description = product.get("seo_description") or ""
    score = calculate_seo_score(title, description, product)
    return {
        "product_id": product.get("product_id") or product.get("id"),
        "title": product.get("title") or "",
        "seo_title": title,
        "seo_description": description,
        "current_title_length": len(title),
        "current_description_length": len(description),
        "seo_score": score,
        "missing_keywords": find_missing_keywords(product),
        "optimization_suggestions": generate_seo_suggestions(product, score),
        "google_category": product.get("google_product_category") or "",
        "search_volume": None,
        "competition": None,
    }


def optimize_product_seo(product: Mapping[str, Any]) -> Dict[str, Any]:
    """Regenerate the SEO title and description and rescore them."""

    optimized = dict(product)
    title = generate_optimized_title(product)
    description = generate_optimized_description(product)
    optimized["seo_title"] = title
    optimized["seo_description"] = description
    optimized["seo_score"] = calculate_seo_score(title, description, product)
    return optimized


def optimize_catalog_seo(
    products: Iterable[Mapping[str, Any]], threshold: Optional[int] = None
) -> List[Dict[str, Any]]:
    """Optimise every product scoring under ``threshold``; others pass through."""

    limit = get_settings().scoring.good_threshold if threshold is None else threshold
    result: List[Dict[str, Any]] = []
    for product in products:
        current = product.get("seo_score")
        if current is None:
            current = analyze_seo_product(product)["seo_score"]
        result.append(optimize_product_seo(product) if current < limit else dict(product))
    return result


def seo_stats(rows: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    scoring = get_settings().scoring
    scores = [int(row.get("seo_score") or 0) for row in rows]
    total = len(scores)
    if not total:
        return {
            "total_products": 0,
            "avg_score": 0,
            "good_seo": 0,
            "needs_work": 0,
            "optimization_rate": 0,
        }
    good = sum(1 for value in scores if value >= scoring.good_threshold)
    return {
        "total_products": total,
        "avg_score": round(sum(scores) / total),
        "good_seo": good,
        "needs_work": sum(1 for value in scores if value < scoring.needs_work_threshold),
        "optimization_rate": round(good / total * 100),
    }
