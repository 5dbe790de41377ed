"""Generated marketing copy: SEO titles, meta descriptions and ad text.

Length limits follow Google's display budgets: 70 chars for the SEO title,
155 for the meta description, 30 for an ad headline and 90 for the ad
description.
"""
from __future__ import annotations

import re
import unicodedata
from typing import Any, Dict, List, Mapping, Optional

from scoring import as_float, discount_percentage
from settings import get_settings

SEO_TITLE_MAX = 70
SEO_DESCRIPTION_MAX = 155
AD_HEADLINE_MAX = 30
AD_DESCRIPTION_MAX = 90
HANDLE_MAX = 100


def _text(product: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = product.get(key)
        if value:
            return str(value).strip()
    return ""


def _brand(product: Mapping[str, Any]) -> str:
    return _text(product, "brand", "vendor") or get_settings().ui.default_brand


def _format_amount(amount: float) -> str:
    return f"{amount:g}"


def detect_promotion(price: float, compare_at_price: Optional[float] = None) -> Dict[str, Any]:
    discount = discount_percentage(price, compare_at_price)
    if not discount:
        return {
            "has_promotion": False,
            "discount_percentage": 0,
            "savings_amount": 0,
            "promotion_text": "",
        }
    savings = round(compare_at_price - price, 2)
    return {
        "has_promotion": True,
        "discount_percentage": discount,
        "savings_amount": savings,
        "promotion_text": f"PROMO -{discount}% ! Économisez {_format_amount(savings)}€",
    }


def generate_seo_content(product: Mapping[str, Any]) -> Dict[str, Any]:
    """Build SEO and ads copy from an enriched product record."""

    name = _text(product, "name", "title") or "Produit"
    brand = _brand(product)
    color = _text(product, "color")
    material = _text(product, "material")
    style = _text(product, "style")
    promotion = detect_promotion(as_float(product.get("price")), as_float(product.get("compare_at_price")))

    color_text = f" {color}" if color else ""
    material_text = f" en {material}" if material else ""
    promo_suffix = f" -{promotion['discount_percentage']}%" if promotion["has_promotion"] else ""

    seo_title = f"{name}{color_text}{material_text}{promo_suffix} - {brand}"[:SEO_TITLE_MAX]
    style_text = f"Style {style}. " if style else ""
    promo_text = f"PROMO -{promotion['discount_percentage']}% ! " if promotion["has_promotion"] else ""
    seo_description = (
        f"{name}{material_text}{color_text}. {style_text}{promo_text}Livraison gratuite. {brand}."
    )[:SEO_DESCRIPTION_MAX]
    ad_headline = f"{name}{promo_suffix}"[:AD_HEADLINE_MAX]
    ad_pitch = f"PROMO -{promotion['discount_percentage']}% !" if promotion["has_promotion"] else "Qualité premium !"
    ad_description = f"{name}{material_text}{color_text}. {ad_pitch}"[:AD_DESCRIPTION_MAX]

    tags: List[str] = []
    for tag in (
        _text(product, "category", "product_type").lower(),
        color,
        material,
        style,
        _text(product, "room"),
        "promotion" if promotion["has_promotion"] else "",
        "promo" if promotion["has_promotion"] else "",
        "livraison gratuite",
    ):
        if tag and tag not in tags:
            tags.append(tag)

    return {
        "seo_title": seo_title,
        "seo_description": seo_description,
        "ad_headline": ad_headline,
        "ad_description": ad_description,
        "tags": tags,
    }


def generate_optimized_title(product: Mapping[str, Any]) -> str:
    elements = [
        _text(product, "title", "name"),
        _text(product, "color"),
        _text(product, "material"),
        _brand(product),
    ]
    return " ".join(element for element in elements if element)[:SEO_TITLE_MAX]


def generate_optimized_description(product: Mapping[str, Any]) -> str:
    color = _text(product, "color")
    style = _text(product, "style")
    elements = [
        _text(product, "title", "name"),
        f"en {color}" if color else "",
        _text(product, "material"),
        f"Style {style}" if style else "",
        "Livraison gratuite",
        "Garantie 2 ans",
    ]
    return ". ".join(element for element in elements if element)[:SEO_DESCRIPTION_MAX]


def generate_handle(title: str) -> str:
    """URL slug without accents, e.g. ``"Canapé d'angle"`` -> ``"canape-dangle"``."""

    decomposed = unicodedata.normalize("NFD", (title or "").lower())
    ascii_only = "".join(char for char in decomposed if not unicodedata.combining(char))
    cleaned = re.sub(r"[^a-z0-9\s-]", "", ascii_only).strip()
    return re.sub(r"[\s-]+", "-", cleaned)[:HANDLE_MAX]
