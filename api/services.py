"""Service helpers backing the FastAPI layer."""
from __future__ import annotations

from typing import Any, Dict, List

import product_store
from attribute_extraction import build_specifications, flatten_specifications
from enrichment import analyze_seo_product, enrich_product, seo_stats
from scoring import calculate_attribute_confidence, score
from settings import get_settings


def extract_specifications(payload: Dict[str, Any]) -> Dict[str, Any]:
    title = payload.get("title") or ""
    description = payload.get("description") or ""
    specs = build_specifications(title, description, payload.get("product_type") or "")
    return {
        "specifications": specs,
        "attributes": flatten_specifications(specs),
        "confidence": calculate_attribute_confidence(f"{title} {description}"),
    }


def score_product(kind: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Run one named heuristic; unknown kinds raise ``ValueError``."""

    result = score(kind, payload)
    return {"kind": kind, **result.to_dict()}


def upsert_product(retailer_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
    """Enrich a catalog product and store it under ``retailer_id``."""

    document = enrich_product(payload, retailer_id)
    product_store.upsert_enriched_product(document)
    return {
        "retailer_id": retailer_id,
        "product_id": document["product_id"],
        "indexed": True,
        "seo_score": document["seo_score"],
        "ads_score": document["ads_score"],
        "confidence_score": document["confidence_score"],
        "specifications": document["specifications"],
        "url": get_settings().product_url_for(retailer_id, document["handle"]),
    }


def fetch_product(retailer_id: str, product_id: str) -> Dict[str, Any]:
    document = product_store.fetch_enriched_product(retailer_id, product_id)
    return {"retailer_id": retailer_id, "product_id": product_id, "document": document}


def list_products(retailer_id: str, size: int) -> Dict[str, Any]:
    return {
        "retailer_id": retailer_id,
        "items": product_store.list_enriched_products(retailer_id, size),
    }


def clear_products(retailer_id: str) -> Dict[str, Any]:
    return {
        "retailer_id": retailer_id,
        "deleted": product_store.clear_enriched_products(retailer_id),
    }


def seo_report(retailer_id: str, size: int) -> Dict[str, Any]:
    products = product_store.list_enriched_products(retailer_id, size)
    rows: List[Dict[str, Any]] = [analyze_seo_product(product) for product in products]
    return {"retailer_id": retailer_id, "stats": seo_stats(rows), "items": rows}
