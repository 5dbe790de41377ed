"""Elasticsearch mappings and helpers for the enriched furniture catalog."""
from __future__ import annotations

import logging
from typing import Dict

from elasticsearch import Elasticsearch
from elasticsearch.exceptions import BadRequestError

logger = logging.getLogger(__name__)


PRODUCTS_ENRICHED_MAPPING: Dict[str, Dict] = {
    "settings": {
        "number_of_shards": 1,
        "analysis": {
            "normalizer": {
                "keyword_lowercase": {
                    "type": "custom",
                    "filter": ["lowercase"],
                }
            }
        },
    },
    "mappings": {
        "dynamic": "false",
        "properties": {
            "retailer_id": {"type": "keyword"},
            "product_id": {"type": "keyword"},
            "handle": {"type": "keyword"},
            "title": {"type": "text", "fields": {"raw": {"type": "keyword"}}},
            "description": {"type": "text"},
            "short_description": {"type": "text"},
            "vendor": {"type": "keyword", "normalizer": "keyword_lowercase"},
            "brand": {"type": "keyword", "normalizer": "keyword_lowercase"},
            "product_type": {"type": "keyword"},
            "category": {"type": "keyword"},
            "subcategory": {"type": "keyword"},
            "color": {"type": "keyword"},
            "material": {"type": "keyword"},
            "style": {"type": "keyword"},
            "room": {"type": "keyword"},
            "dimensions": {"type": "keyword"},
            # Stored verbatim; searchable values live in the attr_* fields.
            "specifications": {"type": "object", "enabled": False},
            "price": {"type": "scaled_float", "scaling_factor": 100},
            "compare_at_price": {"type": "scaled_float", "scaling_factor": 100},
            "currency": {"type": "keyword"},
            "stock_quantity": {"type": "integer"},
            "availability": {"type": "keyword"},
            "image_url": {"type": "keyword"},
            "image_alt": {"type": "text"},
            "product_url": {"type": "keyword"},
            "google_product_category": {"type": "keyword"},
            "source_tags": {"type": "keyword"},
            "tags": {"type": "keyword"},
            "seo_title": {"type": "text"},
            "seo_description": {"type": "text"},
            "ad_headline": {"type": "text"},
            "ad_description": {"type": "text"},
            "seo_score": {"type": "integer"},
            "ads_score": {"type": "integer"},
            "confidence_score": {"type": "integer"},
            "attribute_confidence": {"type": "integer"},
            "pmax_score": {"type": "integer"},
            "matching_score": {"type": "integer"},
            "attr_longueur_cm": {"type": "float"},
            "attr_largeur_cm": {"type": "float"},
            "attr_hauteur_cm": {"type": "float"},
            "attr_profondeur_cm": {"type": "float"},
            "attr_diametre_cm": {"type": "float"},
            "attr_materials": {"type": "keyword"},
            "attr_colors": {"type": "keyword"},
            "attr_weight_kg": {"type": "float"},
            "attr_density_kg_m3": {"type": "float"},
            "attr_default_density_kg_m3": {"type": "float"},
            "attr_style": {"type": "keyword"},
            "attr_seats": {"type": "integer"},
            "attr_drawers": {"type": "integer"},
            "attr_shelves": {"type": "integer"},
            "attr_canape_type": {"type": "keyword"},
            "attr_canape_state": {"type": "keyword"},
            "attr_couchage_size": {"type": "keyword"},
            "attr_lit_type": {"type": "keyword"},
            "attr_tete_de_lit": {"type": "boolean"},
            "attr_cadre_de_lit": {"type": "boolean"},
            "attr_matelas_type": {"type": "keyword"},
            "attr_ressort": {"type": "boolean"},
            "attr_mousse_type": {"type": "keyword"},
            "attr_fermete": {"type": "keyword"},
            "attr_chaise_type": {"type": "keyword"},
            "attr_accoudoirs": {"type": "boolean"},
            "attr_pivotant": {"type": "boolean"},
            "attr_reglable_hauteur": {"type": "boolean"},
            "attr_care": {"type": "keyword"},
            "attr_origin": {"type": "keyword"},
            "attr_warranty": {"type": "keyword"},
            "enrichment_source": {"type": "keyword"},
            "tables_version": {"type": "keyword"},
            "enriched_at": {"type": "date"},
        },
    },
}


def ensure_index(client: Elasticsearch, name: str, body: Dict[str, Dict]) -> None:
    """Create the index or update its mapping if it already exists."""

    if not client.indices.exists(index=name):
        logger.info("Creating index %s", name)
        try:
            client.indices.create(index=name, **body)
        except BadRequestError as exc:  # pragma: no cover - bubbled to caller
            logger.error("Failed to create index %s: %s", name, exc.info)
            raise
        return

    logger.info("Index %s already exists, updating mapping", name)
    client.indices.put_mapping(
        index=name,
        properties=body.get("mappings", {}).get("properties", {}),
    )
