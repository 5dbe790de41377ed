"""Elasticsearch analytics over a retailer's enriched catalog."""
from __future__ import annotations

from typing import Any, Dict, List

from elasticsearch import Elasticsearch

from settings import get_settings


def _client() -> Elasticsearch:
    settings = get_settings()
    return Elasticsearch(settings.es_url, basic_auth=settings.es_basic_auth)


def _retailer_filter(retailer_id: str) -> Dict[str, Any]:
    return {"term": {"retailer_id": retailer_id}}


def attribute_coverage_by_category(retailer_id: str, attribute_field: str) -> List[Dict[str, Any]]:
    client = _client()
    body = {
        "size": 0,
        "query": {"bool": {"filter": [_retailer_filter(retailer_id)]}},
        "aggs": {
            "per_category": {
                "terms": {"field": "category", "size": 200},
                "aggs": {
                    "total_products": {"value_count": {"field": "product_id"}},
                    "with_attr": {
                        "filter": {"exists": {"field": attribute_field}},
                        "aggs": {"count": {"value_count": {"field": "product_id"}}},
                    },
                },
            }
        },
    }
    response = client.search(index=get_settings().indices.products_enriched, body=body)
    results: List[Dict[str, Any]] = []
    for bucket in response["aggregations"]["per_category"]["buckets"]:
        total = bucket["total_products"]["value"]
        with_attr = bucket["with_attr"]["count"]["value"]
        coverage = (with_attr / total) if total else 0.0
        results.append(
            {
                "category": bucket["key"],
                "total_products": total,
                "with_attribute": with_attr,
                "coverage_ratio": coverage,
            }
        )
    return results


def missing_attribute_fix_list(
    retailer_id: str, attribute_field: str, category: str, size: int = 100
) -> List[Dict[str, Any]]:
    client = _client()
    query = {
        "bool": {
            "filter": [_retailer_filter(retailer_id), {"term": {"category": category}}],
            "must_not": {"exists": {"field": attribute_field}},
        }
    }
    body = {
        "size": size,
        "query": query,
        "sort": [
            {"price": {"order": "desc", "missing": "_last"}},
            {"product_id": {"order": "asc"}},
        ],
        "_source": ["product_id", "title", "brand", "price", "category", "image_url"],
    }
    response = client.search(index=get_settings().indices.products_enriched, body=body)
    return [hit["_source"] for hit in response["hits"]["hits"]]


def seo_score_summary(retailer_id: str) -> Dict[str, Any]:
    """Average SEO score and the good / needs-work split for one retailer."""

    scoring = get_settings().scoring
    client = _client()
    body = {
        "size": 0,
        "track_total_hits": True,
        "query": {"bool": {"filter": [_retailer_filter(retailer_id)]}},
        "aggs": {
            "avg_score": {"avg": {"field": "seo_score"}},
            "good": {"filter": {"range": {"seo_score": {"gte": scoring.good_threshold}}}},
            "needs_work": {"filter": {"range": {"seo_score": {"lt": scoring.needs_work_threshold}}}},
        },
    }
    response = client.search(index=get_settings().indices.products_enriched, body=body)
    aggs = response["aggregations"]
    total = response["hits"]["total"]["value"]
    good = aggs["good"]["doc_count"]
    return {
        "total_products": total,
        "avg_score": round(aggs["avg_score"]["value"] or 0),
        "good_seo": good,
        "needs_work": aggs["needs_work"]["doc_count"],
        "optimization_rate": round(good / total * 100) if total else 0,
    }
