"""Persistence of enriched products in Elasticsearch.

Each retailer's catalog shares the ``products_enriched`` index; documents are
keyed ``<retailer_id>:<product_id>`` and every read filters on
``retailer_id`` so tenants never see each other's products.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from elasticsearch import Elasticsearch, helpers
from elasticsearch.exceptions import NotFoundError

from settings import get_settings

logger = logging.getLogger(__name__)


def _client() -> Elasticsearch:
    settings = get_settings()
    return Elasticsearch(settings.es_url, basic_auth=settings.es_basic_auth)


def _index() -> str:
    return get_settings().indices.products_enriched


def document_id(retailer_id: str, product_id: str) -> str:
    if not retailer_id or not product_id:
        raise ValueError("retailer_id and product_id are both required")
    return f"{retailer_id}:{product_id}"


def _retailer_query(retailer_id: str) -> Dict[str, Any]:
    return {"bool": {"filter": [{"term": {"retailer_id": retailer_id}}]}}


def upsert_enriched_product(
    document: Mapping[str, Any], client: Optional[Elasticsearch] = None
) -> str:
    """Index one enriched product, replacing any previous version."""

    client = client or _client()
    doc_id = document_id(document.get("retailer_id", ""), document.get("product_id", ""))
    client.index(index=_index(), id=doc_id, document=dict(document), refresh="wait_for")
    logger.debug("Indexed enriched product %s", doc_id)
    return doc_id


def bulk_upsert_enriched_products(
    documents: Iterable[Mapping[str, Any]], client: Optional[Elasticsearch] = None
) -> Dict[str, int]:
    """Index many enriched products, each replacing its stored version.

    Raises ``RuntimeError`` if any action fails.
    """

    client = client or _client()
    index = _index()
    actions = [
        {
            "_op_type": "index",
            "_index": index,
            "_id": document_id(doc.get("retailer_id", ""), doc.get("product_id", "")),
            "_source": dict(doc),
        }
        for doc in documents
    ]
    stats = {"created": 0, "updated": 0, "noop": 0}
    if not actions:
        return stats

    errors = []
    for ok, info in helpers.streaming_bulk(
        client,
        actions,
        raise_on_error=False,
        max_retries=3,
        request_timeout=60,
    ):
        if not ok:
            errors.append(info)
            continue
        result = info.get("index", {}).get("result")
        if result in stats:
            stats[result] += 1
        else:
            stats["updated"] += 1

    if errors:
        logger.error("Bulk upsert encountered %d errors", len(errors))
        raise RuntimeError(f"Bulk upsert failed for {len(errors)} documents")

    logger.info(
        "Enriched products upserted into %s (created=%s updated=%s noop=%s)",
        index,
        stats["created"],
        stats["updated"],
        stats["noop"],
    )
    return stats


def fetch_enriched_product(
    retailer_id: str, product_id: str, client: Optional[Elasticsearch] = None
) -> Dict[str, Any]:
    client = client or _client()
    doc_id = document_id(retailer_id, product_id)
    try:
        response = client.get(index=_index(), id=doc_id)
    except NotFoundError as exc:
        raise KeyError(f"Product {product_id} was not found for retailer {retailer_id}") from exc
    return response.get("_source", {})


def list_enriched_products(
    retailer_id: str, size: int = 100, client: Optional[Elasticsearch] = None
) -> List[Dict[str, Any]]:
    client = client or _client()
    response = client.search(
        index=_index(),
        body={
            "size": size,
            "query": _retailer_query(retailer_id),
            "sort": [{"product_id": {"order": "asc"}}],
        },
    )
    return [hit.get("_source", {}) for hit in response["hits"]["hits"]]


def clear_enriched_products(retailer_id: str, client: Optional[Elasticsearch] = None) -> int:
    """Delete every enriched product of one retailer and return how many went."""

    client = client or _client()
    response = client.delete_by_query(
        index=_index(),
        query=_retailer_query(retailer_id),
        refresh=True,
        conflicts="proceed",
    )
    deleted = int(response.get("deleted", 0))
    logger.info("Removed %d enriched products for retailer %s", deleted, retailer_id)
    return deleted
