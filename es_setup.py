"""Index setup for the enriched catalog.

Creates the ``products_enriched`` index or refreshes its mapping. Safe to rerun.
"""
from __future__ import annotations

import logging

from elasticsearch import Elasticsearch

from elastic_mappings import PRODUCTS_ENRICHED_MAPPING, ensure_index
from settings import configure_logging, get_settings

logger = logging.getLogger(__name__)


def get_client() -> Elasticsearch:
    """Initialise the Elasticsearch client and check the cluster answers."""

    settings = get_settings()
    logger.debug("Creating Elasticsearch client for %s", settings.es_url)
    client = Elasticsearch(settings.es_url, basic_auth=settings.es_basic_auth)

    try:
        info = client.info()
        logger.info(
            "Connected to Elasticsearch %s (cluster: %s)",
            info["version"]["number"],
            info["cluster_name"],
        )
    except Exception as e:
        logger.error("Failed to connect to Elasticsearch at %s: %s", settings.es_url, e)
        raise

    return client


def create_index(client: Elasticsearch, name: str, body: dict) -> None:
    if client.indices.exists(index=name):
        logger.info("Index '%s' already exists, ensuring mapping", name)
    else:
        mapping_count = len(body.get("mappings", {}).get("properties", {}))
        logger.info("Creating index '%s' with %d mappings", name, mapping_count)
    ensure_index(client, name, body)


def create_products_enriched_index(client: Elasticsearch | None = None) -> None:
    settings = get_settings()
    client = client or get_client()
    create_index(client, settings.indices.products_enriched, PRODUCTS_ENRICHED_MAPPING)


def main() -> None:
    configure_logging()
    try:
        create_products_enriched_index()
    except Exception as exc:  # pragma: no cover - CLI safety
        logger.exception("Index setup failed")
        raise SystemExit(1) from exc
    logger.info("Enriched catalog index is ready")


if __name__ == "__main__":
    main()
