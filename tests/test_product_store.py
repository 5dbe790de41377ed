"""Tests for the enriched product store."""
from unittest.mock import MagicMock, patch

import pytest

import product_store
from enrichment import enrich_product


def test_document_id_is_scoped_by_retailer():
    assert product_store.document_id("decora", "alyana-1") == "decora:alyana-1"
    with pytest.raises(ValueError):
        product_store.document_id("", "alyana-1")


def test_upsert_enriched_product_indexes_document():
    client = MagicMock()
    doc = {"retailer_id": "decora", "product_id": "p1", "title": "Chaise"}

    doc_id = product_store.upsert_enriched_product(doc, client=client)

    assert doc_id == "decora:p1"
    client.index.assert_called_once_with(
        index="products_enriched", id="decora:p1", document=doc, refresh="wait_for"
    )


def test_fetch_enriched_product_maps_missing_document_to_key_error(monkeypatch):
    monkeypatch.setattr(product_store, "NotFoundError", LookupError)
    client = MagicMock()
    client.get.side_effect = LookupError("missing")

    with pytest.raises(KeyError, match="p404"):
        product_store.fetch_enriched_product("decora", "p404", client=client)


def test_fetch_enriched_product_returns_source():
    client = MagicMock()
    client.get.return_value = {"_source": {"product_id": "p1"}}

    assert product_store.fetch_enriched_product("decora", "p1", client=client) == {"product_id": "p1"}
    client.get.assert_called_once_with(index="products_enriched", id="decora:p1")


def test_list_enriched_products_filters_on_retailer():
    client = MagicMock()
    client.search.return_value = {
        "hits": {"hits": [{"_source": {"product_id": "a"}}, {"_source": {"product_id": "b"}}]}
    }

    items = product_store.list_enriched_products("decora", size=2, client=client)

    assert [item["product_id"] for item in items] == ["a", "b"]
    body = client.search.call_args.kwargs["body"]
    assert body["size"] == 2
    assert body["query"]["bool"]["filter"] == [{"term": {"retailer_id": "decora"}}]


def test_clear_enriched_products_returns_deleted_count():
    client = MagicMock()
    client.delete_by_query.return_value = {"deleted": 3}

    assert product_store.clear_enriched_products("decora", client=client) == 3
    kwargs = client.delete_by_query.call_args.kwargs
    assert kwargs["query"] == {"bool": {"filter": [{"term": {"retailer_id": "decora"}}]}}


def test_bulk_upsert_counts_results():
    docs = [
        {"retailer_id": "decora", "product_id": "a"},
        {"retailer_id": "decora", "product_id": "b"},
    ]
    results = [
        (True, {"index": {"result": "created"}}),
        (True, {"index": {"result": "updated"}}),
    ]
    with patch("product_store.helpers.streaming_bulk", return_value=iter(results)) as bulk:
        stats = product_store.bulk_upsert_enriched_products(docs, client=MagicMock())

    assert stats == {"created": 1, "updated": 1, "noop": 0}
    actions = bulk.call_args.args[1]
    assert [action["_id"] for action in actions] == ["decora:a", "decora:b"]


def test_bulk_upsert_raises_on_failed_actions():
    results = [(False, {"index": {"error": "mapper_parsing_exception"}})]
    with patch("product_store.helpers.streaming_bulk", return_value=iter(results)):
        with pytest.raises(RuntimeError, match="1 documents"):
            product_store.bulk_upsert_enriched_products(
                [{"retailer_id": "decora", "product_id": "a"}], client=MagicMock()
            )


def test_bulk_upsert_skips_empty_batches():
    with patch("product_store.helpers.streaming_bulk") as bulk:
        stats = product_store.bulk_upsert_enriched_products([], client=MagicMock())

    bulk.assert_not_called()
    assert stats == {"created": 0, "updated": 0, "noop": 0}


def test_bulk_upsert_replaces_whole_documents():
    """A re-import that no longer detects an attribute must drop the stored value."""
    first = enrich_product({"id": "c1", "title": "Chaise rouge", "description": "poids 5 kg"}, "decora")
    second = enrich_product({"id": "c1", "title": "Chaise"}, "decora")
    assert "attr_colors" in first and "attr_weight_kg" in first

    results = [(True, {"index": {"result": "updated"}})]
    with patch("product_store.helpers.streaming_bulk", return_value=iter(results)) as bulk:
        product_store.bulk_upsert_enriched_products([second], client=MagicMock())

    (action,) = bulk.call_args.args[1]
    assert action["_op_type"] == "index"
    assert action["_source"] == second
    assert "doc" not in action and "doc_as_upsert" not in action
    assert "attr_colors" not in action["_source"]
    assert "attr_weight_kg" not in action["_source"]
