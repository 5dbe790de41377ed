"""Tests for Elasticsearch setup module."""
from unittest.mock import MagicMock, patch

import pytest

import elastic_mappings
import es_setup


def test_get_client_creates_connection():
    """get_client pings the cluster before handing the client out."""
    with patch("es_setup.Elasticsearch") as mock_es:
        mock_client = MagicMock()
        mock_client.info.return_value = {
            "version": {"number": "8.15.2"},
            "cluster_name": "test-cluster",
        }
        mock_es.return_value = mock_client

        client = es_setup.get_client()

        assert client is mock_client
        mock_client.info.assert_called_once()


def test_get_client_logs_connection_failure():
    with patch("es_setup.Elasticsearch") as mock_es:
        mock_client = MagicMock()
        mock_client.info.side_effect = Exception("Connection refused")
        mock_es.return_value = mock_client

        with pytest.raises(Exception, match="Connection refused"):
            es_setup.get_client()


def test_create_index_updates_mapping_of_existing_index():
    mock_client = MagicMock()
    mock_client.indices.exists.return_value = True
    body = {"mappings": {"properties": {"seo_score": {"type": "integer"}}}}

    es_setup.create_index(mock_client, "products_enriched", body)

    mock_client.indices.create.assert_not_called()
    mock_client.indices.put_mapping.assert_called_once_with(
        index="products_enriched", properties={"seo_score": {"type": "integer"}}
    )


def test_create_index_creates_new():
    mock_client = MagicMock()
    mock_client.indices.exists.return_value = False

    body = {"mappings": {"properties": {"field1": {"type": "keyword"}}}}
    es_setup.create_index(mock_client, "new_index", body)

    mock_client.indices.create.assert_called_once_with(index="new_index", **body)


def test_create_index_propagates_failures():
    mock_client = MagicMock()
    mock_client.indices.exists.return_value = False
    mock_client.indices.create.side_effect = Exception("Index creation failed")

    with pytest.raises(Exception):
        es_setup.create_index(mock_client, "bad_index", {})


def test_create_products_enriched_index_uses_configured_name():
    mock_client = MagicMock()
    with patch("es_setup.create_index") as mock_create:
        es_setup.create_products_enriched_index(mock_client)

    mock_create.assert_called_once_with(
        mock_client, "products_enriched", elastic_mappings.PRODUCTS_ENRICHED_MAPPING
    )


def test_products_enriched_mapping_structure():
    props = elastic_mappings.PRODUCTS_ENRICHED_MAPPING["mappings"]["properties"]

    assert props["retailer_id"]["type"] == "keyword"
    assert props["specifications"] == {"type": "object", "enabled": False}
    assert props["attr_materials"]["type"] == "keyword"
    assert props["attr_longueur_cm"]["type"] == "float"
    assert props["seo_score"]["type"] == "integer"


def test_create_index_logs_mapping_count(caplog):
    import logging

    with caplog.at_level(logging.INFO):
        mock_client = MagicMock()
        mock_client.indices.exists.return_value = False

        body = {
            "mappings": {
                "properties": {
                    "field1": {"type": "keyword"},
                    "field2": {"type": "text"},
                }
            }
        }

        es_setup.create_index(mock_client, "test_index", body)

        assert "Creating index 'test_index' with 2 mappings" in caplog.text
