import pandas as pd
import pytest

import ingest_products
from ingest_products import (
    SHOPIFY_COLUMN_MAP,
    catalog_products,
    import_catalog,
    row_to_product,
    strip_html,
)

CSV_EXPORT = """Handle,Title,Body (HTML),Vendor,Type,Tags,Variant SKU,Variant Price,Variant Compare At Price,Variant Inventory Qty,Image Src
canape-alyana,Canapé ALYANA convertible,"<p>Velours côtelé <strong>beige</strong></p><p>Couchage 140x200 cm</p>",Decora Home,Canapé,"salon, convertible",ALY-001,799.00,999.00,5,https://cdn.example.com/alyana.jpg
canape-alyana,,,,,,ALY-002,829.00,,2,https://cdn.example.com/alyana-2.jpg
,,,,,,,,,,
table-travertin,Table basse travertin,<p>Plateau en travertin naturel 120x60 cm</p>,Decora Home,Table,,TRV-001,"1 299,00",,0,
"""


def test_strip_html_keeps_block_breaks():
    html = "<p>Canapé <strong>3 places</strong></p><p>Garantie&nbsp;2 ans</p>"

    assert strip_html(html) == "Canapé 3 places\nGarantie 2 ans"
    assert strip_html(None) == ""


def test_row_to_product_maps_shopify_columns_and_normalizes_values():
    data = {
        "Handle": "canape-alyana",
        "Title": "Canapé ALYANA",
        "Body (HTML)": "<p>Velours beige</p>",
        "Tags": "salon, convertible",
        "Variant Price": "799,00",
        "Variant Compare At Price": "",
        "Variant Inventory Qty": "5",
    }
    for header in SHOPIFY_COLUMN_MAP:
        data.setdefault(header, "")

    product = row_to_product(pd.Series(data))

    assert product["id"] == "canape-alyana"
    assert product["description"] == "Velours beige"
    assert product["price"] == 799.0
    assert "compare_at_price" not in product
    assert product["stock_quantity"] == 5
    assert product["tags"] == ["salon", "convertible"]


def test_row_to_product_generates_missing_handle():
    product = row_to_product(pd.Series({"Title": "Fauteuil Émile"}))

    assert product["handle"] == "fauteuil-emile"
    assert product["id"] == "fauteuil-emile"


def test_catalog_products_collapses_variant_rows(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(CSV_EXPORT, encoding="utf-8")

    products, skipped = catalog_products(ingest_products.load_catalog(path))

    assert [product["handle"] for product in products] == ["canape-alyana", "table-travertin"]
    assert skipped == 2
    assert products[1]["price"] == 1299.0


def test_import_catalog_enriches_and_upserts(tmp_path, monkeypatch):
    path = tmp_path / "export.csv"
    path.write_text(CSV_EXPORT, encoding="utf-8")
    captured = {}

    def fake_bulk(documents, client=None):
        captured["documents"] = list(documents)
        return {"created": len(captured["documents"]), "updated": 0, "noop": 0}

    monkeypatch.setattr(ingest_products, "bulk_upsert_enriched_products", fake_bulk)

    stats = import_catalog(path, retailer_id="decora")

    assert stats == {"created": 2, "updated": 0, "noop": 0, "skipped": 2}
    sofa, table = captured["documents"]
    assert sofa["retailer_id"] == "decora"
    assert sofa["category"] == "Canapé"
    assert sofa["attr_couchage_size"] == "140x200"
    assert sofa["compare_at_price"] == 999.0
    assert table["material"] == "travertin"
    assert table["availability"] == "Rupture de stock"


def test_import_catalog_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        import_catalog(tmp_path / "absent.csv", retailer_id="decora")


def test_import_catalog_without_products(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("Handle,Title\n,\n", encoding="utf-8")

    with pytest.raises(RuntimeError):
        import_catalog(path, retailer_id="decora")
