"""Import a Shopify catalog export, enrich it and store it for one retailer.

Reads the CSV (or Excel) export, maps Shopify headers to internal field names,
strips the HTML body, runs the enrichment pipeline and bulk *upserts* the
result so reruns do not create duplicates.
"""
from __future__ import annotations

import argparse
import html
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd
from elasticsearch import Elasticsearch

from enrichment import enrich_product
from product_store import bulk_upsert_enriched_products
from seo_content import generate_handle
from settings import configure_logging, get_settings

logger = logging.getLogger(__name__)


SHOPIFY_COLUMN_MAP: Dict[str, str] = {
    "Handle": "handle",
    "Title": "title",
    "Body (HTML)": "description",
    "Vendor": "vendor",
    "Type": "product_type",
    "Product Category": "category",
    "Tags": "tags",
    "Variant SKU": "sku",
    "Variant Price": "price",
    "Variant Compare At Price": "compare_at_price",
    "Variant Inventory Qty": "stock_quantity",
    "Image Src": "image_url",
}

NUMERIC_FIELDS = {"price", "compare_at_price"}
INTEGER_FIELDS = {"stock_quantity"}
LIST_FIELDS = {"tags"}
EXCEL_SUFFIXES = {".xlsx", ".xls"}

_TAG_RE = re.compile(r"<[^>]+>")
_BLOCK_TAG_RE = re.compile(r"</?(?:p|br|li|ul|ol|div|h[1-6])\b[^>]*>", re.IGNORECASE)
_SPACE_RE = re.compile(r"[ \t\r\f\v\xa0]+")


def strip_html(value: Optional[str]) -> str:
    """Plain text from a Shopify ``Body (HTML)`` cell; block tags become newlines."""

    if not value:
        return ""
    text = _BLOCK_TAG_RE.sub("\n", value)
    text = html.unescape(_TAG_RE.sub("", text))
    lines = (_SPACE_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n".join(line for line in lines if line)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    return isinstance(value, str) and not value.strip()


def _safe_float(value: Any) -> float | None:
    if _is_blank(value):
        return None
    cleaned = re.sub(r"[^\d.,-]", "", str(value)).replace(",", ".")
    try:
        return float(cleaned)
    except ValueError:
        return None


def _safe_int(value: Any) -> int | None:
    number = _safe_float(value)
    return int(number) if number is not None else None


def _split_list(value: Any) -> list[str] | None:
    if _is_blank(value):
        return None
    parts = [item.strip() for item in str(value).split(",") if item.strip()]
    return parts or None


def row_to_product(row: pd.Series) -> Dict[str, Any]:
    product: Dict[str, Any] = {}
    for column, internal_name in SHOPIFY_COLUMN_MAP.items():
        raw_value = row.get(column)
        if _is_blank(raw_value):
            continue
        if internal_name in NUMERIC_FIELDS:
            value = _safe_float(raw_value)
        elif internal_name in INTEGER_FIELDS:
            value = _safe_int(raw_value)
        elif internal_name in LIST_FIELDS:
            value = _split_list(raw_value)
        elif internal_name == "description":
            value = strip_html(str(raw_value))
        else:
            value = str(raw_value).strip()
        if value is not None:
            product[internal_name] = value

    if not product.get("handle") and product.get("title"):
        product["handle"] = generate_handle(product["title"])
    if product.get("handle"):
        product["id"] = product["handle"]
    return product


def load_catalog(path: Path) -> pd.DataFrame:
    if path.suffix.lower() in EXCEL_SUFFIXES:
        return pd.read_excel(path, dtype=str, keep_default_na=False)
    return pd.read_csv(path, dtype=str, keep_default_na=False)


def catalog_products(df: pd.DataFrame) -> tuple[List[Dict[str, Any]], int]:
    """Collapse variant and image rows onto their product.

    Shopify repeats the handle on every variant/image row and leaves ``Title``
    empty on all but the first, so only the first titled row of a handle is
    kept. Returns the products and the number of skipped rows.
    """

    products: List[Dict[str, Any]] = []
    seen: set[str] = set()
    skipped = 0
    for _, row in df.iterrows():
        product = row_to_product(row)
        handle = product.get("handle")
        if not handle or not product.get("title") or handle in seen:
            skipped += 1
            continue
        seen.add(handle)
        products.append(product)
    return products, skipped


def import_catalog(
    file_path: Path,
    retailer_id: str,
    client: Optional[Elasticsearch] = None,
) -> Dict[str, int]:
    if not file_path.exists():
        raise FileNotFoundError(f"Input file not found: {file_path}")

    df = load_catalog(file_path)
    products, skipped = catalog_products(df)
    if not products:
        raise RuntimeError("No valid products were found in the catalog export")

    documents = [enrich_product(product, retailer_id) for product in products]
    stats = bulk_upsert_enriched_products(documents, client=client)
    stats["skipped"] = skipped
    logger.info(
        "Catalog %s imported for retailer %s (products=%d skipped=%d)",
        file_path,
        retailer_id,
        len(documents),
        skipped,
    )
    return stats


def main() -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Import and enrich a Shopify catalog export")
    parser.add_argument("--retailer", required=True, help="Retailer identifier owning the catalog")
    parser.add_argument(
        "--file",
        type=Path,
        help="Path to the CSV or Excel export (defaults to data_paths.catalog_export)",
    )
    args = parser.parse_args()

    settings = get_settings()
    file_path: Optional[Path] = args.file
    if file_path is None:
        default_path = settings.data_paths.catalog_export
        if not default_path:
            parser.error("Set --file or data_paths.catalog_export in local_settings.json")
        file_path = Path(default_path)

    try:
        stats = import_catalog(file_path=file_path, retailer_id=args.retailer)
    except Exception as exc:  # pragma: no cover - CLI safety
        logger.exception("Catalog import failed")
        raise SystemExit(1) from exc

    logger.info(
        "Import finished: created=%s updated=%s noop=%s skipped=%s",
        stats["created"],
        stats["updated"],
        stats["noop"],
        stats["skipped"],
    )


if __name__ == "__main__":
    main()
