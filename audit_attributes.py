"""Print extracted specifications of a catalog export for manual review.

Works offline on the export file, no cluster needed. Implausible values are
flagged so pattern regressions are easy to spot.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from attribute_extraction import build_specifications, flatten_specifications
from ingest_products import catalog_products, load_catalog
from settings import configure_logging, get_settings

logger = logging.getLogger(__name__)

MAX_DIMENSION_CM = 1000
MAX_WEIGHT_KG = 500
DENSITY_RANGE_KG_M3 = (10, 120)


def flag_specifications(specs: Dict[str, Any]) -> List[str]:
    flags: List[str] = []
    for axis, value in (specs.get("dimensions") or {}).items():
        if axis != "unit" and value > MAX_DIMENSION_CM:
            flags.append(f"{axis} > {MAX_DIMENSION_CM} cm")
    weight = specs.get("weight")
    if weight and weight["value"] > MAX_WEIGHT_KG:
        flags.append(f"poids > {MAX_WEIGHT_KG} kg")
    density = specs.get("density")
    low, high = DENSITY_RANGE_KG_M3
    if density and not low <= density["value"] <= high:
        flags.append(f"densité hors {low}-{high} kg/m³")
    return flags


def audit_rows(products: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    for product in products:
        specs = build_specifications(
            product.get("title", ""),
            product.get("description", ""),
            product.get("product_type", ""),
        )
        rows.append(
            {
                "handle": product.get("handle"),
                "title": product.get("title"),
                "product_type": product.get("product_type", ""),
                "specifications": specs,
                "flags": flag_specifications(specs),
            }
        )
    return rows


def export_csv(rows: List[Dict[str, Any]], path: Path) -> None:
    records = [
        {
            "handle": row["handle"],
            "title": row["title"],
            "product_type": row["product_type"],
            **flatten_specifications(row["specifications"]),
            "flags": "; ".join(row["flags"]),
        }
        for row in rows
    ]
    frame = pd.DataFrame.from_records(records)
    for column in frame.columns:
        frame[column] = frame[column].map(lambda v: "|".join(v) if isinstance(v, list) else v)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False, encoding="utf-8")
    logger.info("Wrote %d audited products to %s", len(records), path)


def main() -> None:
    configure_logging()
    parser = argparse.ArgumentParser(description="Audit extracted furniture attributes")
    parser.add_argument("--file", type=Path, help="Catalog export (defaults to data_paths.catalog_export)")
    parser.add_argument("--limit", type=int, default=20, help="Products to print")
    parser.add_argument("--flagged-only", action="store_true")
    parser.add_argument("--csv", type=Path, help="Optional CSV output of flattened attributes")
    args = parser.parse_args()

    file_path: Optional[Path] = args.file
    if file_path is None:
        default_path = get_settings().data_paths.catalog_export
        if not default_path:
            parser.error("Set --file or data_paths.catalog_export in local_settings.json")
        file_path = Path(default_path)
    if not file_path.exists():
        parser.error(f"Input file not found: {file_path}")

    products, skipped = catalog_products(load_catalog(file_path))
    rows = audit_rows(products)
    shown = [row for row in rows if row["flags"]] if args.flagged_only else rows
    print(f"Produits analysés: {len(rows)} (lignes ignorées: {skipped})")
    for row in shown[: args.limit]:
        flag_text = f" ⚠ {'; '.join(row['flags'])}" if row["flags"] else ""
        attrs = ", ".join(
            f"{key}:{value}" for key, value in flatten_specifications(row["specifications"]).items()
        )
        print(f"- {row['handle']} | {row['title']} -> {attrs or 'aucun attribut'}{flag_text}")

    if args.csv:
        export_csv(rows, args.csv)


if __name__ == "__main__":
    main()
