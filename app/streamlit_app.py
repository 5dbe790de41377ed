"""Streamlit UI for furniture catalog enrichment."""
from __future__ import annotations

import json
from typing import Dict, List

import sys
from pathlib import Path

import pandas as pd
import streamlit as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import attribute_analysis as aa
import product_store
from attribute_extraction import build_specifications, flatten_specifications
from enrichment import analyze_seo_product, enrich_product, optimize_catalog_seo, seo_stats
from scoring import HEURISTICS
from settings import configure_logging, get_settings

configure_logging()
st.set_page_config(page_title="Enrichissement catalogue mobilier", layout="wide")
SETTINGS = get_settings()

ATTRIBUTE_FIELDS = [
    ("attr_longueur_cm", "Longueur (cm)"),
    ("attr_largeur_cm", "Largeur (cm)"),
    ("attr_hauteur_cm", "Hauteur (cm)"),
    ("attr_materials", "Matériaux"),
    ("attr_colors", "Couleurs"),
    ("attr_style", "Style"),
    ("attr_weight_kg", "Poids (kg)"),
    ("attr_seats", "Places"),
    ("attr_warranty", "Garantie"),
]
PRODUCT_TYPES = ["", "Canapé", "Lit", "Matelas", "Chaise", "Fauteuil", "Table", "Rangement"]


@st.cache_data(ttl=120)
def retailer_products(retailer_id: str, size: int = 500) -> List[Dict[str, object]]:
    return product_store.list_enriched_products(retailer_id, size)


@st.cache_data(ttl=180)
def coverage_for_attribute(retailer_id: str, attribute_field: str) -> List[Dict[str, object]]:
    return aa.attribute_coverage_by_category(retailer_id, attribute_field)


def render_playground() -> None:
    st.title("Extraction d'attributs")
    with st.form("playground_form"):
        title = st.text_input("Titre", value="Canapé d'angle convertible ALYANA")
        product_type = st.selectbox("Type de produit", PRODUCT_TYPES, index=1)
        description = st.text_area(
            "Description",
            value="Canapé convertible en velours côtelé beige. Dimensions: 280x180x75 cm. "
            "Couchage 140x190. Garantie 2 ans.",
            height=160,
        )
        price = st.number_input("Prix (€)", min_value=0.0, value=799.0, step=10.0)
        compare_at_price = st.number_input("Prix barré (€)", min_value=0.0, value=0.0, step=10.0)
        submitted = st.form_submit_button("Analyser", use_container_width=True)

    if not submitted:
        return
    specs = build_specifications(title, description, product_type)
    st.subheader("Spécifications")
    if specs:
        st.json(specs)
    else:
        st.info("Aucun attribut détecté dans ce texte.")

    enriched = enrich_product(
        {
            "id": "playground",
            "title": title,
            "description": description,
            "product_type": product_type,
            "price": price,
            "compare_at_price": compare_at_price or None,
        },
        retailer_id="playground",
    )
    st.subheader("Contenu généré")
    st.dataframe(
        pd.DataFrame(
            [
                {"champ": key, "valeur": enriched[key]}
                for key in ("seo_title", "seo_description", "ad_headline", "ad_description")
            ]
        ),
        use_container_width=True,
    )
    cols = st.columns(len(HEURISTICS))
    for col, (kind, heuristic) in zip(cols, HEURISTICS.items()):
        result = heuristic(enriched)
        col.metric(f"Score {kind}", result.score)
        for suggestion in result.suggestions:
            col.caption(f"• {suggestion}")

    st.download_button(
        "Télécharger les attributs (JSON)",
        data=json.dumps(flatten_specifications(specs), ensure_ascii=False, indent=2).encode("utf-8"),
        file_name="attributes.json",
        mime="application/json",
    )


def render_seo_review(retailer_id: str) -> None:
    st.title("Optimisation SEO")
    products = retailer_products(retailer_id)
    if not products:
        st.warning("Aucun produit enrichi pour ce revendeur. Lancez ingest_products.py d'abord.")
        return

    rows = [analyze_seo_product(product) for product in products]
    stats = seo_stats(rows)
    cols = st.columns(4)
    cols[0].metric("Produits", stats["total_products"])
    cols[1].metric("Score moyen", stats["avg_score"])
    cols[2].metric("SEO correct", stats["good_seo"])
    cols[3].metric("À retravailler", stats["needs_work"])

    df = pd.DataFrame(rows)
    df["missing_keywords"] = df["missing_keywords"].apply(", ".join)
    df["optimization_suggestions"] = df["optimization_suggestions"].apply(" | ".join)
    st.dataframe(
        df[["product_id", "seo_title", "seo_score", "current_title_length", "current_description_length", "missing_keywords", "optimization_suggestions"]],
        use_container_width=True,
    )

    if st.button("Optimiser les produits sous le seuil", use_container_width=True):
        optimized = optimize_catalog_seo(products)
        changed = [
            doc for doc, before in zip(optimized, products)
            if doc.get("seo_title") != before.get("seo_title")
        ]
        if changed:
            product_store.bulk_upsert_enriched_products(changed)
            retailer_products.clear()
        st.success(f"{len(changed)} produits optimisés.")


def render_attribute_dashboard(retailer_id: str) -> None:
    st.title("Couverture des attributs")
    products = retailer_products(retailer_id)
    categories = sorted({str(product.get("category")) for product in products if product.get("category")})
    if not categories:
        st.warning("Aucun produit indexé pour calculer la couverture des attributs.")
        return
    category = st.selectbox("Catégorie", categories, index=0)
    attribute_labels = {field: label for field, label in ATTRIBUTE_FIELDS}
    selected_attribute = st.selectbox(
        "Attribut à analyser", [field for field, _ in ATTRIBUTE_FIELDS], format_func=lambda f: attribute_labels[f]
    )

    coverage_rows = []
    for field, label in ATTRIBUTE_FIELDS:
        coverage = next(
            (row for row in coverage_for_attribute(retailer_id, field) if row["category"] == category), None
        )
        coverage_rows.append({"attribute": label, "coverage": coverage["coverage_ratio"] if coverage else 0})
    st.subheader("Couverture par attribut")
    st.bar_chart(pd.DataFrame(coverage_rows).set_index("attribute"))

    st.subheader("Produits à compléter")
    missing = aa.missing_attribute_fix_list(retailer_id, selected_attribute, category, size=200)
    df = pd.DataFrame(missing)
    if df.empty:
        st.success("Tous les produits de la catégorie ont cet attribut.")
        return
    st.dataframe(
        df[[col for col in ["product_id", "title", "brand", "price"] if col in df.columns]],
        use_container_width=True,
    )
    st.download_button(
        "Exporter la liste (CSV)",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name="attribute_fix_list.csv",
        mime="text/csv",
    )


def main() -> None:
    retailer_id = st.sidebar.text_input("Revendeur", value="demo-retailer")
    page = st.sidebar.radio(
        "Navigation",
        (
            "Extraction",
            "SEO",
            "Couverture attributs",
        ),
    )
    if page == "Extraction":
        render_playground()
    elif page == "SEO":
        render_seo_review(retailer_id)
    else:
        render_attribute_dashboard(retailer_id)


if __name__ == "__main__":
    main()
