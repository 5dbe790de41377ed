from seo_content import (
    AD_DESCRIPTION_MAX,
    AD_HEADLINE_MAX,
    SEO_DESCRIPTION_MAX,
    SEO_TITLE_MAX,
    detect_promotion,
    generate_handle,
    generate_optimized_description,
    generate_optimized_title,
    generate_seo_content,
)


def test_detect_promotion():
    assert detect_promotion(80, 100) == {
        "has_promotion": True,
        "discount_percentage": 20,
        "savings_amount": 20,
        "promotion_text": "PROMO -20% ! Économisez 20€",
    }
    assert detect_promotion(100, None)["has_promotion"] is False
    assert detect_promotion(100, 90)["discount_percentage"] == 0


def test_generate_seo_content_with_promotion():
    content = generate_seo_content(
        {
            "title": "Canapé ALYANA",
            "category": "Canapé",
            "color": "beige",
            "material": "velours",
            "brand": "Decora Home",
            "price": 80,
            "compare_at_price": 100,
        }
    )

    assert content["seo_title"] == "Canapé ALYANA beige en velours -20% - Decora Home"
    assert content["ad_headline"] == "Canapé ALYANA -20%"
    assert "PROMO -20%" in content["ad_description"]
    assert "Livraison gratuite" in content["seo_description"]
    assert content["tags"] == ["canapé", "beige", "velours", "promotion", "promo", "livraison gratuite"]


def test_generated_copy_respects_length_budgets():
    long_title = "Canapé d'angle convertible panoramique " * 5
    content = generate_seo_content({"title": long_title, "color": "gris", "material": "tissu"})

    assert len(content["seo_title"]) <= SEO_TITLE_MAX
    assert len(content["seo_description"]) <= SEO_DESCRIPTION_MAX
    assert len(content["ad_headline"]) <= AD_HEADLINE_MAX
    assert len(content["ad_description"]) <= AD_DESCRIPTION_MAX
    assert content["ad_description"].endswith("Qualité premium !") or len(content["ad_description"]) == AD_DESCRIPTION_MAX


def test_optimized_title_and_description_skip_missing_parts():
    product = {"title": "Chaise", "color": "noir", "material": "chêne", "brand": "Maison Lune"}

    assert generate_optimized_title(product) == "Chaise noir chêne Maison Lune"
    assert generate_optimized_description(product) == (
        "Chaise. en noir. chêne. Livraison gratuite. Garantie 2 ans"
    )


def test_optimized_title_falls_back_to_default_brand():
    assert generate_optimized_title({"title": "Chaise"}) == "Chaise Decora Home"


def test_generate_handle_strips_accents_and_punctuation():
    assert generate_handle("Canapé d'angle Convertible") == "canape-dangle-convertible"
    assert generate_handle("  Table -- basse  ") == "table-basse"
    assert len(generate_handle("x" * 300)) == 100
    assert generate_handle("") == ""
