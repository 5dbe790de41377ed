import pytest

from attribute_extraction import (
    build_specifications,
    extract_capacity,
    extract_care_instructions,
    extract_category_specs,
    extract_colors,
    extract_density,
    extract_dimensions,
    extract_materials,
    extract_origin,
    extract_specifications,
    extract_style,
    extract_warranty,
    extract_weight,
    flatten_specifications,
)


def test_combined_dimensions_fill_three_axes():
    assert extract_dimensions("canapé 200x100x75 cm") == {
        "longueur": 200,
        "largeur": 100,
        "hauteur": 75,
        "unit": "cm",
    }


def test_pair_inside_triple_is_not_reapplied():
    dims = extract_dimensions("table 200 x 100 x 75 cm")

    assert dims["longueur"] == 200
    assert dims["largeur"] == 100
    assert dims["hauteur"] == 75


@pytest.mark.parametrize(
    "text, axis, expected",
    [
        ("hauteur 2 m", "hauteur", 200),
        ("Hauteur: 1.2 m", "hauteur", 120),
        ("largeur 850 mm", "largeur", 85),
        ("profondeur : 60,5 cm", "profondeur", 60.5),
        ("diamètre 90 cm", "diametre", 90),
        ("Width: 30 in", "largeur", 76.2),
        ("length 2 ft", "longueur", 60.96),
    ],
)
def test_labelled_axes_are_normalized_to_centimetres(text, axis, expected):
    dims = extract_dimensions(text)

    assert dims[axis] == pytest.approx(expected)
    assert dims["unit"] == "cm"


def test_combined_form_overrides_labelled_axis():
    dims = extract_dimensions("longueur 210 cm. dimensions 200x100x75 cm")

    assert dims["longueur"] == 200


def test_dimensions_absent_without_numbers():
    assert extract_dimensions("canapé confortable") is None


def test_materials_follow_table_order_and_respect_word_boundaries():
    assert extract_materials("table en chêne massif et pieds en acier") == ["chêne", "acier"]
    assert extract_materials("matelas ferme") == []


def test_colors_do_not_fire_inside_longer_words():
    assert extract_colors("canapé convertible") == []
    assert extract_colors("canapé convertible vert") == ["vert"]
    assert extract_colors("chaises blanches et noires") == ["blanc", "noir"]


def test_weight_is_normalized_to_kilograms():
    assert extract_weight("Poids: 500 g") == {"value": 0.5, "unit": "kg"}
    assert extract_weight("weight 10 lbs") == {"value": 4.536, "unit": "kg"}
    assert extract_weight("pèse 45 kg") == {"value": 45, "unit": "kg"}
    assert extract_weight("très léger") is None


def test_density_is_normalized_to_kg_per_cubic_metre():
    assert extract_density("densité 1.2 g/cm3") == {"value": 1200, "unit": "kg/m³"}
    assert extract_density("Densité: 40 kg/m3") == {"value": 40, "unit": "kg/m³"}
    assert extract_density("mousse haute résilience") is None


def test_style_first_in_table_order_wins():
    assert extract_style("style scandinave et moderne") == "moderne"
    assert extract_style("esprit industriel ou vintage") == "vintage"
    assert extract_style("sans style particulier") is None


def test_capacity_groups_counts_and_omits_empty():
    assert extract_capacity("canapé 3 places avec 2 tiroirs") == {"seats": 3, "drawers": 2}
    assert extract_capacity("bibliothèque 5 étagères") == {"shelves": 5}
    assert extract_capacity("canapé") is None


def test_sofa_specs_for_open_convertible():
    specs = extract_category_specs("canapé convertible ouvert couchage 140 x 190", "Canapé")

    assert specs == {
        "canapeType": "convertible",
        "canapeState": "ouvert",
        "couchageSize": "140x190",
    }


def test_sofa_defaults_to_fixed_type():
    assert extract_category_specs("canapé droit en tissu", "canapé") == {"canapeType": "fixe"}


def test_mattress_density_fallback_from_firmness():
    specs = extract_category_specs("matelas mousse ferme", "matelas")

    assert specs["matelasType"] == "mousse"
    assert specs["ressort"] is False
    assert specs["fermete"] == "ferme"
    assert specs["defaultDensity"] == {"value": 45, "unit": "kg/m³"}


def test_mattress_fallback_without_firmness_uses_average_density():
    specs = extract_category_specs("matelas en mousse", "Matelas")

    assert specs["defaultDensity"] == {"value": 35, "unit": "kg/m³"}


def test_mattress_explicit_density_suppresses_fallback():
    specs = extract_category_specs(
        "matelas mousse mémoire de forme densité 50 kg/m3", "Matelas"
    )

    assert specs["mousseType"] == "mémoire de forme"
    assert "defaultDensity" not in specs
    assert "fermete" not in specs


def test_spring_mattress_has_no_default_density():
    specs = extract_category_specs("matelas ressorts ensachés très ferme", "Matelas")

    assert specs == {"matelasType": "ressort", "ressort": True, "fermete": "tres-ferme"}


def test_chair_specs():
    specs = extract_category_specs("fauteuil pivotant en velours", "Fauteuil")

    assert specs == {
        "chaiseType": "fauteuil",
        "accoudoirs": True,
        "pivotant": True,
        "reglableHauteur": False,
    }


def test_bed_specs():
    specs = extract_category_specs("lit double avec tête de lit", "Lit")

    assert specs == {"litType": "double", "teteDeLit": True, "cadreDeLit": False}


def test_category_specs_need_a_known_hint():
    assert extract_category_specs("canapé convertible", "") is None
    assert extract_category_specs("canapé convertible", "Décoration") is None


def test_care_origin_and_warranty():
    assert extract_care_instructions("nettoyage à sec uniquement") == ["nettoyage à sec"]
    assert extract_origin("Fabriqué en France.") == "France"
    assert extract_origin("sans mention") is None
    assert extract_warranty("Garantie 5 ans") == "5 ans"
    assert extract_warranty("warranty: 2 years") == "2 ans"
    assert extract_warranty("garantie 6 mois") == "6 mois"
    assert extract_warranty("garantie constructeur") is None


def test_empty_text_yields_empty_specifications():
    assert extract_specifications("", "", "") == {}
    assert build_specifications("", "", "Canapé") == {"categorySpecs": {"canapeType": "fixe"}}


def test_specifications_are_deterministic():
    args = ("Table basse en marbre blanc 120x60 cm, poids 30 kg", "Table Travertin", "Table")

    assert extract_specifications(*args) == extract_specifications(*args)


def test_alyana_sofa_end_to_end():
    specs = build_specifications(
        "Canapé ALYANA convertible 4 places velours côtelé beige",
        "Couchage 140x200 cm, coffre de rangement, garantie 2 ans",
        "Canapé",
    )

    assert "velours" in specs["materials"]
    assert "beige" in specs["colors"]
    assert specs["categorySpecs"]["canapeType"] == "convertible"
    assert specs["categorySpecs"]["couchageSize"] == "140x200"
    assert specs["warranty"] == "2 ans"
    assert specs["capacity"] == {"seats": 4}


def test_flatten_specifications_projects_attr_fields():
    specs = build_specifications(
        "Matelas mousse ferme",
        "Dimensions 140x190 cm. Fabriqué en France",
        "Matelas",
    )
    flat = flatten_specifications(specs)

    assert flat["attr_longueur_cm"] == 140
    assert flat["attr_largeur_cm"] == 190
    assert flat["attr_matelas_type"] == "mousse"
    assert flat["attr_default_density_kg_m3"] == 45
    assert flat["attr_origin"] == "france"
    assert all(key.startswith("attr_") for key in flat)
