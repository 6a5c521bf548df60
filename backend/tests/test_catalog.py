from app.services.catalog import BASE_EXERCISES, all_exercise_names, build_catalog

def test_base_catalog_untouched():
    catalog = build_catalog()
    assert catalog == BASE_EXERCISES
    catalog["chest"].append("Dips")
    assert "Dips" not in BASE_EXERCISES["chest"]

def test_custom_merged_without_duplicates():
    catalog = build_catalog([("chest", "Cable Fly"), ("chest", "Bench Press"), ("forearms", "Wrist Curl")])
    assert catalog["chest"] == ["Bench Press", "Pec Fly", "Chest Press", "Cable Fly"]
    assert catalog["forearms"] == ["Wrist Curl"]
    assert list(catalog)[-1] == "forearms"

def test_all_exercise_names_dedup_in_order():
    names = all_exercise_names({"a": ["X", "Y"], "b": ["Y", "Z"]})
    assert names == ["X", "Y", "Z"]
