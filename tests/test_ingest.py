import pytest

from pantry.ingest import (
    PROSE,
    STRUCTURED,
    RowSchemaError,
    detect_schema,
    normalize_row,
    normalize_rows,
)

from conftest import PROSE_ROWS, STRUCTURED_ROWS


def test_detect_schema_by_field_presence():
    assert detect_schema(STRUCTURED_ROWS[0]) == STRUCTURED
    assert detect_schema(PROSE_ROWS[0]) == PROSE
    assert detect_schema({"Name": "Toast", "ingredients": "bread"}) == PROSE
    # an empty recipe_name column (mixed CSV) does not make a row prose
    assert detect_schema({"recipe_name": "", "name": "x", "id": "1"}) == STRUCTURED


def test_detect_schema_rejects_non_mapping():
    with pytest.raises(RowSchemaError):
        detect_schema(["not", "a", "row"])


def test_structured_row():
    r = normalize_row(STRUCTURED_ROWS[0], fallback_id=1)
    assert r.id == 101
    assert r.name == "chicken rice bowl"
    assert r.minutes == 25
    assert r.ingredients == ("chicken breast", "rice", "salt")
    assert r.n_ingredients == 3
    assert r.steps == ("cook rice", "grill chicken")
    assert r.tags == ("30-minutes-or-less", "main-dish")
    assert r.nutrition == (410.2, 12.0, 3.0)
    assert r.source_schema == STRUCTURED


def test_structured_counts_are_derived():
    row = dict(STRUCTURED_ROWS[0], n_ingredients="9", n_steps="0")
    r = normalize_row(row, fallback_id=1)
    assert r.n_ingredients == 3
    assert r.n_steps == 2


def test_structured_bad_numbers_default():
    row = dict(STRUCTURED_ROWS[0], id="abc", minutes="soon")
    r = normalize_row(row, fallback_id=7)
    assert r.id == 7
    assert r.minutes == 0


def test_prose_row():
    r = normalize_row(PROSE_ROWS[0], fallback_id=3)
    assert r.id == 3
    assert r.name == "Garlic Soup"
    assert r.minutes == 90
    assert r.ingredients == ("onion", "garlic (2 cloves, minced)", "salt")
    assert r.steps == ("Peel the garlic", "Simmer everything", "Serve hot")
    assert r.tags == ()
    assert r.source_schema == PROSE


def test_prose_alternate_columns():
    row = {"Name": "Toast", "Total Time": "5 mins", "ingredients": "bread, butter",
           "Directions": "Toast the bread."}
    r = normalize_row(row, fallback_id=1)
    assert r.name == "Toast"
    assert r.minutes == 5
    assert r.steps == ("Toast the bread",)


def test_rows_without_ingredients_or_name_are_dropped():
    assert normalize_row(PROSE_ROWS[1], fallback_id=1) is None
    assert normalize_row(dict(STRUCTURED_ROWS[0], name=""), fallback_id=1) is None
    assert normalize_row(dict(STRUCTURED_ROWS[0], ingredients="[]"), fallback_id=1) is None


def test_fallback_ids_follow_kept_rows():
    rows = [
        {"recipe_name": "A", "ingredients": "x"},
        {"recipe_name": "B", "ingredients": ""},  # dropped
        {"recipe_name": "C", "ingredients": "y"},
    ]
    recipes = normalize_rows(rows)
    assert [(r.name, r.id) for r in recipes] == [("A", 1), ("C", 2)]


def test_malformed_row_is_skipped(caplog):
    rows = [STRUCTURED_ROWS[0], None, STRUCTURED_ROWS[1]]
    recipes = normalize_rows(rows)
    assert [r.id for r in recipes] == [101, 102]
    assert "Skipping malformed row 2" in caplog.text


def test_fallback_id_skips_ids_taken_by_source_rows():
    # structured row claims id 2 before the prose row falls back to position 2
    rows = [
        {"recipe_name": "", "id": "2", "name": "Structured", "ingredients": "['rice']"},
        {"recipe_name": "Prose", "id": "", "name": "", "ingredients": "beans"},
    ]
    recipes = normalize_rows(rows)
    assert [(r.name, r.id) for r in recipes] == [("Structured", 2), ("Prose", 3)]


def test_repeated_source_id_is_renumbered(caplog):
    rows = [STRUCTURED_ROWS[0], dict(STRUCTURED_ROWS[1], id="101")]
    recipes = normalize_rows(rows)
    assert [(r.name, r.id) for r in recipes] == [
        ("chicken rice bowl", 101),
        ("peanut noodles", 2),
    ]
    assert "repeats id 101" in caplog.text
