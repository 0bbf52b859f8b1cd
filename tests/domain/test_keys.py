from __future__ import annotations

from libra2dspace.domain.import_pipeline.keys import key_from, normalize_value, squish


def test_squish_collapses_whitespace() -> None:
    assert squish("  Jane \n  Doe ") == "Jane Doe"
    assert squish("   ") is None
    assert squish(None) is None


def test_normalize_value_cleans_export_artifacts() -> None:
    assert normalize_value("Arts \\u0026 Sciences.") == "Arts & Sciences"
    assert normalize_value("Physics;,") == "Physics"
    assert normalize_value(" . ") is None


def test_key_from_is_case_and_space_insensitive() -> None:
    assert key_from("Computer  Science") == key_from("computer science") == "computer_science"


def test_key_from_joins_parts_and_skips_blanks() -> None:
    assert key_from("Doe", None, "Jane") == "doe+jane"
    assert key_from(None, "") is None


def test_key_from_escapes_characters_unsafe_in_directory_names() -> None:
    key = key_from("R&D/Labs", "Über")

    assert key is not None
    assert "/" not in key
    assert key.count("+") == 1
    assert key.startswith("r%26d%2Flabs+")


def test_key_from_strips_trailing_separators() -> None:
    assert key_from("Doe_") == "doe"
