from __future__ import annotations

import pytest

from anomalydiff.models import AnomalyInfo, DiffRegion, Feature, Hidden, Schema
from anomalydiff.records import (
    RecordParseError,
    clear_field,
    from_lines,
    from_text,
    load_record,
    records_equal,
    text_diff,
    to_lines,
    to_text,
)


def test_canonical_text_is_sorted_block_yaml(old_schema: Schema) -> None:
    assert to_lines(old_schema) == [
        "feature:",
        "- name: a",
        "  type: INT",
        "- name: b",
        "  type: BYTES",
        "- name: c",
        "  type: FLOAT",
    ]


def test_canonical_text_omits_defaults() -> None:
    info = AnomalyInfo(severity="ERROR")
    assert to_text(info) == "severity: ERROR\n"


def test_extra_keys_survive_round_trip() -> None:
    schema = Schema.model_validate({"feature": [{"name": "a", "presence": {"min_fraction": 1.0}}], "version": 3})
    again = from_lines(to_lines(schema), Schema)
    assert records_equal(schema, again)
    assert "version: 3" in to_lines(again)


def test_records_equal_ignores_construction_order() -> None:
    a = Feature(name="a", type="INT")
    b = Feature.model_validate({"type": "INT", "name": "a"})
    assert records_equal(a, b)
    assert not records_equal(a, Feature(name="a", type="FLOAT"))


def test_clear_field_returns_copy() -> None:
    info = AnomalyInfo(
        description="d",
        diff_regions=[DiffRegion(hidden=Hidden(left_start=1, size=1))],
    )
    cleared = clear_field(info, "diff_regions")
    assert cleared.diff_regions == []
    assert cleared.description == "d"
    assert len(info.diff_regions) == 1


def test_clear_unknown_field() -> None:
    with pytest.raises(ValueError, match="no field 'nope'"):
        clear_field(AnomalyInfo(), "nope")


def test_empty_record_is_empty_document() -> None:
    assert to_text(Schema()) == ""
    assert to_lines(Schema()) == []
    assert to_lines(AnomalyInfo()) == []
    assert from_lines(to_lines(Schema()), Schema) == Schema()


def test_empty_document_parses_as_empty_record() -> None:
    assert from_lines([], Schema) == Schema()


def test_non_mapping_document_is_rejected() -> None:
    with pytest.raises(RecordParseError, match="Expected a mapping"):
        from_text("- a\n- b\n", Schema)


def test_invalid_yaml_is_rejected() -> None:
    with pytest.raises(RecordParseError, match="Invalid YAML"):
        from_text("feature: [a, b\n", Schema)


def test_invalid_record_is_rejected() -> None:
    with pytest.raises(RecordParseError, match="Invalid Schema"):
        from_text("feature:\n- type: INT\n", Schema)


def test_text_diff_shows_changed_lines() -> None:
    diff = text_diff("a\nb\n", "a\nc\n")
    assert "--- expected" in diff
    assert "+++ actual" in diff
    assert "-b" in diff
    assert "+c" in diff
    assert text_diff("same\n", "same\n") == ""


def test_load_record(tmp_path, old_schema: Schema) -> None:
    path = tmp_path / "schema.yaml"
    path.write_text(to_text(old_schema), encoding="utf-8")
    assert records_equal(load_record(path, Schema), old_schema)
