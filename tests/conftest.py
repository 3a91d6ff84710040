from __future__ import annotations

from difflib import SequenceMatcher
from typing import List

import pytest

from anomalydiff.models import (
    Added,
    AnomalyInfo,
    AnomalyReason,
    Changed,
    DiffRegion,
    ExpectedAnomalyInfo,
    Feature,
    Hidden,
    Removed,
    Schema,
)
from anomalydiff.records import to_lines


def make_diff(old_lines: List[str], new_lines: List[str]) -> List[DiffRegion]:
    """Build diff regions the way an anomaly producer would (equal spans hidden)."""
    regions: List[DiffRegion] = []
    sm = SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    for tag, i1, i2, j1, j2 in sm.get_opcodes():
        if tag == "equal":
            regions.append(DiffRegion(hidden=Hidden(left_start=i1 + 1, size=i2 - i1)))
        elif tag == "insert":
            regions.append(DiffRegion(added=Added(contents=new_lines[j1:j2])))
        elif tag == "delete":
            regions.append(DiffRegion(removed=Removed(contents=old_lines[i1:i2])))
        else:
            regions.append(
                DiffRegion(changed=Changed(left_contents=old_lines[i1:i2], right_contents=new_lines[j1:j2]))
            )
    return regions


def schema_diff(old: Schema, new: Schema) -> List[DiffRegion]:
    return make_diff(to_lines(old), to_lines(new))


@pytest.fixture
def diff_schemas():
    """Diff builder for two schemas, as regions over their canonical lines."""
    return schema_diff


@pytest.fixture
def old_schema() -> Schema:
    return Schema(
        feature=[
            Feature(name="a", type="INT"),
            Feature(name="b", type="BYTES"),
            Feature(name="c", type="FLOAT"),
        ]
    )


@pytest.fixture
def b_new_schema() -> Schema:
    return Schema(
        feature=[
            Feature(name="a", type="INT"),
            Feature(name="b", type="STRING"),
            Feature(name="c", type="FLOAT"),
        ]
    )


@pytest.fixture
def b_info_without_diff() -> AnomalyInfo:
    return AnomalyInfo(
        description="Examples contain values that are not valid for the declared type.",
        severity="ERROR",
        short_description="Unexpected string values",
        reason=[
            AnomalyReason(
                type="ENUM_TYPE_UNEXPECTED_STRING_VALUES",
                short_description="Unexpected string values",
                description="Examples contain values missing from the schema.",
            )
        ],
        path=["b"],
    )


@pytest.fixture
def b_info(old_schema, b_new_schema, b_info_without_diff) -> AnomalyInfo:
    return b_info_without_diff.model_copy(update={"diff_regions": schema_diff(old_schema, b_new_schema)})


@pytest.fixture
def b_expected(b_new_schema, b_info_without_diff) -> ExpectedAnomalyInfo:
    return ExpectedAnomalyInfo(
        expected_info_without_diff=b_info_without_diff,
        expected_new_schema=b_new_schema,
    )


@pytest.fixture
def c_info(old_schema) -> AnomalyInfo:
    new = Schema(feature=[f for f in old_schema.feature if f.name != "c"])
    return AnomalyInfo(
        description="Column dropped",
        severity="WARNING",
        short_description="Column dropped",
        path=["c"],
        diff_regions=schema_diff(old_schema, new),
    )
