"""
Canonical text form of structured records.

Every structural comparison in this package goes through here:
two records are equal iff their canonical YAML texts are equal.
"""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import List, Sequence, Type, TypeVar

import yaml
from pydantic import BaseModel, ValidationError

from .utils import join_lines, split_lines

M = TypeVar("M", bound=BaseModel)


class RecordParseError(ValueError):
    """A text document could not be turned back into a record."""


def to_text(record: BaseModel) -> str:
    """
    Canonical YAML: sorted keys, block style, None/default fields omitted.
    An empty record is the empty document (zero lines).
    """
    data = record.model_dump(mode="json", exclude_none=True, exclude_defaults=True)
    if not data:
        return ""
    return yaml.safe_dump(data, sort_keys=True, default_flow_style=False, allow_unicode=True)


def to_lines(record: BaseModel) -> List[str]:
    return split_lines(to_text(record))


def from_text(text: str, model: Type[M]) -> M:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RecordParseError(f"Invalid YAML for {model.__name__}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise RecordParseError(
            f"Expected a mapping for {model.__name__}, got {type(data).__name__}"
        )

    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RecordParseError(f"Invalid {model.__name__}: {e}") from e


def from_lines(lines: Sequence[str], model: Type[M]) -> M:
    return from_text(join_lines(lines), model)


def records_equal(a: BaseModel, b: BaseModel) -> bool:
    return to_text(a) == to_text(b)


def clear_field(record: M, name: str) -> M:
    """Return a copy of record with field `name` reset to its default."""
    fields = type(record).model_fields
    if name not in fields:
        raise ValueError(f"{type(record).__name__} has no field '{name}'")
    default = fields[name].get_default(call_default_factory=True)
    return record.model_copy(update={name: default})


def text_diff(expected: str, actual: str) -> str:
    """Unified diff from expected to actual, for failure messages."""
    return "\n".join(
        difflib.unified_diff(
            expected.splitlines(),
            actual.splitlines(),
            fromfile="expected",
            tofile="actual",
            lineterm="",
        )
    )


def load_record(path: str | Path, model: Type[M]) -> M:
    path = Path(path)
    return from_text(path.read_text(encoding="utf-8"), model)
