"""
Data models: schemas, anomaly records with their diff regions, and expectations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Unchanged(BaseModel):
    """Lines present on both sides."""
    contents: List[str] = Field(default_factory=list)
    left_start: Optional[int] = None
    right_start: Optional[int] = None


class Added(BaseModel):
    """Lines only present on the new side."""
    contents: List[str] = Field(default_factory=list)
    right_start: Optional[int] = None


class Removed(BaseModel):
    """Lines dropped from the baseline. Contributes nothing to the new side."""
    contents: List[str] = Field(default_factory=list)
    left_start: Optional[int] = None


class Changed(BaseModel):
    """Lines replaced; only right_contents end up on the new side."""
    left_contents: List[str] = Field(default_factory=list)
    right_contents: List[str] = Field(default_factory=list)
    left_start: Optional[int] = None
    right_start: Optional[int] = None


class Hidden(BaseModel):
    """
    Back-reference to `size` baseline lines starting at 1-based `left_start`.
    Bounds are checked at replay time, not here.
    """
    left_start: int
    size: int
    right_start: Optional[int] = None


DIFF_VARIANTS: Dict[str, type] = {
    "unchanged": Unchanged,
    "added": Added,
    "removed": Removed,
    "changed": Changed,
    "hidden": Hidden,
}


class DiffRegion(BaseModel):
    """
    One region of a diff. Exactly one variant field should be set.

    Unknown keys are kept (extra="allow") so that a variant this package does
    not know about shows up in diagnostics instead of being dropped.
    """
    model_config = ConfigDict(extra="allow")

    unchanged: Optional[Unchanged] = None
    added: Optional[Added] = None
    removed: Optional[Removed] = None
    changed: Optional[Changed] = None
    hidden: Optional[Hidden] = None

    @classmethod
    def of(cls, details: BaseModel) -> "DiffRegion":
        for name, variant in DIFF_VARIANTS.items():
            if isinstance(details, variant):
                return cls(**{name: details})
        raise TypeError(f"Not a diff region variant: {type(details).__name__}")

    def populated(self) -> List[Tuple[str, object]]:
        """All set variants, known ones first, then unrecognized extras."""
        out: List[Tuple[str, object]] = [
            (name, getattr(self, name)) for name in DIFF_VARIANTS if getattr(self, name) is not None
        ]
        for name, value in (self.model_extra or {}).items():
            if value is not None:
                out.append((name, value))
        return out


class Feature(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    type: Optional[str] = None


class Schema(BaseModel):
    """Opaque schema record. Only its canonical text form matters here."""
    model_config = ConfigDict(extra="allow")

    feature: List[Feature] = Field(default_factory=list)


class AnomalyReason(BaseModel):
    type: str = "UNKNOWN_TYPE"
    short_description: str = ""
    description: str = ""


class AnomalyInfo(BaseModel):
    """A reported anomaly plus the schema diff that would resolve it."""
    model_config = ConfigDict(extra="allow")

    description: str = ""
    severity: str = "UNKNOWN"
    short_description: str = ""
    reason: List[AnomalyReason] = Field(default_factory=list)
    path: List[str] = Field(default_factory=list)
    diff_regions: List[DiffRegion] = Field(default_factory=list)


class Anomalies(BaseModel):
    """Anomalies found against one baseline schema, keyed by name."""
    baseline: Schema = Field(default_factory=Schema)
    anomaly_info: Dict[str, AnomalyInfo] = Field(default_factory=dict)


@dataclass
class ExpectedAnomalyInfo:
    """
    What a test expects for one anomaly:
    the record with diff_regions stripped, and the schema its diff produces.
    """
    expected_info_without_diff: AnomalyInfo
    expected_new_schema: Schema
