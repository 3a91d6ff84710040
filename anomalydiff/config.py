"""
YAML-driven configuration for anomalydiff.

Fixture paths are taken as written (relative paths resolve against the
current working directory).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


class FixtureConfig(BaseModel):
    baseline_schema: str
    anomalies: str
    expected: str


class ReportConfig(BaseModel):
    title: str = "Anomaly Verification Report"
    truncate_chars: int = 4000
    pdf_path: Optional[str] = None


class RuntimeConfig(BaseModel):
    verbose: bool = True


class AnomalyDiffConfig(BaseModel):
    fixtures: FixtureConfig
    report: ReportConfig = Field(default_factory=ReportConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "AnomalyDiffConfig":
        path = Path(path)
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        return cls.model_validate(data)
