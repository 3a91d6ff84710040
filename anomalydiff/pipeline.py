"""
High-level pipeline:
- load baseline schema, reported anomalies and expectations from YAML
- verify
- print violations
- optionally write a PDF report
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import yaml

from .config import AnomalyDiffConfig
from .models import AnomalyInfo, Anomalies, DiffRegion, ExpectedAnomalyInfo, Schema
from .patch import reconstruct
from .records import load_record
from .report import save_verification_report_pdf
from .utils import split_lines
from .verify import VerificationResult, verify_anomalies


def load_expected(path: str | Path) -> Dict[str, ExpectedAnomalyInfo]:
    """
    Read expectations from a YAML mapping:

        <name>:
          expected_info_without_diff: {...}
          expected_new_schema: {...}
    """
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of anomaly name to expectation")

    expected: Dict[str, ExpectedAnomalyInfo] = {}
    for name, entry in data.items():
        entry = entry or {}
        expected[str(name)] = ExpectedAnomalyInfo(
            expected_info_without_diff=AnomalyInfo.model_validate(entry.get("expected_info_without_diff") or {}),
            expected_new_schema=Schema.model_validate(entry.get("expected_new_schema") or {}),
        )
    return expected


def load_diff_regions(path: str | Path) -> List[DiffRegion]:
    """Read a YAML list of diff regions."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or []
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of diff regions")
    return [DiffRegion.model_validate(item) for item in data]


def patch_file(baseline_path: str | Path, diff_path: str | Path) -> List[str]:
    """Replay the regions in diff_path against the lines of baseline_path."""
    baseline = split_lines(Path(baseline_path).read_text(encoding="utf-8"))
    return reconstruct(baseline, load_diff_regions(diff_path))


def run_from_config(cfg: AnomalyDiffConfig) -> VerificationResult:
    """Run the verification described by cfg and return its result."""
    verbose = cfg.runtime.verbose

    if verbose:
        print(f"[INFO] Loading baseline schema: {cfg.fixtures.baseline_schema}")
    old_schema = load_record(cfg.fixtures.baseline_schema, Schema)

    if verbose:
        print(f"[INFO] Loading anomalies: {cfg.fixtures.anomalies}")
    actual = load_record(cfg.fixtures.anomalies, Anomalies)

    if verbose:
        print(f"[INFO] Loading expectations: {cfg.fixtures.expected}")
    expected = load_expected(cfg.fixtures.expected)

    if verbose:
        print(f"[INFO] Anomalies: reported={len(actual.anomaly_info)} expected={len(expected)}")

    result = verify_anomalies(actual, old_schema, expected)

    if verbose:
        for v in result.violations:
            print(f"[FAIL] {v.describe()}")

    if cfg.report.pdf_path:
        out_dir = Path(cfg.report.pdf_path).parent
        out_dir.mkdir(parents=True, exist_ok=True)
        save_verification_report_pdf(
            result,
            cfg.report.pdf_path,
            title=cfg.report.title,
            truncate_chars=cfg.report.truncate_chars,
        )
        if verbose:
            print(f"[INFO] Report PDF: {cfg.report.pdf_path}")

    if verbose:
        status = "OK" if result.ok else f"{len(result.violations)} violation(s)"
        print(f"[DONE] Verification: {status}")

    return result
