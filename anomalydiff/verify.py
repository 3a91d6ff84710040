"""
Anomaly verification: compare reported anomalies against expectations.

All mismatches are collected into a VerificationResult rather than stopping
at the first one. Malformed diff regions are not mismatches: DiffRegionError
from the replay propagates to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Type

from .models import AnomalyInfo, Anomalies, ExpectedAnomalyInfo, Schema
from .patch import patch_record, reconstruct
from .records import RecordParseError, clear_field, records_equal, text_diff, to_lines, to_text
from .utils import indent_block, join_lines


@dataclass
class Violation:
    """One labeled verification failure."""
    label: str
    message: str
    expected: str = ""
    actual: str = ""

    @property
    def kind(self) -> str:
        return type(self).__name__

    def describe(self) -> str:
        parts = [f"[{self.kind}] {self.label}: {self.message}"]
        if self.expected or self.actual:
            diff = text_diff(self.expected, self.actual)
            if diff:
                parts.append("  diff:\n" + indent_block(diff))
            else:
                parts.append("  expected:\n" + indent_block(self.expected))
                parts.append("  actual:\n" + indent_block(self.actual))
        return "\n".join(parts)


@dataclass
class BaselineMismatch(Violation):
    pass


@dataclass
class MissingAnomaly(Violation):
    name: str = ""


@dataclass
class UnexpectedAnomaly(Violation):
    name: str = ""
    record: str = ""
    new_schema: Optional[str] = None

    def describe(self) -> str:
        parts = [f"[{self.kind}] {self.label}: {self.message}", "  record:\n" + indent_block(self.record)]
        if self.new_schema is not None:
            parts.append("  new schema:\n" + indent_block(self.new_schema))
        return "\n".join(parts)


@dataclass
class SchemaReconstructionMismatch(Violation):
    pass


@dataclass
class RecordFieldMismatch(Violation):
    pass


class AnomalyVerificationError(AssertionError):
    """Raised by VerificationResult.raise_if_failed; lists every violation."""

    def __init__(self, violations: List[Violation]):
        self.violations = list(violations)
        body = "\n\n".join(v.describe() for v in self.violations)
        super().__init__(f"{len(self.violations)} anomaly verification failure(s):\n\n{body}")


@dataclass
class VerificationResult:
    violations: List[Violation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.violations

    def of_kind(self, kind: Type[Violation]) -> List[Violation]:
        return [v for v in self.violations if isinstance(v, kind)]

    def add(self, violation: Violation) -> None:
        self.violations.append(violation)

    def extend(self, violations: List[Violation]) -> None:
        self.violations.extend(violations)

    def raise_if_failed(self) -> None:
        if self.violations:
            raise AnomalyVerificationError(self.violations)


def _new_schema_text(baseline: Schema, info: AnomalyInfo) -> str:
    """Reconstructed schema text for diagnostics; raw lines if it doesn't parse."""
    try:
        return to_text(patch_record(baseline, info.diff_regions))
    except RecordParseError:
        return join_lines(reconstruct(to_lines(baseline), info.diff_regions))


def verify_anomaly_info(
    actual: AnomalyInfo,
    baseline: Schema,
    expected: ExpectedAnomalyInfo,
    label: str,
) -> List[Violation]:
    """Check one anomaly record: its diff's new schema, then its other fields."""
    violations: List[Violation] = []

    if actual.diff_regions:
        expected_schema = to_text(expected.expected_new_schema)
        try:
            new_schema = patch_record(baseline, actual.diff_regions)
        except RecordParseError as e:
            raw = join_lines(reconstruct(to_lines(baseline), actual.diff_regions))
            violations.append(
                SchemaReconstructionMismatch(
                    label=label,
                    message=f"reconstructed schema does not parse: {e}",
                    expected=expected_schema,
                    actual=raw,
                )
            )
        else:
            if not records_equal(new_schema, expected.expected_new_schema):
                violations.append(
                    SchemaReconstructionMismatch(
                        label=label,
                        message="diff applied to baseline does not give the expected new schema",
                        expected=expected_schema,
                        actual=to_text(new_schema),
                    )
                )

    without_diff = clear_field(actual, "diff_regions")
    if not records_equal(without_diff, expected.expected_info_without_diff):
        violations.append(
            RecordFieldMismatch(
                label=label,
                message="anomaly fields differ from expected",
                expected=to_text(expected.expected_info_without_diff),
                actual=to_text(without_diff),
            )
        )

    return violations


def verify_anomalies(
    actual: Anomalies,
    old_schema: Schema,
    expected: Mapping[str, ExpectedAnomalyInfo],
) -> VerificationResult:
    """
    Check that actual.baseline is old_schema, that every expected anomaly was
    reported and matches, and that nothing else was reported.
    """
    result = VerificationResult()

    if not records_equal(actual.baseline, old_schema):
        result.add(
            BaselineMismatch(
                label="baseline",
                message="anomalies were computed against a different baseline schema",
                expected=to_text(old_schema),
                actual=to_text(actual.baseline),
            )
        )

    for name, exp in expected.items():
        info = actual.anomaly_info.get(name)
        if info is None:
            result.add(
                MissingAnomaly(
                    label=f"column: {name}",
                    message=f"expected anomaly for '{name}' not found "
                            f"(reported: {sorted(actual.anomaly_info) or 'none'})",
                    name=name,
                )
            )
            continue
        result.extend(verify_anomaly_info(info, old_schema, exp, f"column: {name}"))

    for name, info in actual.anomaly_info.items():
        if name in expected:
            continue
        new_schema = _new_schema_text(old_schema, info) if info.diff_regions else None
        result.add(
            UnexpectedAnomaly(
                label=f"column: {name}",
                message=f"unexpected anomaly '{name}'",
                name=name,
                record=to_text(clear_field(info, "diff_regions")),
                new_schema=new_schema,
            )
        )

    return result


def assert_anomalies(
    actual: Anomalies,
    old_schema: Schema,
    expected: Dict[str, ExpectedAnomalyInfo],
) -> None:
    """Test helper: verify and raise AnomalyVerificationError on any failure."""
    verify_anomalies(actual, old_schema, expected).raise_if_failed()
