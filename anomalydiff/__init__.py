"""
anomalydiff: replay schema diff regions and verify anomaly records.
"""

from .models import (
    Added,
    AnomalyInfo,
    Anomalies,
    Changed,
    DiffRegion,
    ExpectedAnomalyInfo,
    Hidden,
    Removed,
    Schema,
    Unchanged,
)
from .patch import DiffRegionError, patch_record, reconstruct
from .verify import (
    AnomalyVerificationError,
    VerificationResult,
    assert_anomalies,
    verify_anomalies,
    verify_anomaly_info,
)

__version__ = "0.1.0"
