"""
Command-line interface.

Usage:
  anomalydiff verify --config anomalydiff.yaml
  anomalydiff patch --baseline schema.txt --diff regions.yaml
"""

from __future__ import annotations

import argparse
import sys

from .config import AnomalyDiffConfig
from .pipeline import patch_file, run_from_config


def main() -> None:
    parser = argparse.ArgumentParser(prog="anomalydiff", description="Replay schema diffs and verify anomaly records.")
    sub = parser.add_subparsers(dest="cmd", required=True)

    verify_p = sub.add_parser("verify", help="Verify reported anomalies against expectations from a YAML config.")
    verify_p.add_argument("--config", required=True, help="Path to YAML config file.")

    patch_p = sub.add_parser("patch", help="Apply diff regions to a baseline text file and print the result.")
    patch_p.add_argument("--baseline", required=True, help="Baseline text file (one line per line).")
    patch_p.add_argument("--diff", required=True, help="YAML list of diff regions.")

    args = parser.parse_args()

    if args.cmd == "verify":
        cfg = AnomalyDiffConfig.from_yaml(args.config)
        result = run_from_config(cfg)
        if not result.ok:
            sys.exit(1)
    elif args.cmd == "patch":
        for line in patch_file(args.baseline, args.diff):
            print(line)
