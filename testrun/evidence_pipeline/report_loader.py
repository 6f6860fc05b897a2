"""Load test-run reports from disk."""

import json
from pathlib import Path

from testrun.evidence_pipeline.errors import MalformedReportError
from testrun.evidence_pipeline.models.report import TestRunReport
from testrun.evidence_pipeline.walker import parse_report


def load_report(report_path: Path) -> TestRunReport:
    """Load and validate a JSON reporter document.

    Args:
        report_path: Path to the report file (e.g. test-results.json)

    Returns:
        Parsed report

    Raises:
        FileNotFoundError: If the report doesn't exist
        MalformedReportError: If the file isn't JSON or doesn't match the schema

    """
    if not report_path.exists():
        raise FileNotFoundError(f"Report file not found: {report_path}")

    try:
        with report_path.open(encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise MalformedReportError(f"Invalid JSON in {report_path}: {e}") from e

    if not isinstance(data, dict):
        raise MalformedReportError(f"Report root is not an object: {report_path}")

    return parse_report(data)
