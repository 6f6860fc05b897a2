"""Flatten a test-run report into per-attempt outcomes."""

from collections.abc import Iterator, Mapping
from pathlib import Path

from pydantic import ValidationError

from testrun.evidence_pipeline.errors import MalformedReportError
from testrun.evidence_pipeline.models.outcome import (
    FileReference,
    InlineBytes,
    RawAttachment,
    TestOutcome,
)
from testrun.evidence_pipeline.models.report import (
    ReportAttachment,
    ReportSuite,
    ReportTestResult,
    TestRunReport,
)


def parse_report(data: Mapping[str, object]) -> TestRunReport:
    """Validate a decoded report document.

    Raises:
        MalformedReportError: If required fields are missing or invalid

    """
    try:
        return TestRunReport.model_validate(data)
    except ValidationError as e:
        raise MalformedReportError(f"Invalid report structure: {e}") from e


def walk(report: TestRunReport | Mapping[str, object]) -> Iterator[TestOutcome]:
    """Yield one outcome per test attempt, depth-first in report order.

    Within a suite, its specs come before its nested suites. A raw mapping is
    validated when iteration starts.

    Raises:
        MalformedReportError: If the report is structurally invalid

    """
    if not isinstance(report, TestRunReport):
        report = parse_report(report)

    repeats: dict[tuple[tuple[str, ...], str, str], int] = {}
    for suite in report.suites:
        yield from _walk_suite(suite, (), repeats)


def count_attempts(report: TestRunReport) -> int:
    """Count the (test, attempt) leaves of a report."""

    def _count(suite: ReportSuite) -> int:
        own = sum(len(test.results) for spec in suite.specs for test in spec.tests)
        return own + sum(_count(child) for child in suite.suites)

    return sum(_count(suite) for suite in report.suites)


def _walk_suite(
    suite: ReportSuite,
    parent_path: tuple[str, ...],
    repeats: dict[tuple[tuple[str, ...], str, str], int],
) -> Iterator[TestOutcome]:
    """Yield outcomes of a suite and its descendants.

    ``repeats`` counts tests seen so far per (suite path, spec, project), so
    that --repeat-each runs and same-titled specs get distinct repeat indexes.
    """
    # Playwright emits an untitled root suite per project
    suite_path = parent_path + (suite.title,) if suite.title else parent_path

    for spec in suite.specs:
        for test in spec.tests:
            identity = (suite_path, spec.title, test.project_name)
            repeat_index = repeats.get(identity, 0)
            repeats[identity] = repeat_index + 1
            for attempt_index, result in enumerate(test.results):
                yield TestOutcome(
                    suite_path=suite_path,
                    spec_title=spec.title,
                    project_name=test.project_name,
                    attempt_index=attempt_index,
                    repeat_index=repeat_index,
                    status=result.status,
                    duration_ms=result.duration,
                    error_message=_error_message(result),
                    raw_attachments=tuple(
                        _to_raw_attachment(a) for a in result.attachments
                    ),
                )

    for child in suite.suites:
        yield from _walk_suite(child, suite_path, repeats)


def _error_message(result: ReportTestResult) -> str | None:
    """Pick the first available error message of an attempt."""
    if result.error is not None and result.error.message:
        return result.error.message
    for error in result.errors:
        if error.message:
            return error.message
    return None


def _to_raw_attachment(attachment: ReportAttachment) -> RawAttachment:
    if attachment.path is not None:
        source: FileReference | InlineBytes = FileReference(
            path=Path(attachment.path)
        )
    else:
        source = InlineBytes(data=attachment.body or b"")
    return RawAttachment(
        name=attachment.name,
        content_type=attachment.content_type,
        source=source,
    )
