"""Tests for report walker."""

from pathlib import Path
from typing import Any

import pytest

from testrun.evidence_pipeline.errors import MalformedReportError
from testrun.evidence_pipeline.models.outcome import FileReference, InlineBytes
from testrun.evidence_pipeline.walker import count_attempts, parse_report, walk


def test_walk_builds_suite_path(patient_search_report: dict[str, Any]) -> None:
    """walk records ancestor suite titles, excluding the spec title."""
    outcomes = list(walk(patient_search_report))

    assert len(outcomes) == 1
    outcome = outcomes[0]
    assert outcome.suite_path == ("Login", "Patient Search")
    assert outcome.spec_title == "finds patient"
    assert outcome.project_name == "chromium"
    assert outcome.attempt_index == 0
    assert outcome.status == "passed"
    assert outcome.duration_ms == 4200
    assert outcome.error_message is None


def test_walk_decodes_inline_attachments(
    patient_search_report: dict[str, Any],
) -> None:
    """walk base64-decodes inline attachment bodies."""
    outcome = next(walk(patient_search_report))

    assert [a.name for a in outcome.raw_attachments] == [
        "screenshot.png",
        "screenshot.png",
    ]
    assert outcome.raw_attachments[0].source == InlineBytes(data=b"first")
    assert outcome.raw_attachments[1].source == InlineBytes(data=b"second")


def test_walk_one_outcome_per_attempt(retried_report: dict[str, Any]) -> None:
    """walk emits each retry as its own outcome with increasing index."""
    outcomes = list(walk(retried_report))

    assert [(o.spec_title, o.attempt_index, o.status) for o in outcomes] == [
        ("Dynamic patient data automation", 0, "failed"),
        ("Dynamic patient data automation", 1, "passed"),
        ("skipped spec", 0, "skipped"),
    ]
    assert outcomes[0].error_message == "Timeout 5000ms exceeded"
    assert outcomes[0].raw_attachments[0].source == FileReference(
        path=Path("test-results/shot-1.png")
    )
    assert outcomes[0].raw_attachments[0].content_type == "image/png"
    assert outcomes[1].raw_attachments[0].content_type is None


def test_walk_length_matches_attempt_count(retried_report: dict[str, Any]) -> None:
    """walk neither duplicates nor drops (test, attempt) leaves."""
    report = parse_report(retried_report)

    assert len(list(walk(report))) == count_attempts(report) == 3


def test_walk_depth_first_order() -> None:
    """walk visits a suite's specs, then its nested suites, in order."""
    report = {
        "suites": [
            {
                "title": "A",
                "specs": [_spec("a1")],
                "suites": [
                    {
                        "title": "B",
                        "specs": [_spec("b1"), _spec("b2")],
                        "suites": [{"title": "C", "specs": [_spec("c1")]}],
                    },
                    {"title": "D", "specs": [_spec("d1")]},
                ],
            },
            {"title": "E", "specs": [_spec("e1")]},
        ]
    }

    outcomes = list(walk(report))

    assert [(o.suite_path, o.spec_title) for o in outcomes] == [
        (("A",), "a1"),
        (("A", "B"), "b1"),
        (("A", "B"), "b2"),
        (("A", "B", "C"), "c1"),
        (("A", "D"), "d1"),
        (("E",), "e1"),
    ]


def test_walk_skips_untitled_suites() -> None:
    """walk leaves empty suite titles out of the breadcrumb."""
    report = {
        "suites": [{"title": "", "suites": [{"title": "Login", "specs": [_spec("x")]}]}]
    }

    outcome = next(walk(report))

    assert outcome.suite_path == ("Login",)


def test_walk_one_outcome_per_project() -> None:
    """walk emits the same spec once per project it ran in."""
    spec = {
        "title": "works",
        "tests": [
            {"projectName": "chromium", "results": [_result()]},
            {"projectName": "firefox", "results": [_result()]},
        ],
    }

    outcomes = list(walk({"suites": [{"title": "S", "specs": [spec]}]}))

    assert [o.project_name for o in outcomes] == ["chromium", "firefox"]


def test_walk_error_message_falls_back_to_errors_list() -> None:
    """walk uses the first message in errors when error is absent."""
    result = _result(status="failed")
    result["errors"] = [{"stack": "no message"}, {"message": "expect failed"}]
    spec = {"title": "t", "tests": [{"projectName": "p", "results": [result]}]}

    outcome = next(walk({"suites": [{"title": "S", "specs": [spec]}]}))

    assert outcome.error_message == "expect failed"


def test_walk_suite_without_title_is_malformed() -> None:
    """walk raises MalformedReportError for a suite lacking a title."""
    report = {"suites": [{"specs": [_spec("x")]}]}

    with pytest.raises(MalformedReportError, match="title"):
        list(walk(report))


def test_walk_missing_suites_is_malformed() -> None:
    """walk raises MalformedReportError when the root has no suites."""
    with pytest.raises(MalformedReportError):
        list(walk({"config": {}}))


def test_walk_invalid_status_is_malformed() -> None:
    """walk rejects unknown attempt statuses."""
    spec = {
        "title": "t",
        "tests": [{"projectName": "p", "results": [_result(status="exploded")]}],
    }

    with pytest.raises(MalformedReportError, match="status"):
        list(walk({"suites": [{"title": "S", "specs": [spec]}]}))


@pytest.mark.parametrize(
    "attachment",
    [
        {"name": "both", "path": "a.png", "body": "aGk="},
        {"name": "neither"},
    ],
)
def test_walk_attachment_needs_exactly_one_source(
    attachment: dict[str, Any],
) -> None:
    """walk rejects attachments with both or neither of path and body."""
    result = _result()
    result["attachments"] = [attachment]
    spec = {"title": "t", "tests": [{"projectName": "p", "results": [result]}]}

    with pytest.raises(MalformedReportError, match="exactly one of path or body"):
        list(walk({"suites": [{"title": "S", "specs": [spec]}]}))


def _result(status: str = "passed") -> dict[str, Any]:
    return {"status": status, "duration": 10, "attachments": []}


def _spec(title: str) -> dict[str, Any]:
    return {"title": title, "tests": [{"projectName": "p", "results": [_result()]}]}


def test_walk_numbers_repeated_tests() -> None:
    """walk gives repeats of a spec in one project increasing repeat indexes."""
    spec = {
        "title": "finds patient",
        "tests": [
            {"projectName": "chromium", "results": [_result(), _result()]},
            {"projectName": "firefox", "results": [_result()]},
            {"projectName": "chromium", "results": [_result()]},
        ],
    }

    outcomes = list(walk({"suites": [{"title": "S", "specs": [spec]}]}))

    assert [(o.project_name, o.repeat_index, o.attempt_index) for o in outcomes] == [
        ("chromium", 0, 0),
        ("chromium", 0, 1),
        ("firefox", 0, 0),
        ("chromium", 1, 0),
    ]


def test_walk_numbers_same_titled_specs() -> None:
    """walk tells apart specs sharing a title in the same suite."""
    report = {"suites": [{"title": "S", "specs": [_spec("dup"), _spec("dup")]}]}

    outcomes = list(walk(report))

    assert [o.repeat_index for o in outcomes] == [0, 1]
