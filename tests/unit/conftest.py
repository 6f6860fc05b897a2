"""Shared fixtures for evidence pipeline tests."""

import base64
from typing import Any

import pytest


def make_result(
    status: str = "passed",
    duration: int = 4200,
    attachments: list[dict[str, Any]] | None = None,
    error: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a Playwright result entry."""
    result: dict[str, Any] = {
        "workerIndex": 0,
        "status": status,
        "duration": duration,
        "errors": [],
        "stdout": [],
        "stderr": [],
        "retry": 0,
        "startTime": "2024-05-01T10:00:00.000Z",
        "attachments": attachments or [],
    }
    if error is not None:
        result["error"] = error
        result["errors"] = [error]
    return result


def inline(
    name: str, content: bytes, content_type: str | None = None
) -> dict[str, Any]:
    """Build an inline attachment descriptor."""
    attachment: dict[str, Any] = {
        "name": name,
        "body": base64.b64encode(content).decode("ascii"),
    }
    if content_type is not None:
        attachment["contentType"] = content_type
    return attachment


@pytest.fixture
def patient_search_report() -> dict[str, Any]:
    """Report with one passing spec carrying two same-named screenshots."""
    return {
        "config": {"retries": 1},
        "suites": [
            {
                "title": "Login",
                "file": "login.spec.ts",
                "specs": [],
                "suites": [
                    {
                        "title": "Patient Search",
                        "specs": [
                            {
                                "title": "finds patient",
                                "ok": True,
                                "tests": [
                                    {
                                        "projectName": "chromium",
                                        "expectedStatus": "passed",
                                        "results": [
                                            make_result(
                                                attachments=[
                                                    inline(
                                                        "screenshot.png", b"first"
                                                    ),
                                                    inline(
                                                        "screenshot.png", b"second"
                                                    ),
                                                ]
                                            )
                                        ],
                                        "status": "expected",
                                    }
                                ],
                            }
                        ],
                    }
                ],
            }
        ],
        "errors": [],
        "stats": {"expected": 1, "unexpected": 0, "flaky": 0, "skipped": 0},
    }


@pytest.fixture
def retried_report() -> dict[str, Any]:
    """Report with a flaky spec, a skipped spec, and file attachments."""
    return {
        "suites": [
            {
                "title": "test.spec.ts",
                "specs": [
                    {
                        "title": "Dynamic patient data automation",
                        "tests": [
                            {
                                "projectName": "chromium",
                                "results": [
                                    make_result(
                                        status="failed",
                                        duration=180000,
                                        error={"message": "Timeout 5000ms exceeded"},
                                        attachments=[
                                            {
                                                "name": "screenshot",
                                                "contentType": "image/png",
                                                "path": "test-results/shot-1.png",
                                            },
                                            {
                                                "name": "video",
                                                "contentType": "video/webm",
                                                "path": "videos/run-1.webm",
                                            },
                                        ],
                                    ),
                                    make_result(
                                        status="passed",
                                        duration=3100,
                                        attachments=[
                                            {
                                                "name": "trace.zip",
                                                "path": "test-results/trace.zip",
                                            }
                                        ],
                                    ),
                                ],
                            }
                        ],
                    },
                    {
                        "title": "skipped spec",
                        "tests": [
                            {
                                "projectName": "chromium",
                                "results": [make_result(status="skipped", duration=0)],
                            }
                        ],
                    },
                ],
            }
        ]
    }
