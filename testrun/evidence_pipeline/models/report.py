"""Models for the Playwright JSON reporter document."""

from typing import Literal

from pydantic import Base64Bytes, BaseModel, ConfigDict, Field, model_validator

AttemptStatus = Literal["passed", "failed", "timedOut", "skipped", "interrupted"]


class ReportError(BaseModel):
    """Error reported for a test attempt."""

    message: str | None = Field(default=None, description="Error message")
    stack: str | None = Field(default=None, description="Stack trace")


class ReportAttachment(BaseModel):
    """Attachment descriptor of a test attempt.

    Exactly one of ``path`` (file written by the runner) or ``body``
    (base64-encoded inline content) is present.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Attachment name, e.g. 'screenshot'")
    content_type: str | None = Field(
        default=None, alias="contentType", description="MIME type if known"
    )
    path: str | None = Field(default=None, description="Path to the file")
    body: Base64Bytes | None = Field(default=None, description="Inline content")

    @model_validator(mode="after")
    def check_single_source(self) -> "ReportAttachment":
        """Reject descriptors with both or neither source."""
        if (self.path is None) == (self.body is None):
            raise ValueError(
                f"attachment '{self.name}' must have exactly one of path or body"
            )
        return self


class ReportTestResult(BaseModel):
    """One attempt (initial run or retry) of a test."""

    model_config = ConfigDict(populate_by_name=True)

    status: AttemptStatus = Field(..., description="Attempt status")
    duration: int = Field(..., ge=0, description="Attempt duration in ms")
    retry: int = Field(default=0, ge=0, description="Retry number")
    error: ReportError | None = Field(default=None, description="Primary error")
    errors: list[ReportError] = Field(
        default_factory=list, description="All errors of the attempt"
    )
    attachments: list[ReportAttachment] = Field(
        default_factory=list, description="Captured attachments"
    )


class ReportTest(BaseModel):
    """A spec executed in one project."""

    model_config = ConfigDict(populate_by_name=True)

    project_name: str = Field(
        default="", alias="projectName", description="Playwright project name"
    )
    results: list[ReportTestResult] = Field(
        default_factory=list, description="Attempt results in execution order"
    )


class ReportSpec(BaseModel):
    """A declared test (``test('title', ...)``)."""

    title: str = Field(..., description="Spec title")
    tests: list[ReportTest] = Field(
        default_factory=list, description="One entry per project"
    )


class ReportSuite(BaseModel):
    """A file or ``describe`` block; suites may nest."""

    title: str = Field(..., description="Suite title")
    specs: list[ReportSpec] = Field(default_factory=list, description="Specs")
    suites: list["ReportSuite"] = Field(
        default_factory=list, description="Nested suites"
    )


class TestRunReport(BaseModel):
    """Root of a test-run report."""

    __test__ = False

    suites: list[ReportSuite] = Field(..., description="Top-level suites")
