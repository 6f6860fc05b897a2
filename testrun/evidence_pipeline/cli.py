"""CLI entry point for the evidence pipeline."""

import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from testrun.evidence_pipeline.errors import MalformedReportError
from testrun.evidence_pipeline.models.store_config import (
    DatasetSinkConfig,
    FilesystemStoreConfig,
    HttpStoreConfig,
    JsonLinesSinkConfig,
    KeyValueStoreConfig,
)
from testrun.evidence_pipeline.pipeline import EvidencePipeline
from testrun.evidence_pipeline.report_loader import load_report
from testrun.evidence_pipeline.sinks.base import RecordSink
from testrun.evidence_pipeline.sinks.dataset import DatasetRecordSink
from testrun.evidence_pipeline.sinks.jsonl import JsonLinesRecordSink
from testrun.evidence_pipeline.stores.base import BlobStore
from testrun.evidence_pipeline.stores.filesystem import FilesystemBlobStore
from testrun.evidence_pipeline.stores.http import HttpBlobStore
from testrun.evidence_pipeline.stores.key_value_store import KeyValueStoreBlobStore

# Logs go to stderr so stdout carries only the JSON summary
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
    force=True,
)
logger = logging.getLogger(__name__)

app = typer.Typer()


@app.command()
def main(
    report: Path = typer.Option(..., help="Path to the JSON test-run report"),  # noqa: B008
    work_dir: Path | None = typer.Option(  # noqa: B008
        None, help="Directory attachment paths are relative to (default: report dir)"
    ),
    store: str = typer.Option(
        ..., help="Blob store type (filesystem, http, key-value-store)"
    ),
    store_config: str = typer.Option(..., help="JSON configuration for the store"),
    sink: str = typer.Option(..., help="Record sink type (jsonl, dataset)"),
    sink_config: str = typer.Option(..., help="JSON configuration for the sink"),
    timeout: float | None = typer.Option(
        None, help="Seconds to wait for all uploads before giving up"
    ),
    max_concurrency: int | None = typer.Option(
        None, help="Maximum number of uploads in flight"
    ),
    fail_on_missing: bool = typer.Option(
        False, help="Exit with an error if any artifact could not be linked"
    ),
) -> None:
    """Upload test evidence and append per-attempt records to a sink."""
    logger.info(f"Report: {report}")
    logger.info(f"Store: {store}")
    logger.info(f"Sink: {sink}")

    try:
        blob_store = _create_store(store, store_config)
        record_sink = _create_sink(sink, sink_config)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        parsed_report = load_report(report)
    except (FileNotFoundError, MalformedReportError) as e:
        logger.error(f"Failed to load report: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    pipeline = EvidencePipeline(
        blob_store, max_concurrency=max_concurrency, timeout=timeout
    )

    try:
        result = asyncio.run(pipeline.run(parsed_report, work_dir or report.parent))
    except Exception as e:
        logger.exception("Pipeline failed")
        typer.echo(f"Error running pipeline: {e}", err=True)
        raise typer.Exit(code=1)

    # Summary goes out even when the sink append fails
    output = {
        "records": len(result.records),
        "artifacts": result.artifact_count,
        "warnings": [w.model_dump(mode="json") for w in result.warnings],
        "failures": [f.model_dump(mode="json") for f in result.failures],
    }
    typer.echo(json.dumps(output, indent=2))

    try:
        asyncio.run(record_sink.append_records(result.records))
    except Exception as e:
        logger.exception("Appending records failed")
        typer.echo(f"Error appending records: {e}", err=True)
        raise typer.Exit(code=1)

    if result.warnings:
        logger.warning(f"{len(result.warnings)} artifacts could not be linked")
        if fail_on_missing:
            raise typer.Exit(code=1)


def _create_store(store_type: str, config_json: str) -> BlobStore:
    """Create blob store based on type and JSON configuration."""
    config_dict = _parse_config(config_json, "store-config")
    store_type = store_type.lower()

    try:
        if store_type == "filesystem":
            return FilesystemBlobStore(FilesystemStoreConfig(**config_dict))
        if store_type == "http":
            return HttpBlobStore(HttpStoreConfig(**config_dict))
        if store_type == "key-value-store":
            config = KeyValueStoreConfig(**config_dict)
            if "APIFY_API_BASE_URL" in os.environ:
                config.base_url = os.environ["APIFY_API_BASE_URL"]
            return KeyValueStoreBlobStore(config)
    except ValidationError as e:
        raise ValueError(f"Invalid store-config: {e}") from e

    raise ValueError(
        f"Unknown store type: {store_type}. "
        "Must be one of: filesystem, http, key-value-store"
    )


def _create_sink(sink_type: str, config_json: str) -> RecordSink:
    """Create record sink based on type and JSON configuration."""
    config_dict = _parse_config(config_json, "sink-config")
    sink_type = sink_type.lower()

    try:
        if sink_type == "jsonl":
            return JsonLinesRecordSink(JsonLinesSinkConfig(**config_dict))
        if sink_type == "dataset":
            config = DatasetSinkConfig(**config_dict)
            if "APIFY_API_BASE_URL" in os.environ:
                config.base_url = os.environ["APIFY_API_BASE_URL"]
            return DatasetRecordSink(config)
    except ValidationError as e:
        raise ValueError(f"Invalid sink-config: {e}") from e

    raise ValueError(f"Unknown sink type: {sink_type}. Must be one of: jsonl, dataset")


def _parse_config(config_json: str, option: str) -> dict[str, Any]:
    """Decode a JSON object given on the command line."""
    try:
        config_dict = json.loads(config_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {option}: {e}")
    if not isinstance(config_dict, dict):
        raise ValueError(f"{option} must be a JSON object")
    return config_dict


if __name__ == "__main__":  # pragma: no cover
    app()
