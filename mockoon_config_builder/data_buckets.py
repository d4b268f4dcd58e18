"""Loads data bucket definitions."""

from __future__ import annotations

from pathlib import Path

import structlog

from .errors import MissingIdentifier
from .loader import definition_files, load_record
from .models import DataBucket

LOGGER = structlog.get_logger("mockoon_config_builder")

DATA_DIRNAME = "data"


def load_data_buckets(compiled_dir: Path) -> list[DataBucket]:
    data_dir = compiled_dir / DATA_DIRNAME
    if not data_dir.is_dir():
        LOGGER.info("data_absent", path=str(data_dir))
        return []

    buckets: list[DataBucket] = []
    for bucket_path in definition_files(data_dir):
        bucket = load_record(bucket_path, DataBucket)
        if not bucket.uuid:
            raise MissingIdentifier(f"Missing UUID in databucket config for {bucket_path.name}")
        buckets.append(bucket)

    LOGGER.info("data_loaded", buckets=len(buckets))
    return buckets
