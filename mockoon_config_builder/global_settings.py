"""Loads the environment-wide settings definition."""

from __future__ import annotations

from pathlib import Path

import structlog

from .errors import MissingIdentifier, MissingRequiredFile
from .loader import find_definition, load_record
from .models import Settings

LOGGER = structlog.get_logger("mockoon_config_builder")

SETTINGS_STEM = "global"


def load_global_settings(compiled_dir: Path) -> Settings:
    """Return the settings record of the compiled tree, unchanged."""

    settings_path = find_definition(compiled_dir, SETTINGS_STEM)
    if settings_path is None:
        raise MissingRequiredFile(f"{SETTINGS_STEM} settings definition not found in {compiled_dir}")

    settings = load_record(settings_path, Settings)
    if not settings.uuid:
        raise MissingIdentifier(f"Missing UUID in global config {settings_path.name}")

    LOGGER.info("settings_loaded", path=str(settings_path), name=settings.name, port=settings.port)
    return settings
