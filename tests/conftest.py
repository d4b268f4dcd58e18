"""Ensure the package under test is importable when running from the repo root."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable

import pytest
import structlog
import yaml

PACKAGE_ROOT = Path(__file__).resolve().parents[1]
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def write_definition() -> Callable[[Path, dict[str, Any]], Path]:
    """Write a plain-data definition file (JSON or YAML by suffix) and return its path."""

    def _write(path: Path, payload: dict[str, Any]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if path.suffix == ".json":
            text = json.dumps(payload, indent="\t")
        else:
            text = yaml.safe_dump(payload, sort_keys=False)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
