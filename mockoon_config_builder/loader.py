"""Definition file loading utilities."""

from __future__ import annotations

import importlib.machinery
import importlib.util
import itertools
import json
import sys
from pathlib import Path
from typing import Any, TypeVar

import structlog
import yaml
from pydantic import BaseModel, ValidationError

from .errors import IOFailure, LoaderFailure

LOGGER = structlog.get_logger("mockoon_config_builder")

EXPORT_NAME = "config"
MODULE_SUFFIXES = (".pyc", ".py")
YAML_SUFFIXES = (".yaml", ".yml")
DATA_SUFFIXES = YAML_SUFFIXES + (".json",)
DEFINITION_SUFFIXES = MODULE_SUFFIXES + DATA_SUFFIXES

RecordT = TypeVar("RecordT", bound=BaseModel)

_module_counter = itertools.count()


def is_definition_file(path: Path) -> bool:
    if path.name.startswith(("_", ".")):
        return False
    return path.is_file() and path.suffix.lower() in DEFINITION_SUFFIXES


def list_directory(directory: Path) -> list[Path]:
    """Return the entries of ``directory`` sorted by name."""

    try:
        return sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as exc:
        raise IOFailure("list directory", directory, str(exc)) from exc


def definition_files(directory: Path) -> list[Path]:
    """Return the definition files directly inside ``directory``, sorted by name."""

    return [entry for entry in list_directory(directory) if is_definition_file(entry)]


def find_definition(directory: Path, stem: str) -> Path | None:
    """Locate the definition named ``stem`` using suffix preference order."""

    for suffix in DEFINITION_SUFFIXES:
        candidate = directory / f"{stem}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_definition(path: Path) -> dict[str, Any]:
    """Evaluate a definition file and return the mapping it exports.

    Every call evaluates the file again; nothing is cached between calls.
    """

    suffix = path.suffix.lower()
    try:
        if suffix in MODULE_SUFFIXES:
            exported = _exec_module(path)
        elif suffix == ".json":
            exported = json.loads(path.read_text(encoding="utf-8"))
        elif suffix in YAML_SUFFIXES:
            exported = yaml.safe_load(path.read_text(encoding="utf-8"))
        else:
            raise LoaderFailure(path, f"unsupported definition format '{suffix}'")
    except LoaderFailure:
        raise
    except Exception as exc:
        raise LoaderFailure(path, f"{type(exc).__name__}: {exc}") from exc

    if isinstance(exported, BaseModel):
        exported = exported.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if not isinstance(exported, dict):
        raise LoaderFailure(path, "definition must export a mapping or a model")
    LOGGER.debug("definition_loaded", path=str(path))
    return exported


def load_record(path: Path, model: type[RecordT]) -> RecordT:
    """Load a definition file and validate it against ``model``."""

    payload = load_definition(path)
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise LoaderFailure(path, f"invalid {model.__name__} definition: {exc}") from exc


def _exec_module(path: Path) -> Any:
    module_name = f"_mockoon_definition_{next(_module_counter)}"
    if path.suffix.lower() == ".pyc":
        loader = importlib.machinery.SourcelessFileLoader(module_name, str(path))
    else:
        loader = importlib.machinery.SourceFileLoader(module_name, str(path))
    spec = importlib.util.spec_from_loader(module_name, loader)
    if spec is None:
        raise LoaderFailure(path, "cannot create module spec")
    module = importlib.util.module_from_spec(spec)
    # Registered only while executing so class definitions can resolve their module.
    # No bytecode is cached next to authored sources.
    sys.modules[module_name] = module
    dont_write_bytecode = sys.dont_write_bytecode
    sys.dont_write_bytecode = True
    try:
        loader.exec_module(module)
    finally:
        sys.dont_write_bytecode = dont_write_bytecode
        sys.modules.pop(module_name, None)
    if not hasattr(module, EXPORT_NAME):
        raise LoaderFailure(path, f"module does not define '{EXPORT_NAME}'")
    return getattr(module, EXPORT_NAME)
