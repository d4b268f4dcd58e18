"""Generation pipeline: compile, load, validate, assemble and write."""

from __future__ import annotations

import json
import shutil
from dataclasses import dataclass
from pathlib import Path

import structlog

from .compiler import compile_sources, ensure_dir
from .data_buckets import load_data_buckets
from .errors import IOFailure
from .example import write_example_tree
from .features import load_features
from .generator import generate_environment
from .global_settings import load_global_settings
from .identifiers import ensure_unique_identifiers, validate_identifiers
from .models import Environment

LOGGER = structlog.get_logger("mockoon_config_builder")

INTERMEDIATE_DIRNAME = ".tmp"


@dataclass
class PipelineResult:
    output_path: Path
    environment: Environment
    example_created: bool = False


class ConfigPipeline:
    """Runs one generation from an authored tree to the environment JSON file."""

    def __init__(self, *, source_dir: Path, output_path: Path, work_dir: Path) -> None:
        self.source_dir = source_dir
        self.output_path = output_path
        self.work_dir = work_dir
        self._logger = LOGGER.bind(source_dir=str(source_dir))

    @classmethod
    def from_base_dir(
        cls,
        base_dir: Path,
        *,
        source_dir: Path | None = None,
        output_path: Path | None = None,
    ) -> "ConfigPipeline":
        return cls(
            source_dir=source_dir or base_dir / "src",
            output_path=output_path or base_dir / "dist" / "config.json",
            work_dir=base_dir / INTERMEDIATE_DIRNAME,
        )

    def run(self) -> PipelineResult:
        self._logger.info("generation_started", output_path=str(self.output_path))
        ensure_dir(self.output_path.parent)

        example_created = False
        if not self.source_dir.exists():
            self._logger.info("source_missing_writing_example")
            write_example_tree(self.source_dir)
            example_created = True

        compiled_dir = compile_sources(self.source_dir, self.work_dir)

        settings = load_global_settings(compiled_dir)
        tree = load_features(compiled_dir)
        buckets = load_data_buckets(compiled_dir)

        validate_identifiers(settings, "globalConfig")
        validate_identifiers(tree.folders, "folders")
        validate_identifiers(tree.routes, "routes")
        validate_identifiers(buckets, "databuckets")

        environment = generate_environment(settings, tree.folders, tree.routes, buckets)
        ensure_unique_identifiers(environment)

        write_environment(environment, self.output_path)
        self._cleanup()

        self._logger.info(
            "generation_completed",
            output_path=str(self.output_path),
            folders=len(environment.folders),
            routes=len(environment.routes),
            databuckets=len(environment.data),
            example=example_created,
        )
        return PipelineResult(
            output_path=self.output_path,
            environment=environment,
            example_created=example_created,
        )

    def _cleanup(self) -> None:
        # Output is complete here; cleanup errors only warn.
        try:
            shutil.rmtree(self.work_dir)
        except FileNotFoundError:
            return
        except OSError as exc:
            self._logger.warning("cleanup_failed", work_dir=str(self.work_dir), error=str(exc))


def write_environment(environment: Environment, output_path: Path) -> Path:
    """Serialise ``environment`` as pretty JSON, replacing any existing file."""

    ensure_dir(output_path.parent)
    payload = environment.as_serializable()
    try:
        output_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
        size = output_path.stat().st_size
    except OSError as exc:
        raise IOFailure("write", output_path, str(exc)) from exc
    LOGGER.info("config_written", path=str(output_path), bytes=size)
    return output_path
