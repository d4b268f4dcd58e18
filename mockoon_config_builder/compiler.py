"""Compiles an authored definition tree into the intermediate loadable tree."""

from __future__ import annotations

import py_compile
import shutil
from pathlib import Path

import structlog

from .errors import CompilationFailed, IOFailure
from .loader import DATA_SUFFIXES, is_definition_file

LOGGER = structlog.get_logger("mockoon_config_builder")


def compile_sources(source_dir: Path, work_dir: Path) -> Path:
    """Byte-compile every definition module of ``source_dir`` under ``work_dir``.

    ``work_dir`` is wiped first. Python modules become ``.pyc`` files at the
    same relative location; YAML/JSON definitions are copied as they are.
    Returns the root of the compiled tree (``work_dir / source_dir.name``).
    """

    logger = LOGGER.bind(source_dir=str(source_dir))
    if work_dir.exists():
        logger.info("intermediate_tree_cleared", work_dir=str(work_dir))
        _remove_tree(work_dir)

    try:
        sources = sorted(path for path in source_dir.rglob("*") if _is_source(path, source_dir))
    except OSError as exc:
        raise IOFailure("list directory", source_dir, str(exc)) from exc
    logger.info("compilation_started", files=len(sources))
    if not sources:
        raise CompilationFailed(f"No definition files found in {source_dir}")

    compiled_dir = work_dir / source_dir.name
    diagnostics: list[str] = []
    for source in sources:
        relative = source.relative_to(source_dir)
        if source.suffix.lower() in DATA_SUFFIXES:
            target = compiled_dir / relative
            ensure_dir(target.parent)
            try:
                shutil.copyfile(source, target)
            except OSError as exc:
                raise IOFailure("copy", source, str(exc)) from exc
            continue
        target = (compiled_dir / relative).with_suffix(".pyc")
        ensure_dir(target.parent)
        try:
            py_compile.compile(str(source), cfile=str(target), dfile=str(source), doraise=True)
        except py_compile.PyCompileError as exc:
            diagnostics.append(exc.msg.strip())

    if diagnostics:
        logger.error("compilation_failed", errors=len(diagnostics))
        raise CompilationFailed("Definition compilation failed", diagnostics)

    logger.info("compilation_completed", compiled_dir=str(compiled_dir))
    return compiled_dir


def _is_source(path: Path, root: Path) -> bool:
    relative = path.relative_to(root)
    if any(part.startswith(("_", ".")) for part in relative.parts[:-1]):
        return False
    if path.suffix.lower() == ".pyc":
        return False
    return is_definition_file(path)


def ensure_dir(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise IOFailure("create directory", directory, str(exc)) from exc


def _remove_tree(directory: Path) -> None:
    try:
        shutil.rmtree(directory)
    except OSError as exc:
        raise IOFailure("remove directory", directory, str(exc)) from exc
