"""Turns the features directory into folders and routes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from .errors import MissingIdentifier
from .identifiers import new_identifier
from .loader import definition_files, find_definition, list_directory, load_record
from .models import ChildRef, Folder, Route

LOGGER = structlog.get_logger("mockoon_config_builder")

FEATURES_DIRNAME = "features"
FOLDER_STEM = "folder"


@dataclass
class FeatureTree:
    folders: list[Folder] = field(default_factory=list)
    routes: list[Route] = field(default_factory=list)


def load_features(compiled_dir: Path) -> FeatureTree:
    """Build one folder per feature directory and one route per feature file.

    A missing features directory yields an empty tree. Directories and files
    are processed in name order.
    """

    tree = FeatureTree()
    features_dir = compiled_dir / FEATURES_DIRNAME
    if not features_dir.is_dir():
        LOGGER.info("features_absent", path=str(features_dir))
        return tree

    feature_dirs = [
        entry
        for entry in list_directory(features_dir)
        if entry.is_dir() and not entry.name.startswith(("_", "."))
    ]
    for feature_dir in feature_dirs:
        folder, routes = _load_feature(feature_dir)
        tree.folders.append(folder)
        tree.routes.extend(routes)
        LOGGER.info("feature_loaded", feature=feature_dir.name, folder=folder.name, routes=len(routes))
    return tree


def folder_name_from_directory(directory_name: str) -> str:
    """Convert a kebab-case directory name into a Title Case folder name."""

    spaced = directory_name.replace("-", " ")
    return re.sub(r"\b\w", lambda match: match.group(0).upper(), spaced)


def _load_feature(feature_dir: Path) -> tuple[Folder, list[Route]]:
    folder_path = find_definition(feature_dir, FOLDER_STEM)
    if folder_path is not None:
        # Children are always rebuilt from the routes found on disk.
        folder = load_record(folder_path, Folder).model_copy(update={"children": []})
    else:
        folder = Folder(
            uuid=new_identifier(),
            name=folder_name_from_directory(feature_dir.name),
            children=[],
        )

    if not folder.uuid:
        raise MissingIdentifier(f"Missing UUID in folder config for {feature_dir.name}")

    routes: list[Route] = []
    for route_path in definition_files(feature_dir):
        if route_path.stem == FOLDER_STEM:
            continue
        label = f"{feature_dir.name}/{route_path.name}"
        route = load_record(route_path, Route)
        if not route.uuid:
            raise MissingIdentifier(f"Missing UUID in route config for {label}")
        for index, response in enumerate(route.responses):
            if not response.uuid:
                raise MissingIdentifier(f"Missing UUID in response {index} for route {label}")

        folder.children.append(ChildRef(type="route", uuid=route.uuid))
        routes.append(route)

    return folder, routes
