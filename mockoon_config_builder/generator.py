"""Mockoon environment assembly."""

from __future__ import annotations

import json
from typing import Sequence

from .models import BodyType, ChildRef, DataBucket, Environment, Folder, ResponseSpec, Route, Settings


def generate_environment(
    settings: Settings,
    folders: Sequence[Folder],
    routes: Sequence[Route],
    data_buckets: Sequence[DataBucket],
) -> Environment:
    """Combine validated records into the final environment document.

    Routes are copied with their inline bodies normalised; settings, folders
    and data buckets are reused as they are.
    """

    root_children = [ChildRef(type="folder", uuid=folder.uuid) for folder in folders]
    return Environment(
        settings=settings,
        folders=list(folders),
        routes=[normalize_route(route) for route in routes],
        data=list(data_buckets),
        root_children=root_children,
    )


def normalize_route(route: Route) -> Route:
    """Return a copy of ``route`` whose inline structured bodies are JSON text."""

    if "responses" not in route.model_fields_set:
        return route.model_copy()
    return route.model_copy(update={"responses": [_normalize_response(item) for item in route.responses]})


def _normalize_response(response: ResponseSpec) -> ResponseSpec:
    if response.body_type != BodyType.INLINE or "body" not in response.model_fields_set:
        return response
    body = response.body
    if body is None or isinstance(body, str):
        return response
    return response.model_copy(update={"body": json.dumps(body, separators=(",", ":"), ensure_ascii=False)})
