"""UUID presence, format and uniqueness checks for environment records."""

from __future__ import annotations

import re
import uuid
from typing import Any

from pydantic import BaseModel

from .errors import DuplicateIdentifier, InvalidIdentifierFormat, MissingIdentifier
from .models import Environment

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Only these keys hold nested records; everything else is leaf data.
NESTED_KEYS = ("responses", "children", "data", "routes", "folders")


def new_identifier() -> str:
    """Return a fresh canonical (lowercase) uuid4 string."""

    return str(uuid.uuid4())


def is_valid_identifier(value: Any) -> bool:
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


def validate_identifiers(value: Any, path: str) -> None:
    """Check every record reachable through the nested keys carries a valid uuid.

    ``value`` may be a pydantic model, a mapping, a sequence or a scalar.
    Models are inspected in their wire form. Raises ``MissingIdentifier`` for
    an empty uuid and ``InvalidIdentifierFormat`` for a malformed one.
    """

    if isinstance(value, BaseModel):
        value = value.model_dump(by_alias=True)

    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            validate_identifiers(item, f"{path}[{index}]")
        return

    if not isinstance(value, dict):
        return

    if "uuid" in value:
        identifier = value["uuid"]
        if not identifier:
            raise MissingIdentifier(f"Missing UUID in {path}")
        if not is_valid_identifier(identifier):
            raise InvalidIdentifierFormat(identifier, path)

    for key in NESTED_KEYS:
        if key in value:
            validate_identifiers(value[key], f"{path}.{key}")


def ensure_unique_identifiers(environment: Environment) -> None:
    """Reject an environment in which two records share a uuid.

    Child references point at existing records and are not counted.
    """

    seen: dict[str, str] = {}

    def claim(identifier: str | None, location: str) -> None:
        if not identifier:
            return
        key = identifier.lower()
        if key in seen:
            raise DuplicateIdentifier(identifier, seen[key], location)
        seen[key] = location

    claim(environment.settings.uuid, "globalConfig")
    for index, folder in enumerate(environment.folders):
        claim(folder.uuid, f"folders[{index}]")
    for index, route in enumerate(environment.routes):
        claim(route.uuid, f"routes[{index}]")
        for response_index, response in enumerate(route.responses):
            claim(response.uuid, f"routes[{index}].responses[{response_index}]")
    for index, bucket in enumerate(environment.data):
        claim(bucket.uuid, f"databuckets[{index}]")
