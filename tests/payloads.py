"""Plain-data definition payloads shared by the tests."""

from __future__ import annotations

import uuid
from typing import Any


def make_uuid() -> str:
    return str(uuid.uuid4())


def settings_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "uuid": make_uuid(),
        "lastMigration": 33,
        "name": "Payments API",
        "port": 3001,
        "cors": True,
        "headers": [{"key": "Content-Type", "value": "application/json"}],
    }
    payload.update(overrides)
    return payload


def route_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "uuid": make_uuid(),
        "type": "http",
        "documentation": "List payments",
        "method": "get",
        "endpoint": "payments",
        "responses": [
            {
                "uuid": make_uuid(),
                "statusCode": 200,
                "label": "OK",
                "bodyType": "INLINE",
                "body": {"items": []},
                "rulesOperator": "OR",
                "default": True,
            }
        ],
    }
    payload.update(overrides)
    return payload


def bucket_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "uuid": make_uuid(),
        "id": "pay1",
        "name": "Payments",
        "documentation": "",
        "value": "[]",
    }
    payload.update(overrides)
    return payload
