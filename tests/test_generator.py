from __future__ import annotations

import json

from mockoon_config_builder.generator import generate_environment, normalize_route
from mockoon_config_builder.models import (
    ChildRef,
    DataBucket,
    Folder,
    ResponseSpec,
    Route,
    Settings,
)

from payloads import make_uuid, route_payload


def _folder(name: str, *routes: Route) -> Folder:
    return Folder(
        uuid=make_uuid(),
        name=name,
        children=[ChildRef(type="route", uuid=route.uuid) for route in routes],
    )


def test_root_children_follow_folder_order() -> None:
    routes = [Route.model_validate(route_payload()) for _ in range(3)]
    folders = [_folder("Payments", routes[0], routes[1]), _folder("Accounts", routes[2])]
    buckets = [DataBucket(uuid=make_uuid(), id="b1", name="Bucket")]

    environment = generate_environment(Settings(uuid=make_uuid(), name="Demo"), folders, routes, buckets)

    assert len(environment.folders) == 2
    assert len(environment.routes) == 3
    assert len(environment.data) == 1
    assert [child.model_dump() for child in environment.root_children] == [
        {"type": "folder", "uuid": folders[0].uuid},
        {"type": "folder", "uuid": folders[1].uuid},
    ]
    route_uuids = {route.uuid for route in environment.routes}
    for folder in environment.folders:
        for child in folder.children:
            assert child.type == "route"
            assert child.uuid in route_uuids


def test_empty_inputs_produce_empty_collections() -> None:
    environment = generate_environment(Settings(uuid=make_uuid()), [], [], [])

    payload = environment.as_serializable()
    assert payload["folders"] == []
    assert payload["routes"] == []
    assert payload["data"] == []
    assert payload["rootChildren"] == []


def test_serialized_document_puts_settings_first() -> None:
    settings = Settings(uuid=make_uuid(), name="Demo", port=3005)
    route = Route.model_validate(route_payload())
    folder = _folder("Payments", route)

    payload = generate_environment(settings, [folder], [route], []).as_serializable()

    assert list(payload) == ["uuid", "name", "port", "folders", "routes", "data", "rootChildren"]
    assert payload["rootChildren"] == [{"type": "folder", "uuid": folder.uuid}]
    response = payload["routes"][0]["responses"][0]
    assert response["bodyType"] == "INLINE"
    assert response["rulesOperator"] == "OR"
    assert response["statusCode"] == 200
    assert response["default"] is True


def test_inline_structured_body_is_serialized_once() -> None:
    route = Route.model_validate(route_payload())

    first = normalize_route(route)
    second = normalize_route(first)

    assert first.responses[0].body == '{"items":[]}'
    assert second.responses[0].body == first.responses[0].body
    assert json.loads(second.responses[0].body) == {"items": []}


def test_inputs_are_not_mutated() -> None:
    route = Route.model_validate(route_payload())

    normalized = normalize_route(route)

    assert normalized is not route
    assert route.responses[0].body == {"items": []}


def test_text_and_non_inline_bodies_pass_through() -> None:
    route = Route(
        uuid=make_uuid(),
        responses=[
            ResponseSpec(uuid=make_uuid(), body='{"already": "text"}'),
            ResponseSpec(uuid=make_uuid(), body_type="FILE", body={"ignored": True}, file_path="a.json"),
            ResponseSpec(uuid=make_uuid(), body_type="DATABUCKET", databucket_id="b1"),
        ],
    )

    normalized = normalize_route(route)

    assert normalized.responses[0].body == '{"already": "text"}'
    assert normalized.responses[1].body == {"ignored": True}
    assert "body" not in normalized.responses[2].as_serializable()


def test_route_without_responses_keeps_them_absent() -> None:
    route = Route(uuid=make_uuid(), method="get", endpoint="health")

    normalized = normalize_route(route)

    assert "responses" not in normalized.as_serializable()


def test_unicode_body_is_kept_readable() -> None:
    route = Route(uuid=make_uuid(), responses=[ResponseSpec(uuid=make_uuid(), body={"name": "Zoë"})])

    assert normalize_route(route).responses[0].body == '{"name":"Zoë"}'
