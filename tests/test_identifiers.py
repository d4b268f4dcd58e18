from __future__ import annotations

import pytest

from mockoon_config_builder.errors import DuplicateIdentifier, InvalidIdentifierFormat, MissingIdentifier
from mockoon_config_builder.generator import generate_environment
from mockoon_config_builder.identifiers import (
    ensure_unique_identifiers,
    is_valid_identifier,
    new_identifier,
    validate_identifiers,
)
from mockoon_config_builder.models import ChildRef, DataBucket, Folder, ResponseSpec, Route, Settings

from payloads import make_uuid


@pytest.mark.parametrize("value", ["", None])
def test_empty_uuid_is_missing(value: object) -> None:
    with pytest.raises(MissingIdentifier):
        validate_identifiers({"uuid": value}, "globalConfig")


def test_malformed_uuid_is_rejected_with_value_and_path() -> None:
    with pytest.raises(InvalidIdentifierFormat) as excinfo:
        validate_identifiers([{"uuid": make_uuid()}, {"uuid": "not-a-uuid"}], "routes")

    assert excinfo.value.value == "not-a-uuid"
    assert excinfo.value.path == "routes[1]"
    assert "not-a-uuid" in str(excinfo.value)


def test_mixed_case_uuid_is_accepted() -> None:
    validate_identifiers({"uuid": "AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE"}, "globalConfig")
    assert is_valid_identifier("AAAAAAAA-BBBB-CCCC-DDDD-EEEEEEEEEEEE")


def test_nested_responses_are_visited() -> None:
    route = {"uuid": make_uuid(), "responses": [{"uuid": make_uuid()}, {"uuid": "bad"}]}

    with pytest.raises(InvalidIdentifierFormat) as excinfo:
        validate_identifiers([route], "routes")

    assert excinfo.value.path == "routes[0].responses[1]"


def test_unrelated_keys_are_not_descended() -> None:
    validate_identifiers(
        {"uuid": make_uuid(), "callbacks": [{"uuid": "bad"}], "tlsOptions": {"uuid": ""}},
        "globalConfig",
    )


def test_records_without_uuid_key_are_skipped() -> None:
    validate_identifiers({"name": "no id here", "headers": []}, "globalConfig")
    validate_identifiers("scalar", "value")
    validate_identifiers(None, "value")


def test_models_are_validated_in_wire_form() -> None:
    route = Route(uuid=make_uuid(), responses=[ResponseSpec(uuid=None)])

    with pytest.raises(MissingIdentifier) as excinfo:
        validate_identifiers([route], "routes")

    assert "routes[0].responses[0]" in str(excinfo.value)


def test_new_identifier_is_canonical() -> None:
    identifier = new_identifier()

    assert is_valid_identifier(identifier)
    assert identifier == identifier.lower()
    assert identifier != new_identifier()


def test_duplicate_route_uuid_is_detected() -> None:
    shared = make_uuid()
    routes = [Route(uuid=shared), Route(uuid=shared)]
    environment = generate_environment(Settings(uuid=make_uuid()), [], routes, [])

    with pytest.raises(DuplicateIdentifier) as excinfo:
        ensure_unique_identifiers(environment)

    assert "routes[1]" in str(excinfo.value)
    assert "routes[0]" in str(excinfo.value)


def test_duplicate_detection_ignores_case_and_spans_record_kinds() -> None:
    shared = make_uuid()
    environment = generate_environment(
        Settings(uuid=make_uuid()),
        [Folder(uuid=shared, name="Payments", children=[])],
        [],
        [DataBucket(uuid=shared.upper(), id="b1")],
    )

    with pytest.raises(DuplicateIdentifier):
        ensure_unique_identifiers(environment)


def test_child_references_do_not_count_as_duplicates() -> None:
    route = Route(uuid=make_uuid(), responses=[ResponseSpec(uuid=make_uuid())])
    folder = Folder(uuid=make_uuid(), name="Payments", children=[])
    folder.children.append(ChildRef(type="route", uuid=route.uuid))
    environment = generate_environment(Settings(uuid=make_uuid()), [folder], [route], [])

    ensure_unique_identifiers(environment)
