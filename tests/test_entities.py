from __future__ import annotations

import pytest

from core.parsers.entities import entity_attributes, entity_confidence, extract


def _by_type(entities, entity_type):
    return [entity for entity in entities if entity.type == entity_type]


def test_extract_general_entity_with_attributes() -> None:
    entities = extract("delete all inactive users")
    assert len(entities) == 1
    user = entities[0]
    assert user.type == "user"
    assert user.value == "users"
    assert user.context == "all inactive users"
    assert user.attributes == {"quantifier": "all", "status": "inactive"}
    # "all users" does not appear verbatim, so no quantifier bonus.
    assert user.confidence == pytest.approx(0.7)


def test_entity_confidence_rules() -> None:
    assert entity_confidence("user", "create a user") == pytest.approx(0.7)
    assert entity_confidence("alice@contoso.com", "alice@contoso.com") == pytest.approx(1.0)
    assert entity_confidence("users", "delete all users") == pytest.approx(0.8)


def test_department_is_reported_as_group_identifier() -> None:
    entities = extract("create a user in the IT department every week")
    assert [entity.type for entity in entities] == ["user", "group"]
    department = _by_type(entities, "group")[0]
    assert department.value == "IT"
    assert department.confidence == pytest.approx(0.9)
    assert department.context == "department"
    assert department.attributes == {"specificType": "department"}


def test_email_address_matches_email_and_upn() -> None:
    entities = extract("disable alice@contoso.com")
    specific = [entity.attributes.get("specificType") for entity in entities]
    assert specific == ["email", "upn"]
    assert all(entity.type == "user" for entity in entities)
    assert all(entity.value == "alice@contoso.com" for entity in entities)


def test_guid_is_reported_as_app() -> None:
    entities = extract("remove 0f8fad5b-d9cb-469f-a165-70867728950e")
    guid = [entity for entity in entities if entity.attributes.get("specificType") == "guid"]
    assert len(guid) == 1
    assert guid[0].type == "app"


def test_country_is_reported_as_location() -> None:
    entities = extract("block sign-ins from Germany")
    countries = [entity for entity in entities if entity.attributes.get("specificType") == "country"]
    assert [entity.value for entity in countries] == ["Germany"]
    assert countries[0].type == "location"


def test_general_entities_follow_pattern_order() -> None:
    entities = extract("add the laptops to the security group")
    assert [entity.type for entity in entities] == ["group", "device"]


def test_type_flags_read_whole_input() -> None:
    attributes = entity_attributes("group", "add guest users to the security group where status is active")
    assert attributes["groupType"] == "security"
    assert attributes["hasFilters"] is True
    assert "userType" not in attributes

    user_attributes = entity_attributes("user", "list guest admin accounts")
    assert user_attributes == {"userType": "guest", "role": "admin"}


def test_no_entities_for_plain_text() -> None:
    assert extract("hello") == []
    assert extract("") == []
