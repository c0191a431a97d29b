"""Tests for the designCustomActions handler."""

import pytest

from shared.actions.registrar import ActionRegistrar
from shared.actions.registry import ActionRegistry


@pytest.fixture
def registry():
    return ActionRegistry()


@pytest.fixture
def registrar(registry):
    return ActionRegistrar(
        registry,
        base_url="https://builder.example.com/",
        reserved_names={"designCustomActions"},
    )


def test_registration_succeeds(registrar, registry, sample_parameters):
    """A valid request should register the action and return its specification."""
    result = registrar.handle_registration(
        {"actionName": "sendEmail", "parameters": sample_parameters}
    )

    assert result.status_code == 200
    spec = result.body["actionSpecification"]
    assert spec["customAction"]["openAPISpec"]["paths"]["/sendEmail"]["post"][
        "operationId"
    ] == "sendEmail"
    assert spec["apiEndpoint"]["path"] == "/sendEmail"
    assert spec["apiEndpoint"]["method"] == "POST"
    assert spec["apiEndpoint"]["url"] == "https://builder.example.com/sendEmail"
    assert spec["apiEndpoint"]["parameters"]["required"] == ["to", "subject"]
    assert "curl" in spec["usage"]
    assert "postman" in spec["usage"]
    assert registry.lookup("sendEmail") is not None


@pytest.mark.parametrize(
    "request_body",
    [
        {"parameters": {"properties": {}}},
        {"actionName": "sendEmail"},
        {"actionName": "", "parameters": {"properties": {}}},
        {"actionName": "sendEmail", "parameters": {}},
        {},
        None,
    ],
)
def test_missing_fields_rejected(registrar, registry, request_body):
    """Missing actionName or parameters should be a 400 with no registration."""
    result = registrar.handle_registration(request_body)

    assert result.status_code == 400
    assert result.body["missingFields"] == ["actionName", "parameters"]
    assert len(registry) == 0


def test_authentication_and_strategies_are_restated(registrar):
    result = registrar.handle_registration(
        {
            "actionName": "lookup",
            "parameters": {"properties": {"q": {"type": "string"}}},
            "authentication": {"type": "apiKey", "headerName": "X-Custom"},
            "errorHandling": {"strategies": ["Retry", "Alert"]},
        }
    )

    endpoint = result.body["actionSpecification"]["apiEndpoint"]
    assert endpoint["authentication"] == {"type": "apiKey", "headerName": "X-Custom"}
    assert endpoint["errorHandling"] == ["Retry", "Alert"]


def test_default_strategies_when_not_supplied(registrar, sample_parameters):
    result = registrar.handle_registration(
        {"actionName": "sendEmail", "parameters": sample_parameters}
    )

    endpoint = result.body["actionSpecification"]["apiEndpoint"]
    assert endpoint["errorHandling"][0] == "Parameter validation"
    assert endpoint["authentication"]["headerName"] == "x-api-key"


def test_reregistration_replaces(registrar, registry):
    registrar.handle_registration(
        {"actionName": "act", "parameters": {"properties": {"a": {"type": "string"}}, "required": ["a"]}}
    )
    registrar.handle_registration(
        {"actionName": "act", "parameters": {"properties": {"b": {"type": "string"}}, "required": ["b"]}}
    )

    assert len(registry) == 1
    assert registry.lookup("act").schema.required == ("b",)


@pytest.mark.parametrize("name", ["a/b", "has space", "../up", ".", "..", 42])
def test_invalid_action_name(registrar, registry, name):
    result = registrar.handle_registration(
        {"actionName": name, "parameters": {"properties": {}, "required": []}}
    )

    assert result.status_code == 400
    assert result.body["error"] == "Invalid action name"
    assert len(registry) == 0


def test_reserved_action_name(registrar, registry, sample_parameters):
    result = registrar.handle_registration(
        {"actionName": "designCustomActions", "parameters": sample_parameters}
    )

    assert result.status_code == 400
    assert result.body["error"] == "Action name is reserved"
    assert len(registry) == 0


@pytest.mark.parametrize(
    "parameters",
    [
        ["to", "subject"],
        {"properties": ["to"]},
        {"properties": {}, "required": "to"},
        {"properties": {"a": {"type": "string"}}, "required": [["a"]]},
        {"properties": {}, "required": [1]},
        {"properties": {"a": "string"}},
        {"properties": {"a": {"type": 3}}},
        {"properties": {"a": {"type": "string", "enum": "abc"}}},
        {"properties": {"a": {"type": "number", "enum": 5}}},
    ],
)
def test_invalid_parameters_schema(registrar, registry, parameters):
    """Schemas that could not be enforced should be a 400 with no registration."""
    result = registrar.handle_registration({"actionName": "act", "parameters": parameters})

    assert result.status_code == 400
    assert result.body["error"] == "Invalid parameters schema"
    assert len(registry) == 0


def test_undeclared_required_names_are_accepted(registrar, registry, caplog):
    """Required names missing from properties are registered with a warning."""
    result = registrar.handle_registration(
        {"actionName": "act", "parameters": {"properties": {}, "required": ["ghost"]}}
    )

    assert result.status_code == 200
    assert "ghost" in caplog.text
    assert registry.dispatch("act", {}).status_code == 400


def test_unexpected_failure_returns_500(registrar, registry, sample_parameters):
    """Failures while building the descriptor should be a 500, not a partial success."""
    result = registrar.handle_registration(
        {
            "actionName": "sendEmail",
            "parameters": sample_parameters,
            "authentication": "not-an-object",
        }
    )

    assert result.status_code == 500
    assert result.body["error"] == "Failed to create custom action"
    assert result.body["actionName"] == "sendEmail"
    assert result.body["message"]
    assert len(registry) == 0


def test_failure_while_checking_request_returns_500(registrar, registry, monkeypatch, sample_parameters):
    """Errors raised by the request checks should still produce a JSON 500."""

    def explode(parameters):
        raise TypeError("unhashable type: 'list'")

    monkeypatch.setattr("shared.actions.registrar.schema_problem", explode)

    result = registrar.handle_registration(
        {"actionName": "sendEmail", "parameters": sample_parameters}
    )

    assert result.status_code == 500
    assert result.body["error"] == "Failed to create custom action"
    assert result.body["actionName"] == "sendEmail"
    assert "unhashable" in result.body["message"]
    assert len(registry) == 0
