from __future__ import annotations

from fastapi import FastAPI
from fastapi.testclient import TestClient

from bizcore.domain_errors import (
    ConstraintError,
    DomainError,
    FieldTypeError,
    UniquenessError,
    ValidationError,
)
from bizcore.problem_details import build_problem_details_response, domain_error_handler


def test_problem_details_payload_contains_stable_code_and_rfc7807_fields() -> None:
    response = build_problem_details_response(
        DomainError(
            code="PROBE_ERROR",
            http_status=409,
            message="probe failed",
            details={"probe": True},
        )
    )

    assert response.status_code == 409
    assert response.media_type == "application/problem+json"

    body = response.body.decode("utf-8")
    assert '"type":"https://api.bizcore.local/problems/probe_error"' in body
    assert '"title":"Conflict"' in body
    assert '"status":409' in body
    assert '"detail":"probe failed"' in body
    assert '"code":"PROBE_ERROR"' in body
    assert '"details":{"probe":true}' in body


def test_problem_details_omits_details_when_none() -> None:
    response = build_problem_details_response(
        DomainError(
            code="NO_DETAILS",
            http_status=422,
            message="validation failed",
            details=None,
        )
    )

    body = response.body.decode("utf-8")
    assert response.status_code == 422
    assert '"code":"NO_DETAILS"' in body
    assert '"details"' not in body


def test_error_taxonomy_codes_and_statuses() -> None:
    assert ValidationError("missing").http_status == 422
    assert ValidationError("missing").code == "VALIDATION_FAILED"
    assert ConstraintError("bad value").code == "CONSTRAINT_VIOLATION"
    assert isinstance(ConstraintError("bad value"), ValidationError)

    type_error = FieldTypeError("not an int")
    assert type_error.code == "FIELD_TYPE_MISMATCH"
    assert isinstance(type_error, ValidationError)
    assert isinstance(type_error, TypeError)
    assert str(type_error) == "not an int"

    duplicate = UniquenessError("taken", details={"field": "chat_id"})
    assert duplicate.http_status == 409
    assert duplicate.code == "UNIQUENESS_VIOLATION"
    assert duplicate.details == {"field": "chat_id"}


def test_fastapi_exception_handler_maps_domain_error_to_problem_details() -> None:
    app = FastAPI()
    app.add_exception_handler(DomainError, domain_error_handler)

    @app.get("/boom")
    def _boom():
        raise UniquenessError("item already exists", details={"source": "test"})

    client = TestClient(app)
    response = client.get("/boom")

    assert response.status_code == 409
    assert response.headers["content-type"].startswith("application/problem+json")
    payload = response.json()
    assert payload["code"] == "UNIQUENESS_VIOLATION"
    assert payload["detail"] == "item already exists"
