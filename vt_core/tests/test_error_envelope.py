import json
import uuid

import pytest
from django.test import RequestFactory

from vt_core.common.middleware import AccountScopeMiddleware
from vt_core.tests.helpers import scoped

pytestmark = pytest.mark.django_db


def test_middleware_missing_account_returns_error_envelope():
    rf = RequestFactory()
    req = rf.get("/api/v1/subjects/")

    mw = AccountScopeMiddleware(get_response=lambda r: None)
    resp = mw.process_request(req)

    assert resp is not None
    assert resp.status_code == 400

    body = json.loads(resp.content.decode("utf-8"))
    assert "error" in body
    assert body["error"]["code"] == "validation_error"
    assert "Missing account header" in body["error"]["message"]
    assert "request_id" in body["error"]


def test_unknown_subject_returns_not_found_envelope(api_client, account_id):
    r = api_client.get(f"/api/v1/subjects/{uuid.uuid4()}/", **scoped(account_id))

    assert r.status_code == 404
    assert r.data["error"]["code"] == "not_found"
    assert r.data["error"]["message"] == "Subject not found."
    assert r.data["error"]["request_id"]


def test_invalid_input_carries_details(api_client, account_id, subject):
    r = api_client.patch(
        f"/api/v1/subjects/{subject.id}/",
        {"birthdate": "2024-01-01"},
        format="json",
        **scoped(account_id),
    )

    assert r.status_code == 400
    assert r.data["error"]["code"] == "validation_error"
    assert "Birthdate cannot be changed" in r.data["error"]["message"]
    assert r.data["error"]["details"] == {"birthdate": "2025-01-01"}


def test_serializer_errors_use_generic_message(api_client, account_id):
    r = api_client.post("/api/v1/subjects/", {"full_name": "No Birthdate"}, format="json", **scoped(account_id))

    assert r.status_code == 400
    assert r.data["error"]["code"] == "validation_error"
    assert r.data["error"]["message"] == "Request failed."
    assert "birthdate" in r.data["error"]["details"]
