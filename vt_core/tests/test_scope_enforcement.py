import json

import pytest
from django.test import RequestFactory

from vt_core.common.middleware import AccountScopeMiddleware

pytestmark = pytest.mark.django_db


def test_middleware_invalid_account_returns_error_envelope():
    rf = RequestFactory()
    req = rf.get("/api/v1/subjects/", HTTP_X_ACCOUNT_ID="not-a-uuid")

    mw = AccountScopeMiddleware(get_response=lambda r: None)
    resp = mw.process_request(req)

    assert resp is not None
    assert resp.status_code == 400

    body = json.loads(resp.content.decode("utf-8"))
    assert body["error"]["code"] == "validation_error"
    assert "Invalid account header" in body["error"]["message"]


def test_middleware_attaches_account_id(account_id):
    rf = RequestFactory()
    req = rf.get("/api/v1/subjects/", HTTP_X_ACCOUNT_ID=str(account_id))

    mw = AccountScopeMiddleware(get_response=lambda r: None)
    assert mw.process_request(req) is None
    assert req.account_id == account_id


@pytest.mark.parametrize("path", ["/api/schema/", "/admin/login/", "/api/v1/"])
def test_public_paths_skip_account_check(path):
    rf = RequestFactory()
    req = rf.get(path)

    mw = AccountScopeMiddleware(get_response=lambda r: None)
    assert mw.process_request(req) is None
    assert req.account_id is None


def test_other_account_cannot_read_subject(api_client, subject, other_account_id):
    r = api_client.get(f"/api/v1/subjects/{subject.id}/", HTTP_X_ACCOUNT_ID=str(other_account_id))

    assert r.status_code == 404
    assert r.data["error"]["code"] == "not_found"
