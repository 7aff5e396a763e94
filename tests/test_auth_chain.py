import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from teachflow.core.deps import get_db
from teachflow.core.permissions import require_admin
from teachflow.db import collections
from teachflow.main import app
from tests.conftest import TEACHER_EMAIL


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


CLASS_BODY = {"teacherEmail": TEACHER_EMAIL, "title": "Algebra", "price": 25}


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Token teacher-token"},
        {"Authorization": "Bearer "},
        {"Authorization": "bearer teacher-token"},
        {"Authorization": "Bearer not-a-real-token"},
    ],
)
def test_bad_credentials_are_rejected_before_any_write(client, db, headers):
    r = client.post("/classes", json=CLASS_BODY, headers=headers)

    assert r.status_code == 401, r.text
    assert "message" in r.json()
    assert db[collections.CLASSES].count_documents({}) == 0


def test_student_cannot_use_admin_route(client, db, make_class):
    doc = make_class("c1", status="pending")

    r = client.patch(
        f"/classes/update-status/{doc['_id']}",
        json={"status": "approved"},
        headers=auth_header("student-token"),
    )

    assert r.status_code == 403
    assert db[collections.CLASSES].find_one({"classId": "c1"})["status"] == "pending"


def test_student_cannot_use_teacher_route(client, db):
    r = client.post("/classes", json=CLASS_BODY, headers=auth_header("student-token"))

    assert r.status_code == 403
    assert db[collections.CLASSES].count_documents({}) == 0


def test_unknown_user_is_forbidden(client):
    r = client.get("/classes", headers=auth_header("newcomer-token"))
    assert r.status_code == 403


def test_role_comparison_is_case_sensitive(client, db):
    db[collections.USERS].update_one({"email": TEACHER_EMAIL}, {"$set": {"role": "Teacher"}})

    r = client.post("/classes", json=CLASS_BODY, headers=auth_header("teacher-token"))
    assert r.status_code == 403


def test_admin_passes_admin_gate(client):
    r = client.get("/classes", headers=auth_header("admin-token"))
    assert r.status_code == 200
    assert r.json() == []


def test_any_role_passes_authenticated_only_route(client):
    r = client.get("/enrollments", params={"email": "x@example.com"}, headers=auth_header("newcomer-token"))
    assert r.status_code == 200


def test_identity_provider_outage_is_internal_error(client):
    r = client.get("/classes", headers=auth_header("outage-token"))
    assert r.status_code == 500


class _UnreachableCollection:
    def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")


class _UnreachableDb:
    def __getitem__(self, name):
        return _UnreachableCollection()


def test_role_store_failure_is_internal_error(client):
    app.dependency_overrides[get_db] = lambda: _UnreachableDb()

    r = client.get("/classes", headers=auth_header("admin-token"))

    assert r.status_code == 500
    assert r.json() == {"message": "Server error during role verification"}


def test_role_gate_without_authentication_is_forbidden(db):
    bare = FastAPI()

    @bare.get("/admin-only", dependencies=[Depends(require_admin)])
    def admin_only():
        return {"ok": True}

    bare.dependency_overrides[get_db] = lambda: db
    r = TestClient(bare).get("/admin-only", headers=auth_header("admin-token"))

    assert r.status_code == 403
