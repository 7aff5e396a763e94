from datetime import datetime, timezone

import pytest

from teachflow.db import collections
from tests.conftest import STUDENT_EMAIL


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def class_with_assignments(make_class):
    now = datetime.now(timezone.utc)
    return make_class(
        "c1",
        assignments=[
            {"title": "HW1", "content": "Read ch. 1", "createdAt": now, "submissions": [], "submissionCount": 0},
            {"title": "HW2", "content": "Read ch. 2", "createdAt": now, "submissions": [], "submissionCount": 0},
        ],
    )


def submission(index: int, class_id: str = "c1") -> dict:
    return {
        "classId": class_id,
        "assignmentIndex": index,
        "studentEmail": STUDENT_EMAIL,
        "studentName": "Student One",
        "submissionText": "My answers",
    }


def test_submit_appends_and_counts(client, db, class_with_assignments):
    r = client.post("/assignments/submit", json=submission(1), headers=auth_header("student-token"))

    assert r.status_code == 200, r.text
    assert r.json() == {"success": True}

    doc = db[collections.CLASSES].find_one({"classId": "c1"})
    assert doc["totalSubmissions"] == 1
    assert doc["assignments"][0]["submissionCount"] == 0
    assert doc["assignments"][1]["submissionCount"] == 1
    assert doc["assignments"][1]["submissions"][0]["studentEmail"] == STUDENT_EMAIL


def test_submissions_accumulate(client, db, class_with_assignments):
    headers = auth_header("student-token")
    client.post("/assignments/submit", json=submission(0), headers=headers)
    client.post("/assignments/submit", json=submission(0), headers=headers)

    doc = db[collections.CLASSES].find_one({"classId": "c1"})
    assert doc["assignments"][0]["submissionCount"] == 2
    assert len(doc["assignments"][0]["submissions"]) == 2
    assert doc["totalSubmissions"] == 2


def test_submit_to_missing_assignment(client, db, class_with_assignments):
    headers = auth_header("student-token")

    r = client.post("/assignments/submit", json=submission(5), headers=headers)
    assert r.status_code == 404
    assert r.json() == {"message": "Assignment not found"}

    assert client.post("/assignments/submit", json=submission(0, "nope"), headers=headers).status_code == 404
    assert db[collections.CLASSES].find_one({"classId": "c1"})["totalSubmissions"] == 0


def test_submit_rejects_negative_index(client, class_with_assignments):
    r = client.post("/assignments/submit", json=submission(-1), headers=auth_header("student-token"))
    assert r.status_code == 400
