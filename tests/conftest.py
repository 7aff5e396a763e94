from datetime import datetime, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient

from teachflow.core.deps import get_db, get_identity_verifier, get_payment_provider
from teachflow.core.identity import IdentityClaim, IdentityError, IdentityProviderUnavailable
from teachflow.core.payments import PaymentProviderError
from teachflow.db import collections
from teachflow.db.init_db import init_db
from teachflow.main import app

ADMIN_EMAIL = "admin1@example.com"
TEACHER_EMAIL = "teacher1@example.com"
STUDENT_EMAIL = "student1@example.com"
NEWCOMER_EMAIL = "newcomer@example.com"

# token -> verified email
TOKENS = {
    "admin-token": ADMIN_EMAIL,
    "teacher-token": TEACHER_EMAIL,
    "student-token": STUDENT_EMAIL,
    "newcomer-token": NEWCOMER_EMAIL,  # valid token, no user document
}


class FakeIdentityVerifier:
    def verify(self, token: str) -> IdentityClaim:
        if token == "outage-token":
            raise IdentityProviderUnavailable("certificate fetch timed out")
        if token not in TOKENS:
            raise IdentityError("invalid token")
        return IdentityClaim(uid=f"uid-{token}", email=TOKENS[token], exp=4102444800)


class FakePaymentProvider:
    def __init__(self):
        self.amounts = []
        self.fail = False

    def create_intent(self, amount: int) -> str:
        if self.fail:
            raise PaymentProviderError("Your card was declined.")
        self.amounts.append(amount)
        return f"pi_test_secret_{amount}"


@pytest.fixture()
def db():
    """A fresh in-memory database seeded with one user per role."""
    client = mongomock.MongoClient()
    database = client["teachflow_test"]
    init_db(database)

    now = datetime.now(timezone.utc)
    database[collections.USERS].insert_many(
        [
            {"email": ADMIN_EMAIL, "name": "Admin One", "role": "admin", "createdAt": now, "lastLogin": now},
            {"email": TEACHER_EMAIL, "name": "Teacher One", "role": "teacher", "createdAt": now, "lastLogin": now},
            {"email": STUDENT_EMAIL, "name": "Student One", "role": "student", "createdAt": now, "lastLogin": now},
        ]
    )
    yield database
    client.close()


@pytest.fixture()
def payment_provider():
    return FakePaymentProvider()


@pytest.fixture()
def client(db, payment_provider):
    """Test client wired to the in-memory database and fake collaborators."""
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_identity_verifier] = lambda: FakeIdentityVerifier()
    app.dependency_overrides[get_payment_provider] = lambda: payment_provider
    # no context manager: the lifespan would open a real Mongo connection
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_class(db):
    """Insert a class document directly and return it."""

    def _make_class(class_id: str, status: str = "approved", **fields):
        doc = {
            "classId": class_id,
            "teacherEmail": TEACHER_EMAIL,
            "title": f"Class {class_id}",
            "price": 20,
            "status": status,
            "assignments": [],
            "totalSubmissions": 0,
            "createdAt": datetime.now(timezone.utc),
            **fields,
        }
        doc["_id"] = db[collections.CLASSES].insert_one(doc).inserted_id
        return doc

    return _make_class
