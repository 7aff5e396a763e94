import google.auth.exceptions
import pytest
import requests_mock

from teachflow.core import identity
from teachflow.core.identity import FirebaseTokenVerifier, IdentityError, IdentityProviderUnavailable


@pytest.fixture()
def verifier():
    return FirebaseTokenVerifier("teachflow-test", timeout=1)


def test_valid_token_yields_claim(verifier, monkeypatch):
    seen = {}

    def fake_verify(token, request, audience=None):
        seen["audience"] = audience
        return {
            "iss": "https://securetoken.google.com/teachflow-test",
            "sub": "u1",
            "user_id": "u1",
            "email": "s@example.com",
            "name": "S",
            "exp": 1900000000,
        }

    monkeypatch.setattr(identity.id_token, "verify_firebase_token", fake_verify)

    claim = verifier.verify("good")

    assert claim.email == "s@example.com"
    assert claim.uid == "u1"
    assert claim.exp == 1900000000
    assert seen["audience"] == "teachflow-test"


@pytest.mark.parametrize(
    "error",
    [
        ValueError("Token expired"),
        google.auth.exceptions.InvalidValue("Wrong audience"),
        google.auth.exceptions.MalformedError("Could not parse"),
    ],
)
def test_rejected_token_raises_identity_error(verifier, monkeypatch, error):
    def fake_verify(token, request, audience=None):
        raise error

    monkeypatch.setattr(identity.id_token, "verify_firebase_token", fake_verify)

    with pytest.raises(IdentityError):
        verifier.verify("bad")


def test_unreachable_provider_is_distinguished(verifier, monkeypatch):
    def fake_verify(token, request, audience=None):
        raise google.auth.exceptions.TransportError("timed out")

    monkeypatch.setattr(identity.id_token, "verify_firebase_token", fake_verify)

    with pytest.raises(IdentityProviderUnavailable):
        verifier.verify("any")


def test_token_from_another_project_is_rejected(verifier, monkeypatch):
    def fake_verify(token, request, audience=None):
        return {"iss": "https://securetoken.google.com/other-project", "sub": "u1", "email": "s@example.com"}

    monkeypatch.setattr(identity.id_token, "verify_firebase_token", fake_verify)

    with pytest.raises(IdentityError):
        verifier.verify("foreign")


FIREBASE_CERTS_URL = "https://www.googleapis.com/robot/v1/metadata/x509/securetoken@system.gserviceaccount.com"


def test_signing_certificates_are_fetched_once(verifier):
    adapter = requests_mock.Adapter()
    adapter.register_uri(
        "GET", FIREBASE_CERTS_URL, json={}, headers={"Cache-Control": "public, max-age=3600"}
    )
    verifier.session.mount("https://", adapter)

    for _ in range(3):
        with pytest.raises(IdentityError):
            verifier.verify("not-a-jwt")

    assert adapter.call_count == 1
