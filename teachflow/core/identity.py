import functools
import logging
from typing import Optional

import google.auth.exceptions
import google.auth.transport.requests
import requests_cache
from google.oauth2 import id_token
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class IdentityClaim(BaseModel):
    uid: str
    email: Optional[str] = None
    name: Optional[str] = None
    exp: Optional[int] = None


class IdentityError(Exception):
    """The token was rejected (expired, malformed, bad signature, revoked)."""


class IdentityProviderUnavailable(Exception):
    """The identity provider could not be reached."""


class FirebaseTokenVerifier:
    """
    Verifies Firebase ID tokens against Google's public signing certificates.

    Checks signature, expiry, audience (the Firebase project id) and issuer.
    """

    def __init__(self, project_id: str, timeout: float = 10, cert_ttl: int = 3600):
        self.project_id = project_id
        # signing certs live as long as Google's Cache-Control says, else cert_ttl.
        # A failed refresh serves the last good copy.
        self.session = requests_cache.CachedSession(
            backend="memory",
            cache_control=True,
            expire_after=cert_ttl,
            stale_if_error=True,
        )
        # certificate fetches go through this bounded request
        self._request = functools.partial(
            google.auth.transport.requests.Request(session=self.session), timeout=timeout
        )

    def verify(self, token: str) -> IdentityClaim:
        try:
            decoded = id_token.verify_firebase_token(
                token, self._request, audience=self.project_id
            )
        except google.auth.exceptions.TransportError as exc:
            logger.exception("Identity provider unreachable")
            raise IdentityProviderUnavailable(str(exc)) from exc
        except (ValueError, google.auth.exceptions.GoogleAuthError) as exc:
            raise IdentityError(str(exc)) from exc

        if not decoded:
            raise IdentityError("Empty token payload")
        if decoded.get("iss") != f"https://securetoken.google.com/{self.project_id}":
            raise IdentityError("Token issued for another project")
        if not decoded.get("sub"):
            raise IdentityError("Token has no subject")

        return IdentityClaim(
            uid=decoded.get("user_id") or decoded["sub"],
            email=decoded.get("email"),
            name=decoded.get("name"),
            exp=decoded.get("exp"),
        )
