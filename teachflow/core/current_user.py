import logging
from typing import Optional

from fastapi import Depends, Header, Request

from teachflow.core.deps import get_identity_verifier
from teachflow.core.errors import InternalError, Unauthenticated
from teachflow.core.identity import (
    FirebaseTokenVerifier,
    IdentityClaim,
    IdentityError,
    IdentityProviderUnavailable,
)

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def authenticate(
    request: Request,
    authorization: Optional[str] = Header(None),
    verifier: FirebaseTokenVerifier = Depends(get_identity_verifier),
) -> IdentityClaim:
    """
    Gate 1: resolve the bearer token to a verified identity.

    The claim is stored on request.state.identity for the role gates and the
    handler. This gate never touches the users collection.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise Unauthenticated("Unauthorized: No token provided")

    token = authorization[len(BEARER_PREFIX):].strip()
    if not token:
        raise Unauthenticated("Unauthorized Access")

    try:
        claim = verifier.verify(token)
    except IdentityError as exc:
        logger.info("Token verification failed: %s", exc)
        raise Unauthenticated("Unauthorized: Invalid token")
    except IdentityProviderUnavailable:
        raise InternalError("Identity provider unavailable")

    request.state.identity = claim
    return claim
