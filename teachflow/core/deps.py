from fastapi import Request
from pymongo.database import Database

from teachflow.core.identity import FirebaseTokenVerifier
from teachflow.core.payments import StripePaymentProvider


# clients are built once in the app lifespan and shared by every request
def get_db(request: Request) -> Database:
    return request.app.state.db


def get_identity_verifier(request: Request) -> FirebaseTokenVerifier:
    return request.app.state.identity_verifier


def get_payment_provider(request: Request) -> StripePaymentProvider:
    return request.app.state.payment_provider
