import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from teachflow.core.current_user import authenticate
from teachflow.core.deps import get_db, get_payment_provider
from teachflow.core.errors import Forbidden, InternalError
from teachflow.core.identity import IdentityClaim
from teachflow.core.payments import PaymentProviderError, StripePaymentProvider
from teachflow.core.permissions import AUTHENTICATED
from teachflow.db import collections
from teachflow.db.serialize import serialize_list
from teachflow.db.session import store_errors
from teachflow.models.enrollment import Enrollment, PaymentInfo
from teachflow.models.payment import Payment
from teachflow.schemas.payment import ClientSecret, PaymentCreate, PaymentIntentCreate, PaymentRecorded

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/create-payment-intent", response_model=ClientSecret, dependencies=AUTHENTICATED)
def create_payment_intent(
    payload: PaymentIntentCreate,
    provider: StripePaymentProvider = Depends(get_payment_provider),
):
    try:
        secret = provider.create_intent(payload.amount)
    except PaymentProviderError as exc:
        raise InternalError(str(exc))
    return ClientSecret(client_secret=secret)


@router.post("/payments", response_model=PaymentRecorded, dependencies=AUTHENTICATED)
def record_payment(payload: PaymentCreate, db: Database = Depends(get_db)):
    """
    Record a client-confirmed payment and enroll the student.

    The payment and the enrollment are two separate inserts. If the second one
    fails the payment stays behind without an enrollment; its id is logged so
    it can be repaired by hand.
    """
    now = datetime.now(timezone.utc)

    payment = Payment(
        class_id=payload.class_id,
        email=payload.email,
        amount=payload.amount,
        method=payload.payment_method,
        transaction_id=payload.transaction_id,
        paid_at=now,
    )
    with store_errors("Failed to record payment/enrollment"):
        payment_result = db[collections.PAYMENTS].insert_one(payment.to_document())

    enrollment = Enrollment(
        student_email=payload.email,
        class_id=payload.class_id,
        enrolled_at=now,
        payment_info=PaymentInfo(
            transaction_id=payload.transaction_id,
            method=payload.payment_method,
            amount=payload.amount,
            paid_at=now,
        ),
    )
    try:
        enrollment_result = db[collections.ENROLLMENTS].insert_one(enrollment.to_document())
    except PyMongoError as exc:
        logger.error(
            "Orphaned payment %s: enrollment insert failed for %s in class %s",
            payment_result.inserted_id,
            payload.email,
            payload.class_id,
            exc_info=True,
        )
        raise InternalError("Failed to record payment/enrollment") from exc

    logger.info("Enrolled %s in class %s", payload.email, payload.class_id)
    return PaymentRecorded(
        message="Payment & enrollment successful",
        payment_id=str(payment_result.inserted_id),
        enrollment_id=str(enrollment_result.inserted_id),
    )


@router.get("/payments")
def payment_history(
    email: str | None = Query(None),
    db: Database = Depends(get_db),
    me: IdentityClaim = Depends(authenticate),
):
    if me.email != email:
        raise Forbidden("Forbidden Access!!")

    with store_errors("Failed to get payment"):
        payments = db[collections.PAYMENTS].find({"email": email}).sort("paidAt", DESCENDING)
        return serialize_list(list(payments))
