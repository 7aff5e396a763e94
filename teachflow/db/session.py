import logging
from contextlib import contextmanager

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from teachflow.core.config import DB_NAME, MONGODB_URI, STORE_TIMEOUT_MS
from teachflow.core.errors import InternalError

logger = logging.getLogger(__name__)


def create_client(uri: str = MONGODB_URI) -> MongoClient:
    # MongoClient connects lazily; nothing hits the network until the first operation.
    return MongoClient(
        uri,
        serverSelectionTimeoutMS=STORE_TIMEOUT_MS,
        connectTimeoutMS=STORE_TIMEOUT_MS,
        socketTimeoutMS=STORE_TIMEOUT_MS,
    )


def get_database(client: MongoClient, name: str = DB_NAME) -> Database:
    return client[name]


@contextmanager
def store_errors(message: str):
    """Map any pymongo failure inside the block to a 500 with `message`."""
    try:
        yield
    except PyMongoError as exc:
        logger.exception(message)
        raise InternalError(message) from exc
