from pymongo import ASCENDING
from pymongo.database import Database

from teachflow.db import collections


def init_db(db: Database) -> None:
    # email is the user key; the other indexes back lookups and the enrollment join
    db[collections.USERS].create_index([("email", ASCENDING)], unique=True)
    db[collections.TEACHER_APPLICATIONS].create_index([("email", ASCENDING)])
    db[collections.CLASSES].create_index([("classId", ASCENDING)])
    db[collections.ENROLLMENTS].create_index([("classId", ASCENDING)])
    db[collections.ENROLLMENTS].create_index([("studentEmail", ASCENDING)])
    db[collections.FEEDBACK].create_index([("classId", ASCENDING), ("student", ASCENDING)])
