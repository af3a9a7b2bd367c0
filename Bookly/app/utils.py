import random
import threading
import time
from datetime import datetime
from functools import wraps

from bson.objectid import ObjectId
from flask import session, jsonify
from flask.json.provider import DefaultJSONProvider

from Bookly.app.errors import UnauthorizedError

PRIVILEGED_ROLES = ("Admin", "Manager")

_code_lock = threading.Lock()
_last_code_stamp = 0


def login_required(f):
    """Session must be logged in with a member id that is a valid ObjectId."""
    @wraps(f)
    def wrap(*args, **kwargs):
        if 'logged_in' in session and to_object_id(session.get('user_id')):
            return f(*args, **kwargs)
        return jsonify({'message': 'Authentication required'}), 401
    return wrap


def roles_required(roles):
    """Only let through sessions whose role is one of ``roles``. Use below ``login_required``."""
    def decorator(f):
        @wraps(f)
        def wrap(*args, **kwargs):
            if session.get('role') not in roles:
                return UnauthorizedError('Access denied').to_response()
            return f(*args, **kwargs)
        return wrap
    return decorator


def generate_order_code():
    """
    Order codes look like ``ORD-<epoch ms>-<4 random digits>``.
    The millisecond stamp never repeats inside one process.
    """
    global _last_code_stamp
    with _code_lock:
        stamp = max(int(time.time() * 1000), _last_code_stamp + 1)
        _last_code_stamp = stamp
    return f"ORD-{stamp}-{random.randint(1000, 9999)}"


def normalize_order_code(order_code):
    return order_code.strip().upper()


def to_object_id(value):
    """ObjectId for a 24-hex string (or an ObjectId), None otherwise."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


class MongoJSONProvider(DefaultJSONProvider):
    """Serialises ObjectIds as strings and datetimes as ISO-8601."""

    @staticmethod
    def default(o):
        if isinstance(o, ObjectId):
            return str(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return DefaultJSONProvider.default(o)
