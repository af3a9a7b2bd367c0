from datetime import datetime

import mongomock
import pytest
from bson import ObjectId

from Bookly.app import create_app
from Bookly.app.config import TestConfig


class StubChatClient:
    """Stands in for the Botpress tables client; records every row query."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def find_table_rows(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return list(self.rows)


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client):
    return mongo_client[TestConfig.MONGO_DB_NAME]


@pytest.fixture
def chat_client():
    return StubChatClient()


@pytest.fixture
def app(mongo_client, chat_client):
    return create_app(TestConfig, mongo_client=mongo_client, chat_client=chat_client)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    """Prime the session the way the authentication layer would."""
    def _login(user_id=None, role="Member"):
        user_id = user_id or str(ObjectId())
        with client.session_transaction() as sess:
            sess['logged_in'] = True
            sess['user_id'] = user_id
            sess['role'] = role
        return user_id
    return _login


@pytest.fixture
def add_service(db):
    def _add_service(name, price=100):
        return db.Services.insert_one({"name": name, "price": price}).inserted_id
    return _add_service


@pytest.fixture
def add_order(db):
    def _add_order(service_id, amount, when, status="Paid", member_id=None, order_code=None):
        order = {
            "memberId": member_id or ObjectId(),
            "serviceId": service_id,
            "orderCode": order_code or f"ORD-{ObjectId()}",
            "amount": amount,
            "status": status,
            "transactionDateTime": when,
        }
        return db.Orders.insert_one(order).inserted_id
    return _add_order


def transcript(*messages):
    """Build a transcript from (sender, preview) pairs."""
    return [{"sender": sender, "preview": preview} for sender, preview in messages]


def conversation(row_id, updated_at="2024-05-01T10:00:00.000Z", messages=(), **fields):
    row = {
        "id": row_id,
        "conversationId": f"conv_{row_id}",
        "updatedAt": updated_at,
        "transcript": transcript(*messages),
    }
    row.update(fields)
    return row


JAN_2024 = datetime(2024, 1, 15, 10, 0)
MAR_2024 = datetime(2024, 3, 2, 9, 30)
