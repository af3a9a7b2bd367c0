from flask import current_app
from pymongo import MongoClient

from Bookly.app.logger import get_logger

logger = get_logger("db")


def create_client(connection_string, timeout_ms=5000):
    # Create a MongoClient with timeout settings and test the connection
    try:
        client = MongoClient(
            connection_string,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms
        )
        client.admin.command('ping')
        logger.info("Successfully connected to MongoDB")
    except Exception as e:
        logger.error(f"Failed to connect to MongoDB: {e}")
        raise
    return client


def init_app(app, mongo_client=None):
    """Attach a MongoClient to the app, building one from config when none is given."""
    if mongo_client is None:
        mongo_client = create_client(app.config['MONGO_URI'], app.config['MONGO_TIMEOUT_MS'])
    app.extensions['mongo_client'] = mongo_client
    return mongo_client


def get_db():
    client = current_app.extensions['mongo_client']
    return client[current_app.config['MONGO_DB_NAME']]


def orders_collection():
    return get_db().Orders


def services_collection():
    return get_db().Services
