from pymongo import ASCENDING

from Bookly.app.logger import get_logger
from Bookly.mongodb_database.order_backend.order_validator import order_validator
from Bookly.mongodb_database.service_backend.service_validator import service_validator

logger = get_logger("db")

VALIDATORS = {
    "Orders": order_validator,
    "Services": service_validator,
}


def apply_validators(db):
    existing = db.list_collection_names()
    for collection_name, validator in VALIDATORS.items():
        if collection_name in existing:
            # Collection exists, modify it
            db.command("collMod", collection_name, validator=validator)
            logger.info(f"Validator applied to existing collection '{collection_name}'")
        else:
            db.create_collection(collection_name, validator=validator)
            logger.info(f"Collection '{collection_name}' created with validator")


def create_indexes(db):
    orders = db.Orders
    orders.create_index([("orderCode", ASCENDING)], unique=True)
    orders.create_index([("memberId", ASCENDING)])
    orders.create_index([("status", ASCENDING), ("transactionDateTime", ASCENDING)])
    logger.info("Order indexes created")


def init_db(db):
    apply_validators(db)
    create_indexes(db)
