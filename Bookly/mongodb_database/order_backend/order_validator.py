# Orders Collection Validator
# One document per checkout; amount is in currency units and status drives every revenue report

ORDER_STATUSES = ["Pending", "Paid", "Cancelled", "Failed"]

order_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["memberId", "serviceId", "orderCode", "amount", "status", "transactionDateTime"],
        "properties": {
            "memberId": {
                "bsonType": "objectId",
                "description": "Enter the owning member identifier"
            },
            "serviceId": {
                "bsonType": "objectId",
                "description": "Enter the booked service identifier"
            },
            "orderCode": {
                "bsonType": "string",
                "pattern": r"^ORD-[0-9]+-[0-9]{4}$",
                "description": "Enter the upper-case order code ORD-<epoch ms>-<4 digits>"
            },
            "amount": {
                "bsonType": ["int", "long", "double", "decimal"],
                "minimum": 0,
                "description": "Enter the order amount in currency units"
            },
            "currency": {
                "bsonType": ["string", "null"],
                "description": "Enter the ISO currency code"
            },
            "description": {
                "bsonType": ["string", "null"],
                "description": "Enter a free text order description"
            },
            "paymentMethod": {
                "bsonType": ["string", "null"],
                "description": "Enter the payment method used"
            },
            "paymentStatus": {
                "bsonType": ["string", "null"],
                "description": "Enter the payment gateway status"
            },
            "status": {
                "enum": ORDER_STATUSES,
                "description": "Enter one of the order statuses"
            },
            "buyerName": {
                "bsonType": ["string", "null"],
                "description": "Enter the buyer name"
            },
            "buyerEmail": {
                "bsonType": ["string", "null"],
                "description": "Enter the buyer email"
            },
            "buyerPhone": {
                "bsonType": ["string", "null"],
                "description": "Enter the buyer phone number"
            },
            "buyerAddress": {
                "bsonType": ["string", "null"],
                "description": "Enter the buyer address"
            },
            "items": {
                "bsonType": ["array", "null"],
                "description": "Enter the purchased line items",
                "items": {
                    "bsonType": "object",
                    "properties": {
                        "name": {"bsonType": "string"},
                        "quantity": {"bsonType": ["int", "long"]},
                        "price": {"bsonType": ["int", "long", "double", "decimal"]}
                    }
                }
            },
            "transactionDateTime": {
                "bsonType": "date",
                "description": "Enter the timestamp of the transaction"
            }
        }
    }
}
