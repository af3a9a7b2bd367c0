service_validator = {
    "$jsonSchema": {
        "bsonType": "object",
        "required": ["name", "price"],
        "properties": {
            "name": {
                "bsonType": "string",
                "description": "Enter the service name as a string"
            },
            "price": {
                "bsonType": ["int", "long", "double", "decimal"],
                "minimum": 0,
                "description": "Enter the service price in currency units"
            }
        }
    }
}
