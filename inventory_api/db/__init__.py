from inventory_api.db.database import MongoStore, create_store, serialize_document, to_object_id
