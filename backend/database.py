import logging
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import IndexModel
from config import settings

logger = logging.getLogger(__name__)

client: AsyncIOMotorClient = None
_db_instance = None


class _DbProxy:
    """
    Transparent proxy to the Motor database.
    Lets services do `from database import db` BEFORE connect_db().
    db.collection is resolved against _db_instance at call time.
    """
    def __getattr__(self, name):
        if _db_instance is None:
            raise RuntimeError("Database not connected. Call connect_db() first.")
        return getattr(_db_instance, name)

    def __getitem__(self, name):
        if _db_instance is None:
            raise RuntimeError("Database not connected. Call connect_db() first.")
        return _db_instance[name]


db = _DbProxy()


def get_db():
    return _db_instance


async def connect_db():
    global client, _db_instance
    client = AsyncIOMotorClient(
        settings.MONGO_URL,
        serverSelectionTimeoutMS=5000,
        connectTimeoutMS=10000,
    )
    _db_instance = client[settings.DB_NAME]
    logger.info(f"Connected to MongoDB: {settings.DB_NAME}")
    try:
        await create_indexes()
    except Exception as e:
        logger.warning(f"Could not create indexes (non-blocking): {e}")


async def close_db():
    global client
    if client:
        client.close()
        logger.info("MongoDB connection closed")


async def create_indexes():
    collections_to_index = {
        "beneficiaries": [
            IndexModel([("beneficiary_id", 1)], unique=True),
            IndexModel([("national_id", 1)], unique=True),
            IndexModel([("organization_id", 1)], sparse=True),
            IndexModel([("family_id", 1)], sparse=True),
            IndexModel([("address.governorate", 1), ("address.city", 1), ("address.district", 1)]),
            IndexModel([("identity_status", 1)]),
        ],
        "package_templates": [
            IndexModel([("template_id", 1)], unique=True),
            IndexModel([("status", 1)]),
        ],
        "couriers": [
            IndexModel([("courier_id", 1)], unique=True),
            IndexModel([("status", 1)]),
            IndexModel([("service_areas", 1)]),
        ],
        "organizations": [
            IndexModel([("organization_id", 1)], unique=True),
        ],
        "families": [
            IndexModel([("family_id", 1)], unique=True),
        ],
        "distribution_requests": [
            IndexModel([("request_id", 1)], unique=True),
            IndexModel([("status", 1)]),
            IndexModel([("priority", 1)]),
            IndexModel([("requester_id", 1)]),
            IndexModel([("request_date", 1)]),
        ],
        "request_events": [
            IndexModel([("request_id", 1)]),
            IndexModel([("created_at", 1)]),
        ],
        "tasks": [
            IndexModel([("task_id", 1)], unique=True),
            IndexModel([("request_id", 1)]),
            IndexModel([("courier_id", 1)]),
            IndexModel([("beneficiary_id", 1)]),
            IndexModel([("status", 1)]),
        ],
        "alerts": [
            IndexModel([("alert_id", 1)], unique=True),
            IndexModel([("type", 1), ("is_read", 1)]),
            IndexModel([("created_at", 1)]),
        ],
    }

    for collection_name, index_models in collections_to_index.items():
        try:
            await _db_instance[collection_name].create_indexes(index_models)
            logger.info(f"Indexes created for collection: {collection_name}")
        except Exception as e:
            logger.error(f"Failed to create indexes for collection {collection_name}: {e}")

    logger.info("All MongoDB indexes creation attempts completed.")
