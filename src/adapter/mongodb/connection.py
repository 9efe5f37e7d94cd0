import logging
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, PyMongoError

from utils.config import Settings

logger = logging.getLogger(__name__)

# Keep driver-level chatter out of the structured logs
pymongo_logger = logging.getLogger('pymongo')
pymongo_logger.setLevel(logging.WARNING)


def create_mongodb_client(settings: Settings) -> MongoClient | None:
    """Open a MongoDB client for the configured URL.

    Called once from the application lifespan; the caller owns the client
    and closes it on shutdown.

    Returns:
        MongoDB client or None if not configured or unreachable
    """
    if not settings.mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        return None

    try:
        client = MongoClient(
            settings.mongo_url,
            tz_aware=True,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
            compressors=['zlib'],
            zlibCompressionLevel=1,
        )
        client.admin.command('ping')
        logger.info(f"[MONGODB] Connected successfully to {settings.mongodb_database}")
        return client
    except (ConnectionFailure, PyMongoError) as e:
        logger.error(f"[MONGODB] Initial connection failed: {str(e)[:200]}")
        return None


def ping(client: MongoClient | None) -> bool:
    """Return True if the server answers a ping."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.debug("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False
