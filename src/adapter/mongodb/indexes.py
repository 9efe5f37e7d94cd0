"""Startup index creation for the users collection."""

from logging import getLogger

from pymongo.errors import PyMongoError

logger = getLogger(__name__)


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an older definition that blocks it.

    An existing index with the same name but different options, or with the
    same keys under another name, is dropped and the index is created again.
    Any other server error propagates.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except PyMongoError as e:
        if "already exists" not in str(e) and "Conflict" not in str(e):
            raise

    wanted = dict(keys)
    for existing, info in collection.index_information().items():
        if existing == '_id_':
            continue
        if existing == name or dict(info.get('key', [])) == wanted:
            logger.warning("Replacing index", extra={"index": existing, "replacement": name})
            collection.drop_index(existing)
            collection.create_index(keys, name=name, **kwargs)
            return True

    logger.error("Could not resolve index conflict", extra={"index": name})
    return False


def ensure_all_indexes(db) -> bool:
    """Create the users indexes. Called from the app lifespan."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
