"""MongoDB index helpers shared by the repositories."""

from logging import getLogger

from pymongo.errors import OperationFailure

logger = getLogger(__name__)


def _conflicting_indexes(collection, keys: list, name: str) -> list[str]:
    """Names of existing indexes that clash with (keys, name)."""
    wanted = dict(keys)
    clashes = []
    for idx_name, idx_info in collection.index_information().items():
        if idx_name == '_id_':
            continue
        same_name = idx_name == name
        same_keys = dict(idx_info.get('key', [])) == wanted
        if same_name != same_keys:
            clashes.append(idx_name)
    return clashes


def create_index_safe(collection, keys: list, name: str, **kwargs) -> bool:
    """Create an index, replacing an older one with the same name or key spec.

    Returns False only when the clash could not be cleared.
    """
    try:
        collection.create_index(keys, name=name, **kwargs)
        return True
    except OperationFailure as e:
        clashes = _conflicting_indexes(collection, keys, name)
        if not clashes:
            logger.error("Index creation failed", extra={"index": name, "error": str(e)})
            return False

    for idx_name in clashes:
        logger.warning("Dropping conflicting index", extra={"index": idx_name})
        collection.drop_index(idx_name)
    collection.create_index(keys, name=name, **kwargs)
    logger.info("Recreated index", extra={"index": name})
    return True


def ensure_all_indexes(db) -> bool:
    """Ensure indexes for every collection we write to. Called at app startup."""
    from adapter.mongodb.user_repository import MongoUserRepository

    return MongoUserRepository(db).ensure_indexes()
