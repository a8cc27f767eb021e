from cardbinder.db.database import get_session, init_db
from cardbinder.db.operations import (
    get_all_collections,
    get_set_collection,
    replace_set_collection,
    toggle_card,
)

__all__ = [
    "get_all_collections",
    "get_session",
    "get_set_collection",
    "init_db",
    "replace_set_collection",
    "toggle_card",
]
