from juveboxd.store.base import KeyValueStorage, ReviewStore
from juveboxd.store.local import STORAGE_KEY, LocalReviewStore
from juveboxd.store.remote import RemoteReviewStore

__all__ = [
    "KeyValueStorage",
    "LocalReviewStore",
    "RemoteReviewStore",
    "ReviewStore",
    "STORAGE_KEY",
]
