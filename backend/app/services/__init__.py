# Services module initialization
from .media import MediaStorage, media_storage
from .accounts import seed_legacy_admin

__all__ = ["MediaStorage", "media_storage", "seed_legacy_admin"]
