"""neo-files protocols."""

from .storage_drive import StorageDrive, ListConfig, NamePredicate

__all__ = ["StorageDrive", "ListConfig", "NamePredicate"]
