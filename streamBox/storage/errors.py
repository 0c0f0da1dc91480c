class StorageError(Exception):
    """A write to the local store failed (or the stored record is unusable)."""
