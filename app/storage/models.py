from dataclasses import dataclass


@dataclass(frozen=True)
class StorageKey:
    """Destination of a thumbnail in the object store."""

    bucket: str
    path: str
