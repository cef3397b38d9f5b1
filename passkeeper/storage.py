"""
In-memory credential storage for the password manager.

The store lives for one screen session only. Nothing is written to disk and
passwords are never logged.
"""

import uuid
import logging
from collections import defaultdict
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

logger = logging.getLogger(__name__)

EVENT_INSERTED = "inserted"
EVENT_REPLACED = "replaced"
EVENT_REMOVED = "removed"
EVENT_CLEARED = "cleared"

StoreListener = Callable[[str, int], None]


class IndexOutOfRangeError(IndexError):
    """Raised when a position is outside [0, length) of the store."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Index {index} out of range for store of length {length}")
        self.index = index
        self.length = length


@dataclass(frozen=True)
class Credential:
    """Represents a single site login."""
    site: str
    username: str
    password: str = field(repr=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Credential':
        """Create from dictionary."""
        return cls(**data)


class CredentialView:
    """
    Read-only, restartable view over the credentials matching a query.

    Every iteration scans the store as it is at that moment and yields
    (index, credential) pairs in store order.
    """

    def __init__(self, store: 'CredentialStore', query: str):
        self._store = store
        self._needle = query.lower()
        self.query = query

    def __iter__(self) -> Iterator[Tuple[int, Credential]]:
        for index, credential in enumerate(self._store._entries):
            if self._needle in credential.site.lower() or self._needle in credential.username.lower():
                yield index, credential

    def __repr__(self) -> str:
        return f"CredentialView(query={self.query!r})"


class CredentialStore:
    """Ordered collection of credentials, addressed by position."""

    def __init__(self):
        self._entries: List[Credential] = []
        self._ids: List[str] = []
        self._listeners: List[StoreListener] = []

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Credential]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> Credential:
        self._check_index(index)
        return self._entries[index]

    def _check_index(self, index: int) -> None:
        # Negative positions are rejected, never counted from the end.
        if not 0 <= index < len(self._entries):
            raise IndexOutOfRangeError(index, len(self._entries))

    def insert(self, record: Credential) -> int:
        """
        Append a credential.

        Returns:
            The position of the new record
        """
        self._entries.append(record)
        self._ids.append(uuid.uuid4().hex)
        index = len(self._entries) - 1
        logger.debug(f"Inserted credential for '{record.site}' at index {index}")
        self._notify(EVENT_INSERTED, index)
        return index

    def replace(self, index: int, record: Credential) -> None:
        """
        Overwrite the credential at index, keeping its position and id.

        Raises:
            IndexOutOfRangeError: If index is not in [0, len(store))
        """
        self._check_index(index)
        self._entries[index] = record
        logger.debug(f"Replaced credential at index {index} with '{record.site}'")
        self._notify(EVENT_REPLACED, index)

    def remove(self, index: int) -> Credential:
        """
        Delete the credential at index. Later records shift left by one.

        Returns:
            The removed credential

        Raises:
            IndexOutOfRangeError: If index is not in [0, len(store))
        """
        self._check_index(index)
        removed = self._entries.pop(index)
        del self._ids[index]
        logger.debug(f"Removed credential for '{removed.site}' at index {index}")
        self._notify(EVENT_REMOVED, index)
        return removed

    def search(self, query: str) -> CredentialView:
        """
        Find credentials whose site or username contains query, ignoring case.

        An empty query matches every credential.
        """
        return CredentialView(self, query)

    def entries(self) -> List[Credential]:
        """Get all credentials."""
        return self._entries.copy()

    def clear(self) -> None:
        """Discard all credentials."""
        count = len(self._entries)
        self._entries = []
        self._ids = []
        logger.debug(f"Cleared {count} credentials")
        self._notify(EVENT_CLEARED, -1)

    def id_at(self, index: int) -> str:
        """Get the stable id of the credential at index."""
        self._check_index(index)
        return self._ids[index]

    def index_of(self, entry_id: str) -> Optional[int]:
        """Current position of the credential with entry_id, or None."""
        try:
            return self._ids.index(entry_id)
        except ValueError:
            return None

    def get(self, entry_id: str) -> Optional[Credential]:
        """Get a credential by id."""
        index = self.index_of(entry_id)
        if index is None:
            return None
        return self._entries[index]

    def replace_by_id(self, entry_id: str, record: Credential) -> bool:
        """
        Replace the credential with entry_id.

        Returns:
            True if the credential was found and replaced
        """
        index = self.index_of(entry_id)
        if index is None:
            return False
        self.replace(index, record)
        return True

    def remove_by_id(self, entry_id: str) -> bool:
        """
        Delete the credential with entry_id.

        Returns:
            True if the credential was found and removed
        """
        index = self.index_of(entry_id)
        if index is None:
            return False
        self.remove(index)
        return True

    def find_duplicates(self) -> List[List[int]]:
        """
        Find credentials with duplicate site and username."""
        duplicates = defaultdict(list)
        for index, entry in enumerate(self._entries):
            duplicates[(entry.site.lower(), entry.username.lower())].append(index)
        return [group for group in duplicates.values() if len(group) > 1]

    def subscribe(self, listener: StoreListener) -> None:
        """Register a callback invoked as listener(event, index) after each change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        """Remove a previously registered callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, event: str, index: int) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, index)
            except Exception as e:
                logger.error(f"Store listener failed on '{event}' at index {index}: {e}", exc_info=True)
