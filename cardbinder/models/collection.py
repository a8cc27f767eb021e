from dataclasses import dataclass
from enum import Enum

# set id -> (card variant id -> collected)
CollectionState = dict[str, dict[str, bool]]


class StorageBackend(str, Enum):
    """Where collection state was read from or written to."""

    REMOTE = "remote"
    LOCAL = "local"


@dataclass(frozen=True, slots=True)
class PersistResult:
    """
    Outcome of a persistence attempt.

    persisted is False only when every backend failed; reason then holds
    the last error so callers can decide whether to warn the user.
    """

    persisted: bool
    backend: StorageBackend | None = None
    reason: str | None = None

    @classmethod
    def stored(cls, backend: StorageBackend) -> "PersistResult":
        return cls(persisted=True, backend=backend)

    @classmethod
    def failed(cls, reason: str) -> "PersistResult":
        return cls(persisted=False, reason=reason)


@dataclass(frozen=True, slots=True)
class LoadResult:
    """Outcome of a load: which backend served the state, if any."""

    loaded: bool
    backend: StorageBackend | None = None
    reason: str | None = None


@dataclass(frozen=True, slots=True)
class ToggleResult:
    """New collected flag plus how (or whether) it was persisted."""

    collected: bool
    persisted: bool
    backend: StorageBackend | None = None
    reason: str | None = None

    @classmethod
    def from_persist(cls, collected: bool, result: PersistResult) -> "ToggleResult":
        return cls(
            collected=collected,
            persisted=result.persisted,
            backend=result.backend,
            reason=result.reason,
        )
