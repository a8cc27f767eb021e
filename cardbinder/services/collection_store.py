"""
Collection Store: Collected Flags With Remote/Local Fallback.

Tracks, per set, which card variants the user has collected. State lives
in memory and is persisted to exactly one backend per operation:

- Remote collection service, when configured and reachable
- Local cache file otherwise

FAIL-SAFE: Remote failures never reach the caller. They are logged and
the operation falls back to the local cache. Local cache failures are
logged too; the in-memory state stays usable and the returned
PersistResult/ToggleResult reports persisted=False with a reason.

States: Unloaded -> Loaded(remote) | Loaded(local), see `loaded_from`.

toggle() is the only mutator. Overlapping toggles on the same key are
not serialized here; the caller must not issue them.
"""

import asyncio
import logging

from cardbinder.config import Settings, settings
from cardbinder.models.collection import (
    CollectionState,
    LoadResult,
    PersistResult,
    StorageBackend,
    ToggleResult,
)
from cardbinder.services.local_cache import LocalCache, LocalCacheError
from cardbinder.services.remote_collection import RemoteCollectionClient, RemoteCollectionError

logger = logging.getLogger(__name__)


class CollectionStore:
    """
    In-memory collection state backed by a remote service and a local cache.

    Args:
        cache: Local cache used when the remote is absent or failing
        remote: Collection service client. None means static hosting:
            every operation goes straight to the local cache.
    """

    def __init__(self, cache: LocalCache, remote: RemoteCollectionClient | None = None) -> None:
        self._cache = cache
        self._remote = remote
        self._state: CollectionState = {}
        self._loaded_from: StorageBackend | None = None

    @property
    def remote_configured(self) -> bool:
        return self._remote is not None

    @property
    def loaded_from(self) -> StorageBackend | None:
        """Backend of the last successful load, None while unloaded."""
        return self._loaded_from

    def snapshot(self) -> CollectionState:
        """Copy of the in-memory state."""
        return {set_id: dict(flags) for set_id, flags in self._state.items()}

    # --- Reads ---

    def is_collected(self, set_id: str, card_variant_id: str) -> bool:
        """Check a flag in memory. Absent sets and keys are not collected."""
        return self._state.get(set_id, {}).get(card_variant_id, False) is True

    async def load(self, set_id: str | None = None) -> LoadResult:
        """
        Load collection state.

        With a remote: one set is merged into memory, all sets replace it.
        On any remote failure, or without a remote, the local cache
        replaces the in-memory state.
        """
        if self._remote is not None:
            try:
                if set_id is not None:
                    self._state[set_id] = await self._remote.read_set(set_id)
                else:
                    self._state = await self._remote.read_all()
            except RemoteCollectionError as e:
                logger.warning("Collection service unavailable, using local cache: %s", e)
            else:
                self._loaded_from = StorageBackend.REMOTE
                logger.info("Collection loaded from service: %d sets", len(self._state))
                return LoadResult(loaded=True, backend=StorageBackend.REMOTE)

        return self._load_local()

    def _load_local(self) -> LoadResult:
        try:
            self._state = self._cache.read()
        except LocalCacheError as e:
            # Keep whatever is in memory; nothing collected on a first load
            logger.error("Failed to load collection: %s", e)
            return LoadResult(loaded=False, reason=str(e))

        self._loaded_from = StorageBackend.LOCAL
        logger.info("Collection loaded from local cache: %d sets", len(self._state))
        return LoadResult(loaded=True, backend=StorageBackend.LOCAL)

    # --- Writes ---

    async def save(self, set_id: str | None = None) -> PersistResult:
        """
        Persist collection state.

        With set_id, that set is written (created empty if unknown);
        without, every known set is written, one request per set. Any
        remote failure writes the whole state to the local cache instead.
        """
        if set_id is not None:
            self._state.setdefault(set_id, {})

        if self._remote is not None:
            try:
                await self._save_remote(self._remote, set_id)
            except RemoteCollectionError as e:
                logger.warning("Collection service unavailable, saving to local cache: %s", e)
            else:
                logger.info("Collection saved to service (set=%s)", set_id or "all")
                return PersistResult.stored(StorageBackend.REMOTE)

        return self._save_local()

    async def _save_remote(self, remote: RemoteCollectionClient, set_id: str | None) -> None:
        if set_id is not None:
            await remote.write_set(set_id, dict(self._state[set_id]))
            return

        writes = [remote.write_set(sid, dict(flags)) for sid, flags in self._state.items()]
        results = await asyncio.gather(*writes, return_exceptions=True)
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            raise failures[0]

    def _save_local(self) -> PersistResult:
        try:
            self._cache.write(self._state)
        except LocalCacheError as e:
            logger.error("Failed to save collection: %s", e)
            return PersistResult.failed(str(e))

        logger.info("Collection saved to local cache")
        return PersistResult.stored(StorageBackend.LOCAL)

    async def toggle(self, set_id: str, card_variant_id: str) -> ToggleResult:
        """
        Flip one card variant's flag and persist it.

        The first toggle of an absent key yields True. With a reachable
        remote the service flips the flag and its answer is adopted;
        otherwise the flag is flipped in memory and the whole state is
        written to the local cache.
        """
        if self._remote is not None:
            try:
                collected = await self._remote.toggle_card(set_id, card_variant_id)
            except RemoteCollectionError as e:
                logger.warning("Collection service unavailable, toggling locally: %s", e)
            else:
                self._state.setdefault(set_id, {})[card_variant_id] = collected
                logger.debug("Toggled %s/%s via service: %s", set_id, card_variant_id, collected)
                return ToggleResult.from_persist(
                    collected, PersistResult.stored(StorageBackend.REMOTE)
                )

        flags = self._state.setdefault(set_id, {})
        collected = not flags.get(card_variant_id, False)
        flags[card_variant_id] = collected
        return ToggleResult.from_persist(collected, self._save_local())


def create_collection_store(config: Settings = settings) -> CollectionStore:
    """Build a store from settings; no remote when collection_api_url is unset."""
    remote = None
    if config.collection_api_url:
        remote = RemoteCollectionClient(config.collection_api_url, timeout=config.remote_timeout)
    return CollectionStore(LocalCache(config.local_cache_path), remote=remote)
