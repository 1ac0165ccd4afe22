"""Storage policy repository"""

import threading
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import get_settings
from database.models import StoragePolicyModel
from file_storage.options import prepare_for_save
from logger import get_logger
from models.policy import StoragePolicy
from shared.exceptions import PolicyNotFoundError

logger = get_logger(__name__)


class PolicyCache:
    """In-process TTL cache for loaded policies, shared between repository instances."""

    def __init__(self, ttl: int | None = None):
        """
        Initialize cache.

        Args:
            ttl: Entry lifetime in seconds (None = from settings, 0 = caching disabled)
        """
        self.ttl = get_settings().storage.policy_cache_ttl if ttl is None else ttl
        self._entries: dict[str, tuple[float, StoragePolicy]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(policy_id: int) -> str:
        return f"policy_{policy_id}"

    def get(self, policy_id: int) -> StoragePolicy | None:
        """Get cached policy, None on miss or expiry"""
        key = self.key(policy_id)
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, policy = entry
            if time.monotonic() >= expires_at:
                del self._entries[key]
                return None
            return policy

    def set(self, policy: StoragePolicy) -> None:
        if not self.ttl or policy.id is None:
            return
        with self._lock:
            self._entries[self.key(policy.id)] = (time.monotonic() + self.ttl, policy)

    def delete(self, policy_id: int) -> None:
        with self._lock:
            self._entries.pop(self.key(policy_id), None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


_policy_cache: PolicyCache | None = None


def get_policy_cache() -> PolicyCache:
    """Get the global policy cache (singleton)"""
    global _policy_cache
    if _policy_cache is None:
        _policy_cache = PolicyCache()
    return _policy_cache


class StoragePolicyRepository:
    """Repository for working with storage policies."""

    def __init__(self, session: AsyncSession, cache: PolicyCache | None = None):
        self.session = session
        self.cache = cache or get_policy_cache()

    async def get_by_id(self, policy_id: int) -> StoragePolicy:
        """
        Get policy by ID, served from cache when possible.

        Raises:
            PolicyNotFoundError: If no policy with this ID exists
        """
        cached = self.cache.get(policy_id)
        if cached is not None:
            return cached

        result = await self.session.execute(select(StoragePolicyModel).where(StoragePolicyModel.id == policy_id))
        model = result.scalar_one_or_none()
        if model is None:
            logger.warning(f"Storage policy not found: id={policy_id}", policy_id=policy_id)
            raise PolicyNotFoundError("StoragePolicy", policy_id)

        policy = StoragePolicy.from_model(model)
        self.cache.set(policy)
        logger.info(f"Storage policy loaded: id={policy_id} | type={policy.type}", policy_id=policy_id)
        return policy

    async def save(self, policy: StoragePolicy) -> StoragePolicy:
        """
        Persist policy, encoding its option bag first.

        Returns:
            Saved policy with ID and encoded options
        """
        prepared = prepare_for_save(policy)
        model = await self.session.merge(self._to_model(prepared))
        await self.session.flush()

        saved = prepared.model_copy(update={"id": model.id})
        self.cache.delete(saved.id)
        logger.info(f"Storage policy saved: id={saved.id} | type={saved.type}", policy_id=saved.id)
        return saved

    @staticmethod
    def _to_model(policy: StoragePolicy) -> StoragePolicyModel:
        return StoragePolicyModel(
            id=policy.id,
            name=policy.name,
            type=policy.type,
            server=policy.server,
            bucket_name=policy.bucket_name,
            is_private=policy.is_private,
            base_url=policy.base_url,
            access_key=policy.access_key,
            secret_key=policy.secret_key,
            max_size=policy.max_size,
            auto_rename=policy.auto_rename,
            dir_name_rule=policy.dir_name_rule,
            file_name_rule=policy.file_name_rule,
            is_origin_link_enable=policy.is_origin_link_enable,
            options=policy.options,
        )
