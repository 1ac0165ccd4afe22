"""Storage path builder for policy-driven path and file name generation"""

import os
import posixpath
from datetime import datetime

from file_storage.backends.traits import BackendTraits, get_backend_traits
from file_storage.rule_renderer import RuleRenderer
from file_storage.tokens import ResolutionContext, current_time
from logger import get_logger
from models.policy import StoragePolicy

logger = get_logger(__name__)


def clean_path(path: str) -> str:
    """
    Normalize a generated directory path.

    Collapses duplicate separators and '.' segments, drops the trailing
    separator and emits the platform separator.

    Examples:
        >>> clean_path("/1//23//456")
        '/1/23/456'
    """
    if not path:
        return ""
    cleaned = posixpath.normpath(path.replace("\\", "/"))
    # POSIX keeps a double leading slash, the storage key must not
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned.replace("/", os.sep)


class StoragePathBuilder:
    """Build storage paths, file names and upload URLs for a storage policy"""

    def __init__(self, policy: StoragePolicy):
        """
        Initialize path builder.

        Args:
            policy: Storage policy the names are generated for
        """
        self.policy = policy

    @property
    def traits(self) -> BackendTraits:
        """Behaviour row of the policy backend"""
        return get_backend_traits(self.policy.backend_type)

    def generate_path(self, uid: int, base_path: str, now: datetime | None = None) -> str:
        """
        Generate storage directory from the policy directory rule.

        Args:
            uid: Uploader user ID
            base_path: Virtual directory the user uploads into, used by {path}
            now: Resolution time (defaults to current time)

        Returns:
            Directory path like: uploads/1/docs
        """
        ctx = ResolutionContext(
            uid=uid,
            now=now or current_time(),
            backend_type=self.policy.backend_type,
            base_path=base_path,
        )
        path = clean_path(RuleRenderer.render(self.policy.dir_name_rule, ctx))
        logger.bind(policy_id=self.policy.id, user_id=uid, backend=self.policy.type).debug(
            f"Generated path: {path}"
        )
        return path

    def generate_file_name(self, uid: int, origin_name: str, now: datetime | None = None) -> str:
        """
        Generate stored file name from the policy file name rule.

        With auto rename disabled the original name is kept. An empty
        original name makes {originname} expand to the backend callback
        placeholder, filled in by the provider after upload, or to an empty
        string on backends without one.

        Args:
            uid: Uploader user ID
            origin_name: Original file name (may be empty)
            now: Resolution time (defaults to current time)

        Returns:
            File name or provider-side name template
        """
        if not self.policy.auto_rename:
            return origin_name

        ctx = ResolutionContext(
            uid=uid,
            now=now or current_time(),
            backend_type=self.policy.backend_type,
            origin_name=origin_name,
        )
        name = RuleRenderer.render(self.policy.file_name_rule, ctx)
        logger.bind(policy_id=self.policy.id, user_id=uid, backend=self.policy.type).debug(
            f"Generated file name: {name}"
        )
        return name

    def get_upload_url(self) -> str:
        """
        Get URL the client sends file bytes to.

        Returns:
            Policy server plus backend upload path, or the server unchanged
            when the backend has no upload path
        """
        suffix = self.traits.upload_suffix
        if suffix is None:
            return self.policy.server
        return self.policy.server.rstrip("/") + suffix

    def is_directly_preview(self) -> bool:
        """Whether stored files can be served without proxying"""
        return self.traits.supports_direct_preview

    def is_path_generate_needed(self) -> bool:
        """Whether the storage path must be generated before upload credentials are issued"""
        return self.traits.needs_path_pre_generation
