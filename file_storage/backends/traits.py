"""Backend trait table: behavioural facts per storage backend type"""

from dataclasses import dataclass

from models.policy import BackendType


@dataclass(frozen=True)
class BackendTraits:
    """Behaviour of one backend type.

    Attributes:
        upload_suffix: Path appended to the policy server to build the upload URL (None = server as is)
        supports_direct_preview: Files can be served without proxying or signing
        needs_path_pre_generation: Storage path must be computed before issuing upload credentials
        origin_name_placeholder: Provider callback variable used for {originname} when the
            original name is not known client-side
    """

    upload_suffix: str | None = None
    supports_direct_preview: bool = False
    needs_path_pre_generation: bool = False
    origin_name_placeholder: str = ""


DEFAULT_TRAITS = BackendTraits()

BACKEND_TRAITS: dict[BackendType, BackendTraits] = {
    BackendType.LOCAL: BackendTraits(
        upload_suffix="/api/v3/file/upload",
        supports_direct_preview=True,
    ),
    BackendType.REMOTE: BackendTraits(
        upload_suffix="/api/v3/slave/upload",
    ),
    BackendType.QINIU: BackendTraits(
        needs_path_pre_generation=True,
    ),
    BackendType.OSS: BackendTraits(
        needs_path_pre_generation=True,
        origin_name_placeholder="${filename}",
    ),
    BackendType.COS: BackendTraits(
        needs_path_pre_generation=True,
        origin_name_placeholder="${filename}",
    ),
    BackendType.UPYUN: BackendTraits(
        needs_path_pre_generation=True,
        origin_name_placeholder="{filename}{.suffix}",
    ),
    BackendType.S3: BackendTraits(
        needs_path_pre_generation=True,
    ),
    BackendType.ONEDRIVE: BackendTraits(
        needs_path_pre_generation=True,
    ),
    BackendType.OTHER: DEFAULT_TRAITS,
}


def get_backend_traits(backend: BackendType | str | None) -> BackendTraits:
    """
    Look up traits for a backend type.

    Args:
        backend: Backend type or raw type tag

    Returns:
        Traits row; unrecognized types get the default row
    """
    return BACKEND_TRAITS.get(BackendType.parse(backend), DEFAULT_TRAITS)
