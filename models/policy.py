"""Storage policy domain model"""

from enum import StrEnum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import get_settings

if TYPE_CHECKING:
    from database.models import StoragePolicyModel


class BackendType(StrEnum):
    """Kind of storage target a policy points at."""

    LOCAL = "local"
    REMOTE = "remote"
    QINIU = "qiniu"
    OSS = "oss"
    COS = "cos"
    UPYUN = "upyun"
    S3 = "s3"
    ONEDRIVE = "onedrive"
    OTHER = "other"  # Fallback for unrecognized tags

    @classmethod
    def parse(cls, value: "BackendType | str | None") -> "BackendType":
        """Map a raw backend tag onto a member, unknown tags become OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.OTHER


class PolicyOption(BaseModel):
    """Structured option bag with policy-specific settings."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    op_name: str = Field(default="", description="Provider operator name")
    op_password: str = Field(default="", alias="op_pwd", description="Provider operator password")
    file_type: list[str] = Field(default_factory=list, description="Allowed file extensions")
    mime_type: str = Field(default="", alias="mimetype", description="Forced mime type")
    object_prefix: str = Field(default="", description="Provider-side object name prefix")

    @field_validator("file_type", mode="before")
    @classmethod
    def validate_file_type(cls, v):
        """Unset extension list is stored as null"""
        if v is None:
            return []
        return v


def _default_dir_name_rule() -> str:
    return get_settings().storage.default_dir_name_rule


def _default_file_name_rule() -> str:
    return get_settings().storage.default_file_name_rule


class StoragePolicy(BaseModel):
    """
    Storage policy configuration.

    Describes one storage backend and the rules used to name files stored in it.
    Instances are immutable; `options` holds the canonical encoding of
    `options_serialized` as of the last save.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str = ""
    type: str = ""
    server: str = ""
    bucket_name: str = ""
    is_private: bool = False
    base_url: str = ""
    access_key: str = ""
    secret_key: str = ""
    max_size: int = Field(default=0, ge=0, description="Max single file size in bytes (0 = unlimited)")
    auto_rename: bool = True
    dir_name_rule: str = Field(default_factory=_default_dir_name_rule)
    file_name_rule: str = Field(default_factory=_default_file_name_rule)
    is_origin_link_enable: bool = False
    options: str = ""
    options_serialized: PolicyOption = Field(default_factory=PolicyOption)

    @property
    def backend_type(self) -> BackendType:
        """Backend type parsed from the raw type tag."""
        return BackendType.parse(self.type)

    @classmethod
    def from_model(cls, model: "StoragePolicyModel") -> "StoragePolicy":
        """Build a policy from its database row, decoding the stored options."""
        from file_storage.options import decode_options

        return cls(
            id=model.id,
            name=model.name,
            type=model.type,
            server=model.server or "",
            bucket_name=model.bucket_name or "",
            is_private=model.is_private,
            base_url=model.base_url or "",
            access_key=model.access_key or "",
            secret_key=model.secret_key or "",
            max_size=model.max_size or 0,
            auto_rename=model.auto_rename,
            dir_name_rule=model.dir_name_rule or "",
            file_name_rule=model.file_name_rule or "",
            is_origin_link_enable=model.is_origin_link_enable,
            options=model.options or "",
            options_serialized=decode_options(model.options),
        )

    def __repr__(self):
        return f"<StoragePolicy(id={self.id}, name='{self.name}', type={self.type})>"
