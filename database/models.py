"""Database models for storage policies"""

from datetime import UTC, datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all models"""


class StoragePolicyModel(Base):
    """Storage policy row"""

    __tablename__ = "policies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, index=True)

    # --- Backend connection ---
    server: Mapped[str | None] = mapped_column(String(500), nullable=True)
    bucket_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    base_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    access_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    secret_key: Mapped[str | None] = mapped_column(Text, nullable=True)

    # --- Naming rules ---
    max_size: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)
    auto_rename: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    dir_name_rule: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_name_rule: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_origin_link_enable: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # Canonical JSON of the option bag, written by file_storage.options.prepare_for_save
    options: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC), nullable=False
    )

    def __repr__(self):
        return f"<StoragePolicy(id={self.id}, name='{self.name}', type={self.type})>"
