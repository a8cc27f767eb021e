"""
SQLAlchemy ORM models for the collection service.

One row per (set, card variant) flag. Rows with collected=False are kept
so a replaced set round-trips exactly as posted.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CollectedVariantDB(Base):
    """Collected flag for one card variant within a set."""

    __tablename__ = "collected_variants"
    __table_args__ = (UniqueConstraint("set_id", "card_variant_id", name="uq_set_card_variant"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    set_id: Mapped[str] = mapped_column(String(255), index=True)
    card_variant_id: Mapped[str] = mapped_column(String(512))
    collected: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return (
            f"<CollectedVariantDB(set={self.set_id}, card={self.card_variant_id}, "
            f"collected={self.collected})>"
        )
