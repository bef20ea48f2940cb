from datetime import date, datetime

from sqlalchemy import String, Text, Boolean, Date, DateTime, ForeignKey, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db_base import Base


class Maintenance(Base):
    __tablename__ = "maintenances"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    asset_id: Mapped[int] = mapped_column(
        ForeignKey("assets.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    service_description: Mapped[str] = mapped_column(
        String(500),
        nullable=False,
    )

    # NULL means the service has not been performed yet
    completion_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
    )

    next_due_date: Mapped[date | None] = mapped_column(
        Date,
        nullable=True,
        index=True,
    )

    notes: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    is_completed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    asset: Mapped["Asset"] = relationship("Asset", back_populates="maintenances")
