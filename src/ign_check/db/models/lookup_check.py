from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from ign_check.db.base import Base, UTCNow


class LookupCheck(Base):
    __tablename__ = "lookup_checks"

    id: Mapped[int] = mapped_column(primary_key=True)

    game_code: Mapped[str] = mapped_column(String(64), nullable=False)
    user_id: Mapped[str] = mapped_column(String(128), nullable=False)
    zone_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    outcome: Mapped[str] = mapped_column(
        String(32), nullable=False
    )  # "found", "not_found", "unsupported", "upstream_error"
    ign: Mapped[str | None] = mapped_column(String(255), nullable=True)
    status_code: Mapped[int] = mapped_column(Integer, nullable=False)
    duration_ms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    client_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    request_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    checked_at: Mapped[UTCNow]

    __table_args__ = (
        Index("ix_lookup_checks_checked_at", "checked_at"),
        Index("ix_lookup_checks_game_checked_at", "game_code", "checked_at"),
    )
