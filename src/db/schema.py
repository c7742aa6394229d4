"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from src.core.shared_types import Status


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    board: Mapped[list[list[int]]] = mapped_column(JSON)
    turn: Mapped[str]
    turn_count: Mapped[int] = mapped_column(default=1)
    players: Mapped[dict[str, str]] = mapped_column(JSON)
    status: Mapped[str] = mapped_column(default=Status.WAITING)
    mode: Mapped[str]
    winner: Mapped[Optional[str]]
    end_reason: Mapped[Optional[str]]
    pending_blow: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    missed_capture: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSON, nullable=True
    )
    pending_draw: Mapped[Optional[str]]
    last_move: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON, nullable=True)
    messages: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    moves: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    version: Mapped[int] = mapped_column(nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)

    # every UPDATE checks and bumps the version: a write based on an outdated read fails
    __mapper_args__ = {"version_id_col": version}


class DBRating(Base):
    __tablename__ = "ratings"
    player_name: Mapped[str] = mapped_column(primary_key=True)
    rating: Mapped[int] = mapped_column(default=1200)
    wins: Mapped[int] = mapped_column(default=0)
    losses: Mapped[int] = mapped_column(default=0)
    draws: Mapped[int] = mapped_column(default=0)
    games: Mapped[int] = mapped_column(default=0)
    last_played: Mapped[Optional[datetime]]
