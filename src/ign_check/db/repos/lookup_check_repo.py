from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from ign_check.db.models.lookup_check import LookupCheck
from ign_check.db.repos.base import BaseRepository

PERIODS: dict[str, timedelta] = {
    "1h": timedelta(hours=1),
    "24h": timedelta(hours=24),
    "7d": timedelta(days=7),
    "30d": timedelta(days=30),
}
DEFAULT_PERIOD = "24h"


def period_start(period: str, *, now: datetime | None = None) -> datetime:
    """Unknown periods fall back to the last 24 hours."""

    now = now or datetime.now(UTC)
    return now - PERIODS.get(period, PERIODS[DEFAULT_PERIOD])


@dataclass(frozen=True)
class GameCheckStats:
    game_code: str
    total_checks: int
    found_checks: int
    not_found_checks: int
    success_rate: float
    last_check: datetime | None


@dataclass(frozen=True)
class LookupStats:
    since: datetime
    total_checks: int = 0
    unique_clients: int = 0
    avg_duration_ms: float = 0.0
    by_outcome: dict[str, int] = field(default_factory=dict)
    games: list[GameCheckStats] = field(default_factory=list)


class LookupCheckRepository(BaseRepository[LookupCheck]):
    def __init__(self, session: Session) -> None:
        super().__init__(session=session, model=LookupCheck)

    def record(
        self,
        *,
        game_code: str,
        user_id: str,
        zone_id: str | None,
        outcome: str,
        status_code: int,
        duration_ms: int,
        ign: str | None = None,
        client_ip: str | None = None,
        request_id: str | None = None,
        checked_at: datetime | None = None,
    ) -> LookupCheck:
        row = LookupCheck(
            game_code=game_code,
            user_id=user_id,
            zone_id=zone_id or None,
            outcome=outcome,
            ign=ign,
            status_code=status_code,
            duration_ms=duration_ms,
            client_ip=client_ip,
            request_id=request_id,
            checked_at=checked_at or datetime.now(UTC),
        )
        return self.add(row)

    def stats_since(self, since: datetime) -> LookupStats:
        window = LookupCheck.checked_at >= since

        total, unique_clients, avg_duration = self.session.execute(
            select(
                func.count(LookupCheck.id),
                func.count(func.distinct(LookupCheck.client_ip)),
                func.avg(LookupCheck.duration_ms),
            ).where(window)
        ).one()

        by_outcome = {
            outcome: int(count)
            for outcome, count in self.session.execute(
                select(LookupCheck.outcome, func.count(LookupCheck.id))
                .where(window)
                .group_by(LookupCheck.outcome)
            ).all()
        }

        found = func.sum(case((LookupCheck.outcome == "found", 1), else_=0))
        not_found = func.sum(case((LookupCheck.outcome == "not_found", 1), else_=0))
        checks = func.count(LookupCheck.id)
        rows = self.session.execute(
            select(
                LookupCheck.game_code,
                checks,
                found,
                not_found,
                func.max(LookupCheck.checked_at),
            )
            .where(window)
            .group_by(LookupCheck.game_code)
            .order_by(checks.desc(), LookupCheck.game_code)
        ).all()

        games: list[GameCheckStats] = []
        for game_code, n, n_found, n_not_found, last_check in rows:
            n = int(n)
            n_found = int(n_found or 0)
            games.append(
                GameCheckStats(
                    game_code=game_code,
                    total_checks=n,
                    found_checks=n_found,
                    not_found_checks=int(n_not_found or 0),
                    success_rate=round(n_found * 100.0 / n, 2) if n else 0.0,
                    last_check=last_check,
                )
            )

        return LookupStats(
            since=since,
            total_checks=int(total or 0),
            unique_clients=int(unique_clients or 0),
            avg_duration_ms=round(float(avg_duration or 0.0), 2),
            by_outcome=by_outcome,
            games=games,
        )
