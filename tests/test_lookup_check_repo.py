from __future__ import annotations

from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session, sessionmaker

from ign_check.db.repos.lookup_check_repo import LookupCheckRepository, period_start


def test_period_start_falls_back_to_24h() -> None:
    now = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)
    assert period_start("1h", now=now) == now - timedelta(hours=1)
    assert period_start("7d", now=now) == now - timedelta(days=7)
    assert period_start("bogus", now=now) == now - timedelta(hours=24)


def test_stats_since_counts_window_only(session_factory: sessionmaker[Session]) -> None:
    session = session_factory()
    repo = LookupCheckRepository(session)
    now = datetime.now(UTC)

    repo.record(
        game_code="mlbb",
        user_id="1",
        zone_id="2418",
        outcome="found",
        status_code=200,
        duration_ms=100,
        ign="Pro Player",
        client_ip="10.0.0.1",
    )
    repo.record(
        game_code="mlbb",
        user_id="2",
        zone_id="2418",
        outcome="not_found",
        status_code=404,
        duration_ms=300,
        client_ip="10.0.0.2",
    )
    repo.record(
        game_code="genshin",
        user_id="812345678",
        zone_id=None,
        outcome="found",
        status_code=200,
        duration_ms=200,
        client_ip="10.0.0.1",
    )
    # Outside the window.
    repo.record(
        game_code="coc",
        user_id="#2PP",
        zone_id=None,
        outcome="found",
        status_code=200,
        duration_ms=50,
        checked_at=now - timedelta(days=3),
    )
    repo.commit()

    stats = repo.stats_since(now - timedelta(hours=24))

    assert stats.total_checks == 3
    assert stats.unique_clients == 2
    assert stats.avg_duration_ms == 200.0
    assert stats.by_outcome == {"found": 2, "not_found": 1}

    by_game = {g.game_code: g for g in stats.games}
    assert set(by_game) == {"mlbb", "genshin"}
    assert stats.games[0].game_code == "mlbb"
    assert by_game["mlbb"].total_checks == 2
    assert by_game["mlbb"].found_checks == 1
    assert by_game["mlbb"].not_found_checks == 1
    assert by_game["mlbb"].success_rate == 50.0
    assert by_game["genshin"].success_rate == 100.0


def test_stats_on_empty_table(session_factory: sessionmaker[Session]) -> None:
    stats = LookupCheckRepository(session_factory()).stats_since(datetime.now(UTC))
    assert stats.total_checks == 0
    assert stats.avg_duration_ms == 0.0
    assert stats.games == []
