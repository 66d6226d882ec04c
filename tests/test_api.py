from __future__ import annotations

import httpx
import pytest
import sqlalchemy as sa
from conftest import found_body, make_client
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ign_check.api.app import create_app
from ign_check.api.service import LookupService
from ign_check.core.config import Settings
from ign_check.lookup.dispatcher import LookupDispatcher
from ign_check.lookup.types import Found


def _not_found_for_unknown_ids(request: httpx.Request) -> httpx.Response:
    body = found_body(request)
    if body["user"]["userId"] == "000":
        return httpx.Response(200, json={"success": False})
    return httpx.Response(200, json=body)


@pytest.fixture
def transport_and_api(session_factory: sessionmaker[Session]):
    client, transport = make_client(_not_found_for_unknown_ids)
    app = create_app(
        cfg=Settings(cache_ttl_s=300.0),
        dispatcher=LookupDispatcher.with_default_games(client),
        session_factory=session_factory,
    )
    return transport, TestClient(app)


def test_health(transport_and_api) -> None:
    _, api = transport_and_api
    assert api.get("/health").json() == {"status": "ok"}


def test_list_and_get_games(transport_and_api) -> None:
    _, api = transport_and_api

    resp = api.get("/api/games")
    assert resp.status_code == 200
    body = resp.json()
    codes = {g["code"] for g in body["data"]}
    assert {"mlbb", "genshin", "coc"} <= codes
    assert body["meta"]["total_count"] == len(codes)
    assert resp.headers["x-request-id"] == body["meta"]["request_id"]

    resp = api.get("/api/games/genshin")
    assert resp.status_code == 200
    assert resp.json()["data"]["account_label"] == "uid"
    assert resp.json()["data"]["zone_label"] == "server"

    assert api.get("/api/games/dota2").status_code == 404


def test_search_games(transport_and_api) -> None:
    _, api = transport_and_api

    resp = api.get("/api/games/search", params={"q": "riot"})
    assert {g["code"] for g in resp.json()["data"]} == {"valorant", "lol"}

    assert api.get("/api/games/search", params={"q": " "}).status_code == 400


def test_check_ign_get_found_and_cached(transport_and_api) -> None:
    transport, api = transport_and_api

    resp = api.get("/api/check-ign/mlbb/469123581", params={"zone": "2418"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["account"] == {"ign": "Pro Player", "id": "469123581", "zone": "2418"}

    again = api.get("/api/check-ign/mlbb/469123581", params={"zone": "2418"})
    assert again.status_code == 200
    assert len(transport.requests) == 1


def test_check_ign_get_mlbb_without_zone_is_400(transport_and_api) -> None:
    transport, api = transport_and_api
    resp = api.get("/api/check-ign/mlbb/469123581")
    assert resp.status_code == 400
    assert resp.json()["error"]["name"] == "ValidationError"
    assert transport.requests == []


def test_check_ign_cached_hit_does_not_bypass_zone_validation(transport_and_api) -> None:
    transport, api = transport_and_api

    assert api.get("/api/check-ign/mlbb/1", params={"zone": "2"}).status_code == 200

    resp = api.get("/api/check-ign/mlbb/1:zone:2")
    assert resp.status_code == 400
    assert resp.json()["error"]["name"] == "ValidationError"
    assert len(transport.requests) == 1


def test_check_ign_status_mapping(transport_and_api) -> None:
    transport, api = transport_and_api

    resp = api.post("/api/check-ign", json={"gameId": "genshin", "params": {"uid": "912345678"}})
    assert resp.status_code == 200
    assert resp.json()["data"]["account"] == {
        "ign": "Pro Player",
        "uid": "912345678",
        "server": "TW_HK_MO",
    }

    resp = api.post("/api/check-ign", json={"gameId": "free-fire", "params": {"id": "000"}})
    assert resp.status_code == 404
    assert resp.json()["error"]["name"] == "Not Found"

    sent = len(transport.requests)
    resp = api.post("/api/check-ign", json={"gameId": "fortnite", "params": {"id": "x"}})
    assert resp.status_code == 501
    assert "Fortnite" in resp.json()["error"]["message"]
    assert len(transport.requests) == sent


def test_check_ign_upstream_error_is_502(session_factory: sessionmaker[Session]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="down")

    client, transport = make_client(handler, max_attempts=2)
    app = create_app(
        cfg=Settings(),
        dispatcher=LookupDispatcher.with_default_games(client),
        session_factory=session_factory,
    )
    api = TestClient(app)

    resp = api.get("/api/check-ign/coc/2PP")
    assert resp.status_code == 502
    assert resp.json()["error"]["name"] == "Bad Gateway"
    assert len(transport.requests) == 2

    # Upstream failures are not cached.
    api.get("/api/check-ign/coc/2PP")
    assert len(transport.requests) == 4


def test_check_ign_body_validation(transport_and_api) -> None:
    _, api = transport_and_api

    resp = api.post("/api/check-ign", json={"params": {"id": "1"}})
    assert resp.status_code == 400
    assert resp.json()["error"]["details"]

    resp = api.post("/api/check-ign", json={"gameId": "coc", "params": {}})
    assert resp.status_code == 400


def test_bulk_check(transport_and_api) -> None:
    _, api = transport_and_api

    resp = api.post(
        "/api/bulk-check",
        json={
            "checks": [
                {"gameId": "coc", "params": {"tag": "2PP"}},
                {"gameId": "free-fire", "params": {"id": "000"}},
                {"gameId": "dota2", "params": {"id": "1"}},
                {"gameId": "mlbb", "params": {"id": "1"}},
            ]
        },
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["total_checks"] == 4
    assert data["successful_checks"] == 1
    assert [r["code"] for r in data["results"]] == [200, 404, 501, 400]
    assert data["results"][0]["data"]["account"]["tag"] == "#2PP"

    too_many = {"checks": [{"gameId": "coc", "params": {"tag": "1"}}] * 11}
    assert api.post("/api/bulk-check", json=too_many).status_code == 400


def test_stats_reflect_logged_lookups(transport_and_api) -> None:
    _, api = transport_and_api

    api.get("/api/check-ign/coc/2PP")
    api.post("/api/check-ign", json={"gameId": "free-fire", "params": {"id": "000"}})

    resp = api.get("/api/stats", params={"period": "1h"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["period"] == "1h"
    assert data["total_checks"] == 2
    assert data["by_outcome"] == {"found": 1, "not_found": 1}


def test_lookup_log_failure_does_not_fail_the_lookup() -> None:
    client, _ = make_client(_not_found_for_unknown_ids)
    # No tables: every insert into lookup_checks fails and is rolled back.
    engine = sa.create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    service = LookupService(
        dispatcher=LookupDispatcher.with_default_games(client),
        session_factory=sessionmaker(bind=engine),
    )

    outcome = service.check("coc", "2PP")
    assert isinstance(outcome.result, Found)
    assert outcome.result.ign == "Pro Player"
