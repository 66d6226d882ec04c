from __future__ import annotations

from collections.abc import Callable
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest
import sqlalchemy as sa
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import ign_check.db.models  # noqa: F401
from ign_check.db.base import Base
from ign_check.lookup.providers.base.client import BaseHttpClient
from ign_check.lookup.providers.codashop.client import CodashopClient

Handler = Callable[[httpx.Request], httpx.Response]


def form_of(request: httpx.Request) -> dict[str, str]:
    return {k: v[0] for k, v in parse_qs(request.content.decode(), keep_blank_values=True).items()}


def found_body(request: httpx.Request, *, username: str = "Pro+Player") -> dict[str, Any]:
    form = form_of(request)
    return {
        "success": True,
        "confirmationFields": {"productName": form["voucherTypeName"], "username": username},
        "user": {"userId": form["user.userId"], "zoneId": form["user.zoneId"]},
    }


class RecordingTransport(httpx.MockTransport):
    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def make_client(
    handler: Handler, *, max_attempts: int = 3, sleeps: list[float] | None = None
) -> tuple[CodashopClient, RecordingTransport]:
    transport = RecordingTransport(handler)
    http = BaseHttpClient(
        base_url="https://order-sg.codashop.com",
        headers={"Origin": "https://www.codashop.com", "Referer": "https://www.codashop.com/"},
        transport=transport,
    )
    sink = sleeps if sleeps is not None else []
    client = CodashopClient(http=http, max_attempts=max_attempts, _sleep=sink.append)
    return client, transport


@pytest.fixture
def session_factory() -> sessionmaker[Session]:
    engine = sa.create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
