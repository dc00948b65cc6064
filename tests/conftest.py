"""Shared test fixtures."""

import asyncio

import pytest

from sungrow.config import SunGrowConfig
from sungrow.constants import LOGIN_PATH


class FakeTransport:
    """Stands in for OpenApiTransport, replaying scripted responses per path."""

    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.responses: dict[str, list] = {}
        self.login_gate: asyncio.Event | None = None

    def add(self, path: str, status: int, body: dict | None = None) -> None:
        self.responses.setdefault(path, []).append((status, body))

    def add_error(self, path: str, error: Exception) -> None:
        self.responses.setdefault(path, []).append(error)

    def count(self, path: str) -> int:
        return sum(1 for called, _ in self.calls if called == path)

    async def post(self, path: str, body: dict) -> tuple[int, dict | None]:
        self.calls.append((path, body))
        if path == LOGIN_PATH and self.login_gate is not None:
            await self.login_gate.wait()
        queue = self.responses.get(path)
        if not queue:
            raise AssertionError(f"unexpected request to {path}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response


def login_ok(token: str = "tok-1") -> dict:
    return {"result_code": "1", "result_msg": "success", "result_data": {"token": token}}


def result_ok(result_data: dict) -> dict:
    return {"result_code": "1", "result_msg": "success", "result_data": result_data}


def device_points(points: dict) -> dict:
    return result_ok({"device_point_list": [{"device_point": points}]})


@pytest.fixture
def config() -> SunGrowConfig:
    return SunGrowConfig(
        portalUrl="https://gateway.example.test/",
        appKey="APPKEY",
        secretKey="SECRET",
        userName="user@example.com",
        userPassword="hunter2",
        plantSN="B22C2803603",
        psKey="5326778_14_1_1",
        loginTimeout=1.0,
    )


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
