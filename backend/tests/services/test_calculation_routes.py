"""Calculation Routes — end-to-end CRUD contract over HTTP.

Invariants:
    - GET returns 200 with every record, newest first
    - POST returns 201 with the stored record; invalid payloads return 422 and store nothing
    - DELETE /{id} returns 204, or 404 for an unknown id
    - DELETE (collection) returns 204 and leaves the list empty
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from tickertape.api.routes.calculations import get_calculation_repository
from tickertape.main import app


async def test_can_fetch_all_calculations(client, calculation_factory):
    await calculation_factory(3)

    res = await client.get("/api/calculations")

    assert res.status_code == 200
    assert len(res.json()) == 3


async def test_list_is_empty_without_records(client):
    res = await client.get("/api/calculations")
    assert res.status_code == 200
    assert res.json() == []


async def test_list_returns_newest_first(client, calculation_factory):
    created = await calculation_factory(4)

    res = await client.get("/api/calculations")

    ids = [item["id"] for item in res.json()]
    assert ids == [c.id for c in reversed(created)]
    timestamps = [item["created_at"] for item in res.json()]
    assert timestamps == sorted(timestamps, reverse=True)


async def test_list_items_expose_record_fields(client, calculation_factory):
    await calculation_factory(1)

    item = (await client.get("/api/calculations")).json()[0]

    assert set(item) == {"id", "expression", "result", "created_at", "updated_at"}


async def test_can_store_a_calculation(client):
    res = await client.post(
        "/api/calculations", json={"expression": "9 + 3 = 12", "result": 12},
    )

    assert res.status_code == 201
    body = res.json()
    assert body["expression"] == "9 + 3 = 12"
    assert body["result"] == 12
    assert isinstance(body["id"], int)
    assert body["created_at"]
    assert body["updated_at"]


async def test_store_then_list_contains_record_once(client, calculation_factory):
    await calculation_factory(2)

    await client.post(
        "/api/calculations", json={"expression": "7 / 2 = 3.5", "result": 3.5},
    )
    items = (await client.get("/api/calculations")).json()

    assert len(items) == 3
    matches = [i for i in items if i["expression"] == "7 / 2 = 3.5"]
    assert len(matches) == 1
    assert matches[0]["result"] == 3.5
    assert items[0]["expression"] == "7 / 2 = 3.5"


async def test_store_accepts_numeric_string_result(client):
    res = await client.post(
        "/api/calculations", json={"expression": "1.5 + 1 = 2.5", "result": "2.5"},
    )
    assert res.status_code == 201
    assert res.json()["result"] == 2.5


@pytest.mark.parametrize("payload,field", [
    ({"result": 12}, "expression"),
    ({"expression": "", "result": 12}, "expression"),
    ({"expression": 12, "result": 12}, "expression"),
    ({"expression": "9 + 3 = 12"}, "result"),
    ({"expression": "9 + 3 = 12", "result": "twelve"}, "result"),
    ({"expression": "9 + 3 = 12", "result": None}, "result"),
    ({"expression": "9 + 3 = 12", "result": True}, "result"),
])
async def test_invalid_payload_returns_422_and_stores_nothing(
    client, payload, field,
):
    res = await client.post("/api/calculations", json=payload)

    assert res.status_code == 422
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["category"] == "validation"
    assert field in [d["field"] for d in error["details"]]
    assert (await client.get("/api/calculations")).json() == []


async def test_delete_removes_only_that_calculation(client, calculation_factory):
    first, second = await calculation_factory(2)

    res = await client.delete(f"/api/calculations/{first.id}")

    assert res.status_code == 204
    assert res.content == b""
    items = (await client.get("/api/calculations")).json()
    assert [i["id"] for i in items] == [second.id]


async def test_delete_nonexistent_calculation_returns_404(
    client, calculation_factory,
):
    await calculation_factory(2)

    res = await client.delete("/api/calculations/9999")

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert len((await client.get("/api/calculations")).json()) == 2


async def test_delete_twice_returns_404_the_second_time(client, calculation_factory):
    (calculation,) = await calculation_factory(1)

    assert (await client.delete(f"/api/calculations/{calculation.id}")).status_code == 204
    assert (await client.delete(f"/api/calculations/{calculation.id}")).status_code == 404


@pytest.mark.parametrize("calculation_id", [2**63, 3_000_000_000, 2**31, 0, -1])
async def test_delete_out_of_range_id_returns_404(
    client, calculation_factory, calculation_id,
):
    await calculation_factory(1)

    res = await client.delete(f"/api/calculations/{calculation_id}")

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"
    assert len((await client.get("/api/calculations")).json()) == 1


async def test_delete_with_non_integer_id_returns_422(client):
    res = await client.delete("/api/calculations/abc")
    assert res.status_code == 422
    assert res.json()["error"]["details"][0]["field"] == "calculation_id"


async def test_delete_all_clears_every_calculation(client, calculation_factory):
    await calculation_factory(5)

    res = await client.delete("/api/calculations")

    assert res.status_code == 204
    assert res.content == b""
    assert (await client.get("/api/calculations")).json() == []


async def test_delete_all_on_empty_table_returns_204(client):
    res = await client.delete("/api/calculations")
    assert res.status_code == 204


async def test_ids_not_reused_after_delete_all(client, calculation_factory):
    created = await calculation_factory(3)
    await client.delete("/api/calculations")

    res = await client.post(
        "/api/calculations", json={"expression": "1 + 1 = 2", "result": 2},
    )

    assert res.json()["id"] > max(c.id for c in created)


async def test_storage_failure_returns_500(client, test_engine):
    async with test_engine.begin() as conn:
        await conn.exec_driver_sql("DROP TABLE calculations")

    res = await client.get("/api/calculations")

    assert res.status_code == 500
    assert res.json()["error"]["code"] == "DATABASE_ERROR"


class _InMemoryStore:
    """Minimal CalculationStore used to prove routes only depend on the protocol."""

    def __init__(self):
        self.rows = []
        self._next_id = 1

    async def create(self, expression, result):
        now = datetime.now(timezone.utc)
        row = SimpleNamespace(
            id=self._next_id, expression=expression, result=result,
            created_at=now, updated_at=now,
        )
        self._next_id += 1
        self.rows.append(row)
        return row

    async def list_all(self):
        return list(reversed(self.rows))

    async def delete_by_id(self, calculation_id):
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.id != calculation_id]
        return len(self.rows) < before

    async def delete_all(self):
        self.rows = []


async def test_routes_use_injected_store(client):
    store = _InMemoryStore()
    app.dependency_overrides[get_calculation_repository] = lambda: store

    await client.post("/api/calculations", json={"expression": "1 + 1 = 2", "result": 2})
    await client.post("/api/calculations", json={"expression": "2 + 2 = 4", "result": 4})
    items = (await client.get("/api/calculations")).json()

    assert [i["expression"] for i in items] == ["2 + 2 = 4", "1 + 1 = 2"]
    assert (await client.delete("/api/calculations/1")).status_code == 204
    assert [r.id for r in store.rows] == [2]
