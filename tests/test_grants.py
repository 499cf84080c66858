import asyncio
from collections import defaultdict
from contextlib import asynccontextmanager

import pytest

from core import db
from grants import repository as grant_repository


class FakeInventory:
    """
    Committed table state plus per-row locks.

    A transaction only publishes its writes on commit, and `FOR UPDATE`
    blocks on the row lock until the holder finishes, the way PostgreSQL
    behaves under READ COMMITTED.
    """

    def __init__(self, items: dict[int, int]):
        self.items = dict(items)
        self.grants: list[dict] = []
        self.locks: defaultdict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
        self.fail_decrement = False

    def transaction(self):
        inventory = self

        @asynccontextmanager
        async def _transaction():
            conn = FakeTxConnection(inventory)
            try:
                yield conn
            except BaseException:
                conn.release()
                raise
            inventory.items.update(conn.pending_items)
            inventory.grants.extend(conn.pending_grants)
            conn.release()

        return _transaction()


class FakeTxConnection:
    def __init__(self, inventory: FakeInventory):
        self.inventory = inventory
        self.pending_items: dict[int, int] = {}
        self.pending_grants: list[dict] = []
        self.held: list[asyncio.Lock] = []

    def _count(self, item_id):
        return self.pending_items.get(item_id, self.inventory.items[item_id])

    def release(self):
        for lock in self.held:
            lock.release()
        self.held.clear()

    async def fetchrow(self, sql, *args):
        if "FROM procurement_item" in sql:
            item_id = args[0]
            if "FOR UPDATE" in sql:
                lock = self.inventory.locks[item_id]
                await lock.acquire()
                self.held.append(lock)
            if item_id not in self.inventory.items:
                return None
            row = {"item_id": item_id, "item_count": self._count(item_id)}
            # Give concurrent requests a chance to interleave.
            await asyncio.sleep(0)
            return row
        if "INSERT INTO grants" in sql:
            user_id, procurement_id, count, club_id = args
            row = {
                "grant_id": len(self.inventory.grants) + len(self.pending_grants) + 1,
                "user_id": user_id,
                "procurement_id": procurement_id,
                "count": count,
                "club_id": club_id,
            }
            self.pending_grants.append(row)
            await asyncio.sleep(0)
            return row
        raise AssertionError(f"unexpected query: {sql}")

    async def execute(self, sql, *args):
        assert "UPDATE procurement_item" in sql
        if self.inventory.fail_decrement:
            raise db.ConnectivityError("connection lost")
        count, item_id = args
        self.pending_items[item_id] = self._count(item_id) - count
        return "UPDATE 1"


@pytest.fixture
def inventory(monkeypatch):
    inv = FakeInventory({1: 10, 2: 0})
    monkeypatch.setattr(db, "transaction", inv.transaction)
    return inv


def _grant(count, procurement_id=1):
    return grant_repository.create_grant_and_decrement_stock(
        user_id="u-1",
        procurement_id=procurement_id,
        count=count,
        club_id=7,
    )


def test_grant_decrements_stock_and_records_grant(inventory):
    row = asyncio.run(_grant(4))

    assert row == {"grant_id": 1, "user_id": "u-1", "procurement_id": 1, "count": 4, "club_id": 7}
    assert inventory.items[1] == 6
    assert inventory.grants == [row]


def test_grant_may_take_entire_stock(inventory):
    asyncio.run(_grant(10))

    assert inventory.items[1] == 0


def test_insufficient_stock_leaves_everything_unchanged(inventory):
    with pytest.raises(grant_repository.InsufficientStockError) as exc:
        asyncio.run(_grant(11))

    assert exc.value.available == 10
    assert exc.value.requested == 11
    assert inventory.items[1] == 10
    assert inventory.grants == []


def test_missing_item(inventory):
    with pytest.raises(grant_repository.ItemNotFoundError):
        asyncio.run(_grant(1, procurement_id=404))

    assert inventory.grants == []


def test_failed_decrement_rolls_back_grant(inventory):
    inventory.fail_decrement = True

    with pytest.raises(db.ConnectivityError):
        asyncio.run(_grant(3))

    assert inventory.items[1] == 10
    assert inventory.grants == []


def test_concurrent_grants_never_overallocate(inventory):
    async def run():
        return await asyncio.gather(_grant(6), _grant(6), _grant(6), return_exceptions=True)

    results = asyncio.run(run())

    granted = [r for r in results if isinstance(r, dict)]
    rejected = [r for r in results if isinstance(r, grant_repository.InsufficientStockError)]
    assert len(granted) == 1
    assert len(rejected) == 2
    assert inventory.items[1] == 4
    assert len(inventory.grants) == 1


def test_concurrent_grants_that_fit_all_succeed(inventory):
    async def run():
        return await asyncio.gather(*(_grant(2) for _ in range(5)))

    asyncio.run(run())

    assert inventory.items[1] == 0
    assert len(inventory.grants) == 5


# API layer


GRANT = {"user_id": "u-1", "procurement_id": 1, "count": 3, "club_id": 7}


def test_grant_routes_require_token(client):
    assert client.get("/api/g").status_code == 401
    assert client.post("/api/g", json=GRANT).status_code == 401


def test_create_grant_endpoint(client, auth_headers, inventory):
    resp = client.post("/api/g", json=GRANT, headers=auth_headers)

    assert resp.status_code == 201
    assert resp.json() == {"grant_id": 1, **GRANT}
    assert inventory.items[1] == 7


def test_create_grant_insufficient_stock_is_bad_request(client, auth_headers, inventory):
    resp = client.post("/api/g", json={**GRANT, "procurement_id": 2}, headers=auth_headers)

    assert resp.status_code == 400
    assert resp.json() == {"detail": "Insufficient count"}
    assert inventory.items[2] == 0


def test_create_grant_unknown_item_is_not_found(client, auth_headers, inventory):
    resp = client.post("/api/g", json={**GRANT, "procurement_id": 404}, headers=auth_headers)

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Procurement item not found"}


@pytest.mark.parametrize("count", [0, -5])
def test_create_grant_rejects_non_positive_count(client, auth_headers, inventory, count):
    resp = client.post("/api/g", json={**GRANT, "count": count}, headers=auth_headers)

    assert resp.status_code == 422
    assert inventory.items[1] == 10


def test_list_grants(client, auth_headers, monkeypatch):
    async def list_grants():
        return [{"grant_id": 1, "user_id": "u-1", "procurement_id": 1, "count": 3, "club_id": 7}]

    monkeypatch.setattr(grant_repository, "list_grants", list_grants)

    resp = client.get("/api/g", headers=auth_headers)

    assert resp.status_code == 200
    assert resp.json() == [{"grant_id": 1, **GRANT}]
