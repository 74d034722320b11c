"""Redis read-through cache and its invalidation by writes."""
import asyncio
from decimal import Decimal

from fakeredis import FakeServer
from fakeredis.aioredis import FakeRedis
from sqlalchemy import select

from parkhub.core.cache import RIDES_KEY, Cache, get_cache
from parkhub.main import app
from parkhub.models import Ride, StaffRole


def test_cache_get_set_delete():
    async def _run():
        cache = Cache(FakeRedis(server=FakeServer(), decode_responses=True))
        assert await cache.get("k") is None
        await cache.set("k", [{"id": "1", "price": Decimal("2.50")}], ttl=60)
        assert await cache.get("k") == [{"id": "1", "price": "2.50"}]
        assert 0 < await cache.client.ttl("k") <= 60
        await cache.delete("k")
        assert await cache.get("k") is None
        await cache.close()

    asyncio.run(_run())


def test_cache_ignores_foreign_payload():
    async def _run():
        client = FakeRedis(server=FakeServer(), decode_responses=True)
        await client.set("k", "not json")
        assert await Cache(client).get("k") is None

    asyncio.run(_run())


def test_disabled_cache_is_a_no_op():
    async def _run():
        cache = Cache()
        assert not cache.enabled
        await cache.set("k", [1])
        assert await cache.get("k") is None
        await cache.delete("k")

    asyncio.run(_run())


def test_ride_list_is_cached_and_invalidated(client, make_staff, headers_for, cache_server):
    """A create clears the rides key, the next read stores it again."""
    operator = make_staff(StaffRole.RIDE_STAFF)
    headers = headers_for(StaffRole.RIDE_MANAGER)
    body = {"name": "Log Flume", "price": "6.00", "location": "West", "staff_id": operator.staff_id}

    async def cached():
        return await Cache(FakeRedis(server=cache_server, decode_responses=True)).get(RIDES_KEY)

    assert client.get("/rides", headers=headers).json() == []
    assert asyncio.run(cached()) == []

    assert client.post("/rides", json=body, headers=headers).status_code == 201
    assert asyncio.run(cached()) is None

    rides = client.get("/rides", headers=headers).json()
    assert [r["name"] for r in rides] == ["Log Flume"]
    assert asyncio.run(cached()) == rides


def test_invalidation_runs_after_commit(client, session_maker, cache_server, make_staff, headers_for):
    """A read that races the invalidation already sees the write."""
    seen = []

    class RacingCache(Cache):
        async def delete(self, *keys):
            await super().delete(*keys)
            async with session_maker() as session:
                names = list((await session.scalars(select(Ride.name))).all())
            seen.append(names)

    app.dependency_overrides[get_cache] = lambda: RacingCache(FakeRedis(server=cache_server, decode_responses=True))
    operator = make_staff(StaffRole.RIDE_STAFF)
    headers = headers_for(StaffRole.RIDE_MANAGER)
    body = {"name": "Log Flume", "price": "6.00", "location": "West", "staff_id": operator.staff_id}

    ride = client.post("/rides", json=body, headers=headers).json()
    assert seen == [["Log Flume"]]
    assert [r["name"] for r in client.get("/rides", headers=headers).json()] == ["Log Flume"]

    assert client.delete(f"/rides/{ride['ride_id']}", headers=headers).status_code == 204
    assert seen[-1] == []
    assert client.get("/rides", headers=headers).json() == []
