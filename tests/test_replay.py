from datetime import datetime, timedelta, timezone

import pytest

from twitchkit.eventsub.errors import ReplayError
from twitchkit.eventsub.replay import InMemoryReplayStore, ReplayStoreConfig
from twitchkit.ids import MessageId

T0 = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
TTL = timedelta(minutes=15)


def test_default_config_matches_documented_limits():
    config = InMemoryReplayStore().config
    assert config.replay_window == timedelta(minutes=10)
    assert config.message_id_ttl == timedelta(minutes=15)
    assert config.max_entries == 4096


@pytest.mark.asyncio
async def test_second_sighting_is_reported_as_seen():
    store = InMemoryReplayStore()
    assert await store.seen_or_insert(MessageId("a"), T0, TTL) is False
    assert await store.seen_or_insert(MessageId("a"), T0, TTL) is True
    assert await store.seen_or_insert(MessageId("b"), T0, TTL) is False


@pytest.mark.asyncio
async def test_entries_expire_after_ttl():
    ttl = timedelta(seconds=10)
    store = InMemoryReplayStore()
    await store.seen_or_insert(MessageId("a"), T0, ttl)
    assert await store.seen_or_insert(MessageId("a"), T0 + ttl, ttl) is True

    other = InMemoryReplayStore()
    await other.seen_or_insert(MessageId("a"), T0, ttl)
    later = T0 + ttl + timedelta(seconds=1)
    assert await other.seen_or_insert(MessageId("a"), later, ttl) is False


@pytest.mark.asyncio
async def test_oldest_entries_are_evicted_beyond_bound():
    store = InMemoryReplayStore(ReplayStoreConfig(max_entries=2))
    await store.seen_or_insert(MessageId("a"), T0, TTL)
    await store.seen_or_insert(MessageId("b"), T0 + timedelta(seconds=1), TTL)
    await store.seen_or_insert(MessageId("c"), T0 + timedelta(seconds=2), TTL)

    assert await store.seen_or_insert(MessageId("c"), T0 + timedelta(seconds=3), TTL) is True
    assert await store.seen_or_insert(MessageId("a"), T0 + timedelta(seconds=3), TTL) is False


@pytest.mark.asyncio
async def test_negative_ttl_is_rejected():
    with pytest.raises(ReplayError):
        await InMemoryReplayStore().seen_or_insert(MessageId("a"), T0, timedelta(seconds=-1))