import threading

import pytest

from edupath.services.realtime import ConnectionRegistry

from .conftest import FakeChannel


@pytest.mark.unit
class TestRegisterAndLookup:
    """Test the user -> channel mapping."""

    def test_lookup_unknown_user_returns_none(self, registry: ConnectionRegistry):
        assert registry.lookup(1) is None
        assert 1 not in registry

    def test_register_then_lookup(self, registry: ConnectionRegistry):
        channel = FakeChannel()
        assert registry.register(1, channel) is None
        assert registry.lookup(1) is channel
        assert len(registry) == 1

    def test_register_supersedes_previous_channel(self, registry: ConnectionRegistry):
        first, second = FakeChannel(), FakeChannel()
        registry.register(1, first)

        previous = registry.register(1, second)

        assert previous is first
        assert registry.lookup(1) is second
        # The old channel is not closed by the registry
        assert not first.closed

    def test_sequence_of_registrations_and_unregistrations(
        self, registry: ConnectionRegistry
    ):
        a, b, c = FakeChannel(), FakeChannel(), FakeChannel()
        registry.register(1, a)
        registry.register(2, b)
        registry.register(1, c)
        registry.unregister(2)

        assert registry.lookup(1) is c
        assert registry.lookup(2) is None
        assert sorted(registry.connected_user_ids()) == [1]


@pytest.mark.unit
class TestUnregister:
    """Test removal paths."""

    def test_unregister_is_idempotent(self, registry: ConnectionRegistry):
        registry.register(1, FakeChannel())
        assert registry.unregister(1) is True
        assert registry.unregister(1) is False
        assert registry.lookup(1) is None

    def test_unregister_with_stale_channel_keeps_successor(
        self, registry: ConnectionRegistry
    ):
        old, new = FakeChannel(), FakeChannel()
        registry.register(1, old)
        registry.register(1, new)

        assert registry.unregister(1, old) is False
        assert registry.lookup(1) is new

    def test_channel_close_unregisters_itself(self, registry: ConnectionRegistry):
        channel = FakeChannel()
        registry.register(1, channel)

        channel.close()

        assert registry.lookup(1) is None

    def test_superseded_channel_closing_late_leaves_successor(
        self, registry: ConnectionRegistry
    ):
        old, new = FakeChannel(), FakeChannel()
        registry.register(1, old)
        registry.register(1, new)

        old.close()

        assert registry.lookup(1) is new

    def test_close_callbacks_fire_once(self, registry: ConnectionRegistry):
        channel = FakeChannel()
        calls = []
        channel.add_close_callback(lambda ch: calls.append(ch))

        channel.close()
        channel.close()

        assert calls == [channel]

    def test_registering_already_closed_channel_is_removed_immediately(
        self, registry: ConnectionRegistry
    ):
        channel = FakeChannel()
        channel.close()

        registry.register(1, channel)

        assert registry.lookup(1) is None

    def test_clear(self, registry: ConnectionRegistry):
        registry.register(1, FakeChannel())
        registry.register(2, FakeChannel())
        registry.clear()
        assert len(registry) == 0


@pytest.mark.unit
class TestConcurrency:
    """Test the registry from many threads at once."""

    def test_concurrent_register_and_unregister(self, registry: ConnectionRegistry):
        user_count = 50
        channels = {user_id: FakeChannel() for user_id in range(1, user_count + 1)}
        barrier = threading.Barrier(user_count)

        def worker(user_id: int):
            barrier.wait()
            for _ in range(100):
                registry.register(user_id, channels[user_id])
                registry.lookup(user_id)
                if user_id % 2 == 0:
                    registry.unregister(user_id, channels[user_id])

        threads = [
            threading.Thread(target=worker, args=(user_id,)) for user_id in channels
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        # Odd users end registered, even users end unregistered
        for user_id, channel in channels.items():
            expected = None if user_id % 2 == 0 else channel
            assert registry.lookup(user_id) is expected
