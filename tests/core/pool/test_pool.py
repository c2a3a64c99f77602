"""
Single-threaded pool tests.

Covers pre-warming, checkout from idle and by creation, exhaustion, the
validate/reset lifecycle on return, and the statistics snapshot.
"""

import pytest

from poolfactory import (
    Err,
    Ok,
    Pool,
    PoolConfig,
    PoolExhaustedError,
)


def checkout(pool):
    result = pool.checkout()
    assert result.is_ok(), result
    return result.value


class TestPrewarm:
    """Test pre-warming at construction."""

    def test_prewarm_fills_idle(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(min_size=3, max_size=5))

        stats = pool.stats()
        assert stats.available == 3
        assert stats.in_use == 0
        assert stats.total_created == 3
        assert connection_factory.calls == 3

    def test_prewarm_skips_failures(self, make_factory):
        factory = make_factory(failures={2})
        pool = Pool(factory, config=PoolConfig(min_size=3, max_size=5))

        stats = pool.stats()
        assert stats.available == 2
        assert stats.total_created == 2
        assert factory.calls == 3

    def test_prewarm_survives_raising_creator(self):
        def creator():
            raise ConnectionError("network down")

        pool = Pool(creator, config=PoolConfig(min_size=2, max_size=4))

        assert pool.stats().available == 0
        assert pool.stats().total_created == 0

    def test_no_prewarm_with_zero_min_size(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(min_size=0, max_size=4))
        assert pool.stats().available == 0
        assert connection_factory.calls == 0


class TestCheckout:
    """Test checkout and release."""

    def test_checkout_reuses_idle(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(min_size=1, max_size=2))

        handle = checkout(pool)

        assert handle.value is connection_factory.created[0]
        assert pool.stats().in_use == 1
        assert pool.stats().available == 0
        assert pool.stats().total_created == 1

    def test_checkout_creates_on_demand(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=2))

        first = checkout(pool)
        second = checkout(pool)

        assert first.value.conn_id == 1
        assert second.value.conn_id == 2
        assert pool.stats().total_created == 2
        assert pool.stats().in_use == 2

    def test_release_returns_to_idle(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=2))
        handle = checkout(pool)

        assert handle.release() is True

        stats = pool.stats()
        assert stats.available == 1
        assert stats.in_use == 0

    def test_idle_reuse_is_oldest_returned_first(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=3))
        first = checkout(pool)
        second = checkout(pool)
        third = checkout(pool)

        second.release()
        third.release()
        first.release()

        reused = [checkout(pool), checkout(pool), checkout(pool)]
        assert [handle.value.conn_id for handle in reused] == [2, 3, 1]

    def test_exhaustion_fails_immediately(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=2))
        held = [checkout(pool), checkout(pool)]

        result = pool.checkout()

        assert result.is_err()
        assert isinstance(result.error, PoolExhaustedError)
        assert result.error.in_use == 2
        assert result.error.max_size == 2
        assert pool.stats().in_use == 2
        assert len(held) == 2

    def test_checkout_after_release_when_exhausted(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))
        handle = checkout(pool)
        assert pool.checkout().is_err()

        handle.release()

        again = checkout(pool)
        assert again.value.conn_id == 1
        assert pool.stats().total_created == 1

    def test_creation_error_propagates_verbatim(self, failing_factory):
        pool = Pool(failing_factory, config=PoolConfig(max_size=2))

        result = pool.checkout()

        assert result == Err("connection refused")
        stats = pool.stats()
        assert stats.in_use == 0
        assert stats.total_created == 0

    def test_creator_exception_propagates(self):
        def creator():
            raise ConnectionError("network down")

        pool = Pool(creator, config=PoolConfig(max_size=2))

        with pytest.raises(ConnectionError):
            pool.checkout()
        assert pool.stats().in_use == 0

    def test_plain_return_value_is_accepted(self):
        pool = Pool(lambda: bytearray(16), config=PoolConfig(max_size=1))

        handle = checkout(pool)

        assert handle.value == bytearray(16)

    def test_dropped_handle_is_released(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))

        handle = checkout(pool)
        del handle

        assert pool.stats().in_use == 0
        assert pool.stats().available == 1


class TestLifecycle:
    """Test validation, reset and discard."""

    def test_invalid_idle_resource_replaced_on_acquire(
        self, connection_factory, validator, destroyed
    ):
        pool = Pool(
            connection_factory,
            validator=validator,
            config=PoolConfig(min_size=1, max_size=2),
            destroyer=destroyed,
        )
        connection_factory.created[0].alive = False

        handle = checkout(pool)

        assert handle.value.conn_id == 2
        assert destroyed.resources == [connection_factory.created[0]]
        stats = pool.stats()
        assert stats.total_created == 2
        assert stats.in_use == 1
        assert stats.available == 0

    def test_validation_on_acquire_disabled(self, connection_factory, validator):
        pool = Pool(
            connection_factory,
            validator=validator,
            config=PoolConfig(min_size=1, max_size=2).with_validation(False, False),
        )
        connection_factory.created[0].alive = False

        handle = checkout(pool)

        assert handle.value.conn_id == 1
        assert pool.stats().total_created == 1

    def test_failed_replacement_reports_creation_error(
        self, make_factory, validator
    ):
        factory = make_factory(failures={2})
        pool = Pool(
            factory, validator=validator, config=PoolConfig(min_size=1, max_size=2)
        )
        factory.created[0].alive = False

        result = pool.checkout()

        assert result == Err("connection refused")
        assert pool.stats().available == 0
        assert pool.stats().in_use == 0

    def test_reset_runs_on_release(self, connection_factory, resetter):
        pool = Pool(
            connection_factory, resetter=resetter, config=PoolConfig(max_size=1)
        )
        handle = checkout(pool)
        handle.value.dirty = True

        handle.release()

        assert connection_factory.created[0].dirty is False
        assert pool.stats().available == 1

    def test_failed_reset_discards(self, connection_factory, resetter, destroyed):
        pool = Pool(
            connection_factory,
            resetter=resetter,
            config=PoolConfig(max_size=1),
            destroyer=destroyed,
        )
        handle = checkout(pool)
        handle.value.alive = False

        handle.release()

        stats = pool.stats()
        assert stats.available == 0
        assert stats.in_use == 0
        assert destroyed.resources[0].closed is True

        replacement = checkout(pool)
        assert replacement.value.conn_id == 2
        assert pool.stats().total_created == 2

    def test_raising_resetter_discards(self, connection_factory):
        def resetter(conn):
            raise RuntimeError("reset exploded")

        pool = Pool(
            connection_factory, resetter=resetter, config=PoolConfig(max_size=1)
        )
        handle = checkout(pool)

        assert handle.release() is True
        assert pool.stats().available == 0
        assert pool.stats().in_use == 0

    def test_validation_on_release(self, connection_factory, validator, destroyed):
        pool = Pool(
            connection_factory,
            validator=validator,
            config=PoolConfig(max_size=2).with_validation(False, True),
            destroyer=destroyed,
        )
        good = checkout(pool)
        bad = checkout(pool)
        bad.value.alive = False

        good.release()
        bad.release()

        assert pool.stats().available == 1
        assert [conn.conn_id for conn in destroyed.resources] == [2]

    def test_release_not_validated_by_default(self, connection_factory, validator):
        pool = Pool(connection_factory, validator=validator, config=PoolConfig())
        handle = checkout(pool)
        handle.value.alive = False

        handle.release()

        assert pool.stats().available == 1

    def test_raising_destroyer_does_not_break_release(self, connection_factory):
        def destroyer(conn):
            raise OSError("close failed")

        pool = Pool(
            connection_factory,
            validator=lambda conn: False,
            config=PoolConfig(max_size=1).with_validation(True, True),
            destroyer=destroyer,
        )
        handle = checkout(pool)

        handle.release()

        assert pool.stats().in_use == 0
        assert pool.stats().available == 0

    def test_total_created_never_decreases(
        self, connection_factory, validator, resetter
    ):
        pool = Pool(
            connection_factory,
            validator=validator,
            resetter=resetter,
            config=PoolConfig(min_size=1, max_size=3),
        )
        seen = [pool.stats().total_created]

        for round_number in range(6):
            handles = [checkout(pool) for _ in range(2)]
            if round_number % 2:
                handles[0].value.alive = False
            for handle in handles:
                handle.release()
            seen.append(pool.stats().total_created)

        assert seen == sorted(seen)
        assert seen[-1] == len(connection_factory.created)
        assert pool.stats().in_use == 0


class TestWithResource:
    """Test the bracket-style entry point."""

    def test_returns_body_result(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))

        result = pool.with_resource(lambda conn: conn.conn_id * 10)

        assert result == Ok(10)
        assert pool.stats().in_use == 0
        assert pool.stats().available == 1

    def test_body_can_mutate_resource(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))

        def mark(conn):
            conn.dirty = True

        assert pool.with_resource(mark) == Ok(None)
        assert connection_factory.created[0].dirty is True

    def test_releases_when_body_raises(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))

        def body(conn):
            raise ValueError("bad query")

        with pytest.raises(ValueError):
            pool.with_resource(body)

        assert pool.stats().in_use == 0
        assert pool.stats().available == 1

    def test_creation_failure_leaves_counters(self, failing_factory):
        pool = Pool(failing_factory, config=PoolConfig(max_size=2))
        calls = []

        result = pool.with_resource(calls.append)

        assert result == Err("connection refused")
        assert calls == []
        assert pool.stats().in_use == 0
        assert pool.stats().total_created == 0

    def test_exhausted_pool(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))
        held = checkout(pool)

        result = pool.with_resource(lambda conn: conn)

        assert isinstance(result.error, PoolExhaustedError)
        held.release()


class TestStatsAndDrain:
    """Test statistics, configuration access and draining."""

    def test_stats_snapshot(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(min_size=2, max_size=4))
        handle = checkout(pool)

        stats = pool.stats()
        handle.release()

        assert stats.available == 1
        assert stats.in_use == 1
        assert stats.total_created == 2
        assert stats.max_size == 4
        assert stats.utilization == 0.25
        assert stats.to_dict() == {
            "available": 1,
            "in_use": 1,
            "total_created": 2,
            "max_size": 4,
            "utilization": 0.25,
        }

    def test_config_accessor(self, connection_factory):
        config = PoolConfig(min_size=1, max_size=3)
        pool = Pool(connection_factory, config=config)
        assert pool.config == config

    def test_drain_discards_idle(self, connection_factory, destroyed):
        pool = Pool(
            connection_factory,
            config=PoolConfig(min_size=3, max_size=4),
            destroyer=destroyed,
        )
        handle = checkout(pool)

        assert pool.drain() == 2

        stats = pool.stats()
        assert stats.available == 0
        assert stats.in_use == 1
        assert stats.total_created == 3
        assert len(destroyed.resources) == 2
        assert handle.value not in destroyed.resources

    def test_drain_empty_pool(self, connection_factory):
        pool = Pool(connection_factory, config=PoolConfig(max_size=1))
        assert pool.drain() == 0
