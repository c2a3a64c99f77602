import pytest

from poolfactory import Err, Ok


class FakeConnection:
    """Stand-in for a pooled connection."""

    def __init__(self, conn_id: int) -> None:
        self.conn_id = conn_id
        self.alive = True
        self.dirty = False
        self.closed = False

    def __repr__(self) -> str:
        return f"FakeConnection({self.conn_id})"


class ConnectionFactory:
    """
    Creator callback that records every connection it makes.

    ``failures`` lists the 1-based call numbers that return an error.
    """

    def __init__(self, failures=(), always_fail=False) -> None:
        self.calls = 0
        self.created: list[FakeConnection] = []
        self.failures = set(failures)
        self.always_fail = always_fail

    def __call__(self):
        self.calls += 1
        if self.always_fail or self.calls in self.failures:
            return Err("connection refused")
        conn = FakeConnection(len(self.created) + 1)
        self.created.append(conn)
        return Ok(conn)


class Destroyed:
    """Destroyer callback collecting what the pool discarded."""

    def __init__(self) -> None:
        self.resources: list[FakeConnection] = []

    def __call__(self, conn: FakeConnection) -> None:
        conn.closed = True
        self.resources.append(conn)


def is_alive(conn: FakeConnection) -> bool:
    return conn.alive


def reset_connection(conn: FakeConnection):
    if not conn.alive:
        return Err("cannot reset dead connection")
    conn.dirty = False
    return Ok(None)


@pytest.fixture
def connection_factory():
    return ConnectionFactory()


@pytest.fixture
def failing_factory():
    return ConnectionFactory(always_fail=True)


@pytest.fixture
def make_factory():
    return ConnectionFactory


@pytest.fixture
def destroyed():
    return Destroyed()


@pytest.fixture
def validator():
    return is_alive


@pytest.fixture
def resetter():
    return reset_connection
