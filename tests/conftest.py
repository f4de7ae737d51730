import pytest
from sentinel_listener import SentinelSession
from sentinel_listener.connection import Connection
from sentinel_listener.exceptions import ConnectionError

from .mocks import FakeConnection

default_sentinel_url = "redis://localhost:26379"


def pytest_addoption(parser):
    parser.addoption(
        "--sentinel-url",
        default=default_sentinel_url,
        action="store",
        help="Sentinel connection string, defaults to `%(default)s`",
    )


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "onlysentinel: test requires a running Redis Sentinel"
    )


@pytest.fixture()
def connection():
    return FakeConnection()


@pytest.fixture()
def session(connection):
    return SentinelSession(connection)


@pytest.fixture()
def sentinel_url(request):
    url = request.config.getoption("--sentinel-url")
    conn = Connection.from_url(url, socket_connect_timeout=0.5)
    try:
        conn.connect()
    except ConnectionError:
        pytest.skip(f"No Sentinel available at {url}")
    finally:
        conn.disconnect()
    return url
