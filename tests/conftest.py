"""Shared fixtures: /proc/net/dev tables written to temp files."""

from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"

HEADER = (
    "Inter-|   Receive                                                |  Transmit\n"
    " face |bytes    packets errs drop fifo frame compressed multicast"
    "|bytes    packets errs drop fifo colls carrier compressed\n"
)


@pytest.fixture
def net_dev_path() -> str:
    """Two interfaces: p3p1 with real traffic and an idle lo."""
    return str(FIXTURES / "proc.net.dev")


@pytest.fixture
def net_dev_header() -> str:
    return HEADER


@pytest.fixture
def write_net_dev(tmp_path):
    """Write a table body (header is added) and return its path."""

    def _write(body: str, header: str = HEADER) -> str:
        path = tmp_path / "net.dev"
        path.write_text(header + body, encoding="utf-8")
        return str(path)

    return _write
