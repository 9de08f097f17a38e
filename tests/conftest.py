from __future__ import annotations

import socket

import pytest

from chatclient.config import DEFAULT_CONFIG


@pytest.fixture
def socket_pair():
    left, right = socket.socketpair()
    yield left, right
    left.close()
    right.close()


@pytest.fixture
def client_config():
    return DEFAULT_CONFIG.copy()
