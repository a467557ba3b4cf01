import pytest

from sdpx import SessionConfig

NTP_NOW = 3913056000 << 32


def fake_nameinfo(sockaddr, flags):
    host, port = sockaddr[0], sockaddr[1]
    if len(sockaddr) == 4 and sockaddr[3]:
        host = f"{host}%{sockaddr[3]}"
    return host, str(port)


@pytest.fixture
def ntp_now() -> int:
    return NTP_NOW


@pytest.fixture
def config(ntp_now) -> SessionConfig:
    return SessionConfig(
        tool="sdpx-test 1.0",
        hostname=lambda: "streamer.example.com",
        clock=lambda: ntp_now,
        nameinfo=fake_nameinfo,
    )


@pytest.fixture
def nameinfo():
    return fake_nameinfo
