from __future__ import annotations

import pytest

from statsbench.config import BenchSettings, parse_address, parse_duration
from statsbench.errors import ConfigurationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("30s", 30.0),
        ("500ms", 0.5),
        ("1m30s", 90.0),
        ("2h", 7200.0),
        ("1.5s", 1.5),
        ("250us", 0.00025),
        ("12", 12.0),
        ("0.1", 0.1),
    ],
)
def test_parse_duration(value, expected):
    assert parse_duration(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", ["", "abc", "10x", "s10", "1m 30s", "-1s", "nan", "inf"])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ConfigurationError):
        parse_duration(value)


def test_parse_address():
    assert parse_address("127.0.0.1:8125") == ("127.0.0.1", 8125)
    assert parse_address("metrics.internal:9000") == ("metrics.internal", 9000)
    assert parse_address("[::1]:8125") == ("::1", 8125)


@pytest.mark.parametrize("value", ["localhost", ":8125", "host:port", "host:0", "host:70000"])
def test_parse_address_rejects_invalid(value):
    with pytest.raises(ConfigurationError):
        parse_address(value)


@pytest.mark.parametrize(
    "overrides",
    [
        {"batch_size": 0},
        {"concurrency": 0},
        {"duration_seconds": 0},
        {"duration_seconds": -1.0},
    ],
)
def test_settings_reject_non_positive_values(overrides):
    with pytest.raises(ConfigurationError):
        BenchSettings(**overrides)


def test_settings_address_label():
    settings = BenchSettings(host="10.0.0.5", port=8126)

    assert settings.address == ("10.0.0.5", 8126)
    assert settings.address_label == "10.0.0.5:8126"
