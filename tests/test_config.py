import logging

import pytest

from server_alerts.config import AlertConfiguration, load_config, parse_recipients
from server_alerts.errors import ConfigurationError

BASE_ENV = {
    "ORIGINATOR": "ServerAlert",
    "RECIPIENTS": "31600000000,31611111111",
}


def test_recipients_parsed_in_order():
    config = load_config(BASE_ENV)

    assert config.originator == "ServerAlert"
    assert config.recipients == (31600000000, 31611111111)
    assert config.threshold == logging.ERROR
    assert config.timeout_seconds == 10.0
    assert config.self_test is False


def test_recipients_whitespace_is_stripped():
    assert parse_recipients(" 31600000000 , 31611111111") == (31600000000, 31611111111)


def test_large_recipient_numbers():
    assert parse_recipients("123456789012345678901234567890") == (
        123456789012345678901234567890,
    )


@pytest.mark.parametrize(
    "raw",
    [
        "31600000000,notanumber",
        "31600000000,,31611111111",
        "3160 0000",
        "3160_0000_000",
        "31600000000,3161_1111_111",
        "٣١٦٠٠",
        "31600000000,３１６",
    ],
)
def test_bad_recipients_fail(raw):
    with pytest.raises(ConfigurationError):
        load_config({**BASE_ENV, "RECIPIENTS": raw})


def test_missing_keys_reported_together():
    with pytest.raises(ConfigurationError) as exc:
        load_config({})

    assert "ORIGINATOR" in str(exc.value)
    assert "RECIPIENTS" in str(exc.value)


def test_alert_level_names():
    assert load_config({**BASE_ENV, "ALERT_LEVEL": "warn"}).threshold == logging.WARNING
    assert load_config({**BASE_ENV, "ALERT_LEVEL": "FATAL"}).threshold == logging.CRITICAL

    with pytest.raises(ConfigurationError):
        load_config({**BASE_ENV, "ALERT_LEVEL": "LOUD"})


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_bad_timeout(raw):
    with pytest.raises(ConfigurationError):
        load_config({**BASE_ENV, "TRANSPORT_TIMEOUT_SECONDS": raw})


def test_self_test_flag():
    assert load_config({**BASE_ENV, "STARTUP_SELF_TEST": "true"}).self_test is True


def test_configuration_is_immutable_and_needs_recipients():
    config = load_config(BASE_ENV)
    with pytest.raises(AttributeError):
        config.originator = "someone-else"

    with pytest.raises(ConfigurationError):
        AlertConfiguration(originator="ServerAlert", recipients=())


def test_signed_recipient_accepted():
    assert parse_recipients("+31600000000") == (31600000000,)
