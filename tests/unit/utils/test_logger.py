"""Tests for logging setup."""

import json
import logging

import pytest
import structlog

from apikeys_client.utils.logger import add_service_info, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    yield
    root_logger.handlers = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


def test_production_logging_renders_json(capsys):
    setup_logging(is_production=True)

    with structlog.contextvars.bound_contextvars(service_url="http://keys.test"):
        get_logger("apikeys_client.test").info("API key lookup", operation="get")

    line = capsys.readouterr().out.strip().splitlines()[-1]
    event = json.loads(line)
    assert event["event"] == "API key lookup"
    assert event["operation"] == "get"
    assert event["service_url"] == "http://keys.test"
    assert event["level"] == "info"


def test_httpx_request_logging_is_quieted():
    setup_logging()

    assert logging.getLogger("httpx").level == logging.WARNING


def test_add_service_info_copies_bound_service_url():
    with structlog.contextvars.bound_contextvars(service_url="http://keys.test"):
        event = add_service_info(None, "info", {"event": "x"})

    assert event == {"event": "x", "service_url": "http://keys.test"}


def test_add_service_info_skips_unbound_service_url():
    structlog.contextvars.clear_contextvars()

    assert add_service_info(None, "info", {"event": "x"}) == {"event": "x"}


def test_only_service_url_is_taken_from_context(capsys):
    setup_logging(is_production=True)

    with structlog.contextvars.bound_contextvars(
        service_url="http://keys.test", request_id="abc"
    ):
        get_logger("apikeys_client.test").info("API key lookup")

    event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert event["service_url"] == "http://keys.test"
    assert "request_id" not in event
