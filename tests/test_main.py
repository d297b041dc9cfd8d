"""Tests for application wiring: logging, background tasks and startup."""

import asyncio
import json
import logging
import sys
from datetime import timedelta

import pytest

from data_interface.core.logging import DevFormatter, JSONFormatter, get_logger, record_context
from data_interface.main import _token_blacklist_sweep_loop, create_app, task_done_callback
from data_interface.services.auth import create_access_token


def _record(msg: str, exc_info=None) -> logging.LogRecord:
    return logging.LogRecord(
        name="data_interface.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """Tests for the structured log formatter."""

    def test_fields(self):
        entry = json.loads(JSONFormatter().format(_record("hello")))
        assert entry["level"] == "WARNING"
        assert entry["logger"] == "data_interface.test"
        assert entry["message"] == "hello"
        assert "timestamp" in entry
        assert "exception" not in entry

    def test_special_characters_stay_on_one_line(self):
        line = JSONFormatter().format(_record('quote " and\nnewline'))
        assert "\n" not in line
        assert json.loads(line)["message"] == 'quote " and\nnewline'

    def test_exception_included(self):
        try:
            raise ValueError("bad")
        except ValueError:
            entry = json.loads(JSONFormatter().format(_record("failed", sys.exc_info())))
        assert "ValueError: bad" in entry["exception"]

    def test_extra_fields_become_keys(self):
        record = _record("Request rejected")
        record.method = "GET"
        record.path = "/api/protected/profile"
        record.auth_outcome = "missing_token"

        entry = json.loads(JSONFormatter().format(record))

        assert entry["method"] == "GET"
        assert entry["path"] == "/api/protected/profile"
        assert entry["auth_outcome"] == "missing_token"

    def test_extra_fields_do_not_replace_base_keys(self):
        record = _record("real message")
        record.level = "spoofed"
        entry = json.loads(JSONFormatter().format(record))
        assert entry["level"] == "WARNING"

    def test_record_context_skips_standard_attributes(self):
        record = _record("hello")
        assert record_context(record) == {}
        record.user_id = 3
        assert record_context(record) == {"user_id": 3}

    def test_dev_format_appends_context(self):
        record = _record("User logged in")
        record.username = "demo"
        record.auth_outcome = "login"
        line = DevFormatter().format(record)
        assert "| data_interface.test | User logged in | username=demo auth_outcome=login" in line

    def test_get_logger_prefix(self):
        assert get_logger("auth").name == "data_interface.auth"


@pytest.mark.asyncio
async def test_sweep_loop_removes_expired_entries(blacklist):
    expired = create_access_token(1, "demo", expires_delta=timedelta(seconds=-5))
    live = create_access_token(1, "demo")
    blacklist.add(expired)
    blacklist.add(live)

    task = asyncio.create_task(_token_blacklist_sweep_loop(0))
    for _ in range(5):
        await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert not blacklist.contains(expired)
    assert blacklist.contains(live)


@pytest.mark.asyncio
async def test_task_done_callback_logs_failure(caplog):
    async def fail():
        raise RuntimeError("sweep exploded")

    task = asyncio.create_task(fail(), name="failing-task")
    with pytest.raises(RuntimeError):
        await task

    with caplog.at_level(logging.ERROR, logger="data_interface.main"):
        task_done_callback(task)

    assert "failing-task" in caplog.text
    assert "sweep exploded" in caplog.text


def test_docs_hidden_without_debug(client):
    assert client.get("/docs").status_code == 404


def test_create_app_returns_fresh_instance():
    assert create_app() is not create_app()


def test_startup_seeds_demo_user(client, user_store):
    assert user_store.find_by_username("demo") is not None
    response = client.post(
        "/api/auth/login",
        json={"username": "demo", "password": "password123"},
    )
    assert response.status_code == 200
