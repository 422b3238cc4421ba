from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from carmatch.app import app
from carmatch.core.logging import HANDLER_NAME, configure_logging


def _service_handlers() -> list[logging.Handler]:
    return [h for h in logging.getLogger().handlers if h.get_name() == HANDLER_NAME]


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_importing_app_leaves_root_logging_alone():
    assert _service_handlers() == []


def test_configure_logging_is_idempotent_and_keeps_other_handlers(restore_root_logging):
    other = logging.NullHandler()
    logging.getLogger().addHandler(other)
    configure_logging("DEBUG")
    configure_logging("DEBUG")
    assert len(_service_handlers()) == 1
    assert other in logging.getLogger().handlers
    assert logging.getLogger().level == logging.DEBUG


def test_startup_installs_service_handler(restore_root_logging):
    with TestClient(app) as client:
        assert client.get("/health").status_code == 200
        assert len(_service_handlers()) == 1
