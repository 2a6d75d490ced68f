"""Pytest configuration for module-order tests."""

import logging

import pytest

from module_order.logging_setup import JsonlHandler


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep user settings and the working directory inside a temp dir."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("MODULE_ORDER_LOG_LEVEL", raising=False)
    monkeypatch.delenv("MODULE_ORDER_LOG_PATH", raising=False)
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    root_level = root.level
    yield home

    # CLI runs and logging tests reconfigure the root logger
    root.setLevel(root_level)
    for handler in list(root.handlers):
        if isinstance(handler, JsonlHandler):
            root.removeHandler(handler)
            handler.close()
