import os
import sys

import pytest

# Ensure repository root importable early (run.py lives there)
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from lavamaze import create_app  # noqa: E402
from lavamaze.routes import dungeon_api  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True, "SECRET_KEY": "test-secret"})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def no_dungeon_cache():
    """Start from an empty generation cache and leave it empty afterwards."""
    dungeon_api._dungeon_cache.clear()
    yield
    dungeon_api._dungeon_cache.clear()


def pytest_configure(config):  # register custom marker
    config.addinivalue_line("markers", "performance: generation timing guardrails")
