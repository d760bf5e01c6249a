import logging
from logging.handlers import RotatingFileHandler

from lavamaze import create_app
from lavamaze.server import _configure_logging


def test_configure_logging_idempotent(tmp_path, monkeypatch):
    app = create_app({"TESTING": True})
    # Redirect instance path to a temp directory to exercise logging setup
    monkeypatch.setattr(app, "instance_path", str(tmp_path))
    root = logging.getLogger()
    saved = list(root.handlers)
    saved_level = root.level
    try:
        # Run logging config twice to ensure idempotence (handler replace path)
        _configure_logging(app)
        log_path = _configure_logging(app)
        assert len(root.handlers) == 2
        assert sum(isinstance(h, RotatingFileHandler) for h in root.handlers) == 1
        logging.getLogger("lavamaze.test").info("hello log file")
        for h in root.handlers:
            h.flush()
        assert (tmp_path / "app.log").exists()
        assert log_path == str(tmp_path / "app.log")
        assert "hello log file" in (tmp_path / "app.log").read_text()
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            if h not in saved:
                h.close()
        root.setLevel(saved_level)
        for h in saved:
            root.addHandler(h)


def test_create_app_overrides_and_blueprints():
    app = create_app({"DUNGEON_MAX_SIZE": 50})
    assert app.config["DUNGEON_MAX_SIZE"] == 50
    assert {"dungeon", "seed_api"} <= set(app.blueprints)
    rules = {r.rule for r in app.url_map.iter_rules()}
    assert "/api/dungeon/generate" in rules
    assert "/api/dungeon/seed" in rules
