"""
project: Lava Maze
module: __init__.py
License: MIT

Flask application factory.

The browser game fetches generated dungeons from the JSON API registered here
and renders them itself. Configuration comes from environment variables (a
local ``.env`` is loaded first) with defaults suited to development; the
``instance/`` directory holds runtime files such as the rotating log.
"""

import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

from lavamaze.dungeon.config import OVERRIDE_KEYS

# Load .env if present so SECRET_KEY and DUNGEON_* settings can be supplied
# without exporting shell variables during development.
load_dotenv()


def create_app(overrides: dict | None = None) -> Flask:
    """Build a configured Flask app with the dungeon blueprints registered.

    ``overrides`` is applied last, after environment defaults, which is how
    tests pin settings.
    """
    app = Flask(__name__, instance_relative_config=True)

    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only deployments still serve the API; only file logging needs it
        pass

    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        DUNGEON_DEFAULT_WIDTH=int(os.getenv("DUNGEON_DEFAULT_WIDTH", "35")),
        DUNGEON_DEFAULT_HEIGHT=int(os.getenv("DUNGEON_DEFAULT_HEIGHT", "35")),
        # Upper bound on requested grid sizes so one request cannot pin a worker
        DUNGEON_MAX_SIZE=int(os.getenv("DUNGEON_MAX_SIZE", "99")),
        DUNGEON_DISABLE_CACHE=os.getenv("DUNGEON_DISABLE_CACHE") == "1",
    )
    # Generation overrides only when explicitly set; DungeonConfig owns the defaults.
    for key in OVERRIDE_KEYS:
        if key in os.environ:
            app.config[key] = os.environ[key]
    if overrides:
        app.config.update(overrides)

    from lavamaze.routes.dungeon_api import bp_dungeon
    from lavamaze.routes.seed_api import bp_seed

    app.register_blueprint(bp_dungeon)
    app.register_blueprint(bp_seed)

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        app.logger.exception("Unhandled error %s", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app


__all__ = ["create_app"]
