"""Seed management API routes.

Provides a single endpoint to create/update the active dungeon seed for the
current browser session. Later ``/api/dungeon/*`` calls without an explicit
``seed`` query argument use the session seed.
"""
from flask import Blueprint, request, jsonify, session

from lavamaze.dungeon.rng import coerce_seed

bp_seed = Blueprint('seed_api', __name__)


@bp_seed.route('/api/dungeon/seed', methods=['POST'])
def set_seed():
    """Set (or generate) the dungeon seed.

    Body JSON (all optional):
      { "seed": <int|str|null>, "regenerate": <bool> }
    - If seed omitted or null => random seed.
    - If regenerate true => random seed even when one was provided.
    - If seed provided (int or string) => deterministic hashing.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({"error": "expected a JSON object"}), 400
    provided = data.get('seed', None)
    if isinstance(provided, bool) or not (provided is None or isinstance(provided, (int, str))):
        return jsonify({"error": "seed must be an integer or a string"}), 400
    if data.get('regenerate'):
        provided = None
    seed = coerce_seed(provided)
    session['dungeon_seed'] = seed
    return jsonify({"seed": seed})
