"""
Autocomplete API: prefix suggestions over HTTP.

Exposes the prefix index as a JSON API with endpoints for prefix search,
adding and deleting words, and rebuilding the index from the word store.
Built with Flask. Designed for containerized deployment.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from flask import Blueprint, Flask, current_app, jsonify, request
from flask_cors import CORS

from trie_autocomplete import __version__
from trie_autocomplete.config import Settings
from trie_autocomplete.service import AutocompleteService
from trie_autocomplete.store import WordStore, WordStoreError, open_word_store
from trie_autocomplete.trie import InvalidWordError, PrefixIndex

logger = logging.getLogger(__name__)

EXTENSION_KEY = "autocomplete"

api = Blueprint("api", __name__, url_prefix="/api")


def _service() -> AutocompleteService:
    return current_app.extensions[EXTENSION_KEY]


def _word_from_body() -> tuple[str | None, Any]:
    """Return ``(word, None)`` or ``(None, error response)``."""
    body = request.get_json(silent=True) or {}
    text = body.get("text") if isinstance(body, dict) else None
    # Blank means missing; otherwise the word is kept exactly as sent.
    if not text or (isinstance(text, str) and not text.strip()):
        return None, (jsonify({"error": "Word is required"}), 400)
    if not isinstance(text, str):
        return None, (jsonify({"error": "Word must be a string"}), 400)
    return text, None


# ── Core API ──────────────────────────────────────────────────────────────

@api.route("/search")
def search():
    """Return all words starting with ``q`` as a JSON array."""
    q = request.args.get("q")
    if q is None:
        return jsonify({"error": "Missing query parameter 'q'"}), 400
    limit = request.args.get("limit", type=int)
    if limit is not None and limit < 0:
        limit = None
    return jsonify(_service().suggest(q, limit=limit))


@api.route("/add-word", methods=["POST"])
def add_word():
    """Add a word to the store and the index."""
    word, error = _word_from_body()
    if error:
        return error
    try:
        _service().add_word(word)
    except InvalidWordError as exc:
        return jsonify({"error": str(exc)}), 400
    except WordStoreError:
        return jsonify({"error": "Failed to add word"}), 500
    return jsonify({"message": "Word added successfully"}), 201


@api.route("/delete-word", methods=["DELETE"])
def delete_word():
    """Delete a word; deleting an unknown word still succeeds."""
    word, error = _word_from_body()
    if error:
        return error
    try:
        _service().remove_word(word)
    except InvalidWordError as exc:
        return jsonify({"error": str(exc)}), 400
    except WordStoreError:
        return jsonify({"error": "There was an issue deleting the word. Please try again."}), 500
    return jsonify({"message": "Word deleted successfully"}), 200


@api.route("/reload", methods=["POST"])
def reload():
    """Rebuild the index from the word store."""
    try:
        loaded = _service().reload()
    except WordStoreError:
        logger.exception("Reload from word store failed")
        return jsonify({"error": "Failed to reload words"}), 500
    return jsonify({"loaded": loaded})


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(settings: Settings | None = None, store: WordStore | None = None) -> Flask:
    """Build the Flask app, seeding a fresh index from *store*."""
    settings = settings or Settings.from_env()
    if store is None:
        store = open_word_store(settings.store_url, key=settings.store_key)

    service = AutocompleteService(PrefixIndex(settings.max_word_length), store)
    try:
        service.bootstrap()
    except WordStoreError:
        logger.exception("Word store unavailable at startup; serving an empty index")

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.extensions[EXTENSION_KEY] = service
    CORS(app, origins=settings.cors_origins)
    app.register_blueprint(api)

    start_time = time.time()

    # ── Health & Info ─────────────────────────────────────────────────────

    @app.route("/")
    def index():
        """Landing page with API documentation."""
        return jsonify({
            "service": "Trie Autocomplete Service",
            "version": __version__,
            "description": "REST API for prefix-based autocomplete powered by a Trie",
            "endpoints": {
                "GET    /":                     "This help page",
                "GET    /health":               "Health check",
                "GET    /stats":                "Index statistics",
                "GET    /api/search?q=<pfx>":   "Autocomplete: all words starting with prefix",
                "POST   /api/add-word":         "Add a word  {\"text\": \"...\"}",
                "DELETE /api/delete-word":      "Delete a word  {\"text\": \"...\"}",
                "POST   /api/reload":           "Rebuild the index from the word store",
            },
        })

    @app.route("/health")
    def health():
        """Liveness / readiness probe."""
        return jsonify({
            "status": "healthy",
            "uptime_seconds": round(time.time() - start_time, 2),
            "word_count": len(service.index),
        })

    @app.route("/stats")
    def stats():
        """Index statistics."""
        return jsonify({
            "total_words": len(service.index),
            "total_nodes": service.index.node_count(),
            "uptime_seconds": round(time.time() - start_time, 2),
        })

    return app


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level, format="%(asctime)s [%(levelname)s] %(message)s"
    )
    app = create_app(settings)
    store = app.extensions[EXTENSION_KEY].store
    logger.info("Starting Trie Autocomplete Service on port %d", settings.port)
    try:
        app.run(host=settings.host, port=settings.port, debug=settings.debug)
    finally:
        store.close()
        logger.info("Word store closed")


if __name__ == "__main__":
    main()
