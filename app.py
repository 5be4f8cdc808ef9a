"""
Flask application factory for the n-gram drill API.
"""
import logging
import os
from typing import Optional

from flask import Flask, jsonify

from api.practice_api import create_practice_api
from helpers.log_util import configure_logging
from models.corpus import CorpusProvider
from models.phrase_generator import Permuter
from models.practice_settings import PracticeSettings
from services.practice_service import PracticeService

SETTINGS_ENV = "NGRAM_DRILL_SETTINGS"

logger = logging.getLogger(__name__)


def load_settings(settings_path: Optional[str] = None) -> PracticeSettings:
    """Settings from the given JSON file, NGRAM_DRILL_SETTINGS, or defaults."""
    path = settings_path or os.environ.get(SETTINGS_ENV)
    if path:
        logger.info("Loading practice settings from %s", path)
        return PracticeSettings.from_json_file(path)
    return PracticeSettings.default()


def create_app(
    settings_path: Optional[str] = None,
    corpus_provider: Optional[CorpusProvider] = None,
    permuter: Optional[Permuter] = None,
) -> Flask:
    configure_logging()
    app = Flask(__name__)

    service = PracticeService(
        corpus_provider=corpus_provider or CorpusProvider(),
        settings=load_settings(settings_path),
        permuter=permuter,
    )
    app.extensions["practice_service"] = service
    app.register_blueprint(create_practice_api(service))

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    return app


if __name__ == "__main__":
    create_app().run(host="localhost", port=5000, debug=True)
