"""
API endpoints for phrase generation, practice progress and n-gram analysis.
"""
import io
import logging
from typing import Optional

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, Field, ValidationError

from models.exceptions import (
    EmptyInputError,
    InvalidConfigurationError,
    PracticeError,
    UnknownSourceError,
)
from models.practice_settings import GeneratorParameters
from models.typing_metrics import format_time
from services.export_service import export_filename, export_history, export_ngrams, export_stats
from services.practice_service import PracticeService

logger = logging.getLogger(__name__)


class PhrasesRequest(BaseModel):
    source: str
    scope: Optional[int] = None
    combination: Optional[int] = None
    repetition: Optional[int] = None


class CompletePhraseRequest(BaseModel):
    source: str
    typed: str
    seconds: float = Field(ge=0)


class AnalyzeRequest(BaseModel):
    text: str
    top_n: int = Field(default=20, ge=1, le=500)


class CustomWordsRequest(BaseModel):
    text: str


def _error(message, status: int):
    return jsonify({"success": False, "message": message}), status


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def create_practice_api(service: PracticeService) -> Blueprint:
    practice_api = Blueprint("practice_api", __name__)

    def stats_payload():
        stats = service.stats_summary()
        stats["total_time_display"] = format_time(stats["total_time"])
        stats["current_streak"] = service.stats.current_streak
        stats["longest_streak"] = service.stats.longest_streak
        return stats

    @practice_api.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _error(exc.errors(include_url=False, include_context=False), 400)

    @practice_api.errorhandler(InvalidConfigurationError)
    @practice_api.errorhandler(EmptyInputError)
    @practice_api.errorhandler(PracticeError)
    def handle_bad_input(exc: Exception):
        return _error(str(exc), 400)

    @practice_api.errorhandler(UnknownSourceError)
    def handle_unknown_source(exc: UnknownSourceError):
        return _error(str(exc), 404)

    @practice_api.route("/api/sources", methods=["GET"])
    def list_sources_api():
        return jsonify({"success": True, "sources": service.source_names()})

    @practice_api.route("/api/custom-words", methods=["POST"])
    def set_custom_words_api():
        req = CustomWordsRequest(**(request.get_json(silent=True) or {}))
        words = service.set_custom_words(req.text)
        return jsonify({"success": True, "word_count": len(words)})

    @practice_api.route("/api/phrases", methods=["POST"])
    def generate_phrases_api():
        req = PhrasesRequest(**(request.get_json(silent=True) or {}))
        stored = service.settings.for_source(req.source)
        # Fields left out of the request fall back to the stored settings
        values = stored.parameters().as_kwargs()
        overrides = req.model_dump(exclude_unset=True, exclude={"source"})
        values.update(overrides)
        params = GeneratorParameters.from_mapping(values)
        practice_round = service.start_round(req.source, params)
        return jsonify(
            {
                "success": True,
                "source": req.source,
                "parameters": params.model_dump(),
                "phrases": practice_round.phrases,
                "lesson": practice_round.lesson,
            }
        )

    @practice_api.route("/api/phrases/complete", methods=["POST"])
    def complete_phrase_api():
        req = CompletePhraseRequest(**(request.get_json(silent=True) or {}))
        outcome = service.submit_phrase(req.source, req.typed, req.seconds)
        return jsonify(
            {
                "success": True,
                "advanced": outcome.advanced,
                "met_threshold": outcome.met_threshold,
                "cpm": outcome.cpm,
                "accuracy": outcome.accuracy,
                "lesson": outcome.round.lesson,
                "next_phrase": outcome.round.current_phrase,
                "round_cpms": outcome.round.cpms,
                "stats": stats_payload(),
            }
        )

    @practice_api.route("/api/stats", methods=["GET"])
    def stats_api():
        return jsonify({"success": True, "stats": stats_payload()})

    @practice_api.route("/api/history/export", methods=["GET"])
    def export_history_api():
        buffer = io.StringIO()
        export_history(service.history, buffer)
        filename = export_filename("history")
        logger.info("Exporting %d history records as %s", len(service.history), filename)
        return _csv_response(buffer.getvalue(), filename)

    @practice_api.route("/api/stats/export", methods=["GET"])
    def export_stats_api():
        buffer = io.StringIO()
        export_stats(service.stats_summary(), buffer)
        return _csv_response(buffer.getvalue(), export_filename("stats"))

    @practice_api.route("/api/analyze", methods=["POST"])
    def analyze_text_api():
        req = AnalyzeRequest(**(request.get_json(silent=True) or {}))
        analysis = service.analyze(req.text, top_n=req.top_n)
        return jsonify(
            {
                "success": True,
                "top": {
                    name: [{"ngram": ngram, "frequency": freq} for ngram, freq in ranked]
                    for name, ranked in analysis.top.items()
                },
                "distinct": {name: len(table) for name, table in analysis.tables.items()},
            }
        )

    @practice_api.route("/api/ngrams/<name>/export", methods=["GET"])
    def export_ngrams_api(name: str):
        corpus = service.corpus_provider.load(name)
        buffer = io.StringIO()
        export_ngrams(corpus, buffer)
        filename = export_filename(name)
        logger.info("Exporting corpus %s as %s", name, filename)
        return _csv_response(buffer.getvalue(), filename)

    return practice_api
