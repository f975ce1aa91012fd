from __future__ import annotations

import logging
from dataclasses import asdict

from flask import Flask, jsonify, request

from .config import DEFAULT_SETTINGS, SETTINGS, configure_logging
from .errors import DecodeError, FailureReason, InvariantViolation, ValidationRejected
from .infrastructure.responses import send_error, send_outcome, send_png
from .infrastructure.workers import WORKERS
from .validation import ValidationOutcome, validate_bytes

APP_VERSION = "1.0.0"

UPLOAD_FIELDS = ("file", "image")

logger = logging.getLogger(__name__)


def read_upload() -> bytes | None:
    """Return the uploaded image bytes from a multipart field or the raw body."""
    for field in UPLOAD_FIELDS:
        upload = request.files.get(field)
        if upload is not None:
            return upload.read() or None
    return request.get_data(cache=False) or None


def _missing_upload():
    return (
        jsonify(
            accepted=False,
            reason=None,
            message="No image supplied. Upload a file in the 'file' field.",
        ),
        400,
    )


def create_app() -> Flask:
    configure_logging()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = SETTINGS.max_upload_bytes

    @app.route("/validate", methods=["POST"])
    def validate_image():
        data = read_upload()
        if data is None:
            return _missing_upload()
        outcome: ValidationOutcome = validate_bytes(data, DEFAULT_SETTINGS)
        if outcome.reason is FailureReason.DECODE_FAILURE:
            return send_outcome(outcome, 400)
        return send_outcome(outcome)

    @app.route("/preprocess", methods=["POST"])
    def preprocess_image():
        data = read_upload()
        if data is None:
            return _missing_upload()
        try:
            return send_png(WORKERS.submit(data).result())
        except DecodeError as exc:
            return send_error(exc, 400)
        except ValidationRejected as exc:
            return send_outcome(exc.outcome)
        except InvariantViolation as exc:
            logger.error("Canonical output check failed: %s", exc.message)
            return send_error(exc, 500)

    @app.route("/health")
    def health():
        return jsonify(
            ok=True,
            version=APP_VERSION,
            target_width=DEFAULT_SETTINGS.target_width,
            target_height=DEFAULT_SETTINGS.target_height,
        )

    @app.route("/settings")
    def settings_view():
        return jsonify(asdict(DEFAULT_SETTINGS))

    return app


# Module-level application for WSGI servers (``handprep.app:app``).
app = create_app()
application = app
