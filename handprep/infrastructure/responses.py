from __future__ import annotations

import io

from flask import jsonify, send_file

from ..errors import PipelineError
from ..validation import ValidationOutcome


def send_png(data: bytes):
    return send_file(io.BytesIO(data), mimetype="image/png")


def send_outcome(outcome: ValidationOutcome, status: int | None = None):
    if status is None:
        status = 200 if outcome.accepted else 422
    return jsonify(outcome.to_dict()), status


def send_error(exc: PipelineError, status: int):
    return (
        jsonify(
            accepted=False,
            reason=exc.reason.value if exc.reason else None,
            message=exc.message,
        ),
        status,
    )
