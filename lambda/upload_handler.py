"""Lambda handler for the upload endpoint — triggered by API Gateway.

Thin wrapper around IngestPipeline. All business logic lives in src/minirag/.
Accepts raw text ``{"text", "source", "title"?}`` or text already extracted by
a file-handling service ``{"document": {"filename", "text"}, "title"?}``.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from minirag.config import load_settings
from minirag.errors import IngestionError, ValidationError
from minirag.pipeline.builder import build_ingest_pipeline
from minirag.pipeline.ingest import IngestPipeline

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

# Initialize outside handler for Lambda warm-start reuse
_pipeline: IngestPipeline | None = None


def _get_pipeline() -> IngestPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = build_ingest_pipeline(load_settings())
    return _pipeline


def _response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _parse_upload(body: dict[str, Any]) -> tuple[str, str, str | None]:
    """Return ``(text, source, title)`` from either payload shape."""
    document = body.get("document")
    if isinstance(document, dict):
        text = document.get("text") or ""
        source = document.get("filename") or "unknown"
    else:
        text = body.get("text") or ""
        source = body.get("source") or ""
    title = body.get("title") or None
    return text, source, title


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request — parse upload, ingest, return stats."""
    if event.get("httpMethod", "POST") != "POST":
        return _response(405, {"error": "Method not allowed"})

    try:
        body = json.loads(event.get("body") or "{}")
    except (json.JSONDecodeError, TypeError):
        return _response(400, {"error": "Request body must be JSON"})
    if not isinstance(body, dict):
        return _response(400, {"error": "Request body must be a JSON object"})

    text, source, title = _parse_upload(body)
    if not text or not source:
        return _response(400, {"error": "Text and source are required"})

    try:
        result = _get_pipeline().ingest_text(text, source=source, title=title)
    except ValidationError as exc:
        return _response(400, {"error": str(exc)})
    except IngestionError as exc:
        logger.error("Upload of %s failed during %s: %s", source, exc.stage, exc)
        return _response(500, {"error": str(exc), "stage": exc.stage})

    return _response(200, {"success": True, "stats": result.stats()})
