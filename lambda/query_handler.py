"""Lambda handler for the query endpoint — triggered by API Gateway.

Thin wrapper around QueryPipeline. All business logic lives in src/minirag/.
Request body: ``{"query": str}``. Response body: ``{answer, citations,
timing, usage}``; failures add an ``error`` field.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any

from minirag.config import load_settings
from minirag.pipeline.builder import build_query_pipeline
from minirag.pipeline.query import QueryPipeline

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

# Initialize outside handler for Lambda warm-start reuse
_pipeline: QueryPipeline | None = None


def _get_pipeline() -> QueryPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = build_query_pipeline(load_settings())
    return _pipeline


def _response(status: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """Handle API Gateway request — parse query, run pipeline, return JSON."""
    if event.get("httpMethod", "POST") != "POST":
        return _response(405, {"error": "Method not allowed"})

    try:
        body = json.loads(event.get("body") or "{}")
    except (json.JSONDecodeError, TypeError):
        body = {}

    question = body.get("query", "") if isinstance(body, dict) else ""
    if not isinstance(question, str) or not question.strip():
        return _response(400, {"error": "Query is required"})

    response = _get_pipeline().query(question)
    payload = response.to_dict()

    if not response.ok:
        logger.warning("Query failed: %s", response.error)
        return _response(500, {"error": response.error, **payload})

    return _response(200, payload)
