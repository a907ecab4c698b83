"""Diagnostics reporting for decode anomalies.

Anomalies never propagate to callers; they are reported through a
``ReportFn`` collaborator. The default implementation writes to the
``character_render.diagnostics`` logger.
"""

import json
import logging
from typing import Any, Mapping

logger = logging.getLogger(__name__)


def log_report(message: str) -> None:
    """Default ``ReportFn``: log the message at ERROR level."""
    logger.error(message)


def format_anomaly(character: str, context: Mapping[str, Any]) -> str:
    """Build the report for a bucket that contained falsy elements."""
    return (
        "ERROR! falsy element in raw image layers, "
        + character
        + " "
        + json.dumps(dict(context), sort_keys=True, default=str)
    )


def format_decode_failure(character: str, context: Mapping[str, Any]) -> str:
    """Build the report for a bucket whose decode raised."""
    return (
        "ERROR! failed to decode image string, "
        + character
        + " "
        + json.dumps(dict(context), sort_keys=True, default=str)
    )
