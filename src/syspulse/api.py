"""JSON response envelope for request handlers that expose samples."""

import logging
from datetime import datetime, timezone

from syspulse.sampler import Sampler

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "Failed to fetch system metrics"


def metrics_response(sampler: Sampler, with_specs: bool = True) -> tuple[dict, int]:
    """
    Sample once and wrap the result for an HTTP layer.

    Returns (body, status): {"success": True, "data": ..., "timestamp": ...}
    with 200, or {"success": False, "error": ..., "timestamp": ...} with 500
    if sampling fails in a way the strategies do not cover.
    """
    try:
        snapshot = sampler.sample_with_specs() if with_specs else sampler.sample()
    except Exception:
        logger.exception("Error fetching system metrics")
        return {
            "success": False,
            "error": FAILURE_MESSAGE,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }, 500

    return {
        "success": True,
        "data": snapshot.to_dict(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }, 200
