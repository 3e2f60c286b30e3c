"""
Health Check HTTP Trigger.

GET /api/health - configuration health of the upload notifier.

Reports the environment validation summary (required variables set or
missing, malformed values masked) and the effective configuration. Makes no
storage or RDP API calls.

Exports:
    health_handler: HTTP trigger function for GET /api/health
"""

import json
import sys
from datetime import datetime, timezone

import azure.functions as func

from config import debug_config
from config.env_validation import get_validation_summary
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "HealthCheck")


def health_handler(req: func.HttpRequest) -> func.HttpResponse:
    """
    Report configuration health.

    Returns:
        200 with status "healthy" when every required variable is valid,
        503 with status "unhealthy" otherwise
    """
    summary = get_validation_summary(include_warnings=True)
    healthy = summary["valid"]

    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": {
            "python_version": sys.version.split()[0],
            "function_runtime": "python",
        },
        "configuration": summary,
    }
    if healthy:
        body["effective_config"] = debug_config()
    else:
        logger.warning(
            f"Health check: {summary['error_count']} configuration errors",
            extra={'custom_dimensions': {'missing': summary['required_vars']['missing']}}
        )

    return func.HttpResponse(
        json.dumps(body, default=str),
        status_code=200 if healthy else 503,
        mimetype="application/json"
    )
