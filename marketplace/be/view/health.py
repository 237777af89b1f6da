import logging
import time
from datetime import datetime, timezone
from flask import Blueprint
from flask import request
from flask import current_app
from be.view.cors import cors_headers, preflight, json_response

bp_health = Blueprint("health", __name__)

HEALTH_CORS = cors_headers("*", "GET, OPTIONS")


def run_check(check) -> dict:
    start = time.perf_counter()
    try:
        check()
        result = {"status": "pass"}
    except Exception as e:
        logging.error(f"health check failed: {e}")
        result = {"status": "fail", "message": str(e)}
    result["latency_ms"] = round((time.perf_counter() - start) * 1000)
    return result


@bp_health.route("/health-check", methods=["OPTIONS", "GET"])
def health_check():
    if request.method == "OPTIONS":
        return preflight(HEALTH_CORS)

    checks = {"database": run_check(current_app.extensions["deadline_processor"].ping)}
    if request.args.get("deep", "").lower() == "true":
        checks["stripe"] = run_check(current_app.extensions["payment_service"].balance_check)

    healthy = all(c["status"] == "pass" for c in checks.values())
    body = {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }
    return json_response(body, 200 if healthy else 503, HEALTH_CORS)
