import hmac
from flask import Blueprint
from flask import request
from flask import current_app
from be.view.cors import cors_headers, preflight, json_response

bp_cron = Blueprint("cron", __name__)

CRON_CORS = cors_headers("*", "GET, POST, OPTIONS")


def check_cron_secret(secret: str) -> bool:
    # Open endpoint unless a secret is configured
    if not secret:
        return True
    auth = request.headers.get("Authorization", "")
    # Bytes, so a non-ASCII header is a mismatch rather than a TypeError
    return hmac.compare_digest(auth.strip().encode(), f"Bearer {secret}".encode())


@bp_cron.route("/auto-handle-orders", methods=["OPTIONS", "GET", "POST"])
def auto_handle_orders():
    if request.method == "OPTIONS":
        return preflight(CRON_CORS)

    if not check_cron_secret(current_app.extensions["cron_secret"]):
        return json_response({"success": False, "error": "Unauthorized"}, 401, CRON_CORS)

    job = current_app.extensions["cron_job"]
    code, body = job.run()
    return json_response(body, code, CRON_CORS)
