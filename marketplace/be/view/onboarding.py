from flask import Blueprint
from flask import request
from flask import current_app
from be.view.cors import cors_headers, preflight, json_response

bp_onboarding = Blueprint("onboarding", __name__)


@bp_onboarding.route("/create-stripe-connect-onboarding", methods=["OPTIONS", "POST"])
def create_stripe_connect_onboarding():
    headers = cors_headers(current_app.extensions["allowed_origin"])
    if request.method == "OPTIONS":
        return preflight(headers)

    authorization = request.headers.get("Authorization", "")
    # Empty body is acceptable
    body = request.get_json(silent=True) or {}

    onboarding = current_app.extensions["stripe_onboarding"]
    code, payload = onboarding.create_link(authorization, body)
    return json_response(payload, code, headers)
