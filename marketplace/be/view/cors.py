from flask import jsonify

ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"


def cors_headers(origin: str = "*", methods: str = "POST, OPTIONS") -> dict:
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        "Access-Control-Allow-Methods": methods,
    }


def preflight(headers: dict):
    return "", 200, headers


def json_response(payload: dict, status: int, headers: dict):
    return jsonify(payload), status, headers
