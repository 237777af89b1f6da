error_code = {
    401: "Unauthorized",
    402: "Missing Authorization Header",
    403: "Only influencers can access Stripe onboarding",
    412: "Profile not found",
    413: "No Stripe account found. Please create one first.",
    500: "Missing required environment variable: {}",
    501: "Invalid configuration value for {}: {}",
    502: "{}",
    503: "Inconsistent deadline result: {}",
}


class MarketplaceError(Exception):
    code = 500

    def __init__(self, message: str, code: int = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class ConfigurationError(MarketplaceError):
    code = 500


class AuthenticationError(MarketplaceError):
    code = 401


class AuthorizationError(MarketplaceError):
    code = 403


class PreconditionError(MarketplaceError):
    code = 412


class UpstreamError(MarketplaceError):
    code = 502


def error_missing_environment(*names):
    return ConfigurationError(error_code[500].format(", ".join(names)), 500)


def error_invalid_config(name, value):
    return ConfigurationError(error_code[501].format(name, value), 501)


def error_missing_authorization():
    return AuthenticationError(error_code[402], 402)


def error_unauthorized():
    return AuthenticationError(error_code[401], 401)


def error_not_influencer():
    return AuthorizationError(error_code[403], 403)


def error_profile_not_found():
    return PreconditionError(error_code[412], 412)


def error_no_payment_account():
    return PreconditionError(error_code[413], 413)


def error_upstream(message):
    return UpstreamError(error_code[502].format(message), 502)


def error_inconsistent_result(detail):
    return UpstreamError(error_code[503].format(detail), 503)
