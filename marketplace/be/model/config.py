import os
from be.model import error

DEFAULT_SITE_URL = "https://collabmarket.fr"
DEFAULT_BATCH_LIMIT = 500
DEADLINE_BACKENDS = ("rpc", "sql")

# Variables the HTTP handlers cannot run without
REQUIRED_VARS = (
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_ANON_KEY",
    "STRIPE_SECRET_KEY",
)


class Config:
    """
    Settings read from the environment once at process start.

    Handlers receive this object explicitly; nothing reads os.environ
    while serving a request.
    """

    def __init__(
        self,
        supabase_url: str = None,
        supabase_service_role_key: str = None,
        supabase_anon_key: str = None,
        stripe_secret_key: str = None,
        allowed_origin: str = DEFAULT_SITE_URL,
        public_site_url: str = DEFAULT_SITE_URL,
        database_url: str = None,
        supabase_jwt_secret: str = None,
        cron_secret: str = None,
        deadline_backend: str = "rpc",
        deadline_batch_limit: int = DEFAULT_BATCH_LIMIT,
        log_level: str = "INFO",
    ):
        self.supabase_url = supabase_url
        self.supabase_service_role_key = supabase_service_role_key
        self.supabase_anon_key = supabase_anon_key
        self.stripe_secret_key = stripe_secret_key
        self.allowed_origin = allowed_origin
        self.public_site_url = public_site_url.rstrip("/")
        self.database_url = database_url
        self.supabase_jwt_secret = supabase_jwt_secret
        self.cron_secret = cron_secret
        self.deadline_backend = deadline_backend
        self.deadline_batch_limit = deadline_batch_limit
        self.log_level = log_level

        if self.deadline_backend not in DEADLINE_BACKENDS:
            raise error.error_invalid_config("DEADLINE_BACKEND", deadline_backend)
        if not isinstance(deadline_batch_limit, int) or deadline_batch_limit <= 0:
            raise error.error_invalid_config("DEADLINE_BATCH_LIMIT", deadline_batch_limit)

    @classmethod
    def from_env(cls, environ=None, required=REQUIRED_VARS) -> "Config":
        env = os.environ if environ is None else environ

        def get(name):
            # Empty strings count as unset
            value = env.get(name)
            return value if value else None

        missing = [name for name in required if not get(name)]
        if missing:
            raise error.error_missing_environment(*missing)

        batch_limit = get("DEADLINE_BATCH_LIMIT")
        if batch_limit is None:
            batch_limit = DEFAULT_BATCH_LIMIT
        else:
            try:
                batch_limit = int(batch_limit)
            except ValueError:
                raise error.error_invalid_config("DEADLINE_BATCH_LIMIT", batch_limit)

        return cls(
            supabase_url=get("SUPABASE_URL"),
            supabase_service_role_key=get("SUPABASE_SERVICE_ROLE_KEY"),
            supabase_anon_key=get("SUPABASE_ANON_KEY"),
            stripe_secret_key=get("STRIPE_SECRET_KEY"),
            allowed_origin=get("ALLOWED_ORIGIN") or DEFAULT_SITE_URL,
            public_site_url=get("PUBLIC_SITE_URL") or DEFAULT_SITE_URL,
            database_url=get("POSTGRES_URL"),
            supabase_jwt_secret=get("SUPABASE_JWT_SECRET"),
            cron_secret=get("CRON_SECRET"),
            deadline_backend=(get("DEADLINE_BACKEND") or "rpc").lower(),
            deadline_batch_limit=batch_limit,
            log_level=(get("LOG_LEVEL") or "INFO").upper(),
        )

    def require(self, *fields):
        """Raise if any of the given attributes is unset."""
        missing = [f.upper() for f in fields if not getattr(self, f)]
        if missing:
            raise error.error_missing_environment(*missing)
