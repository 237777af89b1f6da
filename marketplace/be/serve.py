import logging
import os
from flask import Flask
from be.view import cron
from be.view import onboarding
from be.view import health
from be.model.config import Config
from be.model.cron import CronJob
from be.model.deadline import build_deadline_processor
from be.model.identity import (
    JwtIdentityResolver,
    SupabaseIdentityResolver,
    SupabaseProfileRepository,
    SqlProfileRepository,
)
from be.model.onboarding import StripeOnboarding
from be.model.payment import StripeAccountService
from be.model.store import init_database

LOG_FORMAT = "%(asctime)s [%(threadName)-12.12s] [%(levelname)-5.5s]  %(message)s"


def create_app(
    config: Config,
    deadline_processor=None,
    identity_resolver=None,
    profile_repository=None,
    payment_service=None,
) -> Flask:
    """
    Build the Flask app serving both handlers.

    Collaborators not passed in are built from ``config``; platform
    clients are only created for the ones that need them.
    """
    admin_client = None

    def admin():
        nonlocal admin_client
        if admin_client is None:
            from be.model.supabase_client import create_admin_client
            admin_client = create_admin_client(config)
        return admin_client

    if deadline_processor is None:
        client = admin() if config.deadline_backend == "rpc" else None
        deadline_processor = build_deadline_processor(config, client)

    if identity_resolver is None:
        if config.supabase_jwt_secret:
            identity_resolver = JwtIdentityResolver(config.supabase_jwt_secret)
        else:
            from be.model.supabase_client import create_anon_client
            identity_resolver = SupabaseIdentityResolver(create_anon_client(config))

    if profile_repository is None:
        if config.deadline_backend == "sql":
            profile_repository = SqlProfileRepository()
        else:
            profile_repository = SupabaseProfileRepository(admin())

    if payment_service is None:
        config.require("stripe_secret_key")
        payment_service = StripeAccountService(config.stripe_secret_key)

    app = Flask(__name__)
    app.extensions["deadline_processor"] = deadline_processor
    app.extensions["payment_service"] = payment_service
    app.extensions["cron_job"] = CronJob(deadline_processor)
    app.extensions["cron_secret"] = config.cron_secret
    app.extensions["allowed_origin"] = config.allowed_origin
    app.extensions["stripe_onboarding"] = StripeOnboarding(
        identity_resolver,
        profile_repository,
        payment_service,
        config.public_site_url,
    )

    app.register_blueprint(cron.bp_cron)
    app.register_blueprint(onboarding.bp_onboarding)
    app.register_blueprint(health.bp_health)
    return app


def init_logging(level: str = "INFO"):
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def be_run(host: str = "0.0.0.0", port: int = None):
    config = Config.from_env()
    init_logging(config.log_level)

    if config.deadline_backend == "sql":
        this_path = os.path.dirname(__file__)
        parent_path = os.path.dirname(this_path)
        init_database(parent_path, config.database_url)

    app = create_app(config)
    app.run(host=host, port=port or int(os.environ.get("PORT", 5000)))
