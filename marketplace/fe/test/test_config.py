import pytest
from be.model import error
from be.model.config import Config

FULL_ENV = {
    "SUPABASE_URL": "https://project.supabase.co",
    "SUPABASE_SERVICE_ROLE_KEY": "service-key",
    "SUPABASE_ANON_KEY": "anon-key",
    "STRIPE_SECRET_KEY": "sk_test_123",
}


class TestConfig:
    def test_defaults(self):
        config = Config.from_env(dict(FULL_ENV))
        assert config.supabase_url == "https://project.supabase.co"
        assert config.stripe_secret_key == "sk_test_123"
        assert config.allowed_origin == "https://collabmarket.fr"
        assert config.public_site_url == "https://collabmarket.fr"
        assert config.database_url is None
        assert config.cron_secret is None
        assert config.deadline_backend == "rpc"
        assert config.deadline_batch_limit == 500
        assert config.log_level == "INFO"

    def test_overrides(self):
        env = dict(FULL_ENV)
        env.update({
            "ALLOWED_ORIGIN": "https://app.example",
            "PUBLIC_SITE_URL": "https://app.example/",
            "POSTGRES_URL": "postgresql://u:p@db:5432/market",
            "CRON_SECRET": "s3cret",
            "DEADLINE_BACKEND": "SQL",
            "DEADLINE_BATCH_LIMIT": "50",
            "LOG_LEVEL": "debug",
        })
        config = Config.from_env(env)
        assert config.allowed_origin == "https://app.example"
        assert config.public_site_url == "https://app.example"
        assert config.database_url == "postgresql://u:p@db:5432/market"
        assert config.cron_secret == "s3cret"
        assert config.deadline_backend == "sql"
        assert config.deadline_batch_limit == 50
        assert config.log_level == "DEBUG"

    def test_reports_every_missing_variable(self):
        env = {"SUPABASE_URL": "https://project.supabase.co", "STRIPE_SECRET_KEY": ""}
        with pytest.raises(error.ConfigurationError) as exc:
            Config.from_env(env)
        message = exc.value.message
        assert "SUPABASE_SERVICE_ROLE_KEY" in message
        assert "SUPABASE_ANON_KEY" in message
        assert "STRIPE_SECRET_KEY" in message
        assert "SUPABASE_URL" not in message

    def test_nothing_required(self):
        config = Config.from_env({}, required=())
        assert config.supabase_url is None

    @pytest.mark.parametrize("name,value", [
        ("DEADLINE_BACKEND", "graphql"),
        ("DEADLINE_BATCH_LIMIT", "many"),
        ("DEADLINE_BATCH_LIMIT", "0"),
        ("DEADLINE_BATCH_LIMIT", "-5"),
    ])
    def test_invalid_values(self, name, value):
        env = dict(FULL_ENV)
        env[name] = value
        with pytest.raises(error.ConfigurationError):
            Config.from_env(env)

    def test_require(self):
        config = Config(stripe_secret_key="sk_test_1")
        config.require("stripe_secret_key")
        with pytest.raises(error.ConfigurationError) as exc:
            config.require("supabase_url", "supabase_anon_key")
        assert "SUPABASE_URL, SUPABASE_ANON_KEY" in exc.value.message
