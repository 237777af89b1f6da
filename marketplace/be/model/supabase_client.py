from supabase import create_client, Client
from supabase.lib.client_options import ClientOptions
from be.model.config import Config


def create_admin_client(config: Config) -> Client:
    """Service-role client; bypasses row level security."""
    config.require("supabase_url", "supabase_service_role_key")
    return create_client(
        config.supabase_url,
        config.supabase_service_role_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


def create_anon_client(config: Config) -> Client:
    config.require("supabase_url", "supabase_anon_key")
    return create_client(
        config.supabase_url,
        config.supabase_anon_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
