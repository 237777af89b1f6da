import logging
import jwt
from sqlalchemy.exc import SQLAlchemyError
from be.model import db_conn
from be.model import error
from be.model.db_schema import Profile as ProfileModel

# Stored role is French; the English spelling is accepted as well
INFLUENCER_ROLES = ("influenceur", "influencer")

TOKEN_AUDIENCE = "authenticated"


class AuthUser:
    def __init__(self, id: str, email: str = None):
        self.id = id
        self.email = email


class Profile:
    def __init__(self, id: str, role: str = None, stripe_account_id: str = None):
        self.id = id
        self.role = role
        self.stripe_account_id = stripe_account_id

    @property
    def is_influencer(self) -> bool:
        return self.role in INFLUENCER_ROLES


def bearer_token(authorization: str) -> str:
    if not authorization:
        raise error.error_missing_authorization()
    parts = authorization.split(None, 1)
    if parts and parts[0].lower() == "bearer":
        token = parts[1].strip() if len(parts) > 1 else ""
    else:
        token = authorization.strip()
    if not token:
        raise error.error_missing_authorization()
    return token


class IdentityResolver:
    def resolve(self, authorization: str) -> AuthUser:
        raise NotImplementedError


class SupabaseIdentityResolver(IdentityResolver):
    """Asks the platform auth service who owns the access token."""

    def __init__(self, client):
        self.client = client

    def resolve(self, authorization: str) -> AuthUser:
        token = bearer_token(authorization)
        try:
            response = self.client.auth.get_user(token)
        except Exception as e:
            logging.info(f"token rejected by auth service: {e}")
            raise error.error_unauthorized()

        user = getattr(response, "user", None)
        if user is None or not getattr(user, "id", None):
            raise error.error_unauthorized()
        return AuthUser(id=user.id, email=getattr(user, "email", None))


class JwtIdentityResolver(IdentityResolver):
    """Verifies platform access tokens locally with the project JWT secret."""

    def __init__(self, secret: str, audience: str = TOKEN_AUDIENCE):
        self.secret = secret
        self.audience = audience

    def resolve(self, authorization: str) -> AuthUser:
        token = bearer_token(authorization)
        try:
            claims = jwt.decode(
                token,
                key=self.secret,
                algorithms=["HS256"],
                audience=self.audience,
                options={"require": ["sub", "exp"]},
            )
        except jwt.exceptions.InvalidTokenError as e:
            logging.info(f"invalid access token: {e}")
            raise error.error_unauthorized()

        return AuthUser(id=claims["sub"], email=claims.get("email"))


class ProfileRepository:
    def get_profile(self, user_id: str):
        raise NotImplementedError


class SupabaseProfileRepository(ProfileRepository):
    def __init__(self, client):
        self.client = client

    def get_profile(self, user_id: str):
        response = (
            self.client.table("profiles")
            .select("stripe_account_id, role")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        rows = getattr(response, "data", None) or []
        if not rows:
            return None
        row = rows[0]
        return Profile(id=user_id, role=row.get("role"), stripe_account_id=row.get("stripe_account_id"))


class SqlProfileRepository(ProfileRepository):
    def get_profile(self, user_id: str):
        conn = db_conn.DBConn().conn
        try:
            row = conn.query(ProfileModel).filter_by(id=user_id).first()
        except SQLAlchemyError as e:
            conn.rollback()
            raise error.error_upstream(str(e))
        if row is None:
            return None
        return Profile(id=row.id, role=row.role, stripe_account_id=row.stripe_account_id)
