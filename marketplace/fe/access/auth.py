import time
import jwt

JWT_SECRET = "test-jwt-secret-with-enough-bytes-for-hs256"


def mint_token(user_id: str, secret: str = JWT_SECRET, expires_in: int = 3600, audience: str = "authenticated", **claims) -> str:
    payload = {"aud": audience, "exp": int(time.time()) + expires_in, "role": "authenticated"}
    if user_id is not None:
        payload["sub"] = user_id
    payload.update(claims)
    token = jwt.encode(payload, key=secret, algorithm="HS256")
    if isinstance(token, bytes):
        token = token.decode("utf-8")
    return token
