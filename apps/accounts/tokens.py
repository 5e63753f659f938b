from datetime import datetime, timedelta, timezone

import jwt
from django.conf import settings

from .models import Role


class TokenError(Exception):
    pass


def issue_token(user) -> str:
    now = datetime.now(timezone.utc)
    claims = {
        "sub": str(user.id),
        "email": user.email,
        "role": Role.parse(user.role).value,
        "iat": now,
        "exp": now + timedelta(seconds=settings.JWT_EXPIRATION),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """서명/만료 검증 후 claims 반환. role도 여기서 검증 (fail closed)"""
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "role", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e

    try:
        claims["role"] = Role.parse(claims["role"])
    except ValueError as e:
        raise TokenError("Invalid role claim") from e
    return claims
