import logging
from dataclasses import dataclass

from rest_framework import authentication, exceptions

from .models import Role
from .tokens import TokenError, decode_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """인증 경계에서 한 번 만들어 핸들러 → 서비스로 그대로 전달"""

    user_id: str
    role: Role
    email: str = ""

    is_authenticated = True

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN

    @property
    def is_vendor(self) -> bool:
        return self.role is Role.VENDOR

    @property
    def is_customer(self) -> bool:
        return self.role is Role.CUSTOMER


class JWTAuthentication(authentication.BaseAuthentication):
    keyword = "Bearer"

    def authenticate(self, request):
        header = authentication.get_authorization_header(request).decode("latin-1")
        if not header:
            return None

        parts = header.split()
        if len(parts) != 2 or parts[0] != self.keyword:
            raise exceptions.AuthenticationFailed("Invalid authorization header format")

        try:
            claims = decode_token(parts[1])
        except TokenError as e:
            logger.info(f"token rejected: {e}")
            raise exceptions.AuthenticationFailed("Invalid or expired token")

        identity = Identity(user_id=claims["sub"], role=claims["role"], email=claims.get("email", ""))
        return identity, claims

    def authenticate_header(self, request):
        return self.keyword
