import logging
import time

import jwt

from errors import InvalidToken, TokenExpired

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
TOKEN_TTL_SECONDS = 3600


class TokenService:
    """Issues and verifies stateless HS256 session tokens.

    The only identity claim is ``id``. Expiry is checked against ``clock``
    (epoch seconds) rather than PyJWT's wall clock, so tests can move time.
    """

    def __init__(self, secret_key, ttl_seconds=TOKEN_TTL_SECONDS, clock=time.time):
        if not secret_key:
            raise ValueError("Token signing key is not configured")
        self._secret_key = secret_key
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    @classmethod
    def from_config(cls, config, clock=time.time):
        return cls(
            config.get('JWT_SECRET_KEY'),
            ttl_seconds=config.get('TOKEN_TTL_SECONDS', TOKEN_TTL_SECONDS),
            clock=clock,
        )

    def issue(self, user_id):
        now = int(self.clock())
        claims = {
            "id": user_id,
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token):
        if not token:
            raise InvalidToken()
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[ALGORITHM],
                options={
                    "require": ["id", "exp"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", e)
            raise InvalidToken()

        exp = claims["exp"]
        if not isinstance(exp, (int, float)):
            raise InvalidToken()
        if self.clock() >= exp:
            raise TokenExpired()

        user_id = claims["id"]
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidToken()
        return user_id
