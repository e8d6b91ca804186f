import logging
from datetime import datetime, timedelta, timezone

import jwt

from errors import AuthenticationError, InternalError

logger = logging.getLogger(__name__)


class TokenService:
    def __init__(self, secret: str, expires_in: int = 360000, algorithm: str = "HS256"):
        """
        Sign and verify identity tokens

        Args:
            secret: Signing secret, injected from configuration
            expires_in: Token lifetime in seconds
            algorithm: JWT signing algorithm
        """
        if not secret:
            raise ValueError("A token secret is required")
        self.secret = secret
        self.expires_in = expires_in
        self.algorithm = algorithm

    def sign(self, user_id: str) -> str:
        """Issue a token embedding the user id"""
        now = datetime.now(timezone.utc)
        payload = {
            "user": {"id": user_id},
            "iat": now,
            "exp": now + timedelta(seconds=self.expires_in),
        }
        try:
            return jwt.encode(payload, self.secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError) as e:
            logger.error("Could not sign token for %s: %s", user_id, e)
            raise InternalError()

    def verify(self, token: str) -> str:
        """
        Verify the signature and expiry of a token

        Returns:
            The user id embedded in the token

        Raises:
            AuthenticationError: If the token is expired, tampered with or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            raise AuthenticationError("Token is not valid")
        except jwt.InvalidTokenError as e:
            logger.info("Rejected invalid token: %s", e)
            raise AuthenticationError("Token is not valid")

        user = payload.get("user")
        user_id = user.get("id") if isinstance(user, dict) else None
        if not isinstance(user_id, str) or not user_id:
            raise AuthenticationError("Token is not valid")
        return user_id
