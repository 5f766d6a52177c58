"""
JWT service for bearer token validation and generation
The signing secret is supplied at construction; there is no module-level secret.
"""

import jwt
import time
import logging
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

# Tokens minted by the legacy login service carry the user id as "_id"
SUBJECT_CLAIMS = ("sub", "_id")

class JWTService:
    """Service for generating and validating user bearer tokens"""

    def __init__(self, secret_key: str, algorithms: Optional[List[str]] = None):
        if not secret_key:
            raise ValueError("JWT secret key is required")
        self.secret_key = secret_key
        self.algorithms = algorithms or ["HS256"]
        self.algorithm = self.algorithms[0]  # Used for signing

    def issue(
        self,
        subject: str,
        email: Optional[str] = None,
        is_admin: bool = False,
        expires_in: Optional[int] = None
    ) -> str:
        """
        Generate a signed token for a user

        Args:
            subject: User id placed in the "sub" claim
            email: Email claim (optional)
            is_admin: Admin flag claim
            expires_in: Lifetime in seconds; tokens never expire when omitted

        Returns:
            JWT token string
        """
        current_time = int(time.time())
        payload: Dict[str, Any] = {
            "sub": str(subject),
            "is_admin": bool(is_admin),
            "iat": current_time
        }
        if email is not None:
            payload["email"] = email
        if expires_in is not None:
            payload["exp"] = current_time + int(expires_in)

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

        logger.info(f"Generated access token for user: {subject}")
        return token

    def decode(self, token: str) -> Dict[str, Any]:
        """
        Validate a token signature and return its claims

        Args:
            token: JWT token string

        Returns:
            Decoded payload with the subject normalised into "sub"

        Raises:
            jwt.InvalidTokenError: If the token is malformed, tampered or expired
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=self.algorithms,
                options={"verify_signature": True}
            )
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token has expired")
            raise jwt.InvalidTokenError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"JWT validation failed: {str(e)}")
            raise

        subject = next((payload[claim] for claim in SUBJECT_CLAIMS if payload.get(claim)), None)
        if subject is None:
            raise jwt.InvalidTokenError("Missing required claim: sub")

        payload["sub"] = str(subject)
        return payload
