"""
Shared helpers for the users API suite
"""

import jwt
from typing import Any, Dict

TEST_JWT_SECRET = "alguma-senha-secreta"


def make_token(claims: Dict[str, Any], secret: str = TEST_JWT_SECRET) -> str:
    """Sign claims the way the external login service does"""
    return jwt.encode(claims, secret, algorithm="HS256")


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
