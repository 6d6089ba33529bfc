"""Bearer token helpers for the external session collaborator.

The clinic core never verifies credentials. An identity provider issues a
signed token whose ``sub`` claim is the identity id; these helpers decode it
(and issue one for tooling and tests).
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt


def get_jwt_secret_key():
    """Get JWT secret key with production validation.

    In production (FLASK_ENV=production), this function validates that:
    - JWT_SECRET_KEY is set and not using weak defaults
    - Secret is at least 32 characters long

    Raises:
        ValueError: If production deployment uses weak or missing JWT secret
    """
    secret = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-change-me")
    is_production = os.getenv("FLASK_ENV") == "production"

    if is_production:
        weak_secrets = ["dev-jwt-secret-change-me", "dev-secret-change-me", "secret123"]
        if secret in weak_secrets or len(secret) < 32:
            raise ValueError(
                "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
                "Set JWT_SECRET_KEY environment variable."
            )

    return secret


JWT_ALGORITHM = "HS256"
JWT_EXPIRATION_HOURS = 24


def create_access_token(
    data: Dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """Create a JWT access token.

    Args:
        data: Payload data to encode in the token
        expires_delta: Optional custom expiration time

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRATION_HOURS)

    to_encode.update({"exp": expire})

    return jwt.encode(to_encode, get_jwt_secret_key(), algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Decode and validate a JWT access token.

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jwt.decode(token, get_jwt_secret_key(), algorithms=[JWT_ALGORITHM])
    except jwt.PyJWTError:
        return None


def create_identity_token(identity_id: str) -> str:
    """Create a token for an already-authenticated identity."""
    return create_access_token({"sub": str(identity_id), "type": "access"})


def get_identity_from_token(token: str) -> Optional[str]:
    """Extract the identity id from a token, or None when invalid."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    identity_id = payload.get("sub")
    if not identity_id:
        return None
    return str(identity_id)
