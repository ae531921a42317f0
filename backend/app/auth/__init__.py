"""Authentication helpers.

- Passwords are hashed with passlib (pbkdf2_sha256).
- Access and refresh tokens are HS256 JWTs (PyJWT) with a `type` claim.
- Protected routes declare `Depends(get_current_user)`, which reads
  `Authorization: Bearer <access token>`.
"""

from .deps import get_current_user
from .security import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
    hash_password,
    verify_password,
)

__all__ = [
    "get_current_user",
    "create_access_token",
    "create_refresh_token",
    "decode_access_token",
    "decode_refresh_token",
    "hash_password",
    "verify_password",
]
