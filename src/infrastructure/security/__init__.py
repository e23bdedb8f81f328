from .passwords import hash_password, verify_password
from .tokens import TokenPayload, create_access_token, decode_access_token

__all__ = [
    "TokenPayload",
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
