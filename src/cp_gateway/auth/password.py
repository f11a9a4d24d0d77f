"""Password hashing with the ``bcrypt`` library (no passlib).

bcrypt only looks at the first 72 bytes of a password and recent releases
refuse longer input, so passwords are cut to 72 UTF-8 bytes on both sides.
"""

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(plain: str) -> bytes:
    return plain.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(_encode(plain), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(_encode(plain), hashed.encode("utf-8"))
