# server/core/security.py

import hmac
import bcrypt


DEFAULT_ROUNDS = 10

# bcrypt only accepts secrets up to this many bytes
MAX_PASSWORD_BYTES = 72


# -------------------------------
# Password Hashing
# -------------------------------

def generate_salt(rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Generates a fresh bcrypt salt. Called once per signup.
    """
    return bcrypt.gensalt(rounds=rounds).decode("ascii")


def hash_password(password: str, salt: str) -> str:
    """
    One-way salted hash of the password.
    The same password and salt always produce the same hash.
    """
    return bcrypt.hashpw(password.encode("utf-8"), salt.encode("ascii")).decode("ascii")


def verify_password(password: str, password_hash: str, salt: str) -> bool:
    candidate = hash_password(password, salt)
    return hmac.compare_digest(candidate.encode("ascii"), password_hash.encode("ascii"))
