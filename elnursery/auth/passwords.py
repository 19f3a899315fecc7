"""
Credential helpers: random password generation and bcrypt hashing.
"""

import secrets
import string

try:
    import bcrypt
except ImportError:
    raise ImportError("bcrypt is required. Install with: pip install bcrypt")


PASSWORD_LENGTH = 10

# Visually similar characters and symbols that break emails/templates
SIMILAR_CHARACTERS = set("ilLI|`oO0")
EXCLUDED_SYMBOLS = set("()[]{}<>:;.,?/!%^\"'\\")

LOWERCASE = "".join(c for c in string.ascii_lowercase if c not in SIMILAR_CHARACTERS)
UPPERCASE = "".join(c for c in string.ascii_uppercase if c not in SIMILAR_CHARACTERS)
DIGITS = "".join(c for c in string.digits if c not in SIMILAR_CHARACTERS)
SYMBOLS = "".join(
    c for c in string.punctuation if c not in SIMILAR_CHARACTERS and c not in EXCLUDED_SYMBOLS
)

DEFAULT_ROUNDS = 10


def generate_random_password(length: int = PASSWORD_LENGTH) -> str:
    """Generate a password with at least one lowercase, uppercase, digit and symbol"""
    pools = [LOWERCASE, UPPERCASE, DIGITS, SYMBOLS]
    if length < len(pools):
        raise ValueError(f"Password length must be at least {len(pools)}")

    chars = [secrets.choice(pool) for pool in pools]
    alphabet = "".join(pools)
    chars.extend(secrets.choice(alphabet) for _ in range(length - len(pools)))
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password using bcrypt with a fresh salt"""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash"""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class PasswordHasher:
    """Hashing bound to the configured bcrypt cost"""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def generate(self) -> str:
        return generate_random_password()

    def hash(self, password: str) -> str:
        return hash_password(password, rounds=self.rounds)

    def verify(self, password: str, password_hash: str) -> bool:
        return verify_password(password, password_hash)
