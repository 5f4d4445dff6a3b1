import secrets

TRACKING_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
TRACKING_CODE_LENGTH = 6
MAX_CODE_ATTEMPTS = 10


def generate_tracking_code(length: int = TRACKING_CODE_LENGTH) -> str:
    """Sample a code uniformly from an alphabet without look-alike characters (0/O, 1/I)."""
    return "".join(secrets.choice(TRACKING_CODE_ALPHABET) for _ in range(length))


def is_valid_tracking_code(code) -> bool:
    return (
        isinstance(code, str)
        and len(code) == TRACKING_CODE_LENGTH
        and all(ch in TRACKING_CODE_ALPHABET for ch in code)
    )


def normalize_tracking_code(code) -> str:
    return (code or "").strip().upper()
