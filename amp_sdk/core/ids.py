import random

from ..config.constants import RANDOM_ID_CHARSET, RANDOM_ID_LENGTH


def generate_random_string(length: int = RANDOM_ID_LENGTH) -> str:
    """Random alphanumeric identifier for users and sessions (not for secrets)."""
    return "".join(random.choices(RANDOM_ID_CHARSET, k=length))
