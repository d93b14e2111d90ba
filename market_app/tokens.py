import hashlib
import secrets
import time

AVATAR_BASE_URL = "https://www.gravatar.com/avatar/"


def new_listing_id(last_id=None):
    """
    Millisecond timestamp as a string. Bumped past `last_id` so ids issued
    in the same millisecond still increase.
    """
    candidate = time.time_ns() // 1_000_000
    if last_id is not None and candidate <= int(last_id):
        candidate = int(last_id) + 1
    return str(candidate)


def new_user_token():
    return secrets.token_hex(16)


def avatar_url(email):
    digest = hashlib.md5((email or "").strip().lower().encode("utf-8")).hexdigest()
    return f"{AVATAR_BASE_URL}{digest}?d=identicon"
