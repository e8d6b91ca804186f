import hashlib
from urllib.parse import urlencode

GRAVATAR_URL = "https://www.gravatar.com/avatar"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """
    Build the Gravatar image URL for an email address
    :return: the avatar URL, falling back to the "mystery person" image
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{GRAVATAR_URL}/{digest}?{query}"
