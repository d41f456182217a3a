"""Key validation.

Keys double as file names directly under the cache folder, so the character
class is narrow enough to rule out separators and traversal.
"""

import re
from collections.abc import Iterable

from tagstash.errors import InvalidKeyError

_KEY_PATTERN = re.compile(r"[a-zA-Z0-9_.! ]+")

TAG_PREFIX = "tag!"


def validate_key(key: object) -> str:
    """Return ``key`` unchanged if it is a legal key, else raise InvalidKeyError."""
    if not isinstance(key, str):
        raise InvalidKeyError(
            f"Cache key must be a string, {type(key).__name__} given."
        )
    if not _KEY_PATTERN.fullmatch(key):
        raise InvalidKeyError(
            f'Invalid key "{key}". Valid filenames must match [a-zA-Z0-9_.! ].'
        )
    # "." and ".." would resolve to the cache folder or its parent
    if key == "." or ".." in key:
        raise InvalidKeyError(
            f'Invalid key "{key}". Keys must not be "." or contain "..".'
        )
    return key


def validate_keys(keys: Iterable[object]) -> list[str]:
    """Validate every key, failing on the first bad one."""
    return [validate_key(key) for key in keys]


def tag_key(tag: str) -> str:
    """Name of the list holding the keys tagged with ``tag``."""
    return TAG_PREFIX + validate_key(tag)
