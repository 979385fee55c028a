"""Filesystem-safe names for build directories and archives."""

import re
from collections.abc import Iterable


# Characters rejected by at least one of Windows, macOS or Linux
_UNSAFE_CHARS = re.compile(r'[/\\?%*:|"<>\x00-\x1f\x7f]')
_RESERVED_NAMES = re.compile(r"^\.+$")
_WINDOWS_RESERVED = re.compile(
    r"^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$", re.IGNORECASE
)
_TRAILING = re.compile(r"[. ]+$")

MAX_NAME_BYTES = 255
# Room for the ".zip" archive extension
MAX_SANITIZED_BYTES = MAX_NAME_BYTES - len(".zip")


def _truncate(text: str, max_bytes: int) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_filename(name: str, replacement: str = "_") -> str:
    """Sanitize a string for use as a file or directory name.

    Unsafe characters are replaced, trailing dots/spaces are dropped and
    names reserved on Windows are prefixed. The result is never empty and
    leaves room for an archive extension within the file name limit.
    """
    safe = _UNSAFE_CHARS.sub(replacement, name).strip()
    safe = _TRAILING.sub("", safe)

    if not safe or _RESERVED_NAMES.match(safe):
        return "unnamed"
    if _WINDOWS_RESERVED.match(safe):
        safe = f"{replacement}{safe}"

    return _TRAILING.sub("", _truncate(safe, MAX_SANITIZED_BYTES)) or "unnamed"


def unique_sanitized_names(names: Iterable[str]) -> dict[str, str]:
    """Map every name to a sanitized name that is unique in the set.

    Names are processed in order; a sanitized name that is already taken
    (compared case-insensitively, since macOS and Windows file systems are)
    gets ``_2``, ``_3``... appended.

    Returns:
        Mapping of original name to unique sanitized name
    """
    taken: set[str] = set()
    result: dict[str, str] = {}
    for name in names:
        if name in result:
            continue
        base = sanitize_filename(name)
        candidate = base
        counter = 2
        while candidate.lower() in taken:
            suffix = f"_{counter}"
            trimmed = _truncate(base, MAX_SANITIZED_BYTES - len(suffix))
            candidate = f"{trimmed}{suffix}"
            counter += 1
        taken.add(candidate.lower())
        result[name] = candidate
    return result
