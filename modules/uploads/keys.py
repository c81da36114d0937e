"""
Filename sanitization and storage key derivation.

Keys look like ``{owner_id}/{unix_nanoseconds}/{base}{ext}`` where ``base``
is the lowercased filename stem with spaces replaced by underscores. The
nanosecond component keeps two uploads from the same owner apart in
practice; it is not a uniqueness guarantee.
"""

import posixpath
import time
from typing import Callable, Optional

FALLBACK_FILENAME = "uploaded_file"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def sanitize_filename(filename: Optional[str]) -> str:
    """
    Reduce a client-supplied filename to a bare base name.

    Directory components and traversal sequences are dropped, so the result
    can never move a storage key outside its owner's prefix. Empty or
    root-like names become FALLBACK_FILENAME.
    """
    if not filename:
        return FALLBACK_FILENAME

    # Treat Windows separators as separators too
    cleaned = filename.replace("\\", "/").replace("\x00", "").strip()
    cleaned = posixpath.basename(posixpath.normpath(cleaned))

    if cleaned in ("", ".", "..", "/"):
        return FALLBACK_FILENAME
    return cleaned


def resolve_content_type(declared: Optional[str]) -> str:
    """Trust the client's declared MIME type, defaulting to binary."""
    if declared and declared.strip():
        return declared.strip()
    return DEFAULT_CONTENT_TYPE


def derive_storage_key(
    owner_id: str,
    filename: str,
    clock_ns: Callable[[], int] = time.time_ns,
) -> str:
    """
    Build the storage key for an upload.

    Args:
        owner_id: Authenticated user ID
        filename: Already-sanitized filename
        clock_ns: Nanosecond clock, injectable for tests
    """
    base, ext = posixpath.splitext(filename)
    safe_base = base.lower().replace(" ", "_")
    return f"{owner_id}/{clock_ns()}/{safe_base}{ext}"
