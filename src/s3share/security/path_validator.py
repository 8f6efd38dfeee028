"""Object path validation guarding the bucket root and the secret cache keyspace."""

import posixpath

from s3share.error_handling.errors import InvalidPathError

PARENT_SEGMENT = ".."
CURRENT_SEGMENT = "."


def canonicalize(object_path: str) -> str:
    """Resolve ``.``/``..`` segments and duplicate separators, POSIX style."""
    return posixpath.normpath(object_path) if object_path else ""


def is_safe_object_path(object_path: str) -> bool:
    """
    Check that *object_path* stays inside the object namespace.

    A path is safe when its canonical form is relative, contains no parent
    segment, is neither empty nor ``.``, and is spelled exactly as given, so
    two spellings of one object can never map to two cache keys.
    """
    if not object_path or "\x00" in object_path or "\\" in object_path:
        return False

    clean = canonicalize(object_path)
    if clean.startswith("/"):
        return False
    if PARENT_SEGMENT in clean.split("/"):
        return False
    if clean in ("", CURRENT_SEGMENT):
        return False
    return clean == object_path


def validate_object_path(object_path: str) -> str:
    """
    Return *object_path* unchanged if it is safe.

    Raises:
        InvalidPathError: If the path is unsafe or not in canonical form
    """
    if not is_safe_object_path(object_path):
        raise InvalidPathError(f"unsafe object path: {object_path!r}")
    return object_path
