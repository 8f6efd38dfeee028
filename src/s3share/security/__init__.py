"""Security module for object path validation."""

from .path_validator import canonicalize, is_safe_object_path, validate_object_path

__all__ = ["canonicalize", "is_safe_object_path", "validate_object_path"]
