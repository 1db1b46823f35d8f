"""Credential sanitization for logs and user-visible errors."""

import re

_URI_CREDENTIALS = re.compile(r"(mongodb(?:\+srv)?://)([^@/\s]+)@")
_PASSWORD_OPTION = re.compile(r"(password=)[^&\s]+", re.IGNORECASE)


def sanitize_connection_string(uri: str) -> str:
    """Replace the userinfo part of a MongoDB URI with a placeholder."""
    sanitized = _URI_CREDENTIALS.sub(r"\1[REDACTED]@", uri)
    return _PASSWORD_OPTION.sub(r"\1[REDACTED]", sanitized)


def sanitize_error_message(error_msg: str) -> str:
    """Sanitize error messages that may echo a connection string."""
    return sanitize_connection_string(error_msg)
