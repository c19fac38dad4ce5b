"""Domain errors raised by the message engine.

Every error carries the HTTP status it maps to and a short machine-readable
code; the API turns them into ``{"detail": ..., "code": ...}`` responses.
"""


class I18nError(Exception):
    status_code: int = 500
    code: str = "i18n_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# --- validation ---


class ValidationError(I18nError):
    status_code = 422
    code = "validation_error"


class PathResolutionError(ValidationError):
    """Key path is empty or has an empty segment."""

    code = "invalid_key_path"

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid key path {path!r}: segments must be non-empty")
        self.path = path


class InvalidLanguageCode(ValidationError):
    code = "invalid_language_code"

    def __init__(self, code: str) -> None:
        super().__init__(f"Invalid language code {code!r}")
        self.language_code = code


class InvalidImportPayload(ValidationError):
    code = "invalid_import_payload"


# --- conflicts ---


class ConflictError(I18nError):
    status_code = 409
    code = "conflict"


class DuplicateTranslation(ConflictError):
    code = "duplicate_translation"

    def __init__(self, key: str, locale: str) -> None:
        super().__init__(f"Message for key {key!r} and locale {locale!r} already exists")
        self.key = key
        self.locale = locale


class DuplicateLanguage(ConflictError):
    code = "duplicate_language"

    def __init__(self, code: str) -> None:
        super().__init__(f"Language with code {code!r} already exists")
        self.language_code = code


class KeyConflictError(ConflictError):
    """A key would be both a leaf value and a prefix of another key."""

    code = "key_conflict"

    def __init__(self, leaf: str, nested: str) -> None:
        super().__init__(f"Key {leaf!r} holds a value and cannot also contain {nested!r}")
        self.leaf = leaf
        self.nested = nested


# --- not found ---


class NotFoundError(I18nError):
    status_code = 404
    code = "not_found"


class MessageNotFound(NotFoundError):
    code = "message_not_found"

    def __init__(self, message_id: int) -> None:
        super().__init__(f"Message {message_id} not found")
        self.message_id = message_id


class KeyNotFound(NotFoundError):
    code = "key_not_found"

    def __init__(self, key: object) -> None:
        super().__init__(f"Key {key!r} not found")
        self.key = key


# --- store integrity ---


class IntegrityViolation(I18nError):
    status_code = 500
    code = "integrity_violation"


class CycleDetected(IntegrityViolation):
    code = "cycle_detected"

    def __init__(self, key_id: int) -> None:
        super().__init__(f"Cycle detected in key hierarchy at node {key_id}")
        self.key_id = key_id


# --- external provider ---


class ProviderError(I18nError):
    status_code = 502
    code = "provider_error"
