"""HTTP API for managing i18n messages stored as a key tree."""
