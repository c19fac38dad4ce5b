"""Message engine operations built on top of a ``TranslationStore``."""
