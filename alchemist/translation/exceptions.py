class TranslationFailedError(Exception):
    """Raised when the provider call behind one unit's translation fails."""
