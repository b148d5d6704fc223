# errors.py
"""Error types raised across the parsing pipeline.

Construction problems (unknown language, unusable model file) are
`ConfigurationError`s and propagate to the caller. `CoercionError` and
`ResolutionError` concern a single candidate; the parser logs them and keeps
going with the remaining candidates.
"""


class OntologyError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(OntologyError):
    pass


class UnknownLanguageError(ConfigurationError):
    def __init__(self, lang: str):
        super().__init__(f"Unknown language {lang}")
        self.lang = lang


class ModelError(ConfigurationError):
    """Missing, unreadable or malformed scorer model."""


class CoercionError(OntologyError):
    """A value could not be turned into the requested output type."""


class ResolutionError(OntologyError):
    """A datetime expression could not be grounded against the context."""
