from devbrag.core.exceptions.errors import (
    DevbragError,
    EnrichmentError,
    InputError,
    SourceAuthenticationError,
    SourceError,
    SourceNotFoundError,
    SourceRateLimitError,
    SourceValidationError,
    SummarizerError,
)

__all__ = [
    "DevbragError",
    "InputError",
    "SourceError",
    "SourceAuthenticationError",
    "SourceRateLimitError",
    "SourceValidationError",
    "SourceNotFoundError",
    "EnrichmentError",
    "SummarizerError",
]
