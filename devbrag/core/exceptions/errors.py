from datetime import datetime
from typing import Optional


class DevbragError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InputError(DevbragError):
    pass


class SourceError(DevbragError):
    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.status = status
        super().__init__(message)


class SourceAuthenticationError(SourceError):
    pass


class SourceRateLimitError(SourceError):
    def __init__(
        self,
        message: str,
        retry_after: Optional[datetime] = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(message, status=403)


class SourceValidationError(SourceError):
    pass


class SourceNotFoundError(SourceError):
    def __init__(self, message: str, resource: str) -> None:
        self.resource = resource
        super().__init__(message, status=404)


class EnrichmentError(SourceError):
    def __init__(self, message: str, pr_url: str) -> None:
        self.pr_url = pr_url
        super().__init__(message)


class SummarizerError(DevbragError):
    pass
