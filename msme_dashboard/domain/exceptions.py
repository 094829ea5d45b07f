"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class PortfolioAPIError(DomainException):
    """Portfolio API returned an error or is unavailable"""

    pass


class InvalidPortfolioDataError(PortfolioAPIError):
    """Portfolio payload is not JSON or does not match the expected shape"""

    pass


class InvalidStateTransition(DomainException):
    """Fetch state can only leave Loading once per mount"""

    pass
