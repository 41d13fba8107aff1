"""Domain error taxonomy shared by the matching and application apps."""


class MarketplaceError(Exception):
    """Base class for every error the marketplace core raises on purpose."""

    code = "marketplace_error"

    def __init__(self, message: str = "", **context):
        super().__init__(message or self.__class__.__doc__)
        self.context = context


class DuplicateApplicationError(MarketplaceError):
    """An active application already exists for this role."""

    code = "duplicate_application"


class InvalidTransitionError(MarketplaceError):
    """The application cannot move to the requested status."""

    code = "invalid_transition"


class NotFoundError(MarketplaceError):
    """The referenced record does not exist."""

    code = "not_found"


class CollaboratorUnavailableError(MarketplaceError):
    """A backing service failed or timed out."""

    code = "collaborator_unavailable"
