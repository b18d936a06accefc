"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """A required field is missing or malformed."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class VerificationError(DomainError):
    """Base error for third-party credential verification."""

    pass


class InvalidCredentialError(VerificationError):
    """The identity provider rejected the credential, or could not be asked."""

    pass


class ExchangeFailedError(VerificationError):
    """An auth code exchange returned no usable token."""

    pass


class ProfileFetchFailedError(VerificationError):
    """Best-effort profile lookup failed after the credential was accepted."""

    pass
