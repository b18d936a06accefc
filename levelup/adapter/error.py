"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class ProviderError(AdapterError):
    """External provider error."""

    pass


class UpstreamUnavailableError(ProviderError):
    """External provider could not be reached or answered with an error."""

    pass
