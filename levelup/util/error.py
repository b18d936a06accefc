"""Errors raised while loading or using process configuration."""


class ConfigurationError(Exception):
    """A required setting is absent or points at something unusable.

    ``variables`` names the environment variables involved, when known,
    so startup failures can list everything that needs fixing at once.
    """

    def __init__(self, message: str, variables: list[str] | None = None):
        self.variables = variables or []
        super().__init__(message)
