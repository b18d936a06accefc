"""Domain service marker."""


class Service:
    """Request-scoped domain logic built from repositories and adapters.

    Services hold collaborators only; persistent state lives behind the
    repository interfaces.
    """
