"""Provider base class and mock selection."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with interchangeable production and mock providers
Component = Literal["google", "facebook", "recall", "persistence"]


class ProviderBase(Provider):
    """Base for every provider in the container.

    A component base sets ``__mock_component__``; its subclasses are the
    implementations, told apart by ``__is_mock__``. Providers without
    subclasses are used as they are.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

    @classmethod
    def is_mockable(cls) -> bool:
        return cls.__mock_component__ is not None and bool(cls.__subclasses__())

    @classmethod
    def implementation(cls, use_mock: bool) -> type["ProviderBase"]:
        """Pick the production or mock subclass of a component base.

        Raises:
            ValueError: If no subclass of the requested kind is registered
        """
        if not cls.__subclasses__():
            return cls

        for impl in cls.__subclasses__():
            if impl.__is_mock__ == use_mock:
                return impl

        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {cls.__mock_component__ or cls.__name__}"
        )
