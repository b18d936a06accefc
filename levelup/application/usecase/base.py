"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One request from a route, carried out against domain services.

    Use cases are request-scoped and hold no state between calls.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
