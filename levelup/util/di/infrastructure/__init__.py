"""Infrastructure providers."""

# Import bases
from .facebook import FacebookProvider
from .google import GoogleProvider
from .persistence import PersistenceProvider
from .recall import RecallProvider
from .verifiers import VerifierAggregatorProvider

# Import implementations (needed for __subclasses__())
from .facebook import ProdFacebookProvider  # noqa: F401
from .google import ProdGoogleProvider  # noqa: F401
from .persistence import InMemoryPersistenceProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .recall import ProdRecallProvider  # noqa: F401

__all__ = [
    "FacebookProvider",
    "GoogleProvider",
    "InMemoryPersistenceProvider",
    "PersistenceProvider",
    "ProdFacebookProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
    "ProdRecallProvider",
    "RecallProvider",
    "VerifierAggregatorProvider",
]
