"""Recall broker infrastructure providers."""

from dishka import Scope, provide

from levelup.adapter.recall.auth import ServiceAccountTokenSource
from levelup.adapter.recall.client import (
    PlayGamesRecallBroker,
    RealPlayGamesRecallBroker,
)
from levelup.config import RecallSettings
from levelup.util.di.base import ProviderBase


class RecallProvider(ProviderBase):
    """Recall broker component base."""

    __mock_component__ = "recall"


class ProdRecallProvider(RecallProvider):
    """Production recall provider using the Play Games Services API."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_token_source(self, recall: RecallSettings) -> ServiceAccountTokenSource:
        """Provide the service account token source.

        Raises:
            ConfigurationError: If the key file is missing or invalid
        """
        return ServiceAccountTokenSource.from_file(
            recall.key_file_path, recall.scopes
        )

    @provide(scope=Scope.APP)
    def get_recall_broker(
        self, recall: RecallSettings, token_source: ServiceAccountTokenSource
    ) -> PlayGamesRecallBroker:
        """Provide the recall broker client."""
        return RealPlayGamesRecallBroker(
            token_source=token_source,
            api_url=recall.api_url,
            conflicting_links_resolution_policy=(
                recall.conflicting_links_resolution_policy
            ),
        )
