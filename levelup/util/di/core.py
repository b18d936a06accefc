"""Configuration providers.

Settings are read once per container; each section is also provided on
its own so adapters depend only on what they use.
"""

from dishka import Scope, provide

from levelup.config import (
    AuthSettings,
    FacebookSettings,
    GoogleSettings,
    RecallSettings,
    Settings,
)
from levelup.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    scope = Scope.APP

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self._settings = settings

    @provide
    def provide_settings(self) -> Settings:
        return self._settings or Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_google_settings(self, settings: Settings) -> GoogleSettings:
        return settings.google

    @provide
    def provide_facebook_settings(self, settings: Settings) -> FacebookSettings:
        return settings.facebook

    @provide
    def provide_recall_settings(self, settings: Settings) -> RecallSettings:
        return settings.recall
