################################################################################
# File Name: registry.py
# Purpose/Description: Maps notification packages to registered app parsers
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# ================================================================================
################################################################################
"""
Parser registry.

An owned object (constructed once at startup and passed to whoever needs it)
mapping configuration app ids to AppParser instances. Package lookups go
through the current config snapshot, so enabling/disabling an app in
configuration takes effect on the next ConfigStore.replace().

Usage:
    registry = createDefaultRegistry(configStore)
    parser = registry.getParserForPackage('com.google.android.apps.maps')
"""

import logging
import threading

from navlink.config.store import ConfigStore
from navlink.config.types import AppPattern

from .base import AppParser
from .generic import GenericNavigationParser
from .google_maps import GOOGLE_MAPS_APP_ID, GoogleMapsParser
from .text_parser import NavigationTextParser

logger = logging.getLogger(__name__)


class ParserRegistry:
    """
    Registry of app parsers keyed by app id.

    Registration is last-write-wins; an overwrite is logged as a warning.
    Lookups that find nothing return None.
    """

    def __init__(self, configStore: ConfigStore):
        self._configStore = configStore
        self._parsers: dict[str, AppParser] = {}
        self._lock = threading.Lock()
        self._textParserVersion = -1
        self._textParser: NavigationTextParser | None = None

    def registerParser(self, appId: str, parser: AppParser) -> None:
        """
        Associate a parser with a configuration app id.

        Args:
            appId: AppPattern id
            parser: Parser instance
        """
        with self._lock:
            if appId in self._parsers:
                logger.warning(
                    f"Overwriting registered parser | appId={appId} "
                    f"previous={type(self._parsers[appId]).__name__} new={type(parser).__name__}"
                )
            self._parsers[appId] = parser

        logger.debug(f"Registered parser | appId={appId} parser={type(parser).__name__}")

    def unregisterParser(self, appId: str) -> bool:
        with self._lock:
            return self._parsers.pop(appId, None) is not None

    def findAppForPackage(self, packageName: str) -> AppPattern | None:
        """Enabled AppPattern owning the package in the current snapshot."""
        return self._configStore.get().appPatterns.getAppForPackage(packageName)

    def getParserForPackage(self, packageName: str) -> AppParser | None:
        """
        Resolve the registered parser for a package.

        Args:
            packageName: Source package

        Returns:
            AppParser, or None when the package is unmapped or its app has
            no registered parser
        """
        app = self.findAppForPackage(packageName)
        if app is None:
            logger.debug(f"No app pattern for package | package={packageName}")
            return None

        with self._lock:
            parser = self._parsers.get(app.id)

        if parser is None:
            logger.debug(f"No parser registered | appId={app.id} package={packageName}")
        return parser

    def resolveParser(self, packageName: str) -> AppParser | None:
        """
        Like getParserForPackage, but a mapped app without a dedicated
        parser gets a GenericNavigationParser.
        """
        app = self.findAppForPackage(packageName)
        if app is None:
            return None

        with self._lock:
            parser = self._parsers.get(app.id)
        if parser is not None:
            return parser

        return GenericNavigationParser(app, self.getTextParser())

    def getTextParser(self) -> NavigationTextParser:
        """Text parser for the current snapshot, rebuilt after a config replace."""
        version = self._configStore.version
        with self._lock:
            if self._textParser is None or version != self._textParserVersion:
                keywords = self._configStore.get().navigationKeywords.resolve()
                self._textParser = NavigationTextParser(keywords)
                self._textParserVersion = version
            return self._textParser

    def getAllEnabledApps(self) -> list[AppPattern]:
        return self._configStore.get().appPatterns.getEnabledApps()

    def isRegistered(self, appId: str) -> bool:
        with self._lock:
            return appId in self._parsers

    def getRegisteredAppIds(self) -> list[str]:
        with self._lock:
            return list(self._parsers)


def createDefaultRegistry(configStore: ConfigStore) -> ParserRegistry:
    """
    Build a registry with the standard parsers.

    GoogleMapsParser is registered under 'google_maps' and a
    GenericNavigationParser under every other enabled app id.

    Args:
        configStore: Source of the current pattern configuration

    Returns:
        Populated ParserRegistry
    """
    registry = ParserRegistry(configStore)
    textParser = registry.getTextParser()

    registry.registerParser(GOOGLE_MAPS_APP_ID, GoogleMapsParser(textParser))

    for app in registry.getAllEnabledApps():
        if app.id == GOOGLE_MAPS_APP_ID:
            continue
        registry.registerParser(app.id, GenericNavigationParser(app, textParser))

    logger.info(f"Parser registry created | apps={registry.getRegisteredAppIds()}")
    return registry
