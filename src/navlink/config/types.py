################################################################################
# File Name: types.py
# Purpose/Description: Immutable pattern configuration models (pydantic)
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Read-only mapping fields
# ================================================================================
################################################################################

"""
Pattern configuration models.

Every model is a frozen pydantic model built once from a JSON-shaped
dictionary (camelCase keys) and replaced wholesale on reload. Each top-level
section carries a 'major.minor' version string checked against
SUPPORTED_CONFIG_MAJOR.

Sections:
- AppPatternsConfig: which apps produce navigation notifications
- NavigationKeywords: direction/maneuver/unit vocabulary
- DeviceProfilesConfig: per-vendor call state vocabulary
- MCUFormatsConfig: wire formats for the downstream device
- NotificationTypesConfig: generic notification categories
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_validator,
)

from navlink.model.types import CallState, Direction

logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

SUPPORTED_CONFIG_MAJOR = 1

AUTO_DETECT_PROFILE = 'auto_detect'
GENERIC_PROFILE_ID = 'generic'

# Transformer families
FAMILY_ESP32_JSON = 'esp32_json'
FAMILY_COMPACT = 'compact'

DEFAULT_MAX_PAYLOAD = 512

DEFAULT_ALERT_KEYWORDS: tuple[str, ...] = (
    'speed camera',
    'accident',
    'road closed',
    'road closure',
    'hazard',
    'police',
    'construction',
    'crash',
    'traffic jam',
)

DEFAULT_WAYPOINT_KEYWORDS: tuple[str, ...] = (
    'waypoint',
    'stopover',
    'you have arrived',
    'arriving at',
    'destination reached',
)

# Categories accepted as 'CATEGORY:keyword' prefixes in userAdditions
ADDITION_ALERT = 'ALERT'
ADDITION_WAYPOINT = 'WAYPOINT'
ADDITION_MANEUVER = 'MANEUVER'
ADDITION_UNIT = 'UNIT'

_VERSION_PATTERN = re.compile(r'^(\d+)\.(\d+)$')


# =============================================================================
# Base Models
# =============================================================================

class FrozenModel(BaseModel):
    """Immutable configuration model; unknown keys are ignored."""

    model_config = ConfigDict(frozen=True, extra='ignore', populate_by_name=True)


class VersionedConfig(FrozenModel):
    """Top-level configuration section with a forward-compatibility version."""

    version: str = Field(default='1.0', description="Section format version 'major.minor'")

    @field_validator('version')
    @classmethod
    def _checkVersion(cls, value: str) -> str:
        match = _VERSION_PATTERN.match(value.strip())
        if match is None:
            raise ValueError(f"version must be 'major.minor', got '{value}'")

        major = int(match.group(1))
        if major > SUPPORTED_CONFIG_MAJOR:
            raise ValueError(
                f"version {value} is newer than supported major {SUPPORTED_CONFIG_MAJOR}"
            )
        return value.strip()


def _readOnly(value: Mapping) -> Mapping:
    """Read-only view so frozen models cannot be changed through their mapping fields."""
    return MappingProxyType(dict(value))


def _serializeMapping(value: Mapping, handler: SerializerFunctionWrapHandler) -> Any:
    return handler(dict(value))


def _findDuplicates(ids: list[str]) -> list[str]:
    seen: set[str] = set()
    duplicates: list[str] = []
    for itemId in ids:
        if itemId in seen and itemId not in duplicates:
            duplicates.append(itemId)
        seen.add(itemId)
    return duplicates


# =============================================================================
# App Patterns
# =============================================================================

class AppPattern(FrozenModel):
    """Identifies a source application and how to recognize its notifications."""

    id: str = Field(..., min_length=1)
    name: str
    enabled: bool = True
    packageNames: tuple[str, ...] = ()
    detectionKeywords: tuple[str, ...] = ()
    titlePatterns: tuple[str, ...] = ()


class AppPatternsConfig(VersionedConfig):
    """Built-in apps plus user-added apps; ids unique across the union."""

    apps: tuple[AppPattern, ...] = ()
    userApps: tuple[AppPattern, ...] = ()

    @model_validator(mode='after')
    def _checkUniqueIds(self) -> 'AppPatternsConfig':
        duplicates = _findDuplicates([app.id for app in self.getAllApps()])
        if duplicates:
            raise ValueError(f"duplicate app ids: {', '.join(duplicates)}")
        return self

    def getAllApps(self) -> list[AppPattern]:
        """Built-in apps first, then user apps."""
        return list(self.apps) + list(self.userApps)

    def getEnabledApps(self) -> list[AppPattern]:
        return [app for app in self.getAllApps() if app.enabled]

    def getAppForPackage(self, packageName: str) -> AppPattern | None:
        """First enabled app owning the package, else None."""
        for app in self.getEnabledApps():
            if packageName in app.packageNames:
                return app
        return None


# =============================================================================
# Navigation Keywords
# =============================================================================

@dataclass(frozen=True)
class ResolvedKeywords:
    """
    Lowercased navigation vocabulary with userAdditions already unioned.

    Attributes:
        directions: (Direction, keywords) pairs in configuration order
        maneuvers: Maneuver keywords in configuration order
        distanceUnits: Unit tokens
        navigationKeywords: Informational navigation vocabulary
        alertKeywords: Alert vocabulary
        waypointKeywords: Waypoint vocabulary
    """

    directions: tuple[tuple[Direction, tuple[str, ...]], ...] = ()
    maneuvers: tuple[str, ...] = ()
    distanceUnits: tuple[str, ...] = ()
    navigationKeywords: tuple[str, ...] = ()
    alertKeywords: tuple[str, ...] = ()
    waypointKeywords: tuple[str, ...] = ()

    def allDirectionKeywords(self) -> list[str]:
        return [keyword for _, keywords in self.directions for keyword in keywords]


def _union(base: tuple[str, ...] | list[str], extra: list[str]) -> tuple[str, ...]:
    """Lowercase, strip and de-duplicate keeping first occurrence order."""
    result: list[str] = []
    for keyword in list(base) + list(extra):
        normalized = keyword.strip().lower()
        if normalized and normalized not in result:
            result.append(normalized)
    return tuple(result)


class NavigationKeywords(VersionedConfig):
    """
    Navigation vocabulary.

    'directions' is an ordered map of Direction key to keywords; earlier keys
    win when several directions match the same text.
    """

    directions: Mapping[str, tuple[str, ...]] = Field(default_factory=dict, validate_default=True)
    maneuvers: tuple[str, ...] = ()
    distanceUnits: tuple[str, ...] = ()
    navigationKeywords: tuple[str, ...] = ()
    userAdditions: tuple[str, ...] = ()
    alertKeywords: tuple[str, ...] = DEFAULT_ALERT_KEYWORDS
    waypointKeywords: tuple[str, ...] = DEFAULT_WAYPOINT_KEYWORDS

    @field_validator('directions', mode='after')
    @classmethod
    def _freezeDirections(cls, value: Mapping) -> Mapping:
        return _readOnly(value)

    @field_serializer('directions', mode='wrap')
    def _dumpDirections(self, value: Mapping, handler: SerializerFunctionWrapHandler) -> Any:
        return _serializeMapping(value, handler)

    def resolve(self) -> ResolvedKeywords:
        """
        Build the matching snapshot.

        Unknown direction keys are logged and ignored. A userAdditions entry
        'CATEGORY:keyword' goes to the named list (a Direction name, ALERT,
        WAYPOINT, MANEUVER or UNIT); a bare keyword extends
        navigationKeywords.

        Returns:
            ResolvedKeywords snapshot
        """
        directionAdds: dict[Direction, list[str]] = {}
        alertAdds: list[str] = []
        waypointAdds: list[str] = []
        maneuverAdds: list[str] = []
        unitAdds: list[str] = []
        navigationAdds: list[str] = []

        for entry in self.userAdditions:
            category, sep, keyword = entry.partition(':')
            if not sep or not keyword.strip():
                navigationAdds.append(entry)
                continue

            category = category.strip().upper()
            if category == ADDITION_ALERT:
                alertAdds.append(keyword)
            elif category == ADDITION_WAYPOINT:
                waypointAdds.append(keyword)
            elif category == ADDITION_MANEUVER:
                maneuverAdds.append(keyword)
            elif category == ADDITION_UNIT:
                unitAdds.append(keyword)
            elif Direction.isValid(category):
                directionAdds.setdefault(Direction.fromString(category), []).append(keyword)
            else:
                logger.warning(f"Unknown userAdditions category | entry={entry}")

        directions: list[tuple[Direction, tuple[str, ...]]] = []
        for key, keywords in self.directions.items():
            if not Direction.isValid(key):
                logger.warning(f"Unknown direction key in config | key={key}")
                continue
            direction = Direction.fromString(key)
            if any(existing is direction for existing, _ in directions):
                continue
            directions.append((direction, _union(keywords, directionAdds.pop(direction, []))))

        # Additions for directions not declared in config go last
        for direction, keywords in directionAdds.items():
            directions.append((direction, _union((), keywords)))

        return ResolvedKeywords(
            directions=tuple(directions),
            maneuvers=_union(self.maneuvers, maneuverAdds),
            distanceUnits=_union(self.distanceUnits, unitAdds),
            navigationKeywords=_union(self.navigationKeywords, navigationAdds),
            alertKeywords=_union(self.alertKeywords, alertAdds),
            waypointKeywords=_union(self.waypointKeywords, waypointAdds),
        )


# =============================================================================
# Device Profiles
# =============================================================================

class CallPatterns(FrozenModel):
    """Keyword lists used to infer a CallState from call notification text."""

    incoming: tuple[str, ...] = ()
    outgoing: tuple[str, ...] = ()
    missed: tuple[str, ...] = ()
    ended: tuple[str, ...] = ()

    def allKeywords(self) -> list[str]:
        return list(self.missed) + list(self.ended) + list(self.outgoing) + list(self.incoming)


class DeviceProfile(FrozenModel):
    """Per-vendor phone UI description."""

    id: str = Field(..., min_length=1)
    name: str
    manufacturers: tuple[str, ...] = ()
    packages: tuple[str, ...] = ()
    patterns: CallPatterns = Field(default_factory=CallPatterns)
    multiNotification: bool = False

    def matchesManufacturer(self, manufacturer: str) -> bool:
        wanted = manufacturer.strip().lower()
        return any(m.lower() == wanted for m in self.manufacturers)


class DeviceProfilesConfig(VersionedConfig):
    """Device profiles plus the active profile id (or 'auto_detect')."""

    profiles: tuple[DeviceProfile, ...] = ()
    activeProfile: str = AUTO_DETECT_PROFILE

    @model_validator(mode='after')
    def _checkActiveProfile(self) -> 'DeviceProfilesConfig':
        ids = [profile.id for profile in self.profiles]
        duplicates = _findDuplicates(ids)
        if duplicates:
            raise ValueError(f"duplicate profile ids: {', '.join(duplicates)}")
        if self.activeProfile != AUTO_DETECT_PROFILE and self.activeProfile not in ids:
            raise ValueError(
                f"activeProfile '{self.activeProfile}' not found in profiles: {', '.join(ids)}"
            )
        return self

    def getProfileById(self, profileId: str) -> DeviceProfile | None:
        for profile in self.profiles:
            if profile.id == profileId:
                return profile
        return None

    def getProfileForManufacturer(self, manufacturer: str) -> DeviceProfile | None:
        for profile in self.profiles:
            if profile.matchesManufacturer(manufacturer):
                return profile
        return None

    def getActiveProfile(self, manufacturer: str | None = None) -> DeviceProfile | None:
        """
        Resolve the active profile.

        An explicit id selects that profile. With 'auto_detect' the first
        profile listing the manufacturer wins, then the 'generic' profile,
        then the first profile.

        Args:
            manufacturer: Device manufacturer used for auto-detection

        Returns:
            DeviceProfile, or None when no profiles are configured
        """
        if self.activeProfile != AUTO_DETECT_PROFILE:
            return self.getProfileById(self.activeProfile)

        if manufacturer:
            profile = self.getProfileForManufacturer(manufacturer)
            if profile is not None:
                return profile

        generic = self.getProfileById(GENERIC_PROFILE_ID)
        if generic is not None:
            return generic

        return self.profiles[0] if self.profiles else None

    def getAllPackages(self) -> list[str]:
        return [pkg for profile in self.profiles for pkg in profile.packages]


# =============================================================================
# MCU Formats
# =============================================================================

class NotificationTypeConfig(FrozenModel):
    """Wire type tag and ordered field list for one notification type."""

    type: str
    fields: tuple[str, ...] = ()


class MCUFormat(FrozenModel):
    """
    A named wire format for one device protocol.

    directionMapping/callStateMapping are keyed by enum member name.
    """

    name: str
    family: str = FAMILY_ESP32_JSON
    maxPayload: int = DEFAULT_MAX_PAYLOAD
    directionMapping: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    callStateMapping: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    notificationTypes: Mapping[str, NotificationTypeConfig] = Field(default_factory=dict, validate_default=True)
    defaultDirectionCode: str = 'straight'
    defaultCallStateCode: str = 'unknown'

    @field_validator('directionMapping', 'callStateMapping', 'notificationTypes', mode='after')
    @classmethod
    def _freezeMappings(cls, value: Mapping) -> Mapping:
        return _readOnly(value)

    @field_serializer('directionMapping', 'callStateMapping', 'notificationTypes', mode='wrap')
    def _dumpMappings(self, value: Mapping, handler: SerializerFunctionWrapHandler) -> Any:
        return _serializeMapping(value, handler)

    def directionCode(self, direction: Direction | None) -> str:
        if direction is None:
            return self.defaultDirectionCode
        return self.directionMapping.get(direction.name, self.defaultDirectionCode)

    def callStateCode(self, callState: CallState) -> str:
        return self.callStateMapping.get(callState.name, self.defaultCallStateCode)


class MCUFormatsConfig(VersionedConfig):
    """Available formats; activeFormat must key into formats."""

    activeFormat: str
    formats: Mapping[str, MCUFormat]

    @field_validator('formats', mode='after')
    @classmethod
    def _freezeFormats(cls, value: Mapping) -> Mapping:
        return _readOnly(value)

    @field_serializer('formats', mode='wrap')
    def _dumpFormats(self, value: Mapping, handler: SerializerFunctionWrapHandler) -> Any:
        return _serializeMapping(value, handler)

    @model_validator(mode='after')
    def _checkActiveFormat(self) -> 'MCUFormatsConfig':
        if self.activeFormat not in self.formats:
            raise ValueError(
                f"activeFormat '{self.activeFormat}' not found in formats: "
                f"{', '.join(self.formats)}"
            )
        return self

    def getActiveFormat(self) -> MCUFormat:
        return self.formats[self.activeFormat]


# =============================================================================
# Notification Types
# =============================================================================

class NotificationType(FrozenModel):
    """Generic notification category with enable scoping and triggers."""

    id: str = Field(..., min_length=1)
    name: str
    priority: str = 'normal'
    enabled: bool = True
    keywords: tuple[str, ...] = ()
    apps: tuple[str, ...] = ()
    enabledApps: tuple[str, ...] = ()
    disabledApps: tuple[str, ...] = ()
    titlePatterns: tuple[str, ...] = ()
    mcuType: str = ''


class NotificationConfigSettings(FrozenModel):
    enableAllByDefault: bool = True
    sendToMCUWhenDisabled: bool = False


class NotificationTypesConfig(VersionedConfig):
    """Built-in plus user notification types; ids unique across both."""

    notificationTypes: tuple[NotificationType, ...] = ()
    userTypes: tuple[NotificationType, ...] = ()
    settings: NotificationConfigSettings = Field(default_factory=NotificationConfigSettings)

    @model_validator(mode='after')
    def _checkUniqueIds(self) -> 'NotificationTypesConfig':
        duplicates = _findDuplicates([t.id for t in self.getAllTypes()])
        if duplicates:
            raise ValueError(f"duplicate notification type ids: {', '.join(duplicates)}")
        return self

    def getAllTypes(self) -> list[NotificationType]:
        return list(self.notificationTypes) + list(self.userTypes)

    def getEnabledTypes(self) -> list[NotificationType]:
        return [t for t in self.getAllTypes() if t.enabled]

    def getTypeById(self, typeId: str) -> NotificationType | None:
        for notificationType in self.getAllTypes():
            if notificationType.id == typeId:
                return notificationType
        return None

    def isAppEnabledForType(self, typeId: str, packageName: str) -> bool:
        """
        Check whether notifications of a type from a package are enabled.

        An unknown type defers to settings.enableAllByDefault. A disabled
        type is off for every app. disabledApps always excludes; a non-empty
        enabledApps list is an allow-list.
        """
        notificationType = self.getTypeById(typeId)
        if notificationType is None:
            return self.settings.enableAllByDefault

        if not notificationType.enabled:
            return False

        if packageName in notificationType.disabledApps:
            return False

        if notificationType.enabledApps:
            return packageName in notificationType.enabledApps

        return True


# =============================================================================
# Bundle
# =============================================================================

class PatternConfigSet(FrozenModel):
    """One immutable snapshot of all five pattern configuration sections."""

    appPatterns: AppPatternsConfig
    navigationKeywords: NavigationKeywords
    deviceProfiles: DeviceProfilesConfig
    mcuFormats: MCUFormatsConfig
    notificationTypes: NotificationTypesConfig

    def toDict(self) -> dict[str, Any]:
        return self.model_dump()
