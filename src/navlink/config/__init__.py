################################################################################
# File Name: __init__.py
# Purpose/Description: Pattern configuration package exports
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
Config Subpackage.

This subpackage contains configuration components:
- Immutable pydantic models for the five pattern sections
- Built-in default sections
- Application/pattern loading and validation
- ConfigStore for reload-and-replace

Usage:
    from navlink.config import buildPatternConfigSet, ConfigStore
    from navlink.config import loadNavlinkConfig, loadPatternConfigSet
    from navlink.config import PatternConfigError
"""

from .defaults import DEFAULT_PATTERN_SECTIONS
from .exceptions import PatternConfigError
from .loader import (
    SECTION_MODELS,
    buildPatternConfigSet,
    buildSection,
    loadNavlinkConfig,
    loadPatternConfigSet,
    validateNavlinkConfig,
)
from .store import ConfigStore
from .types import (
    AUTO_DETECT_PROFILE,
    FAMILY_COMPACT,
    FAMILY_ESP32_JSON,
    SUPPORTED_CONFIG_MAJOR,
    AppPattern,
    AppPatternsConfig,
    CallPatterns,
    DeviceProfile,
    DeviceProfilesConfig,
    MCUFormat,
    MCUFormatsConfig,
    NavigationKeywords,
    NotificationConfigSettings,
    NotificationType,
    NotificationTypeConfig,
    NotificationTypesConfig,
    PatternConfigSet,
    ResolvedKeywords,
)

__all__ = [
    # Types
    'AppPattern',
    'AppPatternsConfig',
    'CallPatterns',
    'DeviceProfile',
    'DeviceProfilesConfig',
    'MCUFormat',
    'MCUFormatsConfig',
    'NavigationKeywords',
    'NotificationConfigSettings',
    'NotificationType',
    'NotificationTypeConfig',
    'NotificationTypesConfig',
    'PatternConfigSet',
    'ResolvedKeywords',
    'AUTO_DETECT_PROFILE',
    'FAMILY_COMPACT',
    'FAMILY_ESP32_JSON',
    'SUPPORTED_CONFIG_MAJOR',
    # Exceptions
    'PatternConfigError',
    # Loader
    'DEFAULT_PATTERN_SECTIONS',
    'SECTION_MODELS',
    'buildPatternConfigSet',
    'buildSection',
    'loadNavlinkConfig',
    'loadPatternConfigSet',
    'validateNavlinkConfig',
    # Store
    'ConfigStore',
]
