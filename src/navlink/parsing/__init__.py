################################################################################
# File Name: __init__.py
# Purpose/Description: Parsing package exports
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
Parsing Subpackage.

Notification-to-event parsing:
- AppParser variants and the ParserRegistry
- NavigationTextParser for navigation text
- PhoneCallParser for telephony notifications
- NotificationClassifier for generic notification types
"""

from .base import AppParser
from .classifier import ClassifiedNotification, NotificationClassifier, extractNotificationData
from .generic import GenericNavigationParser
from .google_maps import GOOGLE_MAPS_APP_ID, GoogleMapsParser
from .phone import PhoneCallParser, extractPhoneNumber, parseDuration
from .registry import ParserRegistry, createDefaultRegistry
from .text_parser import NavigationTextParser

__all__ = [
    'AppParser',
    'ClassifiedNotification',
    'GOOGLE_MAPS_APP_ID',
    'GenericNavigationParser',
    'GoogleMapsParser',
    'NavigationTextParser',
    'NotificationClassifier',
    'ParserRegistry',
    'PhoneCallParser',
    'createDefaultRegistry',
    'extractNotificationData',
    'extractPhoneNumber',
    'parseDuration',
]
