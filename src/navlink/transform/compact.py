################################################################################
# File Name: compact.py
# Purpose/Description: Pipe-delimited transformer for low-bandwidth devices
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
Compact transformer.

Positional, pipe-delimited records for devices without a JSON parser:

    NAV|<dir>|<meters>|<maneuver>|<icon>|<eta>
    CALL|<state>|<number>|<name>|<duration>
    <type>|key=value|key=value

The first token of a navigation record is the event type (NAV, ALR, WPT,
INF). A dropped field leaves an empty slot so positions never shift; '|'
inside free text is replaced with '/'.
"""

from typing import Any

from navlink.config.types import FAMILY_COMPACT
from navlink.model.helpers import parseDistanceToMeters
from navlink.model.types import EventType

from .base import DataTransformer

SEPARATOR = '|'
CALL_TAG = 'CALL'
UNKNOWN_TAG = 'UNKNOWN'

EVENT_TAGS: dict[EventType, str] = {
    EventType.NAVIGATION: 'NAV',
    EventType.ALERT: 'ALR',
    EventType.WAYPOINT: 'WPT',
    EventType.INFO: 'INF',
}


def _clean(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, bool):
        return '1' if value else '0'
    return str(value).replace(SEPARATOR, '/').replace('\n', ' ')


class CompactTransformer(DataTransformer):
    """Transformer for the 'compact' family."""

    family = FAMILY_COMPACT

    def renderNavigation(self, fields: dict[str, Any]) -> str:
        meters = str(parseDistanceToMeters(fields['distance'])) if fields.get('distance') else ''
        parts = [
            EVENT_TAGS[fields['type']],
            fields['direction'],
            meters,
            fields.get('maneuver'),
            fields.get('icon'),
            fields.get('eta'),
        ]
        return SEPARATOR.join(_clean(part) for part in parts)

    def renderPhoneCall(self, fields: dict[str, Any]) -> str:
        parts = [
            CALL_TAG,
            fields['callState'],
            fields.get('callerNumber'),
            fields.get('callerName'),
            fields.get('duration'),
        ]
        return SEPARATOR.join(_clean(part) for part in parts)

    def renderNotification(self, wireType: str, fields: dict[str, Any]) -> str:
        parts = [_clean(wireType)] + [f"{key}={_clean(value)}" for key, value in fields.items()]
        return SEPARATOR.join(parts)

    def renderUnknownNotification(self, data: dict[str, Any] | None) -> str:
        return self.renderNotification(UNKNOWN_TAG, data or {})

    def extractDirectionCode(self, payload: str) -> str | None:
        parts = payload.split(SEPARATOR)
        if len(parts) < 2 or parts[0] not in EVENT_TAGS.values():
            return None
        return parts[1]

    def extractCallStateCode(self, payload: str) -> str | None:
        parts = payload.split(SEPARATOR)
        if len(parts) < 2 or parts[0] != CALL_TAG:
            return None
        return parts[1]
