################################################################################
# File Name: esp32.py
# Purpose/Description: Compact JSON transformer for the ESP32 display firmware
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
ESP32 JSON transformer.

Firmware contract:
- Navigation: {"type", "direction", "distance" (integer metres), "maneuver",
  "icon", "eta"}; icon and eta only when present
- Phone call: {"type": "phone_call", "caller_name", "caller_number",
  "call_state", "duration"}
- Notification: {"type": <wire type>, <configured fields>...}, or
  {"type": "unknown", "data": {...}} for a type the format does not know

JSON is written without whitespace and keys keep insertion order, so the
same input always renders the same bytes.
"""

import json
from typing import Any

from navlink.config.types import FAMILY_ESP32_JSON
from navlink.model.helpers import parseDistanceToMeters

from .base import DataTransformer

PHONE_CALL_TYPE = 'phone_call'
UNKNOWN_TYPE = 'unknown'


def _dumps(data: dict[str, Any]) -> str:
    return json.dumps(data, separators=(',', ':'), ensure_ascii=False)


class Esp32JsonTransformer(DataTransformer):
    """Transformer for the 'esp32_json' family."""

    family = FAMILY_ESP32_JSON

    def renderNavigation(self, fields: dict[str, Any]) -> str:
        data: dict[str, Any] = {
            'type': fields['type'].value,
            'direction': fields['direction'],
        }
        if 'distance' in fields:
            data['distance'] = parseDistanceToMeters(fields['distance'])
        if 'maneuver' in fields:
            data['maneuver'] = fields['maneuver'] or ''
        if fields.get('icon') is not None:
            data['icon'] = fields['icon']
        if fields.get('eta') is not None:
            data['eta'] = fields['eta']
        return _dumps(data)

    def renderPhoneCall(self, fields: dict[str, Any]) -> str:
        data: dict[str, Any] = {'type': PHONE_CALL_TYPE}
        if 'callerName' in fields:
            data['caller_name'] = fields['callerName'] or ''
        if 'callerNumber' in fields:
            data['caller_number'] = fields['callerNumber'] or ''
        data['call_state'] = fields['callState']
        if 'duration' in fields:
            data['duration'] = fields['duration']
        return _dumps(data)

    def renderNotification(self, wireType: str, fields: dict[str, Any]) -> str:
        return _dumps({'type': wireType, **fields})

    def renderUnknownNotification(self, data: dict[str, Any] | None) -> str:
        payload: dict[str, Any] = {'type': UNKNOWN_TYPE}
        if data is not None:
            payload['data'] = data
        return _dumps(payload)

    def extractDirectionCode(self, payload: str) -> str | None:
        return _readKey(payload, 'direction')

    def extractCallStateCode(self, payload: str) -> str | None:
        return _readKey(payload, 'call_state')


def _readKey(payload: str, key: str) -> str | None:
    try:
        data = json.loads(payload)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    value = data.get(key)
    return value if isinstance(value, str) else None
