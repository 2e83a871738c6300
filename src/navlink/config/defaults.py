################################################################################
# File Name: defaults.py
# Purpose/Description: Built-in pattern configuration sections
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | navigation and phone_call notification types
# ================================================================================
################################################################################

"""
Built-in pattern configuration.

Plain JSON-shaped dictionaries, used for any section the application config
does not supply. They go through the same pydantic validation as user
configuration.
"""

from typing import Any

GOOGLE_MAPS_PACKAGE = 'com.google.android.apps.maps'
WAZE_PACKAGE = 'com.waze'


DEFAULT_APP_PATTERNS: dict[str, Any] = {
    'version': '1.0',
    'apps': [
        {
            'id': 'google_maps',
            'name': 'Google Maps',
            'enabled': True,
            'packageNames': [GOOGLE_MAPS_PACKAGE],
            'detectionKeywords': ['turn', 'continue', 'head', 'roundabout', 'exit'],
            'titlePatterns': ['Google Maps', 'Navigation'],
        },
        {
            'id': 'waze',
            'name': 'Waze',
            'enabled': True,
            'packageNames': [WAZE_PACKAGE],
            'detectionKeywords': ['turn', 'keep', 'exit', 'roundabout'],
            'titlePatterns': ['Waze'],
        },
        {
            'id': 'generic_navigation',
            'name': 'Generic Navigation',
            'enabled': False,
            'packageNames': [
                'com.here.app.maps',
                'net.osmand',
                'com.sygic.aura',
            ],
            'detectionKeywords': ['turn left', 'turn right', 'continue straight'],
            'titlePatterns': ['Navigation'],
        },
    ],
    'userApps': [],
}


# Order matters: the first direction with a keyword hit wins, so the more
# specific phrasings come before LEFT/RIGHT/STRAIGHT.
DEFAULT_NAVIGATION_KEYWORDS: dict[str, Any] = {
    'version': '1.0',
    'directions': {
        'DESTINATION_REACHED': [
            'you have arrived',
            'destination reached',
            'arrived at your destination',
            'arrive at your destination',
        ],
        'WAYPOINT_REACHED': ['waypoint reached', 'reached waypoint', 'reached your stop'],
        'U_TURN': ['make a u-turn', 'u-turn', 'u turn', 'uturn'],
        'ROUNDABOUT_LEFT': ['roundabout left', 'roundabout, turn left'],
        'ROUNDABOUT_RIGHT': ['roundabout right', 'roundabout, turn right'],
        'ROUNDABOUT_STRAIGHT': ['roundabout'],
        'SHARP_LEFT': ['sharp left'],
        'SHARP_RIGHT': ['sharp right'],
        'SLIGHT_LEFT': ['slight left', 'bear left'],
        'SLIGHT_RIGHT': ['slight right', 'bear right'],
        'MERGE_LEFT': ['merge left'],
        'MERGE_RIGHT': ['merge right'],
        'KEEP_LEFT': ['keep left', 'stay left'],
        'KEEP_RIGHT': ['keep right', 'stay right'],
        'LEFT': ['turn left', 'left'],
        'RIGHT': ['turn right', 'right'],
        'STRAIGHT': ['continue straight', 'go straight', 'straight', 'continue on'],
    },
    'maneuvers': [
        'make a u-turn',
        'turn left',
        'turn right',
        'sharp left',
        'sharp right',
        'slight left',
        'slight right',
        'keep left',
        'keep right',
        'merge',
        'take the exit',
        'exit',
        'roundabout',
        'continue straight',
        'continue',
        'head',
    ],
    'distanceUnits': [
        'km', 'm', 'mi', 'ft', 'yd',
        'kilometers', 'kilometres', 'meters', 'metres', 'miles', 'feet', 'yards',
    ],
    'navigationKeywords': [
        'navigation',
        'route',
        'towards',
        'onto',
        'speed limit',
        'traffic',
        'rerouting',
    ],
    'userAdditions': [],
}


_STANDARD_CALL_PATTERNS: dict[str, list[str]] = {
    'incoming': ['incoming call', 'call from', 'is calling', 'ringing'],
    'outgoing': ['outgoing call', 'dialing', 'ongoing call', 'call in progress', 'on call'],
    'missed': ['missed call'],
    'ended': ['call ended', 'call finished', 'call completed'],
}

DEFAULT_DEVICE_PROFILES: dict[str, Any] = {
    'version': '1.0',
    'profiles': [
        {
            'id': 'samsung',
            'name': 'Samsung One UI',
            'manufacturers': ['samsung'],
            'packages': ['com.samsung.android.incallui', 'com.samsung.android.dialer'],
            'patterns': _STANDARD_CALL_PATTERNS,
            'multiNotification': True,
        },
        {
            'id': 'xiaomi',
            'name': 'Xiaomi MIUI',
            'manufacturers': ['xiaomi', 'redmi', 'poco'],
            'packages': ['com.android.incallui', 'com.miui.voip'],
            'patterns': _STANDARD_CALL_PATTERNS,
            'multiNotification': False,
        },
        {
            'id': 'generic',
            'name': 'Generic Android',
            'manufacturers': [],
            'packages': [
                'com.android.incallui',
                'com.android.dialer',
                'com.google.android.dialer',
                'com.android.phone',
            ],
            'patterns': _STANDARD_CALL_PATTERNS,
            'multiNotification': False,
        },
    ],
    'activeProfile': 'auto_detect',
}


_ESP32_DIRECTIONS: dict[str, str] = {
    'LEFT': 'left',
    'RIGHT': 'right',
    'STRAIGHT': 'straight',
    'U_TURN': 'uturn',
    'SHARP_LEFT': 'sharp_left',
    'SHARP_RIGHT': 'sharp_right',
    'SLIGHT_LEFT': 'slight_left',
    'SLIGHT_RIGHT': 'slight_right',
    'ROUNDABOUT_LEFT': 'roundabout_left',
    'ROUNDABOUT_RIGHT': 'roundabout_right',
    'ROUNDABOUT_STRAIGHT': 'roundabout_straight',
    'MERGE_LEFT': 'merge_left',
    'MERGE_RIGHT': 'merge_right',
    'KEEP_LEFT': 'keep_left',
    'KEEP_RIGHT': 'keep_right',
    'DESTINATION_REACHED': 'destination',
    'WAYPOINT_REACHED': 'waypoint',
}

_COMPACT_DIRECTIONS: dict[str, str] = {
    'LEFT': 'L',
    'RIGHT': 'R',
    'STRAIGHT': 'S',
    'U_TURN': 'U',
    'SHARP_LEFT': 'HL',
    'SHARP_RIGHT': 'HR',
    'SLIGHT_LEFT': 'SL',
    'SLIGHT_RIGHT': 'SR',
    'ROUNDABOUT_LEFT': 'OL',
    'ROUNDABOUT_RIGHT': 'OR',
    'ROUNDABOUT_STRAIGHT': 'OS',
    'MERGE_LEFT': 'ML',
    'MERGE_RIGHT': 'MR',
    'KEEP_LEFT': 'KL',
    'KEEP_RIGHT': 'KR',
    'DESTINATION_REACHED': 'D',
    'WAYPOINT_REACHED': 'W',
}

_NOTIFICATION_FIELDS: dict[str, Any] = {
    'message': {'type': 'message', 'fields': ['sender', 'message']},
    'battery': {'type': 'battery', 'fields': ['percentage', 'is_charging']},
    'weather': {'type': 'weather', 'fields': ['temperature']},
}

DEFAULT_MCU_FORMATS: dict[str, Any] = {
    'version': '1.0',
    'activeFormat': 'esp32',
    'formats': {
        'esp32': {
            'name': 'ESP32 JSON',
            'family': 'esp32_json',
            'maxPayload': 512,
            'directionMapping': _ESP32_DIRECTIONS,
            'callStateMapping': {
                'INCOMING': 'INCOMING',
                'ONGOING': 'ONGOING',
                'MISSED': 'MISSED',
                'ENDED': 'ENDED',
            },
            'notificationTypes': _NOTIFICATION_FIELDS,
            'defaultDirectionCode': 'straight',
            'defaultCallStateCode': 'unknown',
        },
        'compact': {
            'name': 'Compact Pipe-Delimited',
            'family': 'compact',
            'maxPayload': 128,
            'directionMapping': _COMPACT_DIRECTIONS,
            'callStateMapping': {
                'INCOMING': 'IN',
                'ONGOING': 'ON',
                'MISSED': 'MI',
                'ENDED': 'EN',
            },
            'notificationTypes': {
                'message': {'type': 'MSG', 'fields': ['sender', 'message']},
                'battery': {'type': 'BAT', 'fields': ['percentage', 'is_charging']},
                'weather': {'type': 'WX', 'fields': ['temperature']},
            },
            'defaultDirectionCode': 'S',
            'defaultCallStateCode': 'UN',
        },
    },
}


DEFAULT_NOTIFICATION_TYPES: dict[str, Any] = {
    'version': '1.0',
    'notificationTypes': [
        {
            'id': 'message',
            'name': 'Messages',
            'priority': 'high',
            'enabled': True,
            'keywords': ['message', 'sent you', 'new message', 'replied'],
            'apps': [
                'com.whatsapp',
                'org.telegram.messenger',
                'com.google.android.apps.messaging',
                'com.samsung.android.messaging',
            ],
            'titlePatterns': [],
            'mcuType': 'message',
        },
        {
            'id': 'battery',
            'name': 'Battery',
            'priority': 'normal',
            'enabled': True,
            'keywords': ['battery', 'charging', 'charged', 'low power'],
            'apps': ['android', 'com.android.systemui'],
            'titlePatterns': ['Battery'],
            'mcuType': 'battery',
        },
        {
            'id': 'weather',
            'name': 'Weather',
            'priority': 'low',
            'enabled': True,
            'keywords': ['weather', 'forecast', 'temperature', '°'],
            'apps': [
                'com.google.android.apps.weather',
                'com.sec.android.daemonapp',
                'com.accuweather.android',
            ],
            'titlePatterns': ['Weather'],
            'mcuType': 'weather',
        },
        # Gates for the navigation and phone stages; no triggers, so the
        # classifier never picks them
        {
            'id': 'navigation',
            'name': 'Navigation',
            'priority': 'high',
            'enabled': True,
            'keywords': [],
            'apps': [],
            'titlePatterns': [],
            'mcuType': 'navigation',
        },
        {
            'id': 'phone_call',
            'name': 'Phone Calls',
            'priority': 'high',
            'enabled': True,
            'keywords': [],
            'apps': [],
            'titlePatterns': [],
            'mcuType': 'phone_call',
        },
    ],
    'userTypes': [],
    'settings': {
        'enableAllByDefault': True,
        'sendToMCUWhenDisabled': False,
    },
}


DEFAULT_PATTERN_SECTIONS: dict[str, dict[str, Any]] = {
    'appPatterns': DEFAULT_APP_PATTERNS,
    'navigationKeywords': DEFAULT_NAVIGATION_KEYWORDS,
    'deviceProfiles': DEFAULT_DEVICE_PROFILES,
    'mcuFormats': DEFAULT_MCU_FORMATS,
    'notificationTypes': DEFAULT_NOTIFICATION_TYPES,
}
