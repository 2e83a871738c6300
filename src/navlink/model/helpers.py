################################################################################
# File Name: helpers.py
# Purpose/Description: Distance conversion and ETA estimation helpers
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Comma thousands separators in distances
# ================================================================================
################################################################################
"""
Distance and ETA helpers.

Both functions are pure: the same input always gives the same output and no
clock is consulted.

Usage:
    from navlink.model.helpers import parseDistanceToMeters, calculateEta

    parseDistanceToMeters('1.2 km')            # 1200
    calculateEta('500 m', Direction.LEFT)      # '1 min'
"""

import re

from .types import Direction

# Metres per unit, keyed by every accepted spelling
UNIT_TO_METERS: dict[str, float] = {
    'm': 1.0,
    'meter': 1.0,
    'meters': 1.0,
    'metre': 1.0,
    'metres': 1.0,
    'km': 1000.0,
    'kilometer': 1000.0,
    'kilometers': 1000.0,
    'kilometre': 1000.0,
    'kilometres': 1000.0,
    'mi': 1609.34,
    'mile': 1609.34,
    'miles': 1609.34,
    'ft': 0.3048,
    'foot': 0.3048,
    'feet': 0.3048,
    'yd': 0.9144,
    'yard': 0.9144,
    'yards': 0.9144,
}

# Average speed in km/h by maneuver context
DEFAULT_SPEED_KMH = 30.0
SPEED_BY_DIRECTION_KMH: dict[Direction, float] = {
    Direction.SHARP_LEFT: 20.0,
    Direction.SHARP_RIGHT: 20.0,
    Direction.U_TURN: 15.0,
    Direction.ROUNDABOUT_LEFT: 25.0,
    Direction.ROUNDABOUT_RIGHT: 25.0,
    Direction.ROUNDABOUT_STRAIGHT: 25.0,
    Direction.MERGE_LEFT: 35.0,
    Direction.MERGE_RIGHT: 35.0,
    Direction.KEEP_LEFT: 40.0,
    Direction.KEEP_RIGHT: 40.0,
    Direction.DESTINATION_REACHED: 0.0,
}

# '1,200' groups thousands; any other comma is a decimal point ('1,5')
DISTANCE_NUMBER = r'\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:[.,]\d+)?'
_THOUSANDS_PATTERN = re.compile(r'\d{1,3}(?:,\d{3})+(?:\.\d+)?')
_DISTANCE_PATTERN = re.compile(rf'^\s*({DISTANCE_NUMBER})\s*([a-z]*)\s*$', re.IGNORECASE)


def parseDistanceToMeters(distance: str | None) -> int:
    """
    Convert a distance token to whole metres.

    Args:
        distance: Distance such as '200 m', '1.2km', '1,5 km' or '1,200 ft'

    Returns:
        Distance in metres (truncated), or 0 when the token is absent or
        cannot be read. A bare number is taken as metres.
    """
    if not distance:
        return 0

    match = _DISTANCE_PATTERN.match(distance)
    if match is None:
        return 0

    number = match.group(1)
    if _THOUSANDS_PATTERN.fullmatch(number):
        value = float(number.replace(',', ''))
    else:
        value = float(number.replace(',', '.'))
    unit = match.group(2).lower()

    if not unit:
        return int(value)

    factor = UNIT_TO_METERS.get(unit)
    if factor is None:
        return 0

    return int(value * factor)


def formatDuration(minutes: int) -> str:
    """Render whole minutes as '< 1 min', 'N min', 'Hh' or 'Hh Mm'."""
    if minutes < 1:
        return '< 1 min'
    if minutes < 60:
        return f'{minutes} min'

    hours, remaining = divmod(minutes, 60)
    if remaining == 0:
        return f'{hours}h'
    return f'{hours}h {remaining}m'


def calculateEta(distance: str, direction: Direction | None = None) -> str:
    """
    Estimate time to a maneuver from its distance.

    Speed depends on the maneuver: sharp turns 20 km/h, U-turns 15,
    roundabouts 25, merges 35, keep-left/right 40, everything else 30.

    Args:
        distance: Distance token (e.g. '200 m', '1.2 km')
        direction: Maneuver direction for context-aware speed

    Returns:
        Formatted ETA, or 'Arrived' for a reached destination
    """
    speedKmh = SPEED_BY_DIRECTION_KMH.get(direction, DEFAULT_SPEED_KMH)
    if speedKmh <= 0:
        return 'Arrived'

    meters = parseDistanceToMeters(distance)
    seconds = meters / (speedKmh / 3.6)

    return formatDuration(int(seconds // 60))
