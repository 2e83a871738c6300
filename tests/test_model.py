################################################################################
# File Name: test_model.py
# Purpose/Description: Tests for domain events, enums and unit helpers
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Thousands separator distance tests
# ================================================================================
################################################################################

"""
Tests for the navlink.model package.

Run with:
    pytest tests/test_model.py -v
"""

import dataclasses

import pytest

from navlink.model.helpers import calculateEta, formatDuration, parseDistanceToMeters
from navlink.model.types import (
    BLEConnectionStatus,
    CallState,
    DeliveryState,
    Direction,
    EventType,
    NavigationData,
    NotificationEvent,
    PhoneCallData,
    QueuedMessage,
)


class TestEnums:
    """Tests for the lookup enums."""

    def test_fromString_mixedCaseWithDash_returnsMember(self):
        """
        Given: ' u-turn ' with padding and a dash
        When: Direction.fromString() is called
        Then: Returns U_TURN
        """
        assert Direction.fromString(' u-turn ') is Direction.U_TURN

    def test_fromString_unknownValue_raisesValueError(self):
        """
        Given: A name that is not a member
        When: CallState.fromString() is called
        Then: ValueError is raised
        """
        with pytest.raises(ValueError):
            CallState.fromString('on_hold')

    def test_isValid_knownAndUnknown_returnsExpected(self):
        """
        Given: One valid and one invalid event type name
        When: EventType.isValid() is called
        Then: Only the valid name is accepted
        """
        assert EventType.isValid('alert') is True
        assert EventType.isValid('banner') is False

    def test_isRoundabout_roundaboutDirections_returnsTrue(self):
        """
        Given: Each direction
        When: isRoundabout is read
        Then: Only the three roundabout directions report True
        """
        roundabouts = {d for d in Direction if d.isRoundabout}

        assert roundabouts == {
            Direction.ROUNDABOUT_LEFT,
            Direction.ROUNDABOUT_RIGHT,
            Direction.ROUNDABOUT_STRAIGHT,
        }


class TestEvents:
    """Tests for the immutable event records."""

    def test_navigationData_assignment_raisesFrozenError(self):
        """
        Given: A NavigationData instance
        When: A field is assigned
        Then: FrozenInstanceError is raised
        """
        data = NavigationData(direction=Direction.LEFT, distance='200 m')

        with pytest.raises(dataclasses.FrozenInstanceError):
            data.distance = '100 m'

    def test_navigationData_toDict_usesEnumValues(self):
        """
        Given: NavigationData with type and direction
        When: toDict() is called
        Then: Enum members are rendered by value
        """
        data = NavigationData(direction=Direction.KEEP_RIGHT, distance='1 km', timestamp=5)

        result = data.toDict()

        assert result['type'] == 'NAVIGATION'
        assert result['direction'] == 'KEEP_RIGHT'
        assert result['distance'] == '1 km'
        assert result['timestamp'] == 5

    def test_phoneCallData_durationOnIncoming_isZeroed(self):
        """
        Given: An INCOMING call created with a duration
        When: The record is constructed
        Then: Duration is 0
        """
        call = PhoneCallData(callerNumber='5551234567', callState=CallState.INCOMING, duration=42)

        assert call.duration == 0

    def test_phoneCallData_durationOnOngoing_isKept(self):
        """
        Given: An ONGOING call with a duration
        When: The record is constructed
        Then: Duration is kept
        """
        call = PhoneCallData(callerNumber='5551234567', callState=CallState.ONGOING, duration=42)

        assert call.duration == 42

    def test_queuedMessage_navigationData_onlyForNavigation(self):
        """
        Given: Queued navigation and notification events
        When: navigationData is read
        Then: Only the navigation message returns its event
        """
        navigation = NavigationData(direction=Direction.LEFT)
        notification = NotificationEvent(typeId='battery', fields={'percentage': 15})

        assert QueuedMessage(navigation).navigationData is navigation
        assert QueuedMessage(notification).navigationData is None

    def test_connectionStatus_toDict_rendersState(self):
        """
        Given: A status snapshot in SCANNING
        When: toDict() is called
        Then: State is rendered by value
        """
        status = BLEConnectionStatus(state=DeliveryState.SCANNING, retryAttempts=2)

        result = status.toDict()

        assert result['state'] == 'scanning'
        assert result['retryAttempts'] == 2
        assert result['isConnected'] is False


class TestDistanceHelpers:
    """Tests for distance parsing and ETA estimation."""

    @pytest.mark.parametrize('distance,expected', [
        ('200 m', 200),
        ('1.2 km', 1200),
        ('1,5km', 1500),
        ('1,200 m', 1200),
        ('1,200 ft', 365),
        ('12,500 m', 12500),
        ('1,250.5 m', 1250),
        ('0.5 miles', 804),
        ('300 ft', 91),
        ('250', 250),
        ('', 0),
        (None, 0),
        ('far away', 0),
        ('10 parsecs', 0),
    ])
    def test_parseDistanceToMeters_variousTokens_returnsMeters(self, distance, expected):
        """
        Given: A distance token
        When: parseDistanceToMeters() is called
        Then: Whole metres are returned, 0 when unreadable
        """
        assert parseDistanceToMeters(distance) == expected

    @pytest.mark.parametrize('minutes,expected', [
        (0, '< 1 min'),
        (7, '7 min'),
        (60, '1h'),
        (95, '1h 35m'),
    ])
    def test_formatDuration_minutes_returnsLabel(self, minutes, expected):
        """
        Given: Whole minutes
        When: formatDuration() is called
        Then: The compact label is returned
        """
        assert formatDuration(minutes) == expected

    def test_calculateEta_defaultSpeed_usesThirtyKmh(self):
        """
        Given: 1.1 km with no special direction
        When: calculateEta() is called
        Then: 2 minutes at 30 km/h
        """
        assert calculateEta('1.1 km', Direction.LEFT) == '2 min'

    def test_calculateEta_uTurn_usesSlowerSpeed(self):
        """
        Given: 1.1 km for a U-turn (15 km/h)
        When: calculateEta() is called
        Then: 4 minutes
        """
        assert calculateEta('1.1 km', Direction.U_TURN) == '4 min'

    def test_calculateEta_destinationReached_returnsArrived(self):
        """
        Given: A reached destination
        When: calculateEta() is called
        Then: 'Arrived'
        """
        assert calculateEta('50 m', Direction.DESTINATION_REACHED) == 'Arrived'

    def test_calculateEta_thousandsSeparator_readsFullDistance(self):
        """
        Given: '1,200 m', which groups thousands rather than meaning 1.2 m
        When: calculateEta() is called
        Then: 1200 m at 30 km/h gives 2 minutes
        """
        assert calculateEta('1,200 m', Direction.LEFT) == '2 min'
