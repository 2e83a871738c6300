################################################################################
# File Name: test_text_parser.py
# Purpose/Description: Tests for the navigation text parser
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Thousands separator distance cases
# ================================================================================
################################################################################

"""
Tests for navlink.parsing.text_parser.

Run with:
    pytest tests/test_text_parser.py -v
"""

import pytest

from navlink.config.types import NavigationKeywords
from navlink.model.types import Direction, EventType
from navlink.parsing.text_parser import NavigationTextParser


class TestParse:
    """Tests for NavigationTextParser.parse()."""

    def test_parse_turnLeftWithDistance_returnsNavigation(self, textParser):
        """
        Given: 'Turn left in 200 m onto Main St'
        When: parse() is called
        Then: LEFT, '200 m', NAVIGATION with maneuver and ETA
        """
        data = textParser.parse('Turn left in 200 m onto Main St')

        assert data.direction is Direction.LEFT
        assert data.distance == '200 m'
        assert data.type is EventType.NAVIGATION
        assert data.maneuver == 'Turn left'
        assert data.eta is not None

    @pytest.mark.parametrize('text', [None, '', '   \n\t'])
    def test_parse_blankText_returnsNone(self, textParser, text):
        """
        Given: Missing or whitespace-only text
        When: parse() is called
        Then: None is returned
        """
        assert textParser.parse(text) is None

    def test_parse_noDirectionKeyword_returnsUnknown(self, textParser):
        """
        Given: Text without any direction keyword
        When: parse() is called
        Then: Direction is UNKNOWN and no distance is found
        """
        data = textParser.parse('Lunch at noon')

        assert data.direction is Direction.UNKNOWN
        assert data.distance is None
        assert data.eta is None
        assert data.maneuver == 'Lunch at noon'

    def test_parse_specificDirectionBeforeGeneric_keepRightWins(self, textParser):
        """
        Given: 'Keep right in 1.5km', which also contains 'right'
        When: parse() is called
        Then: KEEP_RIGHT wins by configuration order
        """
        data = textParser.parse('Keep right in 1.5km')

        assert data.direction is Direction.KEEP_RIGHT
        assert data.distance == '1.5 km'

    def test_parse_roundaboutExit_usesOrdinalManeuver(self, textParser):
        """
        Given: A roundabout instruction naming the 2nd exit
        When: parse() is called
        Then: ROUNDABOUT_STRAIGHT with maneuver '2nd exit'
        """
        data = textParser.parse('At the roundabout take the 2nd exit in 300 m')

        assert data.direction is Direction.ROUNDABOUT_STRAIGHT
        assert data.maneuver == '2nd exit'
        assert data.distance == '300 m'

    def test_parse_alertVocabulary_returnsAlert(self, textParser):
        """
        Given: 'Speed camera ahead'
        When: parse() is called
        Then: Type is ALERT
        """
        data = textParser.parse('Speed camera ahead')

        assert data.type is EventType.ALERT
        assert data.direction is Direction.UNKNOWN

    def test_parse_arrival_returnsWaypointWithDestinationDirection(self, textParser):
        """
        Given: 'You have arrived at your destination'
        When: parse() is called
        Then: Type WAYPOINT, direction DESTINATION_REACHED
        """
        data = textParser.parse('You have arrived at your destination')

        assert data.type is EventType.WAYPOINT
        assert data.direction is Direction.DESTINATION_REACHED

    def test_parse_informationalOnly_returnsInfo(self, textParser):
        """
        Given: Informational navigation text without a direction or maneuver
        When: parse() is called
        Then: Type is INFO and the text is the maneuver
        """
        data = textParser.parse('Heavy traffic on route')

        assert data.type is EventType.INFO
        assert data.maneuver == 'Heavy traffic on route'

    def test_parse_sameInput_isDeterministic(self, textParser):
        """
        Given: The same text and timestamp twice
        When: parse() is called
        Then: The results are equal
        """
        first = textParser.parse('Turn right in 50 m', timestamp=1000)
        second = textParser.parse('Turn right in 50 m', timestamp=1000)

        assert first == second

    def test_parse_userAddition_extendsDirection(self):
        """
        Given: keywords with userAdditions 'LEFT:links abbiegen'
        When: 'Links abbiegen in 200 m' is parsed
        Then: Direction is LEFT
        """
        keywords = NavigationKeywords(
            directions={'LEFT': ('turn left',)},
            distanceUnits=('m',),
            userAdditions=('LEFT:links abbiegen',),
        )
        parser = NavigationTextParser(keywords.resolve())

        data = parser.parse('Links abbiegen in 200 m')

        assert data.direction is Direction.LEFT
        assert data.distance == '200 m'


class TestDistance:
    """Tests for distance extraction."""

    @pytest.mark.parametrize('text,expected', [
        ('in 500 meters', '500 meters'),
        ('after 0.3 MI', '0.3 mi'),
        ('1,2 km ahead', '1,2 km'),
        ('Turn left in 1,200 ft', '1,200 ft'),
        ('12,500 m to go', '12,500 m'),
        ('wait 5 minutes', None),
        ('no numbers', None),
    ])
    def test_extractDistance_variousText_returnsToken(self, textParser, text, expected):
        """
        Given: Text with or without a distance
        When: extractDistance() is called
        Then: '<value> <unit>' with a lowercased unit, or None
        """
        assert textParser.extractDistance(text) == expected

    def test_extractDistance_noUnitsConfigured_returnsNone(self):
        """
        Given: A parser without distance units
        When: extractDistance() is called
        Then: None is returned
        """
        parser = NavigationTextParser(NavigationKeywords().resolve())

        assert parser.extractDistance('200 m') is None


class TestIsNavigationText:
    """Tests for the cheap navigation pre-filter."""

    @pytest.mark.parametrize('text,expected', [
        ('Rerouting', True),
        ('Turn right', True),
        ('300 ft', True),
        ('Dinner is ready', False),
        ('', False),
        (None, False),
    ])
    def test_isNavigationText_variousText_returnsExpected(self, textParser, text, expected):
        """
        Given: Navigation and non-navigation text
        When: isNavigationText() is called
        Then: Only navigation text is accepted
        """
        assert textParser.isNavigationText(text) is expected
