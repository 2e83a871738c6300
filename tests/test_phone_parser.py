################################################################################
# File Name: test_phone_parser.py
# Purpose/Description: Tests for the phone call parser
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Whole-word call vocabulary tests
# ================================================================================
################################################################################

"""
Tests for navlink.parsing.phone.

Run with:
    pytest tests/test_phone_parser.py -v
"""

import pytest

from navlink.config.types import DeviceProfilesConfig
from navlink.model.types import CallState
from navlink.parsing.phone import PhoneCallParser, extractPhoneNumber, parseDuration


@pytest.fixture
def phoneParser(patternSet) -> PhoneCallParser:
    return PhoneCallParser(patternSet.deviceProfiles, manufacturer='samsung')


class TestProfileSelection:
    """Tests for device profile resolution."""

    def test_init_knownManufacturer_selectsProfile(self, phoneParser):
        """
        Given: Manufacturer 'samsung'
        When: The parser is created
        Then: The samsung profile is active
        """
        assert phoneParser.profile.id == 'samsung'

    def test_init_unknownManufacturer_selectsGeneric(self, patternSet):
        """
        Given: An unlisted manufacturer
        When: The parser is created
        Then: The generic profile is active
        """
        assert PhoneCallParser(patternSet.deviceProfiles, 'fairphone').profile.id == 'generic'

    def test_init_noProfiles_detectsByPackageOnly(self):
        """
        Given: An empty profile configuration
        When: A notification with call wording is checked
        Then: The parser has no profile and no keyword match
        """
        parser = PhoneCallParser(DeviceProfilesConfig())

        assert parser.profile is None
        assert parser.isPhoneCallNotification('com.example', 'Incoming call') is False


class TestDetection:
    """Tests for isPhoneCallNotification()."""

    def test_isPhoneCallNotification_profilePackage_returnsTrue(self, phoneParser):
        """
        Given: A package listed by any profile
        When: isPhoneCallNotification() is called
        Then: Returns True
        """
        assert phoneParser.isPhoneCallNotification('com.google.android.dialer') is True

    def test_isPhoneCallNotification_callKeyword_returnsTrue(self, phoneParser):
        """
        Given: An unlisted package with 'Missed call' in the title
        When: isPhoneCallNotification() is called
        Then: Returns True
        """
        assert phoneParser.isPhoneCallNotification('com.whatsapp', 'Missed call', 'Bob') is True

    def test_isPhoneCallNotification_chatMessage_returnsFalse(self, phoneParser):
        """
        Given: A chat message
        When: isPhoneCallNotification() is called
        Then: Returns False
        """
        assert phoneParser.isPhoneCallNotification('com.whatsapp', 'Alice', 'See you') is False

    @pytest.mark.parametrize('title, text', [
        ('200 m', 'Turn right on Calle Ocho'),
        ('Directions', 'Turn left onto Springing Way'),
        ('Offers', 'Redialing is free this week'),
    ])
    def test_isPhoneCallNotification_callWordInsideLongerWord_returnsFalse(self, phoneParser, title, text):
        """
        Given: Text where a call phrase only appears inside longer words
        When: isPhoneCallNotification() is called for an unlisted package
        Then: Returns False
        """
        assert phoneParser.isPhoneCallNotification('com.example.app', title, text) is False

    def test_isPhoneCallNotification_keywordsOff_onlyPackagesCount(self, phoneParser):
        """
        Given: matchKeywords False
        When: A call phrase from an unlisted package and a dialer package are checked
        Then: Only the dialer package is a call
        """
        assert phoneParser.isPhoneCallNotification(
            'com.google.android.apps.maps', 'Missed call', 'Bob', matchKeywords=False
        ) is False
        assert phoneParser.isPhoneCallNotification('com.android.incallui', matchKeywords=False) is True

    def test_detectCallState_wholeWordsOnly_defaultsToIncoming(self, phoneParser):
        """
        Given: 'on Calle' text, which contains 'on call' only as a substring
        When: detectCallState() is called
        Then: No outgoing match, so INCOMING
        """
        assert phoneParser.detectCallState('Meet on Calle Ocho') is CallState.INCOMING


class TestParse:
    """Tests for PhoneCallParser.parse()."""

    def test_parse_incomingWithNumber_returnsNameAndNumber(self, phoneParser):
        """
        Given: 'Incoming call' with a name and international number
        When: parse() is called
        Then: INCOMING with the cleaned name and number
        """
        call = phoneParser.parse(
            'com.samsung.android.incallui', 'Incoming call', 'John Smith +1 555-123-4567'
        )

        assert call.callState is CallState.INCOMING
        assert call.callerName == 'John Smith'
        assert call.callerNumber == '+15551234567'
        assert call.duration == 0

    def test_parse_missedCall_returnsMissed(self, phoneParser):
        """
        Given: A missed call from 'Mom'
        When: parse() is called
        Then: MISSED with the name and no number
        """
        call = phoneParser.parse('com.samsung.android.incallui', 'Missed call', 'Mom')

        assert call.callState is CallState.MISSED
        assert call.callerName == 'Mom'
        assert call.callerNumber == ''

    def test_parse_ongoingWithTimer_readsDuration(self, phoneParser):
        """
        Given: An ongoing call showing a 03:25 timer
        When: parse() is called
        Then: ONGOING with 205 seconds and the timer stripped from the name
        """
        call = phoneParser.parse('com.samsung.android.incallui', 'Ongoing call', 'Alice 03:25')

        assert call.callState is CallState.ONGOING
        assert call.callerName == 'Alice'
        assert call.duration == 205

    def test_parse_isCallingPhrase_extractsName(self, phoneParser):
        """
        Given: 'Bob is calling'
        When: parse() is called
        Then: INCOMING from Bob
        """
        call = phoneParser.parse('com.samsung.android.incallui', None, 'Bob is calling')

        assert call.callState is CallState.INCOMING
        assert call.callerName == 'Bob'

    def test_parse_noCaller_returnsNone(self, phoneParser):
        """
        Given: Call wording without any name or number
        When: parse() is called
        Then: None is returned
        """
        assert phoneParser.parse('com.samsung.android.incallui', 'Incoming call') is None


class TestHelpers:
    """Tests for number and duration helpers."""

    @pytest.mark.parametrize('text,expected', [
        ('Call 5551234567 now', '5551234567'),
        ('+44 20 7946 0958', '+442079460958'),
        ('Room 123', None),
    ])
    def test_extractPhoneNumber_variousText_returnsDigits(self, text, expected):
        """
        Given: Text with and without phone numbers
        When: extractPhoneNumber() is called
        Then: The number without separators, or None
        """
        assert extractPhoneNumber(text) == expected

    @pytest.mark.parametrize('text,expected', [
        ('00:42', 42),
        ('12:05', 725),
        ('1:02:03', 3723),
        ('no timer', 0),
    ])
    def test_parseDuration_timerText_returnsSeconds(self, text, expected):
        """
        Given: mm:ss, h:mm:ss or no timer
        When: parseDuration() is called
        Then: Seconds are returned
        """
        assert parseDuration(text) == expected
