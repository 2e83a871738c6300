################################################################################
# File Name: google_maps.py
# Purpose/Description: Dedicated parser for Google Maps navigation notifications
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
Google Maps parser.

Google Maps puts the street name in the title and the instruction in the
text ("Turn left" / "200 m"), so it relies on the shared concatenation in
AppParser.parseNavigation.
"""

from navlink.config.defaults import GOOGLE_MAPS_PACKAGE

from .base import AppParser

GOOGLE_MAPS_APP_ID = 'google_maps'


class GoogleMapsParser(AppParser):
    """Dedicated parser registered under the 'google_maps' app id."""

    @property
    def appId(self) -> str:
        return GOOGLE_MAPS_APP_ID

    @property
    def packageNames(self) -> tuple[str, ...]:
        return (GOOGLE_MAPS_PACKAGE,)

    @property
    def titlePatterns(self) -> tuple[str, ...]:
        return ('Google Maps', 'Navigation')

    @property
    def detectionKeywords(self) -> tuple[str, ...]:
        return ('google maps',)
