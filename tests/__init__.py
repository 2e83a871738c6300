################################################################################
# File Name: __init__.py
# Purpose/Description: Test package initialization
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
################################################################################

"""
Test package for NavLink.

Run tests with:
    pytest tests/
"""
