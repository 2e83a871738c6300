################################################################################
# File Name: __init__.py
# Purpose/Description: Main application package initialization
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
Main application package.

This package contains the application source code organized as:
- common/: Shared utilities (config, logging, errors)
- navlink/: Notification parsing, formatting and delivery
- patterns/: Sample pattern configuration files

Entry point: main.py
"""

__version__ = '1.0.0'
