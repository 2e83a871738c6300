################################################################################
# File Name: __init__.py
# Purpose/Description: NavLink package initialization
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
NavLink: phone notifications to a navigation display.

Subpackages:
- model/: Events, enums and unit helpers
- config/: Pattern configuration models, defaults, loader and store
- parsing/: App parsers, text parsing, call parsing, classification
- transform/: Device wire formats
- delivery/: Link state machine, queueing and transports

Entry point: pipeline.createPipelineFromConfig()
"""

__version__ = '1.0.0'
