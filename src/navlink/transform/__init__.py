################################################################################
# File Name: __init__.py
# Purpose/Description: Device-protocol transformer package exports
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
Transform Subpackage.

Renders normalized events into the active MCU wire format.

Usage:
    from navlink.transform import TransformerSelector

    selector = TransformerSelector(configStore)
    payload = selector.current().transformNavigation(navigationData)
"""

from .base import CALL_DROP_ORDER, NAVIGATION_DROP_ORDER, DataTransformer
from .compact import CompactTransformer
from .esp32 import Esp32JsonTransformer
from .exceptions import PayloadOverflowError
from .helpers import TRANSFORMER_FAMILIES, TransformerSelector, createTransformer

__all__ = [
    'CALL_DROP_ORDER',
    'CompactTransformer',
    'DataTransformer',
    'Esp32JsonTransformer',
    'NAVIGATION_DROP_ORDER',
    'PayloadOverflowError',
    'TRANSFORMER_FAMILIES',
    'TransformerSelector',
    'createTransformer',
]
