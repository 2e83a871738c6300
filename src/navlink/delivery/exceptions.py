################################################################################
# File Name: exceptions.py
# Purpose/Description: Delivery and transport exception classes
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
Delivery exception classes.

Delivery failures are retryable: the manager absorbs them into its bounded
retry policy and surfaces them only through the status projection.
"""

from common.error_handler import RetryableError


class DeliveryError(RetryableError):
    """Base exception for delivery errors."""
    pass


class TransportError(DeliveryError):
    """The transport rejected a scan, connect or send request."""
    pass


class DeliveryTimeoutError(DeliveryError):
    """A scan, connect or send did not complete within its window."""
    pass
