################################################################################
# File Name: exceptions.py
# Purpose/Description: Device-protocol transformer exceptions
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
Transformer exception classes.
"""

from common.error_handler import DataError


class PayloadOverflowError(DataError):
    """
    Raised when the mandatory fields of an event alone exceed maxPayload.

    The message must be dropped; a truncated payload the device cannot parse
    is never emitted.

    Attributes:
        payloadSize: Size in UTF-8 bytes of the smallest rendering
        maxPayload: Format limit in bytes
    """

    def __init__(self, message: str, payloadSize: int, maxPayload: int):
        self.payloadSize = payloadSize
        self.maxPayload = maxPayload
        super().__init__(
            message,
            details={'payloadSize': payloadSize, 'maxPayload': maxPayload}
        )
