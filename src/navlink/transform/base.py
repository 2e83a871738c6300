################################################################################
# File Name: base.py
# Purpose/Description: Abstract base class for device-protocol transformers
# Author: Ralph Agent
# Creation Date: 2026-10-17
# Copyright: (c) 2026 NavLink Project. All rights reserved.
#
# Modification History:
# ================================================================================
# Date          | Author       | Description
# ================================================================================
# 2026-10-17    | Ralph Agent  | Initial implementation
# 2026-10-17    | Ralph Agent  | Undeclared notification types logged once
# ================================================================================
################################################################################
"""
Abstract base class for data transformers.

Each transformer is bound to exactly one MCUFormat. Subclasses supply the
rendering of an ordered field mapping; the base class owns enum mapping
and the payload-size policy:

- Payloads are measured in UTF-8 bytes against getMaxPayloadSize()
- Optional fields are dropped one at a time in a fixed order until the
  payload fits
- If the mandatory fields alone do not fit, PayloadOverflowError is raised
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from navlink.config.types import DEFAULT_MAX_PAYLOAD, MCUFormat
from navlink.model.types import (
    CallState,
    DeviceEvent,
    Direction,
    NavigationData,
    NotificationEvent,
    PhoneCallData,
)

from .exceptions import PayloadOverflowError

logger = logging.getLogger(__name__)

# Optional fields in the order they are dropped
NAVIGATION_DROP_ORDER = ['eta', 'icon', 'maneuver', 'distance']
CALL_DROP_ORDER = ['duration', 'callerName', 'callerNumber']


class DataTransformer(ABC):
    """
    Abstract base class for device-protocol transformers.

    All transformers must implement:
    - renderNavigation(): Render navigation fields
    - renderPhoneCall(): Render call fields
    - renderNotification(): Render notification fields
    - extractDirectionCode(): Read the direction code back from a payload
    - extractCallStateCode(): Read the call state code back from a payload
    """

    family: str = ''

    def __init__(self, mcuFormat: MCUFormat):
        """
        Initialize transformer.

        Args:
            mcuFormat: Wire format this transformer renders
        """
        self.mcuFormat = mcuFormat
        self._directionByCode = _invert(mcuFormat.directionMapping, Direction)
        self._callStateByCode = _invert(mcuFormat.callStateMapping, CallState)
        self._undeclaredTypes: set[str] = set()

    def getMaxPayloadSize(self) -> int:
        """Format payload limit in bytes, 512 when not configured."""
        return self.mcuFormat.maxPayload if self.mcuFormat.maxPayload > 0 else DEFAULT_MAX_PAYLOAD

    # -------------------------------------------------------------------------
    # Enum mapping
    # -------------------------------------------------------------------------

    def mapDirection(self, direction: Direction | None) -> str:
        return self.mcuFormat.directionCode(direction)

    def mapCallState(self, callState: CallState) -> str:
        return self.mcuFormat.callStateCode(callState)

    def decodeDirection(self, payload: str) -> Direction | None:
        """Recover the Direction of a rendered navigation payload."""
        code = self.extractDirectionCode(payload)
        return self._directionByCode.get(code) if code is not None else None

    def decodeCallState(self, payload: str) -> CallState | None:
        """Recover the CallState of a rendered call payload."""
        code = self.extractCallStateCode(payload)
        return self._callStateByCode.get(code) if code is not None else None

    # -------------------------------------------------------------------------
    # Public transforms
    # -------------------------------------------------------------------------

    def transformEvent(self, event: DeviceEvent) -> str:
        """Render any device event by its kind."""
        if isinstance(event, NavigationData):
            return self.transformNavigation(event)
        if isinstance(event, PhoneCallData):
            return self.transformPhoneCall(event)
        if isinstance(event, NotificationEvent):
            return self.transformNotification(event.typeId, event.fields)
        raise TypeError(f"Unsupported event type: {type(event).__name__}")

    def transformNavigation(self, data: NavigationData) -> str:
        """
        Render navigation data for the device.

        Raises:
            PayloadOverflowError: If type and direction alone exceed the limit
        """
        fields: dict[str, Any] = {
            'type': data.type,
            'direction': self.mapDirection(data.direction),
            'distance': data.distance,
            'maneuver': data.maneuver,
            'icon': data.icon,
            'eta': data.eta,
        }
        return self.fitPayload(self.renderNavigation, fields, NAVIGATION_DROP_ORDER, 'navigation')

    def transformPhoneCall(self, data: PhoneCallData) -> str:
        """
        Render phone call data for the device.

        Raises:
            PayloadOverflowError: If the call state alone exceeds the limit
        """
        fields: dict[str, Any] = {
            'callState': self.mapCallState(data.callState),
            'callerNumber': data.callerNumber,
            'callerName': data.callerName,
            'duration': data.duration,
        }
        return self.fitPayload(self.renderPhoneCall, fields, CALL_DROP_ORDER, 'phone_call')

    def transformNotification(self, typeId: str, fields: dict[str, Any]) -> str:
        """
        Render a generic notification with the format's field list.

        Configured fields are dropped last-to-first when oversize. An unknown
        type id renders the format's 'unknown' shape.

        Raises:
            PayloadOverflowError: If the type tag alone exceeds the limit
        """
        typeConfig = self.mcuFormat.notificationTypes.get(typeId)
        if typeConfig is None:
            # INFO on the first occurrence of a type, DEBUG afterwards
            level = logging.DEBUG if typeId in self._undeclaredTypes else logging.INFO
            self._undeclaredTypes.add(typeId)
            logger.log(level, f"Notification type not declared by format | type={typeId} format={self.mcuFormat.name}")
            return self.fitPayload(
                lambda f: self.renderUnknownNotification(f.get('data')),
                {'data': dict(fields)},
                ['data'],
                typeId
            )

        selected = {name: fields[name] for name in typeConfig.fields if fields.get(name) is not None}
        dropOrder = [name for name in reversed(typeConfig.fields) if name in selected]
        return self.fitPayload(
            lambda f: self.renderNotification(typeConfig.type, f),
            selected,
            dropOrder,
            typeId
        )

    # -------------------------------------------------------------------------
    # Size policy
    # -------------------------------------------------------------------------

    def payloadSize(self, payload: str) -> int:
        return len(payload.encode('utf-8'))

    def fitPayload(
        self,
        render: Callable[[dict[str, Any]], str],
        fields: dict[str, Any],
        dropOrder: list[str],
        label: str
    ) -> str:
        """
        Render, dropping optional fields in order until the payload fits.

        Args:
            render: Renders a field mapping (absent keys mean dropped)
            fields: Full field mapping
            dropOrder: Optional keys, first dropped first
            label: Event label for logging

        Returns:
            Payload within the size limit

        Raises:
            PayloadOverflowError: If nothing droppable is left and it still does not fit
        """
        maxPayload = self.getMaxPayloadSize()
        remaining = dict(fields)
        payload = render(remaining)
        dropped: list[str] = []

        for key in dropOrder:
            if self.payloadSize(payload) <= maxPayload:
                break
            if key in remaining:
                del remaining[key]
                dropped.append(key)
                payload = render(remaining)

        size = self.payloadSize(payload)
        if size > maxPayload:
            raise PayloadOverflowError(
                f"Mandatory {label} fields exceed payload limit ({size} > {maxPayload} bytes)",
                payloadSize=size,
                maxPayload=maxPayload
            )

        if dropped:
            logger.debug(f"Truncated payload | event={label} dropped={dropped} size={size}")
        return payload

    # -------------------------------------------------------------------------
    # Family-specific rendering
    # -------------------------------------------------------------------------

    @abstractmethod
    def renderNavigation(self, fields: dict[str, Any]) -> str:
        pass

    @abstractmethod
    def renderPhoneCall(self, fields: dict[str, Any]) -> str:
        pass

    @abstractmethod
    def renderNotification(self, wireType: str, fields: dict[str, Any]) -> str:
        pass

    @abstractmethod
    def renderUnknownNotification(self, data: dict[str, Any] | None) -> str:
        pass

    @abstractmethod
    def extractDirectionCode(self, payload: str) -> str | None:
        pass

    @abstractmethod
    def extractCallStateCode(self, payload: str) -> str | None:
        pass


def _invert(mapping: dict[str, str], enumClass) -> dict[str, Any]:
    """Code -> enum member; unknown member names are logged and skipped."""
    inverse: dict[str, Any] = {}
    for name, code in mapping.items():
        if not enumClass.isValid(name):
            logger.warning(f"Unknown {enumClass.__name__} key in format mapping | key={name}")
            continue
        inverse.setdefault(code, enumClass.fromString(name))
    return inverse
