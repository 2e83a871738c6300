################################################################################
# File Name: transport.py
# Purpose/Description: Abstract link transport and its completion listener
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
Transport boundary.

The radio layer below "send bytes to a connected peer" is an external
collaborator. startScan/stopScan/connect/disconnect are non-blocking
requests whose completion arrives on the bound TransportListener; send()
blocks for at most its timeout.
"""

from abc import ABC, abstractmethod


class TransportListener(ABC):
    """Receives asynchronous transport completions."""

    @abstractmethod
    def onDeviceFound(self, name: str | None, address: str) -> None:
        pass

    @abstractmethod
    def onConnected(self, name: str | None, address: str) -> None:
        pass

    @abstractmethod
    def onConnectFailed(self, error: str) -> None:
        pass

    @abstractmethod
    def onDisconnected(self) -> None:
        pass


class Transport(ABC):
    """
    Abstract base class for link transports.

    All transports must implement:
    - bind(): Register the completion listener
    - startScan() / stopScan(): Discovery
    - connect() / disconnect(): Link lifecycle
    - send(): Write one payload, True on acknowledgment
    """

    @abstractmethod
    def bind(self, listener: TransportListener) -> None:
        pass

    @abstractmethod
    def startScan(self) -> None:
        """
        Begin discovery; results arrive via onDeviceFound.

        Raises:
            TransportError: If the scan cannot be started
        """
        pass

    @abstractmethod
    def stopScan(self) -> None:
        pass

    @abstractmethod
    def connect(self, address: str) -> None:
        """
        Request a link; completion arrives via onConnected/onConnectFailed.

        Raises:
            TransportError: If the request cannot be issued
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass

    @abstractmethod
    def send(self, payload: bytes, timeout: float) -> bool:
        """
        Write a payload to the connected peer.

        Args:
            payload: Encoded payload
            timeout: Seconds to wait for acknowledgment

        Returns:
            True if acknowledged within the timeout

        Raises:
            TransportError: If the write fails outright
        """
        pass
