"""ZeroMQ request/reply session with the terminal bridge.

One REQ socket per session enforces strict send/receive alternation: at most
one request is outstanding at a time. Send and receive are each bounded by
their own timeout.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import zmq

from mt4client.exceptions import MT4ConnectionError, MT4TimeoutError
from mt4client.settings import ClientSettings

log = logging.getLogger(__name__)

_settings = ClientSettings()


@runtime_checkable
class Transport(Protocol):
    """A request/reply session carrying one text frame each way."""

    def send(self, request: str) -> str | None:
        """Send one request and wait for its reply.

        Returns:
            The reply text, or None if the receive timeout expired.

        """
        ...

    def close(self) -> None:
        """Release the session. Safe to call more than once."""
        ...


class ZmqTransport:
    """REQ-socket transport using pyzmq.

    Example:
        >>> transport = ZmqTransport("tcp://localhost:28282")
        >>> reply = transport.send('{"action": "GET_ACCOUNT_INFO"}')
        >>> transport.close()

    """

    def __init__(
        self,
        address: str = _settings.address,
        request_timeout_ms: int = _settings.request_timeout_ms,
        response_timeout_ms: int = _settings.response_timeout_ms,
        high_water_mark: int = _settings.high_water_mark,
        linger_ms: int = _settings.linger_ms,
    ) -> None:
        """Open a session.

        Args:
            address: ZeroMQ endpoint, e.g. ``tcp://host:port``.
            request_timeout_ms: Send timeout in milliseconds.
            response_timeout_ms: Receive timeout in milliseconds.
            high_water_mark: Outgoing and incoming queue limit.
            linger_ms: Pending-message linger on close.

        Raises:
            MT4ConnectionError: If the socket cannot be created or connected.

        """
        self._address = address
        self._request_timeout_ms = request_timeout_ms
        self._response_timeout_ms = response_timeout_ms
        self._context = zmq.Context()
        try:
            self._socket = self._context.socket(zmq.REQ)
            self._socket.setsockopt(zmq.SNDHWM, high_water_mark)
            self._socket.setsockopt(zmq.RCVHWM, high_water_mark)
            self._socket.setsockopt(zmq.SNDTIMEO, request_timeout_ms)
            self._socket.setsockopt(zmq.RCVTIMEO, response_timeout_ms)
            self._socket.setsockopt(zmq.LINGER, linger_ms)
            self._socket.connect(address)
        except zmq.ZMQError as e:
            self._context.destroy(linger=0)
            msg = f"Failed to connect: {e}"
            raise MT4ConnectionError(msg, address=address) from e
        self._closed = False
        log.debug("Connected to %s", address)

    @property
    def address(self) -> str:
        """Endpoint this session is connected to."""
        return self._address

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    def send(self, request: str) -> str | None:
        """Send one request frame and receive the reply frame.

        Raises:
            MT4TimeoutError: If the request could not be queued in time.
            MT4ConnectionError: On any other socket error.

        """
        if self._closed:
            msg = "Transport is closed"
            raise MT4ConnectionError(msg, address=self._address)
        try:
            self._socket.send_string(request)
        except zmq.Again as e:
            msg = "Timed out sending request"
            raise MT4TimeoutError(
                msg, timeout_ms=self._request_timeout_ms, address=self._address
            ) from e
        except zmq.ZMQError as e:
            msg = f"Failed to send request: {e}"
            raise MT4ConnectionError(msg, address=self._address) from e

        try:
            return self._socket.recv_string()
        except zmq.Again:
            log.debug(
                "No reply from %s within %d ms",
                self._address,
                self._response_timeout_ms,
            )
            return None
        except zmq.ZMQError as e:
            msg = f"Failed to receive response: {e}"
            raise MT4ConnectionError(msg, address=self._address) from e

    def close(self) -> None:
        """Close the socket and terminate the context."""
        if self._closed:
            return
        self._closed = True
        self._socket.close(linger=0)
        self._context.term()
        log.debug("Closed connection to %s", self._address)


__all__ = ["Transport", "ZmqTransport"]
