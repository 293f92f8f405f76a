"""Simulated ledger environment: clock, addresses, authorisation and events."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Iterable


class AuthorizationError(Exception):
    """Raised when an address has not authorised the current call."""

    def __init__(self, address: str) -> None:
        super().__init__(f"address {address} has not authorised this call")
        self.address = address


@dataclass(frozen=True)
class Event:
    """A published contract event."""

    topics: tuple
    data: Any


class Env:
    """Shared state that contracts run against.

    Holds the ledger timestamp, hands out fresh addresses, decides which
    addresses count as having authorised a call, and records every
    published event in order.
    """

    def __init__(self, timestamp: int = 0) -> None:
        self.timestamp = timestamp
        self.events: list[Event] = []
        self._counter = itertools.count(1)
        self._all_authorised = False
        self._authorised: frozenset[str] = frozenset()

    def generate_address(self) -> str:
        """Return a new address, distinct from every earlier one."""
        return f"G{next(self._counter):055X}"

    def mock_all_auths(self) -> None:
        """Treat every address as having authorised every call."""
        self._all_authorised = True
        self._authorised = frozenset()

    def mock_auths(self, addresses: Iterable[str]) -> None:
        """Treat only the given addresses as having authorised calls."""
        self._all_authorised = False
        self._authorised = frozenset(addresses)

    def require_auth(self, address: str) -> None:
        """Raise AuthorizationError unless the address has authorised the call."""
        if self._all_authorised or address in self._authorised:
            return
        raise AuthorizationError(address)

    def publish(self, topics: tuple, data: Any) -> None:
        """Record an event with the given topics and data."""
        self.events.append(Event(tuple(topics), data))