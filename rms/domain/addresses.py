"""Address lookup scoped to the caller's own addresses."""

from __future__ import annotations

from typing import Hashable, Iterable

from .entities import Address
from .errors import NotFoundError


def find_address(address_id: Hashable, addresses: Iterable[Address]) -> Address:
    """Return the address with *address_id* or raise ``NotFoundError``.

    Only the requesting user's addresses are ever passed in, so an id that
    belongs to somebody else is indistinguishable from an unknown one.
    """
    for address in addresses:
        if address.id == address_id:
            return address
    raise NotFoundError("Address not exist")
