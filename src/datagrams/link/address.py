# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from dataclasses import dataclass
from typing import ClassVar, Self

from datagrams.messages.datamodel import UInt16Adapter

from .exceptions import EmptyAddressError, InvalidPortError

__all__ = 'I2PAddr', 'parse_address', 'format_address'


@dataclass(frozen=True, slots=True)
class I2PAddr:
    """
    A destination together with a port.

    An empty destination stands for an unknown or anonymous sender and port 0
    stands for an unspecified port. The textual form is destination:port, but
    the destination may itself contain colons, as only the last one separates
    the port.
    """

    destination: str = ''
    port: int = 0

    network: ClassVar[str] = 'i2p'

    _display_length_: ClassVar[int] = 16

    def __post_init__(self) -> None:
        try:
            UInt16Adapter.validate(self.port)
        except (TypeError, ValueError) as exc:
            raise InvalidPortError(str(self.port)) from exc

    def __str__(self) -> str:
        if not self.destination:
            return f':{self.port}'
        # the display length is measured in UTF-8 bytes and a multibyte character cut by it is dropped
        data = self.destination.encode(errors='surrogatepass')
        if len(data) > self._display_length_:
            return f'{data[:self._display_length_].decode(errors='ignore')}...:{self.port}'
        return f'{self.destination}:{self.port}'

    @classmethod
    def parse(cls, address: str) -> Self:
        if not address:
            raise EmptyAddressError(address)
        *parts, port = address.split(':')
        if not parts:
            return cls(destination=port, port=0)
        if not (port.isascii() and port.isdigit()) or len(port.lstrip('0')) > 5 or int(port) > 2**16 - 1:
            raise InvalidPortError(port)
        return cls(destination=':'.join(parts), port=int(port))


def parse_address(address: str) -> I2PAddr:
    return I2PAddr.parse(address)


def format_address(address: I2PAddr) -> str:
    """Return a human readable form of the address, with long destinations truncated"""
    return str(address)
