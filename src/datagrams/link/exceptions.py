# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later


__all__ = 'AddressError', 'InvalidPortError', 'EmptyAddressError'


class AddressError(ValueError):
    """Base class for errors raised while parsing network addresses."""


class InvalidPortError(AddressError):
    """Raised when the port is not a decimal number between 0 and 65535."""

    def __init__(self, port: str) -> None:
        super().__init__(f'Invalid port {port!r}')
        self.port = port


class EmptyAddressError(AddressError):
    """Raised when parsing an empty address string."""

    def __init__(self, address: str = '') -> None:
        super().__init__('Empty address string')
        self.address = address
