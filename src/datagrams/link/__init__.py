# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from .address import I2PAddr, format_address, parse_address
from .exceptions import AddressError, EmptyAddressError, InvalidPortError

__all__ = 'I2PAddr', 'parse_address', 'format_address', 'AddressError', 'EmptyAddressError', 'InvalidPortError'  # noqa: RUF022
