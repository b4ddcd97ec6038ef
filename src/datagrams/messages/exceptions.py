# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from typing import Literal

__all__ = (  # noqa: RUF022
    'MessageFormatError',
    'TooShortError',
    'UnknownSignatureTypeError',
    'SizeMismatchError',
    'MalformedPairError',
    'KeyTooLongError',
    'ValueTooLongError',
    'SignatureRole',
)


type SignatureRole = Literal['transient', 'destination']


class MessageFormatError(ValueError):
    """Base class for errors raised while encoding or decoding datagram metadata."""


class TooShortError(MessageFormatError):
    """Raised when a buffer does not hold enough data for a header or a length determined field."""

    def __init__(self, what: str, *, required: int, actual: int) -> None:
        super().__init__(f'Insufficient data in buffer to extract {what} (need {required} bytes, got {actual})')
        self.what = what
        self.required = required
        self.actual = actual


class UnknownSignatureTypeError(MessageFormatError):
    """Raised when a signature type code is not present in the signature types table."""

    def __init__(self, code: int, *, role: SignatureRole) -> None:
        super().__init__(f'Unknown {role} signature type: {code}')
        self.code = code
        self.role = role


class SizeMismatchError(MessageFormatError):
    """Raised when the declared size of a mapping exceeds the available data."""

    def __init__(self, *, declared: int, available: int) -> None:
        super().__init__(f'The mapping size exceeds the available data ({declared} > {available})')
        self.declared = declared
        self.available = available


class MalformedPairError(MessageFormatError):
    """Raised when a mapping record violates the key=value; grammar."""

    def __init__(self, reason: str, *, offset: int) -> None:
        super().__init__(f'Malformed mapping record at offset {offset}: {reason}')
        self.reason = reason
        self.offset = offset


class KeyTooLongError(MessageFormatError):
    def __init__(self, key: str, *, length: int) -> None:
        super().__init__(f'The mapping key {key!r} is too long (max length is 255, key has {length} bytes)')
        self.key = key
        self.length = length


class ValueTooLongError(MessageFormatError):
    def __init__(self, key: str, *, length: int) -> None:
        super().__init__(f'The value for mapping key {key!r} is too long (max length is 255, value has {length} bytes)')
        self.key = key
        self.length = length
