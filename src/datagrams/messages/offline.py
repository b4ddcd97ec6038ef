# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Offline signatures

   An offline signature lets a destination authorize a transient signing key
   ahead of time, so that the destination's long term private key can be kept
   offline. The block is carried in datagrams that are signed by the transient
   key and it has the following structure:

     +----+----+----+----+----+----+
     |      expires      | sigtype |
     +----+----+----+----+----+----+
     |   transient_public_key      |
     +----+----+----+----+----+----+
     |         signature           |
     +----+----+----+----+----+----+

   expires:  4 bytes, seconds since the epoch, after which the authorization
      is no longer valid.

   sigtype:  2 bytes, the signature type of the transient key.

   transient_public_key:  the transient public key, with the length defined
      by sigtype.

   signature:  the signature over the fields above made with the destination's
      key, with the length defined by the destination's signature type. The
      destination's signature type is not part of the block; it is a property
      of the destination and it needs to be provided by the caller.

   All integers are in network byte order.

"""

from datetime import UTC, datetime
from io import BytesIO
from typing import ClassVar, Self

from .datamodel import TimestampAdapter, UInt16Adapter, WireData, read_exactly
from .elements import AnnotatedStructure, Element
from .exceptions import TooShortError, UnknownSignatureTypeError
from .signatures import public_key_length, signature_length

__all__ = 'OfflineSignature',  # noqa: COM818


class OfflineSignature(AnnotatedStructure):
    _header_size_: ClassVar[int] = TimestampAdapter._size_ + UInt16Adapter._size_

    expires: Element[datetime] = Element(datetime)
    transient_sig_type: Element[int] = Element(int, adapter=UInt16Adapter)
    transient_public_key: Element[bytes] = Element(bytes)
    signature: Element[bytes] = Element(bytes)

    @classmethod
    def from_wire(cls, buffer: WireData, destination_sig_type: int) -> Self:
        """
        Read an offline signature block from the buffer.

        The lengths of the transient public key and of the signature are given
        by the transient signature type found in the block and respectively by
        the destination signature type provided by the caller. If the buffer is
        a BytesIO object, it is left positioned right after the block.
        """
        if not isinstance(buffer, BytesIO):
            buffer = BytesIO(buffer)
        header = read_exactly(buffer, cls._header_size_, 'the offline signature header')
        expires = TimestampAdapter.from_wire(header[:TimestampAdapter._size_])
        transient_sig_type = UInt16Adapter.from_wire(header[TimestampAdapter._size_:])

        key_length = public_key_length(transient_sig_type)
        if key_length == 0:
            raise UnknownSignatureTypeError(transient_sig_type, role='transient')
        auth_length = signature_length(destination_sig_type)
        if auth_length == 0:
            raise UnknownSignatureTypeError(destination_sig_type, role='destination')

        body = buffer.read(key_length + auth_length)
        if len(body) < key_length + auth_length:
            total_length = cls._header_size_ + key_length + auth_length
            raise TooShortError('the offline signature', required=total_length, actual=cls._header_size_ + len(body))

        return cls(expires=expires, transient_sig_type=transient_sig_type, transient_public_key=body[:key_length], signature=body[key_length:])

    @classmethod
    def decode(cls, data: WireData, destination_sig_type: int) -> tuple[Self, int]:
        """Decode the offline signature block at the start of data and return it together with the number of bytes it used"""
        instance = cls.from_wire(data, destination_sig_type)
        return instance, instance.wire_length()

    def wire_length(self) -> int:
        return self._header_size_ + len(self.transient_public_key) + len(self.signature)

    @property
    def signed_data(self) -> bytes:
        """The bytes covered by the destination's signature (the whole block minus the signature)"""
        return self.to_wire()[:self._header_size_ + len(self.transient_public_key)]

    def is_expired(self, now: datetime | None = None) -> bool:
        if now is None:
            now = datetime.now(UTC)
        elif now.tzinfo is None:
            raise ValueError('The current time must be a timezone aware datetime')
        return now > self.expires
