# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Datagram metadata

   Repliable datagrams carry, next to their payload, metadata structures
   that are encoded using binary fields with all integers in network byte
   order. The structures defined here are:

   Offline Signature:  lets a destination authorize a transient signing key
      until an expiration time. The length of its variable fields depends on
      the signature types involved, which are looked up in a static table.

   Options:  a canonical key/value mapping used for protocol parameters. The
      mapping is serialized with its keys sorted, so that signatures over it
      are reproducible.

   Decoding a structure from a buffer returns the structure together with the
   number of bytes it used, so the rest of the buffer can be interpreted by
   the caller (for example as the datagram payload).

"""

from .datamodel import SignatureType
from .exceptions import KeyTooLongError, MalformedPairError, MessageFormatError, SizeMismatchError, TooShortError, UnknownSignatureTypeError, ValueTooLongError
from .offline import OfflineSignature
from .options import Options
from .signatures import SIGNATURE_LENGTHS, SignatureLengths, lengths_for, public_key_length, signature_length

__all__ = (  # noqa: RUF022
    # structures

    'OfflineSignature',
    'Options',

    # signature types

    'SignatureType',
    'SignatureLengths',
    'SIGNATURE_LENGTHS',
    'lengths_for',
    'public_key_length',
    'signature_length',

    # errors

    'MessageFormatError',
    'TooShortError',
    'UnknownSignatureTypeError',
    'SizeMismatchError',
    'MalformedPairError',
    'KeyTooLongError',
    'ValueTooLongError',
)
