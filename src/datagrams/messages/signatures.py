# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

# The signature types define the sizes of the public keys and signatures that
# appear in datagram metadata. The sizes are not present on the wire, so the
# fields that hold keys and signatures can only be parsed after looking up the
# signature type that produced them. Signature types that are not listed here
# are unknown and have no sizes (both lengths are 0), which must be treated as
# a parsing failure.

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from .datamodel import SignatureType

__all__ = 'SignatureLengths', 'SIGNATURE_LENGTHS', 'UNKNOWN_SIGNATURE_LENGTHS', 'lengths_for', 'public_key_length', 'signature_length'  # noqa: RUF022


@dataclass(frozen=True, slots=True)
class SignatureLengths:
    public_key: int
    signature: int

    @property
    def known(self) -> bool:
        return self.public_key > 0 and self.signature > 0


UNKNOWN_SIGNATURE_LENGTHS: Final = SignatureLengths(public_key=0, signature=0)

SIGNATURE_LENGTHS: Final[Mapping[int, SignatureLengths]] = MappingProxyType({
    SignatureType.DSA_SHA1:              SignatureLengths(public_key=128, signature=40),
    SignatureType.ECDSA_SHA256_P256:     SignatureLengths(public_key=64, signature=64),
    SignatureType.ECDSA_SHA384_P384:     SignatureLengths(public_key=96, signature=96),
    SignatureType.ECDSA_SHA512_P521:     SignatureLengths(public_key=132, signature=132),
    SignatureType.EdDSA_SHA512_Ed25519:  SignatureLengths(public_key=32, signature=64),
    SignatureType.RedDSA_SHA512_Ed25519: SignatureLengths(public_key=32, signature=64),
})


def lengths_for(code: int) -> SignatureLengths:
    """Return the key and signature lengths for the signature type code (all 0 if the code is unknown)"""
    return SIGNATURE_LENGTHS.get(code, UNKNOWN_SIGNATURE_LENGTHS)


def public_key_length(code: int) -> int:
    return lengths_for(code).public_key


def signature_length(code: int) -> int:
    return lengths_for(code).signature
