# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import enum
from collections.abc import Buffer, MutableMapping
from datetime import UTC, datetime
from io import BytesIO
from typing import ClassVar, Protocol, Self, runtime_checkable

from .exceptions import TooShortError

__all__ = (  # noqa: RUF022
    # Protocols and types

    'WireData',
    'DataWireProtocol',
    'DataWireAdapter',

    # Adapters and the adapter registry

    'AdapterRegistry',

    'UnsignedIntegerAdapter',
    'UInt16Adapter',
    'UInt32Adapter',

    'BytesAdapter',
    'StringAdapter',
    'String8Adapter',
    'LiteralBytesAdapter',
    'EqualsSignAdapter',
    'SemicolonAdapter',

    'TimestampAdapter',

    # Enumerations

    'SignatureType',
)


type WireData = bytes | bytearray | memoryview | BytesIO


# Protocols

@runtime_checkable
class DataWireProtocol(Protocol):
    """The wire protocol for datagram metadata elements"""

    @classmethod
    def from_wire(cls, buffer: WireData) -> Self: ...

    def to_wire(self) -> bytes: ...

    def wire_length(self) -> int: ...


@runtime_checkable
class DataWireAdapter[T](Protocol):
    """Wire protocol adapter for a datagram metadata element of type T"""

    _abstract_: ClassVar[bool] = True

    @staticmethod
    def from_wire(buffer: WireData) -> T: ...

    @staticmethod
    def to_wire(value: T, /) -> bytes: ...

    @staticmethod
    def wire_length(value: T, /) -> int: ...

    @staticmethod
    def validate(value: T, /) -> T: ...


class AdapterRegistry[T]:
    _adapters: ClassVar[MutableMapping[type, type[DataWireAdapter]]] = {}

    @classmethod
    def associate(cls, data_type: type[T], adapter: type[DataWireAdapter[T]]) -> None:
        if issubclass(data_type, DataWireProtocol):
            raise TypeError('Adapters for types that already implement DataWireProtocol must be explicitly provided with the element descriptors.')
        cls._adapters[data_type] = adapter

    @classmethod
    def get_adapter(cls, data_type: type[T]) -> type[DataWireAdapter[T]] | None:
        return cls._adapters.get(data_type, None)


# Helpers

def byte_length(number: int) -> int:
    """Return the number of bytes needed to represent the number"""
    return (number.bit_length() + 7) // 8


def read_exactly(buffer: WireData, size: int, what: str) -> bytes:
    """Read size bytes from the buffer, raising TooShortError if there are fewer available"""
    if isinstance(buffer, BytesIO):
        data = buffer.read(size)
    else:
        data = bytes(buffer[:size])
    if len(data) < size:
        raise TooShortError(what, required=size, actual=len(data))
    return data


# Adapters

class UnsignedIntegerAdapter:
    _abstract_: ClassVar[bool] = True
    _bits_: ClassVar[int] = NotImplemented
    _size_: ClassVar[int] = NotImplemented

    def __init_subclass__(cls, *, bits: int = NotImplemented, **kw: object) -> None:
        if bits is not NotImplemented:
            cls._bits_ = bits
            cls._size_ = bits // 8
            cls._abstract_ = False
        super().__init_subclass__(**kw)

    @classmethod
    def from_wire(cls, buffer: WireData) -> int:
        return int.from_bytes(read_exactly(buffer, cls._size_, f'an unsigned {cls._bits_}-bit integer'), byteorder='big')

    @classmethod
    def to_wire(cls, value: int, /) -> bytes:
        return value.to_bytes(cls._size_, byteorder='big')

    @classmethod
    def wire_length(cls, _: int, /) -> int:
        return cls._size_

    @classmethod
    def validate(cls, value: int, /) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f'Expected an integer value, got {value.__class__.__qualname__!r}')
        if value < 0 or value.bit_length() > cls._bits_:
            raise ValueError(f'Value is out of range for unsigned {cls._bits_}-bits integer: {value!r}')
        return value


class UInt16Adapter(UnsignedIntegerAdapter, bits=16):
    pass


class UInt32Adapter(UnsignedIntegerAdapter, bits=32):
    pass


class BytesAdapter:
    """Adapter for a bytes buffer without a length prefix (its length is known from context)"""

    _abstract_: ClassVar[bool] = False

    @staticmethod
    def from_wire(buffer: WireData) -> bytes:
        if isinstance(buffer, BytesIO):
            return buffer.read()
        return bytes(buffer)

    @staticmethod
    def to_wire(value: bytes, /) -> bytes:
        return value

    @staticmethod
    def wire_length(value: bytes, /) -> int:
        return len(value)

    @staticmethod
    def validate(value: Buffer, /) -> bytes:
        if isinstance(value, str) or not isinstance(value, Buffer):
            raise TypeError(f'Expected a bytes-like value, got {value.__class__.__qualname__!r}')
        return bytes(value)  # Always keep a private immutable copy


class StringAdapter:
    """Represent strings as UTF-8 encoded length prefixed bytes limited to maxsize"""

    _abstract_: ClassVar[bool] = True
    _maxsize_: ClassVar[int] = NotImplemented
    _sizelen_: ClassVar[int] = NotImplemented

    def __init_subclass__(cls, *, maxsize: int = NotImplemented, **kw: object) -> None:
        if maxsize is not NotImplemented:
            cls._maxsize_ = maxsize
            cls._sizelen_ = byte_length(maxsize)
            cls._abstract_ = False
        super().__init_subclass__(**kw)

    @classmethod
    def from_wire(cls, buffer: WireData) -> str:
        if not isinstance(buffer, BytesIO):
            buffer = BytesIO(buffer)
        data_length = int.from_bytes(read_exactly(buffer, cls._sizelen_, 'the length of the string'), byteorder='big')
        data = read_exactly(buffer, data_length, 'the bytes representation of the string')
        try:
            return data.decode()
        except UnicodeDecodeError as exc:
            raise ValueError(f'Cannot decode bytes to string: {exc}') from exc

    @classmethod
    def to_wire(cls, value: str, /) -> bytes:
        data = value.encode()
        return len(data).to_bytes(cls._sizelen_, byteorder='big') + data

    @classmethod
    def wire_length(cls, value: str, /) -> int:
        return cls._sizelen_ + len(value.encode())

    @classmethod
    def validate(cls, value: str, /) -> str:
        data = value.encode()
        if len(data) > cls._maxsize_:
            raise ValueError(f'Value is too long for string (max length is {cls._maxsize_}, value has {len(data)} bytes)')
        return value


class String8Adapter(StringAdapter, maxsize=2**8 - 1):
    pass


class LiteralBytesAdapter:
    """Adapter for a literal bytes value, like a separator or a terminator"""

    _abstract_: ClassVar[bool] = True
    _static_value_: ClassVar[bytes] = NotImplemented

    def __init_subclass__(cls, *, value: bytes, **kw: object) -> None:
        cls._static_value_ = value
        cls._abstract_ = False
        super().__init_subclass__(**kw)

    @classmethod
    def from_wire(cls, buffer: WireData) -> bytes:
        data = read_exactly(buffer, len(cls._static_value_), f'literal bytes {cls._static_value_!r}')
        if data != cls._static_value_:
            raise ValueError(f'Value on wire does not match literal bytes {cls._static_value_!r} (wire content {data!r})')
        return cls._static_value_

    @classmethod
    def to_wire(cls, _: bytes, /) -> bytes:
        return cls._static_value_

    @classmethod
    def wire_length(cls, _: bytes, /) -> int:
        return len(cls._static_value_)

    @classmethod
    def validate(cls, value: bytes, /) -> bytes:
        if value != cls._static_value_:
            raise ValueError(f'Invalid literal bytes value (expected {cls._static_value_!r}, got {value!r})')
        return value


class EqualsSignAdapter(LiteralBytesAdapter, value=b'='):
    pass


class SemicolonAdapter(LiteralBytesAdapter, value=b';'):
    pass


class TimestampAdapter:
    """Represent a point in time as an unsigned 32-bit number of seconds since the epoch"""

    _abstract_: ClassVar[bool] = False
    _size_ = UInt32Adapter._size_

    @staticmethod
    def from_wire(buffer: WireData) -> datetime:
        return datetime.fromtimestamp(UInt32Adapter.from_wire(buffer), UTC)

    @staticmethod
    def to_wire(value: datetime, /) -> bytes:
        return UInt32Adapter.to_wire(int(value.timestamp()))

    @classmethod
    def wire_length(cls, _: datetime, /) -> int:
        return cls._size_

    @staticmethod
    def validate(value: datetime, /) -> datetime:
        if not isinstance(value, datetime):
            raise TypeError(f'Expected a datetime value, got {value.__class__.__qualname__!r}')
        if value.tzinfo is None:
            raise ValueError('The timestamp must be a timezone aware datetime')
        value = value.astimezone(UTC).replace(microsecond=0)
        timestamp = int(value.timestamp())
        if timestamp < 0 or timestamp.bit_length() > 32:
            raise ValueError(f'The timestamp cannot be represented as an unsigned 32-bit number of seconds since the epoch: {value.isoformat()}')
        return value


AdapterRegistry.associate(bytes, BytesAdapter)
AdapterRegistry.associate(datetime, TimestampAdapter)


# Enumerations

class SignatureType(enum.IntEnum):
    # https://geti2p.net/spec/common-structures#type-signature
    DSA_SHA1 = 0
    ECDSA_SHA256_P256 = 1
    ECDSA_SHA384_P384 = 2
    ECDSA_SHA512_P521 = 3
    EdDSA_SHA512_Ed25519 = 7
    RedDSA_SHA512_Ed25519 = 11

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}.{self.name}'
