# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Options mapping

   The options mapping is a set of key/value pairs used to carry protocol
   parameters. It is serialized as a 2-byte size, followed by that many
   bytes of records:

     +----+----+----+-----//-----+----+----+-----//-----+----+
     |  size   | kl |    key     | =  | vl |   value    | ;  | ...
     +----+----+----+-----//-----+----+----+-----//-----+----+

   size:  2 bytes, the number of bytes that follow (excluding the size).

   kl, vl:  1 byte, the length of the UTF-8 encoded key and value.

   The records are sorted by the raw bytes of their keys, which makes the
   serialization canonical. This is required because mappings are included
   in signed structures and the signature must be reproducible by anyone
   who serializes the same mapping.

"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from io import BytesIO
from typing import ClassVar, Self

from .datamodel import EqualsSignAdapter, LiteralBytesAdapter, SemicolonAdapter, String8Adapter, UInt16Adapter, WireData, read_exactly
from .exceptions import KeyTooLongError, MalformedPairError, MessageFormatError, SizeMismatchError, TooShortError, ValueTooLongError

__all__ = 'Options',  # noqa: COM818


log = logging.getLogger(__name__)


class Options(Mapping[str, str]):
    """
    A key/value mapping with a canonical wire representation.

    Lookups behave like a regular read-only mapping. The only mutation is the
    upsert of a single key (options[key] = value or options.set(key, value)).
    The wire representation is computed from the current contents every time
    it is requested, so it always reflects the latest changes.
    """

    _sizelen_: ClassVar[int] = UInt16Adapter._size_
    _maxsize_: ClassVar[int] = String8Adapter._maxsize_

    def __init__(self, values: Mapping[str, str] | Iterable[tuple[str, str]] | None = None, /) -> None:
        self._values: dict[str, str] = {}
        if values is not None:
            for key, value in dict(values).items():
                self[key] = value

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self._values!r})'

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str):
            raise TypeError(f'Mapping keys must be strings, not {key.__class__.__qualname__!r}')
        if not isinstance(value, str):
            raise TypeError(f'Mapping values must be strings, not {value.__class__.__qualname__!r}')
        self._values[key] = value

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def set(self, key: str, value: str) -> None:
        self[key] = value

    def has(self, key: str) -> bool:
        return key in self._values

    @property
    def is_empty(self) -> bool:
        return not self._values

    def to_dict(self) -> dict[str, str]:
        return dict(self._values)

    def canonical_items(self) -> list[tuple[str, str]]:
        """Return the items sorted by the raw bytes of their keys"""
        return sorted(self._values.items(), key=lambda item: item[0].encode(errors='surrogatepass'))

    def validate(self) -> None:
        """Check that all keys and values fit on the wire, in canonical key order"""
        for key, value in self.canonical_items():
            if (length := len(self._encode(key, f'The mapping key {key!r}'))) > self._maxsize_:
                raise KeyTooLongError(key, length=length)
            if (length := len(self._encode(value, f'The value for mapping key {key!r}'))) > self._maxsize_:
                raise ValueTooLongError(key, length=length)

    @staticmethod
    def _encode(text: str, description: str) -> bytes:
        try:
            return text.encode()
        except UnicodeEncodeError as exc:
            raise MessageFormatError(f'{description} cannot be encoded as UTF-8: {exc.reason}') from exc

    @classmethod
    def from_wire(cls, buffer: WireData, *, strict: bool = False) -> Self:
        """
        Read a mapping from the buffer.

        Records with duplicate keys overwrite the previous value, unless strict
        is True in which case they are rejected. If the buffer is a BytesIO
        object, it is left positioned right after the mapping.
        """
        if not isinstance(buffer, BytesIO):
            buffer = BytesIO(buffer)
        size = int.from_bytes(read_exactly(buffer, cls._sizelen_, 'the mapping size'), byteorder='big')
        if size == 0:
            return cls()
        content = buffer.read(size)
        if len(content) < size:
            raise SizeMismatchError(declared=size, available=len(content))
        return cls(cls._parse_records(content, strict=strict))

    @classmethod
    def decode(cls, data: WireData, *, strict: bool = False) -> tuple[Self, int]:
        """Decode the mapping at the start of data and return it together with the number of bytes it used"""
        buffer = data if isinstance(data, BytesIO) else BytesIO(data)
        start = buffer.tell()
        instance = cls.from_wire(buffer, strict=strict)
        return instance, buffer.tell() - start

    def to_wire(self) -> bytes:
        if not self._values:
            return bytes(self._sizelen_)
        self.validate()
        equals_sign = EqualsSignAdapter.to_wire(b'=')
        semicolon = SemicolonAdapter.to_wire(b';')
        content = b''.join(String8Adapter.to_wire(key) + equals_sign + String8Adapter.to_wire(value) + semicolon for key, value in self.canonical_items())
        try:
            size = UInt16Adapter.validate(len(content))
        except ValueError as exc:
            raise MessageFormatError(f'The mapping is too big to be serialized ({len(content)} bytes)') from exc
        return UInt16Adapter.to_wire(size) + content

    def wire_length(self) -> int:
        return len(self.to_wire())

    # Record parsing helpers. The offsets in errors are relative to the start
    # of the mapping, so the first record is at offset 2.

    @classmethod
    def _parse_records(cls, content: bytes, *, strict: bool) -> dict[str, str]:
        records = BytesIO(content)
        values: dict[str, str] = {}
        while records.tell() < len(content):
            offset = cls._sizelen_ + records.tell()
            key = cls._read_string(records, 'key')
            cls._read_literal(records, EqualsSignAdapter, 'key')
            value = cls._read_string(records, 'value')
            cls._read_literal(records, SemicolonAdapter, 'value')
            if key in values:
                if strict:
                    raise MalformedPairError(f'duplicate key {key!r}', offset=offset)
                log.debug('Duplicate mapping key %r at offset %d overwrites the previous value', key, offset)
            values[key] = value
        return values

    @classmethod
    def _read_string(cls, records: BytesIO, what: str) -> str:
        offset = cls._sizelen_ + records.tell()
        try:
            return String8Adapter.from_wire(records)
        except TooShortError as exc:
            raise MalformedPairError(f'the {what} runs past the end of the mapping', offset=offset) from exc
        except ValueError as exc:
            raise MalformedPairError(f'the {what} is not a valid UTF-8 string', offset=offset) from exc

    @classmethod
    def _read_literal(cls, records: BytesIO, adapter: type[LiteralBytesAdapter], what: str) -> None:
        offset = cls._sizelen_ + records.tell()
        try:
            adapter.from_wire(records)
        except ValueError as exc:
            raise MalformedPairError(f'expected {adapter._static_value_!r} after the {what}', offset=offset) from exc
