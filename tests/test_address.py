# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest
from datagrams.link import AddressError, EmptyAddressError, I2PAddr, InvalidPortError, format_address, parse_address


class TestI2PAddr:

    def test_parse(self) -> None:
        assert parse_address('example.i2p:8080') == I2PAddr(destination='example.i2p', port=8080)
        assert parse_address(':9000') == I2PAddr(destination='', port=9000)
        assert parse_address('a:b:12345') == I2PAddr(destination='a:b', port=12345)
        assert parse_address('example.i2p') == I2PAddr(destination='example.i2p', port=0)
        assert parse_address('example.i2p:0') == I2PAddr(destination='example.i2p', port=0)
        assert parse_address('example.i2p:65535') == I2PAddr(destination='example.i2p', port=65535)
        assert parse_address('example.i2p:00080') == I2PAddr(destination='example.i2p', port=80)
        assert I2PAddr.parse('example.i2p:8080') == parse_address('example.i2p:8080')

    def test_parse_errors(self) -> None:
        with pytest.raises(EmptyAddressError, match='Empty address string'):
            parse_address('')

        for address, port in [('x:99999', '99999'), ('x:65536', '65536'), ('x:-1', '-1'), ('x:+1', '+1'), ('x: 1', ' 1'), ('x:1_0', '1_0'), ('x:', ''), (':', ''), ('x:\u0663', '\u0663'), ('x:port', 'port')]:
            with pytest.raises(InvalidPortError) as exc_info:
                parse_address(address)
            assert exc_info.value.port == port

        with pytest.raises(InvalidPortError):
            parse_address('x:' + 5000 * '9')

        assert issubclass(InvalidPortError, AddressError)
        assert issubclass(EmptyAddressError, AddressError)
        assert issubclass(AddressError, ValueError)

    def test_construction(self) -> None:
        address = I2PAddr()
        assert address.destination == ''
        assert address.port == 0
        assert address.network == 'i2p'

        with pytest.raises(InvalidPortError):
            I2PAddr('example.i2p', 2**16)
        with pytest.raises(InvalidPortError):
            I2PAddr('example.i2p', -1)
        with pytest.raises(InvalidPortError):
            I2PAddr('example.i2p', '80')  # type: ignore[arg-type]

        with pytest.raises(AttributeError):
            address.port = 80  # type: ignore[misc]

    def test_format(self) -> None:
        assert format_address(I2PAddr()) == ':0'
        assert format_address(I2PAddr(port=9000)) == ':9000'
        assert format_address(I2PAddr('example.i2p', 8080)) == 'example.i2p:8080'
        assert format_address(I2PAddr(16 * 'a', 1)) == f'{16 * 'a'}:1'
        assert format_address(I2PAddr(17 * 'a', 1)) == f'{16 * 'a'}...:1'
        assert str(I2PAddr('example.i2p', 8080)) == 'example.i2p:8080'

        # the display length counts UTF-8 bytes, not characters
        assert format_address(I2PAddr(8 * 'é', 1)) == f'{8 * 'é'}:1'
        assert format_address(I2PAddr(10 * 'é', 1)) == f'{8 * 'é'}...:1'
        assert format_address(I2PAddr('a' + 10 * 'é', 1)) == f'a{7 * 'é'}...:1'

        # the truncated form is only meant for display
        destination = 'A' * 516 + '.b32.i2p'
        address = I2PAddr(destination, 22)
        assert str(address) == 'AAAAAAAAAAAAAAAA...:22'
        assert parse_address(f'{address.destination}:{address.port}') == address

    def test_equality(self) -> None:
        assert parse_address('example.i2p:8080') == parse_address('example.i2p:8080')
        assert hash(parse_address('example.i2p:8080')) == hash(parse_address('example.i2p:8080'))
        assert parse_address('example.i2p:8080') != parse_address('example.i2p:8081')
        assert parse_address(':8080') != parse_address('example.i2p:8080')

        # a missing address is only equal to another missing address
        no_address: I2PAddr | None = None
        assert no_address == None  # noqa: E711
        assert I2PAddr() != no_address
        assert len({parse_address('a:1'), parse_address('a:1'), parse_address('b:1')}) == 2
