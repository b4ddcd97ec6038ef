# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

from pathlib import Path

import pytest
from datagrams.configuration import ConfigurationError, RelaxNGValidator, dump_options, load_options, ns_options, options_validator
from datagrams.messages import Options, ValueTooLongError

DOCUMENT = b"""\
<?xml version="1.0" encoding="UTF-8"?>
<options xmlns="urn:i2p:datagrams:options">
  <option name="inbound.length">3</option>
  <option name="i2cp.leaseSetEncType">4,0</option>
  <option name="outbound.nickname">caf\xc3\xa9</option>
  <option name="i2cp.dontPublishLeaseSet"/>
</options>
"""


class TestOptionsProfiles:

    def test_validator(self) -> None:
        assert options_validator() is options_validator()
        assert repr(options_validator()) == "RelaxNGValidator('options.rng')"
        assert options_validator().schema_path == RelaxNGValidator.schema_directory / 'options.rng'

    def test_load_document(self) -> None:
        options = load_options(DOCUMENT)

        assert isinstance(options, Options)
        assert options.to_dict() == {
            'inbound.length': '3',
            'i2cp.leaseSetEncType': '4,0',
            'outbound.nickname': 'café',
            'i2cp.dontPublishLeaseSet': '',
        }

    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / 'options.xml'
        path.write_bytes(DOCUMENT)

        assert load_options(path) == load_options(DOCUMENT)
        assert load_options(str(path)) == load_options(DOCUMENT)

    def test_load_empty_document(self) -> None:
        options = load_options(f'<options xmlns="{ns_options}"/>'.encode())
        assert options.is_empty
        assert options.to_wire() == b'\x00\x00'

    def test_invalid_documents(self) -> None:
        with pytest.raises(ConfigurationError, match='Invalid XML document'):
            load_options(b'<options xmlns="urn:i2p:datagrams:options">')

        invalid_documents = [
            b'<options/>',  # wrong namespace
            b'<settings xmlns="urn:i2p:datagrams:options"/>',
            b'<options xmlns="urn:i2p:datagrams:options"><option>3</option></options>',
            b'<options xmlns="urn:i2p:datagrams:options"><option name="">3</option></options>',
            b'<options xmlns="urn:i2p:datagrams:options"><option name="a"><value>3</value></option></options>',
        ]
        for document in invalid_documents:
            with pytest.raises(ConfigurationError, match='The document does not match the options.rng schema'):
                load_options(document)

        with pytest.raises(TypeError, match='Cannot load options from'):
            load_options(1)  # type: ignore[arg-type]

    def test_duplicate_options(self) -> None:
        document = b'<options xmlns="urn:i2p:datagrams:options">\n<option name="a">1</option>\n<option name="a">2</option>\n</options>'
        with pytest.raises(ConfigurationError, match="Duplicate option 'a' on line 3"):
            load_options(document)

    def test_option_limits(self) -> None:
        document = f'<options xmlns="{ns_options}"><option name="a">{256 * 'v'}</option></options>'.encode()
        with pytest.raises(ValueTooLongError):
            load_options(document)

    def test_dump(self) -> None:
        options = Options({'c': '3', 'a': '1', 'b': ''})
        document = dump_options(options)

        assert document.startswith(b"<?xml version='1.0' encoding='UTF-8'?>")
        assert document.index(b'name="a"') < document.index(b'name="b"') < document.index(b'name="c"')
        assert load_options(document) == options

        loaded = load_options(dump_options(load_options(DOCUMENT)))
        assert loaded.to_wire() == load_options(DOCUMENT).to_wire()

    def test_dump_text_not_representable_in_xml(self) -> None:
        # control characters are valid in a mapping on the wire, but not in XML
        options, _ = Options.decode(b'\x00\x06\x01a=\x01\x01;')
        assert options['a'] == '\x01'

        with pytest.raises(ConfigurationError, match="Option 'a' cannot be represented in XML"):
            dump_options(options)
        with pytest.raises(ConfigurationError, match="Option '\\\\x02' cannot be represented in XML"):
            dump_options(Options({'\x02': 'v'}))
