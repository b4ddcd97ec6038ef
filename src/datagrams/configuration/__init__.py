# SPDX-FileCopyrightText: 2025-present Dan Pascu <dan@aethereal.link>
#
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Options profiles

   The protocol parameters that a session sends in its options mapping can
   be kept in XML documents that look like this:

     <options xmlns="urn:i2p:datagrams:options">
       <option name="i2cp.leaseSetEncType">4,0</option>
       <option name="inbound.length">3</option>
     </options>

   The documents are validated against the options.rng RelaxNG schema from
   the schema directory.

"""

import logging
from functools import cache
from pathlib import Path

from lxml import etree

from datagrams.messages import Options

__all__ = 'ConfigurationError', 'RelaxNGValidator', 'load_options', 'dump_options', 'ns_options'  # noqa: RUF022


log = logging.getLogger(__name__)


# noinspection PyProtectedMember
type ETreeElement = etree._Element  # noqa: SLF001


ns_options = 'urn:i2p:datagrams:options'


class ConfigurationError(ValueError):
    """Raised when an options profile cannot be parsed or does not match its schema."""


class RelaxNGValidator:
    schema_directory = Path(__file__).parent / 'schema'

    def __init__(self, schema_file: str) -> None:
        self.schema_path = self.schema_directory / schema_file
        self.schema = etree.RelaxNG(file=self.schema_path)

    def __repr__(self) -> str:
        return f'{self.__class__.__qualname__}({self.schema_path.name!r})'

    def validate(self, element: ETreeElement) -> None:
        if not self.schema.validate(element):
            raise ConfigurationError(f'The document does not match the {self.schema_path.name} schema: {self.schema.error_log.last_error}')


@cache
def options_validator() -> RelaxNGValidator:
    return RelaxNGValidator('options.rng')


def load_options(source: str | Path | bytes) -> Options:
    """Load an options profile from an XML file path or from an XML document given as bytes"""
    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        match source:
            case bytes():
                root = etree.fromstring(source, parser)
                origin = 'document'
            case str() | Path():
                root = etree.parse(str(source), parser).getroot()
                origin = str(source)
            case _:
                raise TypeError(f'Cannot load options from {source.__class__.__qualname__!r}')
    except etree.XMLSyntaxError as exc:
        raise ConfigurationError(f'Invalid XML document: {exc}') from exc

    options_validator().validate(root)

    options = Options()
    for element in root.iterfind(f'{{{ns_options}}}option'):
        name = element.get('name')
        if name in options:
            raise ConfigurationError(f'Duplicate option {name!r} on line {element.sourceline}')
        options[name] = element.text or ''
    options.validate()

    log.debug('Loaded %d options from %s', len(options), origin)
    return options


def dump_options(options: Options) -> bytes:
    """Serialize the options as an XML document, with the options in canonical order"""
    root = etree.Element(f'{{{ns_options}}}options', nsmap={None: ns_options})
    for key, value in options.canonical_items():
        try:
            element = etree.SubElement(root, f'{{{ns_options}}}option', name=key)
            element.text = value
        except ValueError as exc:  # control characters and other text that XML cannot represent
            raise ConfigurationError(f'Option {key!r} cannot be represented in XML: {exc}') from exc
    return etree.tostring(root, xml_declaration=True, encoding='UTF-8', pretty_print=True)
