"""
Copyright 2020 EUROCONTROL
==========================================

Redistribution and use in source and binary forms, with or without modification, are permitted
provided that the following conditions are met:

1. Redistributions of source code must retain the above copyright notice, this list of conditions
   and the following disclaimer.
2. Redistributions in binary form must reproduce the above copyright notice, this list of
conditions
   and the following disclaimer in the documentation and/or other materials provided with the
   distribution.
3. Neither the name of the copyright holder nor the names of its contributors may be used to
endorse
   or promote products derived from this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR
IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND
FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER
IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT
OF
THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

==========================================

Editorial note: this license is an instance of the BSD license template as provided by the Open
Source Initiative: http://opensource.org/licenses/BSD-3-Clause

Details on EUROCONTROL: http://www.eurocontrol.int
"""

from __future__ import annotations

import logging
from copy import deepcopy
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from lxml.etree import QName, _Element

__author__ = "EUROCONTROL (SWIM)"

logger = logging.getLogger(__name__)

SOAP_1_1_NAMESPACE = 'http://schemas.xmlsoap.org/soap/envelope/'
SOAP_1_2_NAMESPACE = 'http://www.w3.org/2003/05/soap-envelope'
SOAP_ENVELOPE_ALIAS = 'soapenv'
SOAP_BODY = 'Body'

XSD_ALIAS = 'xsd'
XML_NAMESPACE = 'http://www.w3.org/XML/1998/namespace'

NEW_LINE_CHARACTERS = '\n\r'
# ASCII whitespace, new lines included
WHITESPACE_CHARACTERS = ' \t\n\x0b\f\r'


class TrimMode(Enum):
    """
    How leading and trailing characters are stripped from the text and attribute values of an XML document.
    """
    NONE = 'none'
    NEW_LINE = 'new_line'
    WHITESPACE = 'whitespace'
    BOTH = 'both'

    @classmethod
    def from_flags(cls, trim_whitespace: bool, trim_new_line: bool) -> TrimMode:
        if trim_whitespace and trim_new_line:
            return cls.BOTH
        if trim_new_line:
            return cls.NEW_LINE
        if trim_whitespace:
            return cls.WHITESPACE
        return cls.NONE

    def trim(self, value: Optional[str]) -> Optional[str]:
        """
        :param value: The string to trim, None is passed through.
        :return: The value with the leading and trailing characters of this mode removed.
        """
        if value is None or self is TrimMode.NONE:
            return value
        if self is TrimMode.NEW_LINE:
            return value.strip(NEW_LINE_CHARACTERS)
        return value.strip(WHITESPACE_CHARACTERS)


def is_element(node) -> bool:
    """
    lxml exposes comments, processing instructions and entities as elements whose tag is not a string.

    :param node: A node of an lxml tree.
    :return: True if the node is a proper XML element.
    """
    return isinstance(node, _Element) and isinstance(node.tag, str)


def qualified_name(element: _Element) -> str:
    """
    :param element: An lxml element.
    :return: The name of the element as written in the document, i.e. 'alias:local' when its namespace is bound to a
             prefix and 'local' otherwise.
    """
    local_name = QName(element).localname
    if element.prefix:
        return f'{element.prefix}:{local_name}'
    return local_name


def qualified_attribute_name(element: _Element, attribute_name: str) -> str:
    """
    Shortens an lxml attribute name in Clark notation ('{namespace}local') into its prefixed form ('alias:local'),
    using the namespaces in scope of the element that carries it.

    :param element: The element the attribute belongs to.
    :param attribute_name: The attribute name as used by lxml.
    :return: The attribute name as written in the document.
    """
    name = QName(attribute_name)
    if not name.namespace:
        return name.localname
    if name.namespace == XML_NAMESPACE:
        return f'xml:{name.localname}'
    try:
        return f'{get_short_namespace(name.namespace, element.nsmap)}:{name.localname}'
    except KeyError:
        logger.debug("No alias in scope for namespace {}, keeping local name {}".format(name.namespace,
                                                                                         name.localname))
        return name.localname


def namespace_declarations(element: _Element) -> List[Tuple[str, str]]:
    """
    Lists the namespace declarations introduced by an element, as the 'xmlns' and 'xmlns:alias' attributes that
    declare them.

    :param element: An lxml element.
    :return: A list of (attribute name, namespace) tuples for the namespaces not already in scope of the parent.
    """
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    declarations = []
    for alias, namespace in element.nsmap.items():
        if inherited.get(alias) == namespace:
            continue
        declarations.append(('xmlns' if alias is None else f'xmlns:{alias}', namespace))
    return declarations


def trim_namespace_alias(name: str) -> str:
    """
    Drops the namespace alias from a qualified name, e.g. 'soapenv:Body' becomes 'Body'. Only the first colon is
    considered.

    :param name: A qualified XML name.
    :return: The local part of the name, or the name itself if it has no alias.
    """
    _, separator, local_name = name.partition(':')
    return local_name if separator else name


def get_short_namespace(full_ns: str, xml_namespaces: Dict[Optional[str], str]) -> str:
    """
    Inverse search of a short namespace by its full namespace value.

    :param full_ns: The full namespace of which the abbreviated namespace is to be found.
    :param xml_namespaces: A dictionary containing the mapping between short namespace (keys) and
                           long namespace (values). The default namespace (None key) is never returned.
    :return: If the full namespace is found in the dictionary, returns the short namespace.
    :raise KeyError: If the full namespace is not found in the dictionary.
    """
    for key, value in xml_namespaces.items():
        if key is not None and full_ns == value:
            return key

    raise KeyError('The namespace is not found in "xml_namespaces".', full_ns)


def find_namespaces(root: _Element) -> Dict[str, str]:
    """
    Finds the namespaces declared with an alias on the root element of an XML document.

    :param root: The root element of the document.
    :return: A dictionary containing the mapping between short namespace and full namespace.
    """
    namespaces = dict(root.nsmap)
    namespaces.pop(None, None)
    return namespaces


def find_envelope_alias(root: _Element) -> Optional[str]:
    """
    Finds the namespace alias of a SOAP envelope, looking at the declarations of the root element. The alias bound
    to one of the SOAP envelope namespaces wins, otherwise the last declared alias is used.

    :param root: The root element of the document.
    :return: The alias, or None if the root declares no alias.
    """
    namespaces = find_namespaces(root)
    for soap_namespace in (SOAP_1_1_NAMESPACE, SOAP_1_2_NAMESPACE):
        try:
            return get_short_namespace(soap_namespace, namespaces)
        except KeyError:
            pass
    aliases = list(namespaces)
    return aliases[-1] if aliases else None


def find_soap_body(root: _Element) -> Optional[_Element]:
    """
    Looks for the Body of a SOAP envelope: the first descendant of the root named 'Body' under the envelope alias.

    :param root: The root element of the document, a SOAP Envelope.
    :return: The Body element or None if there is none.
    """
    alias = find_envelope_alias(root)
    for element in root.iterdescendants():
        if is_element(element) and element.prefix == alias and QName(element).localname == SOAP_BODY:
            return element
    return None


def body_only_copy(root: _Element) -> _Element:
    """
    Builds a copy of a SOAP Envelope that keeps the root with only its children whose name ends with 'Body'. Text
    directly under the root is dropped too. The input element is left untouched.

    :param root: The SOAP Envelope element.
    :return: A filtered deep copy of the envelope.
    """
    envelope = deepcopy(root)
    envelope.text = None
    for child in list(envelope):
        if is_element(child) and qualified_name(child).endswith(SOAP_BODY):
            child.tail = None
        else:
            envelope.remove(child)
    return envelope


def element_text(element: _Element) -> Optional[str]:
    """
    Concatenates in document order the text nodes that are direct children of an element: its text and the tails of
    its children (comments and processing instructions included).

    :param element: An lxml element.
    :return: The text of the element or None if it has no text node at all.
    """
    segments = [element.text] + [child.tail for child in element]
    segments = [segment for segment in segments if segment is not None]
    if not segments:
        return None
    return ''.join(segments)


def child_elements(element: _Element) -> Iterable[_Element]:
    return (child for child in element if is_element(child))
