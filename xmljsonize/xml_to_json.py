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
from typing import Any, Dict, List, Optional, Tuple, Union

from lxml.etree import _Element, _ElementTree

from xmljsonize.coercion import CoercionKind, coerce
from xmljsonize.policy import X2JPolicy
from xmljsonize.utils.json import JSONPointer
from xmljsonize.utils.xml import (XSD_ALIAS,
                                  body_only_copy,
                                  child_elements,
                                  element_text,
                                  find_soap_body,
                                  namespace_declarations,
                                  qualified_attribute_name,
                                  qualified_name,
                                  trim_namespace_alias)

__author__ = "EUROCONTROL (SWIM)"

logger = logging.getLogger(__name__)


class XMLToJSON:
    """
    Converts XML documents into JSON serializable Python values according to an X2JPolicy.

    Elements with attributes or child elements become dictionaries: attributes are stored under their prefixed name,
    children under their name, repeated children as a list in document order and the remaining text under the value
    field name. Elements with neither become their text, or None ('' if null_as_empty_string) when they have no text.
    Once converted, the values listed in the array, boolean and number fields of the policy are coerced, in that order.

    The transcoder holds no state between conversions and can be reused.

    :param policy: The X2JPolicy of the conversions, defaults to X2JPolicy().
    :raises InvalidPointerExpression: If one of the coercion fields of the policy is not a valid JSON Pointer.
    """

    def __init__(self, policy: Optional[X2JPolicy] = None) -> None:
        self.policy = policy or X2JPolicy()
        self._trim_mode = self.policy.trim_mode
        self._skip_xsd_attributes = self.policy.ignore_xsd_type_attr
        self._coercions = [
            (CoercionKind.ARRAY, [JSONPointer(pointer) for pointer in self.policy.xml_array_fields]),
            (CoercionKind.BOOLEAN, [JSONPointer(pointer) for pointer in self.policy.xml_boolean_fields]),
            (CoercionKind.NUMBER, [JSONPointer(pointer) for pointer in self.policy.xml_number_fields])
        ]  # type: List[Tuple[CoercionKind, List[JSONPointer]]]

    def convert(self, document: Union[_ElementTree, _Element]) -> Any:
        """
        :param document: A parsed XML document or its root element. It is never modified.
        :return: The JSON serializable value of the document.
        """
        root = document.getroot() if isinstance(document, _ElementTree) else document

        if self.policy.tear_soap_envelope:
            json = self._convert_soap_envelope(root)
        elif self.policy.include_root:
            json = self._fold(attributes={}, text=None, groups=self._group([root]))
        else:
            json = self._convert_element(root)

        for kind, pointers in self._coercions:
            json = coerce(json, pointers, kind, self.policy.compat_coercion)
        return json

    def _convert_soap_envelope(self, root: _Element) -> Any:
        if self.policy.include_root:
            logger.debug("Converting the SOAP envelope {} without its header".format(qualified_name(root)))
            return self._convert_element(body_only_copy(root))

        body = find_soap_body(root)
        if body is None:
            logger.warning("No SOAP Body found in {}, converting the whole document".format(qualified_name(root)))
            return self._convert_element(root)
        return self._convert_element(body)

    def _trim_name(self, name: str) -> str:
        if self.policy.remove_namespace_alias:
            return trim_namespace_alias(name)
        return name

    def _collect_attributes(self, element: _Element) -> Dict[str, str]:
        if self.policy.ignore_xml_attribute:
            return {}

        raw_attributes = namespace_declarations(element) + [
            (qualified_attribute_name(element, name), value) for name, value in element.attrib.items()
        ]
        attributes = {}
        for name, value in raw_attributes:
            if self._skip_xsd_attributes and name.startswith(f'{XSD_ALIAS}:'):
                logger.debug("Ignoring XSD attribute {}".format(name))
                continue
            attributes[self._trim_name(name)] = self._trim_mode.trim(value)
        return attributes

    def _group(self, children: List[_Element]) -> Dict[str, List[_Element]]:
        groups = {}  # type: Dict[str, List[_Element]]
        for child in children:
            groups.setdefault(self._trim_name(qualified_name(child)), []).append(child)
        return groups

    def _convert_element(self, element: _Element) -> Any:
        return self._fold(attributes=self._collect_attributes(element),
                          text=self._trim_mode.trim(element_text(element)),
                          groups=self._group(list(child_elements(element))))

    def _fold(self, attributes: Dict[str, str], text: Optional[str], groups: Dict[str, List[_Element]]) -> Any:
        if not attributes and not groups:
            if text is None and self.policy.null_as_empty_string:
                return ''
            return text

        json = {}
        for name, value in attributes.items():
            json[self.policy.xml_attribute_prefix + name] = value
        for name, elements in groups.items():
            if len(elements) == 1:
                json[name] = self._convert_element(elements[0])
            else:
                json[name] = [self._convert_element(element) for element in elements]
        if text:
            json[self.policy.xml_value_field_name] = text
        return json


def xml_to_json(document: Union[_ElementTree, _Element], policy: Optional[X2JPolicy] = None) -> Any:
    """
    Converts an XML document into a JSON serializable Python value.

    :param document: A parsed XML document or its root element.
    :param policy: The X2JPolicy of the conversion, defaults to X2JPolicy().
    :return: The JSON serializable value of the document.
    """
    return XMLToJSON(policy).convert(document)
