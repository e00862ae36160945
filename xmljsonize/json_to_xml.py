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
from typing import Any, Dict, Optional

from lxml.etree import Element, ElementTree, QName, SubElement, _Element, _ElementTree

from xmljsonize.policy import J2XPolicy
from xmljsonize.utils.json import JSONNodeType, infer_json_type, json_scalar_to_text
from xmljsonize.utils.xml import (SOAP_1_1_NAMESPACE,
                                  SOAP_1_2_NAMESPACE,
                                  SOAP_BODY,
                                  SOAP_ENVELOPE_ALIAS,
                                  XML_NAMESPACE)

__author__ = "EUROCONTROL (SWIM)"

logger = logging.getLogger(__name__)


class JSONToXML:
    """
    Converts JSON serializable Python values into XML documents according to a J2XPolicy.

    Dictionaries expand into the element being built: scalar keys carrying the attribute prefix become attributes, the
    value field name becomes the text, lists become one child element per item named after their key and any other key
    becomes a child element. Scalars become the text of the element being built. Prefixed names ('alias:local') are
    qualified with the namespace bound to their alias, either in scope or declared by an '@xmlns:alias' key of the same
    or of the enclosing object. Names whose alias is not bound to any namespace keep their local name.

    :param policy: The J2XPolicy of the conversions, defaults to J2XPolicy().
    :raises ValueError: If the policy asks for a namespace but gives no namespace URI.
    """

    def __init__(self, policy: Optional[J2XPolicy] = None) -> None:
        self.policy = policy or J2XPolicy()
        if self.policy.create_namespace and not self.policy.namespace:
            raise ValueError('A namespace URI must be given when create_namespace is set.')

    @property
    def soap_namespace(self) -> str:
        return SOAP_1_1_NAMESPACE if self.policy.soap_version == '1.1' else SOAP_1_2_NAMESPACE

    def convert(self, json: Any) -> _ElementTree:
        """
        :param json: A JSON serializable value, e.g. the output of json.load.
        :return: The XML document built from the value.
        """
        if not self.policy.wrap_soap_envelope:
            root = self._new_root_element(json)
            self._map(root, json, field_name=None)
            return ElementTree(root)

        envelope = Element(QName(self.soap_namespace, 'Envelope'), nsmap={SOAP_ENVELOPE_ALIAS: self.soap_namespace})
        body = SubElement(envelope, QName(self.soap_namespace, SOAP_BODY))
        if self.policy.soap_body_as_root:
            logger.debug("Mapping JSON root into the SOAP Body")
            self._map(body, json, field_name=self.policy.root_name)
        else:
            root = self._new_root_element(json)
            self._map(root, json, field_name=None)
            body.append(root)
        return ElementTree(envelope)

    def _new_root_element(self, json: Any) -> _Element:
        nsmap = self._used_namespaces(None, json, {})
        if self.policy.create_namespace:
            nsmap[self.policy.alias] = self.policy.namespace
            return Element(QName(self.policy.namespace, self.policy.root_name), nsmap=nsmap)
        return Element(self.policy.root_name, nsmap=nsmap)

    def _text(self, value: Any) -> str:
        text = json_scalar_to_text(value)
        if self.policy.trim_whitespace and isinstance(value, str):
            return text.strip()
        return text

    def _declared_namespaces(self, json: Any) -> Dict[str, str]:
        """
        :param json: A JSON value.
        :return: The namespaces declared by the '@xmlns:alias' keys of the value, by alias.
        """
        if not isinstance(json, dict):
            return {}
        declaration = f'{self.policy.xml_attribute_prefix}xmlns:'
        return {key[len(declaration):]: value for key, value in json.items()
                if key.startswith(declaration) and isinstance(value, str) and value}

    def _used_namespaces(self, name: Optional[str], json: Any, scope: Dict[str, str]) -> Dict[str, str]:
        """
        Finds the namespace declarations an element needs for its own name and the names of its attributes.

        :param name: The name of the element, None if it is given by the policy.
        :param json: The JSON value the element is built from.
        :param scope: The namespaces declared next to the element's key.
        :return: The namespaces used by the element, by alias.
        """
        namespaces = dict(scope)
        namespaces.update(self._declared_namespaces(json))

        names = [name] if name else []
        if isinstance(json, dict) and not self.policy.ignore_xml_attribute:
            prefix = self.policy.xml_attribute_prefix
            names.extend(key[len(prefix):] for key in json if key.startswith(prefix))
        aliases = set()
        for qualified_name in names:
            alias, separator, _ = qualified_name.partition(':')
            if separator and alias and alias != 'xml':
                aliases.add(alias)

        return {alias: namespace for alias, namespace in namespaces.items() if alias in aliases}

    @staticmethod
    def _qualify(name: str, nsmap: Dict[Optional[str], str]) -> str:
        """
        Turns a prefixed name ('alias:local') into its lxml form ('{namespace}local').

        :param name: An element or attribute name, prefixed or not.
        :param nsmap: The namespaces in scope.
        :return: The qualified name, or the local name if the alias is not bound to any namespace.
        """
        alias, separator, local_name = name.partition(':')
        if not separator:
            return name
        if alias == 'xml':
            return QName(XML_NAMESPACE, local_name).text
        if alias in nsmap:
            return QName(nsmap[alias], local_name).text
        logger.debug("Namespace alias {} is not declared, using local name {}".format(alias, local_name))
        return local_name

    def _child(self, parent: _Element, name: str, json: Any, scope: Dict[str, str]) -> _Element:
        nsmap = {alias: namespace for alias, namespace in self._used_namespaces(name, json, scope).items()
                 if parent.nsmap.get(alias) != namespace}
        return SubElement(parent, self._qualify(name, {**parent.nsmap, **nsmap}), nsmap=nsmap)

    def _map(self, element: _Element, json: Any, field_name: Optional[str]) -> _Element:
        json_type = infer_json_type(json)
        if json_type == JSONNodeType.ARRAY:
            self._map_array(element, json, field_name or self.policy.unnamed_arr_xml_node_name, scope={})
        elif json_type == JSONNodeType.OBJECT:
            self._map_object(element, json)
        else:
            element.text = self._text(json)
        return element

    def _map_array(self, element: _Element, items: list, name: str, scope: Dict[str, str]) -> None:
        if not items:
            if self.policy.ignore_empty_array:
                logger.debug("Ignoring empty array {}".format(name))
            else:
                self._child(element, name, None, scope)
            return

        for item in items:
            if infer_json_type(item) == JSONNodeType.ARRAY:
                # Nested arrays are flattened under the same name
                self._map_array(element, item, name, scope)
            else:
                self._map(self._child(element, name, item, scope), item, field_name=name)

    def _map_object(self, element: _Element, json: dict) -> None:
        prefix = self.policy.xml_attribute_prefix
        scope = self._declared_namespaces(json)
        for key, value in json.items():
            json_type = infer_json_type(value)
            if key.startswith(prefix) and not json_type.is_container:
                if not self.policy.ignore_xml_attribute:
                    self._set_attribute(element, key[len(prefix):], value)
                    continue
                if prefix:
                    logger.debug("Ignoring attribute {}".format(key))
                    continue

            if key == self.policy.xml_value_field_name and not json_type.is_container:
                element.text = self._text(value)
            elif json_type == JSONNodeType.ARRAY:
                self._map_array(element, value, key, scope)
            else:
                self._map(self._child(element, key, value, scope), value, field_name=key)

    def _set_attribute(self, element: _Element, name: str, value: Any) -> None:
        if name == 'xmlns' or name.startswith('xmlns:'):
            logger.debug("Skipping namespace declaration {}".format(name))
            return
        element.set(self._qualify(name, element.nsmap), self._text(value))


def json_to_xml(json: Any, policy: Optional[J2XPolicy] = None) -> _ElementTree:
    """
    Converts a JSON serializable Python value into an XML document.

    :param json: A JSON serializable value.
    :param policy: The J2XPolicy of the conversion, defaults to J2XPolicy().
    :return: The XML document built from the value.
    """
    return JSONToXML(policy).convert(json)
