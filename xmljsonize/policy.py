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
from json import load
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple

from jsonschema import Draft7Validator

from xmljsonize.utils.xml import TrimMode

__author__ = "EUROCONTROL (SWIM)"

logger = logging.getLogger(__name__)

_POINTER_LIST = {'type': 'array', 'items': {'type': 'string'}}

X2J_POLICY_SCHEMA = {
    '$schema': 'http://json-schema.org/draft-07/schema#',
    'title': 'XML to JSON conversion policy',
    'type': 'object',
    'properties': {
        'ignoreXmlAttribute': {'type': 'boolean'},
        'xmlAttributePrefix': {'type': 'string'},
        'xmlValueFieldName': {'type': 'string'},
        'includeRoot': {'type': 'boolean'},
        'ignoreXsdTypeAttr': {'type': 'boolean'},
        'xmlArrayFields': _POINTER_LIST,
        'xmlNumberFields': _POINTER_LIST,
        'xmlBooleanFields': _POINTER_LIST,
        'trimWhitespace': {'type': 'boolean'},
        'trimNewLine': {'type': 'boolean'},
        'nullAsEmptyString': {'type': 'boolean'},
        'tearSOAPEnvelope': {'type': 'boolean'},
        'removeNamespaceAlias': {'type': 'boolean'},
        'compatCoercion': {'type': 'boolean'}
    },
    'additionalProperties': False
}

J2X_POLICY_SCHEMA = {
    '$schema': 'http://json-schema.org/draft-07/schema#',
    'title': 'JSON to XML conversion policy',
    'type': 'object',
    'properties': {
        'rootName': {'type': 'string', 'minLength': 1},
        'unnamedArrXmlNodeName': {'type': 'string', 'minLength': 1},
        'ignoreXmlAttribute': {'type': 'boolean'},
        'xmlAttributePrefix': {'type': 'string'},
        'xmlValueFieldName': {'type': 'string'},
        'trimWhitespace': {'type': 'boolean'},
        'ignoreEmptyArray': {'type': 'boolean'},
        'createNamespace': {'type': 'boolean'},
        'alias': {'type': 'string', 'minLength': 1},
        'namespace': {'type': ['string', 'null']},
        'wrapSoapEnvelope': {'type': 'boolean'},
        'soapVersion': {'type': 'string'},
        'soapBodyAsRoot': {'type': 'boolean'}
    },
    'additionalProperties': False
}

_X2J_FIELD_NAMES = {
    'ignoreXmlAttribute': 'ignore_xml_attribute',
    'xmlAttributePrefix': 'xml_attribute_prefix',
    'xmlValueFieldName': 'xml_value_field_name',
    'includeRoot': 'include_root',
    'ignoreXsdTypeAttr': 'ignore_xsd_type_attr',
    'xmlArrayFields': 'xml_array_fields',
    'xmlNumberFields': 'xml_number_fields',
    'xmlBooleanFields': 'xml_boolean_fields',
    'trimWhitespace': 'trim_whitespace',
    'trimNewLine': 'trim_new_line',
    'nullAsEmptyString': 'null_as_empty_string',
    'tearSOAPEnvelope': 'tear_soap_envelope',
    'removeNamespaceAlias': 'remove_namespace_alias',
    'compatCoercion': 'compat_coercion'
}

_J2X_FIELD_NAMES = {
    'rootName': 'root_name',
    'unnamedArrXmlNodeName': 'unnamed_arr_xml_node_name',
    'ignoreXmlAttribute': 'ignore_xml_attribute',
    'xmlAttributePrefix': 'xml_attribute_prefix',
    'xmlValueFieldName': 'xml_value_field_name',
    'trimWhitespace': 'trim_whitespace',
    'ignoreEmptyArray': 'ignore_empty_array',
    'createNamespace': 'create_namespace',
    'alias': 'alias',
    'namespace': 'namespace',
    'wrapSoapEnvelope': 'wrap_soap_envelope',
    'soapVersion': 'soap_version',
    'soapBodyAsRoot': 'soap_body_as_root'
}


def _policy_arguments(policy: Dict, schema: Dict, field_names: Dict[str, str]) -> Dict:
    """
    Validates a serialized policy against its JSON schema and renames its options into keyword arguments.

    :param policy: A dictionary using the camelCase option names, e.g. the output of json.load.
    :param schema: The JSON schema the policy must be an instance of.
    :param field_names: Mapping from option name to keyword argument name.
    :raises jsonschema.ValidationError: If the policy is not an instance of the schema.
    :return: The keyword arguments of the policy.
    """
    validator = Draft7Validator(schema)
    validator.validate(policy)
    arguments = {field_names[option]: value for option, value in policy.items()}
    logger.debug("Policy options set: {}".format(", ".join(arguments)))
    for pointer_list in ('xml_array_fields', 'xml_number_fields', 'xml_boolean_fields'):
        if pointer_list in arguments:
            arguments[pointer_list] = tuple(arguments[pointer_list])
    return arguments


class X2JPolicy(NamedTuple):
    """
    Immutable set of options driving an XML to JSON conversion.

    :param ignore_xml_attribute: If True, XML attributes are left out of the JSON output.
    :param xml_attribute_prefix: Prefix prepended to the name of an attribute to build its JSON key.
    :param xml_value_field_name: JSON key holding the text of an element that also has attributes or children.
    :param include_root: If True, the root element is kept as the single key of the JSON output.
    :param ignore_xsd_type_attr: If True, attributes under the 'xsd' alias are left out.
    :param xml_array_fields: JSON Pointers of the values that must be arrays.
    :param xml_number_fields: JSON Pointers of the values that must be numbers.
    :param xml_boolean_fields: JSON Pointers of the values that must be booleans.
    :param trim_whitespace: If True, leading and trailing whitespace is removed from values.
    :param trim_new_line: If True, leading and trailing new lines are removed from values.
    :param null_as_empty_string: If True, empty elements become '' instead of null.
    :param tear_soap_envelope: If True, only the Body of a SOAP envelope is converted.
    :param remove_namespace_alias: If True, 'alias:name' names become 'name'.
    :param compat_coercion: If True, array and number coercion behave as the legacy converter did: array fields are
                            replaced by an array wrapping the whole document and number fields are parsed from the
                            pointer string instead of the field value.
    """
    ignore_xml_attribute: bool = True
    xml_attribute_prefix: str = '@'
    xml_value_field_name: str = '_value'
    include_root: bool = False
    ignore_xsd_type_attr: bool = True
    xml_array_fields: Tuple[str, ...] = ()
    xml_number_fields: Tuple[str, ...] = ()
    xml_boolean_fields: Tuple[str, ...] = ()
    trim_whitespace: bool = True
    trim_new_line: bool = True
    null_as_empty_string: bool = False
    tear_soap_envelope: bool = False
    remove_namespace_alias: bool = True
    compat_coercion: bool = False

    @property
    def trim_mode(self) -> TrimMode:
        return TrimMode.from_flags(self.trim_whitespace, self.trim_new_line)

    @classmethod
    def from_dict(cls, policy: Dict) -> X2JPolicy:
        """
        Builds a policy from its serialized form, missing options take their default value.

        :param policy: A dictionary using the camelCase option names ('ignoreXmlAttribute', 'xmlArrayFields'...).
        :raises jsonschema.ValidationError: If an option is unknown or has the wrong type.
        """
        return cls(**_policy_arguments(policy, X2J_POLICY_SCHEMA, _X2J_FIELD_NAMES))

    @classmethod
    def from_json_document(cls, policy_document: Path) -> X2JPolicy:
        with policy_document.open('r', encoding='utf-8') as policy_file:
            return cls.from_dict(load(policy_file))


class J2XPolicy(NamedTuple):
    """
    Immutable set of options driving a JSON to XML conversion.

    :param root_name: Name of the element receiving the JSON root.
    :param unnamed_arr_xml_node_name: Name of the elements built from the items of an array that has no key.
    :param ignore_xml_attribute: If True, keys starting with xml_attribute_prefix do not produce attributes.
    :param xml_attribute_prefix: Prefix identifying the keys that map to attributes.
    :param xml_value_field_name: Key whose value becomes the text of its element.
    :param trim_whitespace: If True, leading and trailing whitespace is removed from string values.
    :param ignore_empty_array: If True, empty arrays produce no element at all.
    :param create_namespace: If True, the root element is qualified with alias and namespace.
    :param alias: Namespace alias of the root element.
    :param namespace: Namespace URI of the root element.
    :param wrap_soap_envelope: If True, the output is wrapped into a SOAP envelope.
    :param soap_version: '1.1' selects the SOAP 1.1 envelope namespace, anything else SOAP 1.2.
    :param soap_body_as_root: If True, the JSON root is mapped directly into the SOAP Body.
    """
    root_name: str = 'root'
    unnamed_arr_xml_node_name: str = 'item'
    ignore_xml_attribute: bool = False
    xml_attribute_prefix: str = '@'
    xml_value_field_name: str = '_value'
    trim_whitespace: bool = True
    ignore_empty_array: bool = False
    create_namespace: bool = False
    alias: str = 'n0'
    namespace: Optional[str] = None
    wrap_soap_envelope: bool = False
    soap_version: str = '1.2'
    soap_body_as_root: bool = False

    @classmethod
    def from_dict(cls, policy: Dict) -> J2XPolicy:
        """
        Builds a policy from its serialized form, missing options take their default value.

        :param policy: A dictionary using the camelCase option names ('rootName', 'wrapSoapEnvelope'...).
        :raises jsonschema.ValidationError: If an option is unknown or has the wrong type.
        """
        return cls(**_policy_arguments(policy, J2X_POLICY_SCHEMA, _J2X_FIELD_NAMES))

    @classmethod
    def from_json_document(cls, policy_document: Path) -> J2XPolicy:
        with policy_document.open('r', encoding='utf-8') as policy_file:
            return cls.from_dict(load(policy_file))
