from .utils.json import JSONNodeType, JSONPointer, InvalidPointerExpression, MISSING, infer_json_type
from .utils.xml import TrimMode, SOAP_1_1_NAMESPACE, SOAP_1_2_NAMESPACE
from .policy import X2JPolicy, J2XPolicy
from .coercion import CoercionKind, coerce
from .xml_to_json import XMLToJSON, xml_to_json
from .json_to_xml import JSONToXML, json_to_xml
from .mapping import (xml_document_to_dict,
                      xml_string_to_dict,
                      xml_document_to_json_document,
                      dict_to_xml_string,
                      json_document_to_xml_document)
