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

from pathlib import Path
from json import load, dump
from typing import Any, Dict, List, Optional, Union
import logging

from lxml.etree import fromstring, parse as xml_parse, tostring

from xmljsonize.json_to_xml import JSONToXML
from xmljsonize.policy import J2XPolicy, X2JPolicy
from xmljsonize.xml_to_json import XMLToJSON

__author__ = "EUROCONTROL (SWIM)"

logger = logging.getLogger(__name__)


def xml_document_to_dict(xml_document: Path, policy: Optional[X2JPolicy] = None) -> Any:
    """
    Transforms an XML document into a JSON serializable Python value.

    :param xml_document: A Path to the XML document that is to be converted.
    :param policy: The X2JPolicy of the conversion, defaults to X2JPolicy().
    :return: A JSON serializable value, a dictionary unless the root element is a plain text element.
    """
    logger.debug("Converting XML document {}".format(xml_document))
    xml_etree = xml_parse(str(xml_document))
    return XMLToJSON(policy).convert(xml_etree)


def xml_string_to_dict(xml: Union[str, bytes], policy: Optional[X2JPolicy] = None) -> Any:
    """
    Transforms a serialized XML document into a JSON serializable Python value.

    :param xml: The XML document. Strings carrying an encoding declaration must be given as bytes.
    :param policy: The X2JPolicy of the conversion, defaults to X2JPolicy().
    :return: A JSON serializable value.
    """
    if isinstance(xml, str):
        xml = xml.encode('utf-8')
    return XMLToJSON(policy).convert(fromstring(xml))


def xml_document_to_json_document(xml_document: Path,
                                  json_document: Path,
                                  policy: Optional[X2JPolicy] = None,
                                  indent: Optional[int] = None) -> None:
    """
    Transforms an XML document into a UTF-8 encoded JSON document.

    :param xml_document: A Path to the XML document that is to be converted.
    :param json_document: A Path to the JSON document to write, it is overwritten if it exists.
    :param policy: The X2JPolicy of the conversion, defaults to X2JPolicy().
    :param indent: Indentation of the JSON document, compact if None.
    """
    json = xml_document_to_dict(xml_document, policy)
    with json_document.open('w', encoding='utf-8') as json_file:
        dump(json, json_file, indent=indent, ensure_ascii=False)


def dict_to_xml_string(json: Union[Dict, List, str, int, float, bool, None],
                       policy: Optional[J2XPolicy] = None,
                       pretty_print: bool = False) -> str:
    """
    Transforms a JSON serializable Python value into a serialized XML document.

    :param json: The JSON serializable value.
    :param policy: The J2XPolicy of the conversion, defaults to J2XPolicy().
    :param pretty_print: Whether the XML is to be indented.
    :return: The XML document, without XML declaration.
    """
    xml_etree = JSONToXML(policy).convert(json)
    return tostring(xml_etree, encoding='unicode', pretty_print=pretty_print)


def json_document_to_xml_document(json_document: Path,
                                  xml_document: Path,
                                  policy: Optional[J2XPolicy] = None,
                                  pretty_print: bool = False) -> None:
    """
    Transforms a JSON document into a UTF-8 encoded XML document.

    :param json_document: A Path to the JSON document that is to be converted.
    :param xml_document: A Path to the XML document to write, it is overwritten if it exists.
    :param policy: The J2XPolicy of the conversion, defaults to J2XPolicy().
    :param pretty_print: Whether the XML is to be indented.
    """
    logger.debug("Converting JSON document {}".format(json_document))
    with json_document.open('r', encoding='utf-8') as json_file:
        json = load(json_file)
    xml_etree = JSONToXML(policy).convert(json)
    xml_etree.write(str(xml_document), encoding='utf-8', xml_declaration=True, pretty_print=pretty_print)
