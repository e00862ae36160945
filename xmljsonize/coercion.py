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
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Union

from pyparsing import ParseException, Regex

from xmljsonize.utils.json import JSONPointer, MISSING

__author__ = "EUROCONTROL (SWIM)"

logger = logging.getLogger(__name__)

# ASCII decimal literals only, '1_000' or 'nan' are not numbers
_INTEGER = Regex(r'[+-]?[0-9]+').leave_whitespace()
_DECIMAL = Regex(r'[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?')


class CoercionKind(Enum):
    """
    JSON types a converted value can be coerced into.
    """
    ARRAY = 'array'
    BOOLEAN = 'boolean'
    NUMBER = 'number'


def _coerce_array(json: Any, parent: Dict, field: str, target: Any, pointer: JSONPointer, compat: bool) -> None:
    if isinstance(target, list):
        return
    if compat:
        # Legacy behaviour: the array holds the whole document, not the field
        parent[field] = [json]
        return
    if target is MISSING:
        logger.debug("Array coercion skipped, nothing at {}".format(pointer))
        return
    parent[field] = [target]


def _coerce_boolean(json: Any, parent: Dict, field: str, target: Any, pointer: JSONPointer, compat: bool) -> None:
    if not isinstance(target, str):
        logger.debug("Boolean coercion skipped, value at {} is not a string".format(pointer))
        return
    if target.lower() == 'true':
        parent[field] = True
    elif target.lower() == 'false':
        parent[field] = False
    else:
        logger.debug("Boolean coercion skipped, '{}' at {} is not a boolean".format(target, pointer))


def _coerce_number(json: Any, parent: Dict, field: str, target: Any, pointer: JSONPointer, compat: bool) -> None:
    if not isinstance(target, str):
        logger.debug("Number coercion skipped, value at {} is not a string".format(pointer))
        return
    # Legacy behaviour parses the pointer itself
    text = str(pointer) if compat else target
    grammar, parse = (_DECIMAL, float) if '.' in target else (_INTEGER, int)
    try:
        grammar.parse_string(text, parse_all=True)
    except ParseException:
        logger.debug("Number coercion skipped, '{}' at {} is not a number".format(text, pointer))
        return
    parent[field] = parse(text)


_COERCIONS = {
    CoercionKind.ARRAY: _coerce_array,
    CoercionKind.BOOLEAN: _coerce_boolean,
    CoercionKind.NUMBER: _coerce_number
}  # type: Dict[CoercionKind, Callable]


def coerce(json: Any, pointers: Iterable[Union[str, JSONPointer]], kind: CoercionKind, compat: bool = False) -> Any:
    """
    Reinterprets the values addressed by each JSON Pointer as the given kind of JSON value. The pointers are applied
    in order and the input is modified in place. All pointers are parsed first, so an invalid one leaves the input
    untouched.

    Coercion is best effort: pointers to values that do not exist, whose parent is not an object or whose value cannot
    be coerced are skipped.

    :param json: The JSON serializable value produced by an XML to JSON conversion.
    :param pointers: The JSON Pointer expressions of the values to coerce. '/' is accepted and ignored.
    :param kind: The CoercionKind to apply.
    :param compat: If True, reproduces the legacy array and number coercions (see X2JPolicy.compat_coercion).
    :raises InvalidPointerExpression: If one of the pointers is not a well formed JSON Pointer.
    :return: The coerced JSON value.
    """
    coercion = _COERCIONS[kind]
    pointers = [pointer if isinstance(pointer, JSONPointer) else JSONPointer(pointer) for pointer in pointers]
    for pointer in pointers:
        if pointer.is_root():
            logger.debug("{} coercion of the root is not supported, ignoring '/'".format(kind.value))
            continue

        parent = pointer.parent().resolve(json)
        if not isinstance(parent, dict):
            logger.debug("{} coercion skipped, parent of {} is not an object".format(kind.value, pointer))
            continue

        field = pointer.field_name()
        coercion(json, parent, field, parent.get(field, MISSING), pointer, compat)
    return json
