from __future__ import annotations
from enum import Enum
from pyparsing import Regex, Suppress, OneOrMore, ParseException
from typing import Any, Dict, List, Union


class InvalidPointerExpression(ValueError):
    """
    Raised when a string is not a well formed JSON Pointer expression.
    :param pointer: The offending pointer expression.
    """

    def __init__(self, pointer: str):
        super().__init__(f"'{pointer}' is not a valid JSON Pointer expression")
        self.pointer = pointer


class _MissingNode:
    """
    Sentinel returned when a JSON Pointer does not resolve to any value. It is falsy and distinct from None, which is
    a legitimate JSON null.
    """

    def __repr__(self):
        return 'MISSING'

    def __bool__(self):
        return False


MISSING = _MissingNode()


class JSONPointer():
    """
    Class representing a JSON Pointer, e.g.:
    '/person/name' addresses the key 'name' of the key 'person' of the root
    '/people/0/name' addresses the key 'name' of the first item of the array 'people'
    '/' is accepted as a degenerate pointer addressing the root itself.

    Reference tokens must be non empty and are unescaped as usual ('~1' for '/', '~0' for '~').
    :param pointer: String representation of a JSON Pointer.
    :raises InvalidPointerExpression: If the string is not a well formed pointer.
    """

    _reference_token = Regex(r'[^/]+').set_parse_action(lambda tokens: tokens[0].replace('~1', '/').replace('~0', '~'))
    _grammar = OneOrMore(Suppress('/') + _reference_token).leave_whitespace()

    def __init__(self, pointer: str):
        self.raw_pointer = pointer
        self.reference_tokens = JSONPointer._parse_reference_tokens(pointer)

    @classmethod
    def from_reference_tokens(cls, reference_tokens: List[str]) -> JSONPointer:
        return cls(cls.string_representation(reference_tokens))

    @staticmethod
    def _parse_reference_tokens(pointer: str) -> List[str]:
        """
        Parses the raw pointer into the list of its unescaped reference tokens.
        :param pointer: JSON Pointer string representation.
        :return: A list of reference tokens, empty for the root pointer '/'.
        """
        if pointer == '/':
            return []
        if not isinstance(pointer, str):
            raise InvalidPointerExpression(str(pointer))
        try:
            return list(JSONPointer._grammar.parse_string(pointer, parse_all=True))
        except ParseException:
            raise InvalidPointerExpression(pointer)

    @staticmethod
    def string_representation(reference_tokens: List[str]) -> str:
        """
        Returns a string representation from a list of reference tokens, escaping them as needed.
        :param reference_tokens: List of (unescaped) reference tokens.
        """
        if not reference_tokens:
            return '/'
        return ''.join('/' + token.replace('~', '~0').replace('/', '~1') for token in reference_tokens)

    def is_root(self) -> bool:
        """
        :return: Boolean indicating if the pointer addresses the root of the document.
        """
        return not self.reference_tokens

    def parent(self) -> JSONPointer:
        """
        :return: The pointer to the container of the addressed value. The parent of the root is the root.
        """
        return JSONPointer.from_reference_tokens(self.reference_tokens[:-1])

    def field_name(self) -> str:
        """
        :return: The last reference token, i.e. the key under which the addressed value is stored in its parent.
        :raises ValueError: If the pointer addresses the root.
        """
        if self.is_root():
            raise ValueError('The root pointer does not address a field.')
        return self.reference_tokens[-1]

    def resolve(self, json: Any) -> Any:
        """
        :param json: JSON serializable input in which to look for the addressed value.
        :return: The value addressed by the pointer, or MISSING if any reference token cannot be followed.
        """
        current_item = json
        for token in self.reference_tokens:
            if isinstance(current_item, dict):
                current_item = current_item.get(token, MISSING)
            elif isinstance(current_item, list) and token.isdigit() and int(token) < len(current_item):
                current_item = current_item[int(token)]
            else:
                return MISSING
            if current_item is MISSING:
                return MISSING
        return current_item

    def __str__(self):
        return self.raw_pointer

    def __repr__(self):
        return f'JSONPointer({self.raw_pointer!r})'

    def __hash__(self):
        return hash(tuple(self.reference_tokens))

    def __eq__(self, other: JSONPointer):
        return isinstance(other, JSONPointer) and self.reference_tokens == other.reference_tokens


class JSONNodeType(Enum):
    """
    JSON base types.
    """
    STRING = 'string'
    INTEGER = 'integer'
    NUMBER = 'number'
    OBJECT = 'object'
    ARRAY = 'array'
    BOOLEAN = 'boolean'
    NULL = 'null'

    @property
    def is_container(self) -> bool:
        return self in (JSONNodeType.OBJECT, JSONNodeType.ARRAY)


def infer_json_type(value: Any) -> JSONNodeType:
    """
    Finds the JSON type of a JSON serializable Python value.
    :param value: A value as produced by json.load.
    :raises ValueError: If the value has no JSON counterpart.
    :return: The JSONNodeType of the value.
    """
    # bool is a subclass of int, check it first
    if isinstance(value, bool):
        return JSONNodeType.BOOLEAN
    if value is None:
        return JSONNodeType.NULL
    if isinstance(value, str):
        return JSONNodeType.STRING
    if isinstance(value, int):
        return JSONNodeType.INTEGER
    if isinstance(value, float):
        return JSONNodeType.NUMBER
    if isinstance(value, dict):
        return JSONNodeType.OBJECT
    if isinstance(value, (list, tuple)):
        return JSONNodeType.ARRAY
    raise ValueError(f'{type(value).__name__} is not a JSON type')


def json_scalar_to_text(value: Union[str, int, float, bool, None]) -> str:
    """
    :param value: A JSON scalar.
    :return: The textual representation of the scalar: strings are returned as they are, any other scalar is spelled
             the way JSON spells it ('true', 'false', 'null', '30', '1.5').
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if value is None:
        return 'null'
    return repr(value)


def get_item_from_json_pointer(pointer: Union[str, JSONPointer], json: Union[Dict, List]) -> Any:
    """
    :param pointer: JSON Pointer (or its string representation) of the item that is to be accessed.
    :param json: JSON serializable input from which to obtain the item.
    :raises InvalidPointerExpression: If the pointer string is not well formed.
    :return: Item at the given pointer, MISSING if it does not exist.
    """
    if not isinstance(pointer, JSONPointer):
        pointer = JSONPointer(pointer)
    return pointer.resolve(json)
