import unittest

from xmljsonize.coercion import CoercionKind, coerce
from xmljsonize.utils.json import InvalidPointerExpression


def sample_json():
    return {'person': {'name': 'John',
                       'age': '30',
                       'height': '1.85',
                       'weight': 'heavy',
                       'active': 'TRUE',
                       'retired': 'false',
                       'married': 'yes',
                       'phone': '555-1234',
                       'address': {'city': 'Brussels'}},
            'people': [{'name': 'Jane', 'age': '25'}]}


class TestArrayCoercion(unittest.TestCase):

    def test_wrap_field(self):
        json = coerce(sample_json(), ['/person/phone'], CoercionKind.ARRAY)
        self.assertEqual(json['person']['phone'], ['555-1234'])

    def test_wrap_object(self):
        json = coerce(sample_json(), ['/person/address'], CoercionKind.ARRAY)
        self.assertEqual(json['person']['address'], [{'city': 'Brussels'}])

    def test_already_array(self):
        json = coerce(sample_json(), ['/people'], CoercionKind.ARRAY)
        self.assertEqual(json['people'], [{'name': 'Jane', 'age': '25'}])

    def test_missing_field(self):
        json = coerce(sample_json(), ['/person/email', '/nobody/phone'], CoercionKind.ARRAY)
        self.assertEqual(json, sample_json())

    def test_root_pointer_ignored(self):
        json = coerce(sample_json(), ['/'], CoercionKind.ARRAY)
        self.assertEqual(json, sample_json())

    def test_parent_in_array(self):
        json = coerce(sample_json(), ['/people/0/name'], CoercionKind.ARRAY)
        self.assertEqual(json['people'][0]['name'], ['Jane'])

    def test_parent_is_not_object(self):
        json = coerce(sample_json(), ['/person/name/first'], CoercionKind.ARRAY)
        self.assertEqual(json, sample_json())

    def test_compat_wraps_root(self):
        json = coerce(sample_json(), ['/person/phone'], CoercionKind.ARRAY, compat=True)
        self.assertIsInstance(json['person']['phone'], list)
        self.assertEqual(len(json['person']['phone']), 1)
        self.assertIs(json['person']['phone'][0], json)

    def test_compat_wraps_root_for_missing_field(self):
        json = coerce(sample_json(), ['/person/email'], CoercionKind.ARRAY, compat=True)
        self.assertIs(json['person']['email'][0], json)


class TestBooleanCoercion(unittest.TestCase):

    def test_booleans(self):
        json = coerce(sample_json(), ['/person/active', '/person/retired'], CoercionKind.BOOLEAN)
        with self.subTest('TRUE'):
            self.assertIs(json['person']['active'], True)
        with self.subTest('false'):
            self.assertIs(json['person']['retired'], False)

    def test_not_a_boolean(self):
        json = coerce(sample_json(), ['/person/married', '/person/address'], CoercionKind.BOOLEAN)
        self.assertEqual(json['person']['married'], 'yes')
        self.assertEqual(json['person']['address'], {'city': 'Brussels'})

    def test_after_array_coercion(self):
        json = coerce(sample_json(), ['/person/active'], CoercionKind.ARRAY)
        json = coerce(json, ['/person/active'], CoercionKind.BOOLEAN)
        self.assertEqual(json['person']['active'], ['TRUE'])


class TestNumberCoercion(unittest.TestCase):

    def test_integer(self):
        json = coerce(sample_json(), ['/person/age', '/people/0/age'], CoercionKind.NUMBER)
        with self.subTest():
            self.assertEqual(json['person']['age'], 30)
            self.assertIsInstance(json['person']['age'], int)
        with self.subTest():
            self.assertEqual(json['people'][0]['age'], 25)

    def test_float(self):
        json = coerce(sample_json(), ['/person/height'], CoercionKind.NUMBER)
        self.assertEqual(json['person']['height'], 1.85)

    def test_parse_failure(self):
        json = coerce(sample_json(), ['/person/weight', '/person/phone'], CoercionKind.NUMBER)
        self.assertEqual(json['person']['weight'], 'heavy')
        self.assertEqual(json['person']['phone'], '555-1234')

    def test_strict_number_literals(self):
        json = {'a': '1_000', 'b': 'nan.0', 'c': '\u0661', 'd': '0x1F', 'e': '-12', 'f': '+.5', 'g': '1.5e3'}
        coerce(json, ['/a', '/b', '/c', '/d', '/e', '/f', '/g'], CoercionKind.NUMBER)
        self.assertEqual(json, {'a': '1_000', 'b': 'nan.0', 'c': '\u0661', 'd': '0x1F', 'e': -12, 'f': 0.5,
                                'g': 1500.0})

    def test_compat_parses_pointer(self):
        json = coerce(sample_json(), ['/person/age', '/person/height'], CoercionKind.NUMBER, compat=True)
        self.assertEqual(json['person']['age'], '30')
        self.assertEqual(json['person']['height'], '1.85')


class TestInvalidPointer(unittest.TestCase):

    def test_invalid_pointer(self):
        for kind in CoercionKind:
            with self.subTest(kind=kind):
                with self.assertRaises(InvalidPointerExpression) as context:
                    coerce(sample_json(), ['/person/age', 'not a pointer'], kind)
                self.assertEqual(context.exception.pointer, 'not a pointer')

    def test_input_untouched_on_invalid_pointer(self):
        for kind in CoercionKind:
            with self.subTest(kind=kind):
                json = sample_json()
                with self.assertRaises(InvalidPointerExpression):
                    coerce(json, ['/person/age', '/person/active', '/person/phone', 'bad'], kind)
                self.assertEqual(json, sample_json())

    def test_missing_leading_slash(self):
        with self.assertRaises(InvalidPointerExpression):
            coerce(sample_json(), ['person/age'], CoercionKind.NUMBER)


if __name__ == '__main__':
    unittest.main()
