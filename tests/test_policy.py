import json
import tempfile
import unittest
from pathlib import Path

from jsonschema import ValidationError

from xmljsonize.policy import J2XPolicy, X2JPolicy
from xmljsonize.utils.xml import TrimMode


class TestX2JPolicy(unittest.TestCase):

    def test_defaults(self):
        policy = X2JPolicy()
        self.assertTrue(policy.ignore_xml_attribute)
        self.assertEqual(policy.xml_attribute_prefix, '@')
        self.assertEqual(policy.xml_value_field_name, '_value')
        self.assertFalse(policy.include_root)
        self.assertTrue(policy.ignore_xsd_type_attr)
        self.assertEqual(policy.xml_array_fields, ())
        self.assertTrue(policy.remove_namespace_alias)
        self.assertFalse(policy.compat_coercion)
        self.assertEqual(policy.trim_mode, TrimMode.BOTH)

    def test_immutable(self):
        policy = X2JPolicy()
        with self.assertRaises(AttributeError):
            policy.include_root = True

    def test_from_dict(self):
        policy = X2JPolicy.from_dict({'ignoreXmlAttribute': False,
                                      'tearSOAPEnvelope': True,
                                      'xmlArrayFields': ['/people/person'],
                                      'trimNewLine': False})
        self.assertEqual(policy, X2JPolicy(ignore_xml_attribute=False,
                                           tear_soap_envelope=True,
                                           xml_array_fields=('/people/person',),
                                           trim_new_line=False))
        self.assertEqual(policy.trim_mode, TrimMode.WHITESPACE)

    def test_from_dict_unknown_option(self):
        with self.assertRaises(ValidationError):
            X2JPolicy.from_dict({'ignoreAttributes': True})

    def test_from_dict_wrong_type(self):
        with self.subTest():
            with self.assertRaises(ValidationError):
                X2JPolicy.from_dict({'includeRoot': 'yes'})
        with self.subTest():
            with self.assertRaises(ValidationError):
                X2JPolicy.from_dict({'xmlNumberFields': '/age'})

    def test_from_json_document(self):
        with tempfile.TemporaryDirectory() as directory:
            policy_document = Path(directory) / 'policy.json'
            policy_document.write_text(json.dumps({'includeRoot': True, 'xmlBooleanFields': ['/active']}),
                                       encoding='utf-8')
            policy = X2JPolicy.from_json_document(policy_document)
        self.assertTrue(policy.include_root)
        self.assertEqual(policy.xml_boolean_fields, ('/active',))


class TestJ2XPolicy(unittest.TestCase):

    def test_defaults(self):
        policy = J2XPolicy()
        self.assertEqual(policy.root_name, 'root')
        self.assertEqual(policy.unnamed_arr_xml_node_name, 'item')
        self.assertFalse(policy.ignore_xml_attribute)
        self.assertEqual(policy.alias, 'n0')
        self.assertIsNone(policy.namespace)
        self.assertEqual(policy.soap_version, '1.2')

    def test_from_dict(self):
        policy = J2XPolicy.from_dict({'rootName': 'request',
                                      'createNamespace': True,
                                      'namespace': 'http://example.com',
                                      'alias': 'ex',
                                      'wrapSoapEnvelope': True,
                                      'soapVersion': '1.1'})
        self.assertEqual(policy, J2XPolicy(root_name='request',
                                           create_namespace=True,
                                           namespace='http://example.com',
                                           alias='ex',
                                           wrap_soap_envelope=True,
                                           soap_version='1.1'))

    def test_from_dict_invalid(self):
        for invalid in [{'rootName': ''}, {'namespace': 3}, {'wrapSoap': True}]:
            with self.subTest(policy=invalid):
                with self.assertRaises(ValidationError):
                    J2XPolicy.from_dict(invalid)


if __name__ == '__main__':
    unittest.main()
