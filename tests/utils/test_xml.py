import unittest
from xmljsonize.utils.xml import (TrimMode, body_only_copy, element_text, find_envelope_alias, find_namespaces,
                                  find_soap_body, get_short_namespace, namespace_declarations,
                                  qualified_attribute_name, qualified_name, trim_namespace_alias,
                                  SOAP_1_1_NAMESPACE)
from lxml.etree import fromstring, tostring

soap_envelope = b"""<soapenv:Envelope xmlns:soapenv="http://schemas.xmlsoap.org/soap/envelope/" xmlns:ns="urn:ns">
    <soapenv:Header><ns:token>abc</ns:token></soapenv:Header>
    <soapenv:Body><ns:person id="123"><ns:name>John</ns:name></ns:person></soapenv:Body>
</soapenv:Envelope>"""


class TestNamespaceSubstitution(unittest.TestCase):
    namespaces = {'gml': 'http://www.opengis.net/gml/3.2',
                  'adrmsg': 'http://www.eurocontrol.int/cfmu/b2b/ADRMessage',
                  'aixm': 'http://www.aixm.aero/schema/5.1',
                  'xlink': 'http://www.w3.org/1999/xlink'}

    def test_namespace_found(self):
        full_ns = 'http://www.opengis.net/gml/3.2'
        short_ns = 'gml'
        self.assertEqual(short_ns, get_short_namespace(full_ns, self.namespaces))

    def test_namespace_not_found(self):
        with self.assertRaises(KeyError):
            get_short_namespace('http://notfound.com', self.namespaces)

    def test_default_namespace_never_returned(self):
        with self.assertRaises(KeyError):
            get_short_namespace('urn:default', {None: 'urn:default'})

    def test_find_namespaces(self):
        root = fromstring(b'<a:root xmlns="urn:default" xmlns:a="urn:a" xmlns:b="urn:b"/>')
        self.assertEqual(find_namespaces(root), {'a': 'urn:a', 'b': 'urn:b'})


class TestQualifiedNames(unittest.TestCase):

    def test_element_names(self):
        root = fromstring(b'<a:root xmlns:a="urn:a" xmlns="urn:default"><child/><a:child/></a:root>')
        with self.subTest():
            self.assertEqual(qualified_name(root), 'a:root')
        with self.subTest():
            self.assertEqual([qualified_name(child) for child in root], ['child', 'a:child'])

    def test_attribute_names(self):
        root = fromstring(b'<root xmlns:xsd="http://www.w3.org/2001/XMLSchema" xsd:type="string" id="1" xml:lang="en"/>')
        names = [qualified_attribute_name(root, name) for name in root.attrib]
        self.assertEqual(names, ['xsd:type', 'id', 'xml:lang'])

    def test_namespace_declarations(self):
        root = fromstring(b'<a:root xmlns:a="urn:a"><a:child xmlns="urn:default" xmlns:a="urn:a"/></a:root>')
        with self.subTest():
            self.assertEqual(namespace_declarations(root), [('xmlns:a', 'urn:a')])
        with self.subTest():
            self.assertEqual(namespace_declarations(root[0]), [('xmlns', 'urn:default')])

    def test_trim_namespace_alias(self):
        cases = [('soapenv:Body', 'Body'), ('Body', 'Body'), ('a:b:c', 'b:c'), ('xmlns:soapenv', 'soapenv')]
        for name, trimmed in cases:
            with self.subTest(name=name):
                self.assertEqual(trim_namespace_alias(name), trimmed)


class TestTrimMode(unittest.TestCase):
    value = '\n\r  value \t\n'

    def test_from_flags(self):
        with self.subTest():
            self.assertEqual(TrimMode.from_flags(trim_whitespace=True, trim_new_line=True), TrimMode.BOTH)
        with self.subTest():
            self.assertEqual(TrimMode.from_flags(trim_whitespace=False, trim_new_line=True), TrimMode.NEW_LINE)
        with self.subTest():
            self.assertEqual(TrimMode.from_flags(trim_whitespace=True, trim_new_line=False), TrimMode.WHITESPACE)
        with self.subTest():
            self.assertEqual(TrimMode.from_flags(trim_whitespace=False, trim_new_line=False), TrimMode.NONE)

    def test_trim(self):
        with self.subTest():
            self.assertEqual(TrimMode.NONE.trim(self.value), self.value)
        with self.subTest():
            self.assertEqual(TrimMode.NEW_LINE.trim(self.value), '  value \t')
        with self.subTest():
            self.assertEqual(TrimMode.WHITESPACE.trim(self.value), 'value')
        with self.subTest():
            self.assertEqual(TrimMode.BOTH.trim(self.value), 'value')

    def test_trim_none(self):
        self.assertIsNone(TrimMode.BOTH.trim(None))


class TestElementText(unittest.TestCase):

    def test_mixed_content(self):
        root = fromstring(b'<person>Mr <name>John</name> Doe<!-- note --> Jr</person>')
        self.assertEqual(element_text(root), 'Mr  Doe Jr')

    def test_no_text(self):
        with self.subTest():
            self.assertIsNone(element_text(fromstring(b'<person/>')))
        with self.subTest():
            self.assertIsNone(element_text(fromstring(b'<person><name/></person>')))

    def test_empty_text(self):
        self.assertEqual(element_text(fromstring(b'<person> </person>')), ' ')


class TestSOAPEnvelope(unittest.TestCase):

    def test_find_envelope_alias(self):
        with self.subTest():
            self.assertEqual(find_envelope_alias(fromstring(soap_envelope)), 'soapenv')
        with self.subTest():
            self.assertEqual(find_envelope_alias(fromstring(b'<e:Envelope xmlns:e="urn:e"/>')), 'e')
        with self.subTest():
            self.assertIsNone(find_envelope_alias(fromstring(b'<Envelope/>')))

    def test_find_soap_body(self):
        body = find_soap_body(fromstring(soap_envelope))
        self.assertEqual(qualified_name(body), 'soapenv:Body')
        self.assertEqual(qualified_name(body[0]), 'ns:person')

    def test_no_soap_body(self):
        self.assertIsNone(find_soap_body(fromstring(b'<soapenv:Envelope xmlns:soapenv="%s"/>'
                                                    % SOAP_1_1_NAMESPACE.encode())))

    def test_body_only_copy(self):
        envelope = fromstring(soap_envelope)
        original = tostring(envelope)
        copy = body_only_copy(envelope)
        with self.subTest('header removed'):
            self.assertEqual([qualified_name(child) for child in copy], ['soapenv:Body'])
        with self.subTest('text removed'):
            self.assertIsNone(element_text(copy))
        with self.subTest('input untouched'):
            self.assertEqual(tostring(envelope), original)


if __name__ == '__main__':
    unittest.main()
