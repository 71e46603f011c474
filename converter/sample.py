# -*- coding: utf-8 -*-

from lxml import etree

from .dom import direct_children_by_tag, find_first, first_direct_child, get_attr
from .errors import ProfileStructureError
from .json_schema import find_json_profile, find_root_object
from .mapping import XSD_STRING, boomi_type, to_xsd
from .transform import group_by_name, merge_siblings, parse_facets

XML_SAMPLE_VALUES = {
    'xs:string': "sampleText",
    'xs:decimal': "123.45",
    'xs:integer': "123",
    'xs:date': "2025-01-01",
    'xs:dateTime': "2025-01-01T12:00:00",
    'xs:boolean': "true",
}

JSON_SAMPLE_VALUES = {
    'number': 123.45,
    'decimal': 123.45,
    'integer': 123,
    'boolean': True,
}


def fit_length(value, facets):
    """Pads or cuts a sample string to the length facets of its node"""
    facets = dict(facets)
    max_length = facets.get('maxLength')
    min_length = facets.get('minLength')
    if max_length is not None:
        value = value[:max_length]
    if min_length is not None and len(value) < min_length:
        value += "x" * (min_length - len(value))
    return value


class XmlSampleGenerator:
    """
    Writes an example document for the first root element of an <XMLProfile>.
    Optional elements (minOccurs 0) are left out, the others are repeated
    minOccurs times, every attribute is written.
    """

    def generate(self, node):
        xml_profile = find_first(node, 'XMLProfile')
        if xml_profile is None:
            raise ProfileStructureError("<XMLProfile> not found in input file")

        data_elements = find_first(xml_profile, 'DataElements')
        if data_elements is None:
            raise ProfileStructureError("<DataElements> not found in XMLProfile")

        roots = group_by_name(direct_children_by_tag(data_elements, 'XMLElement'))
        if not roots:
            raise ProfileStructureError("<DataElements> declares no element")

        namespace = get_attr(xml_profile, 'namespace')
        namespace = namespace.strip() if namespace else None

        name, nodes = next(iter(roots.items()))
        root = etree.Element(self.tag(namespace, name), nsmap={None: namespace} if namespace else None)
        self.fill(root, nodes[0], namespace)

        return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding='UTF-8').decode('utf-8')

    def tag(self, namespace, name):
        return etree.QName(namespace, name).text if namespace else name

    def fill(self, element, template, namespace):
        for attr in direct_children_by_tag(template, 'XMLAttribute'):
            if attr.get('name'):
                element.set(attr.get('name'), self.sample_value(attr))

        children = direct_children_by_tag(template, 'XMLElement')
        if not children:
            element.text = self.sample_value(template)
            return

        for nodes in group_by_name(children).values():
            merged = merge_siblings(nodes)
            for _ in range(merged.occurrence.min_occurs):
                child = etree.SubElement(element, self.tag(namespace, merged.name))
                self.fill(child, merged.template, namespace)

    def sample_value(self, node):
        xsd_type = to_xsd(boomi_type(node))
        value = XML_SAMPLE_VALUES.get(xsd_type, "sample")
        if xsd_type == XSD_STRING:
            value = fit_length(value, parse_facets(node, xsd_type))
        return value


class JsonSampleGenerator:
    """Writes an example document for the root object of a <JSONProfile>"""

    def generate(self, node):
        obj = find_root_object(find_json_profile(node))
        if obj is None:
            return {}
        return self.build_object(obj)

    def build_object(self, obj):
        sample = {}
        for entry in direct_children_by_tag(obj, 'JSONObjectEntry'):
            sample[entry.get('name', '')] = self.build_entry(entry)
        return sample

    def build_entry(self, entry):
        nested = first_direct_child(entry, 'JSONObject')
        if nested is not None:
            return self.build_object(nested)

        array = first_direct_child(entry, 'JSONArray')
        if array is not None:
            obj = first_direct_child(array, 'JSONObject')
            if obj is not None:
                return [self.build_object(obj)]
            element = first_direct_child(array, 'JSONArrayElement')
            if element is not None:
                return [self.build_entry(element)]
            return [self.sample_value(array.get('itemType'))]

        return self.sample_value(boomi_type(entry))

    def sample_value(self, data_type):
        if data_type is None:
            return "sample"
        return JSON_SAMPLE_VALUES.get(data_type.strip().lower(), "sampleText")
