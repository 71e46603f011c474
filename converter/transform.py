# -*- coding: utf-8 -*-

import copy
import hashlib
import json
import logging
from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

from lxml import etree

from .dom import direct_children_by_tag, find_first, get_attr
from .errors import MergeConflictError, ProfileStructureError
from .mapping import XSD_STRING, boomi_type, to_xsd
from .occurrence import OccurrenceRange, combine_all, is_required, occurrence_of

logger = logging.getLogger(__name__)

XSD_NS = "http://www.w3.org/2001/XMLSchema"
XS = "{%s}" % XSD_NS

MERGE_MODES = ("permissive", "strict")


def _xs(parent, tag, **attrib):
    if parent is None:
        return etree.Element(XS + tag, attrib, nsmap={'xs': XSD_NS})
    return etree.SubElement(parent, XS + tag, attrib)


def type_name_base(name):
    """'purchaseOrder' -> 'PurchaseOrderType'"""
    return name[:1].upper() + name[1:] + "Type"


def parse_facets(node, xsd_type):
    """
    Reads the length and pattern constraints of a profile element or attribute

    Args:
        node (etree.Element): <XMLElement> or <XMLAttribute>
        xsd_type (str): resolved XSD primitive of the node

    Returns:
        tuple: (facet, value) pairs in emission order (minLength, maxLength, pattern)
    """
    facets = []

    # xs:minLength and xs:maxLength only apply to string content
    if xsd_type == XSD_STRING:
        for key in ('minLength', 'maxLength'):
            raw = get_attr(node, key)
            if raw is None:
                continue
            try:
                value = int(raw.strip())
            except ValueError:
                value = -1
            if value < 0:
                logger.debug("%s=%r on <%s> is not a length, dropped", key, raw, node.get('name'))
                continue
            facets.append((key, value))

    pattern = get_attr(node, 'pattern')
    if pattern is not None:
        facets.append(('pattern', pattern))

    return tuple(facets)


# ---------------------------------------------------------------------------
# Sibling merger
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MergedElement:
    """One element name of a sequence, standing for all its declarations"""
    name: str
    template: etree._Element
    occurrence: OccurrenceRange
    declarations: Tuple[etree._Element, ...]


def group_by_name(nodes):
    """Groups nodes by their `name` attribute, keeping first-seen order"""
    groups = OrderedDict()
    for node in nodes:
        groups.setdefault(node.get('name', ''), []).append(node)
    return groups


def merge_siblings(nodes):
    """
    Merges same-named declarations: the first one is the structural template,
    the occurrence range is combined over all of them.
    """
    nodes = tuple(nodes)
    return MergedElement(
        name=nodes[0].get('name', ''),
        template=nodes[0],
        occurrence=combine_all(occurrence_of(node) for node in nodes),
        declarations=nodes,
    )


# ---------------------------------------------------------------------------
# Type registry
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypeDefinition:
    name: str
    fingerprint: str
    body: etree._Element


class TypeRegistry:
    """Named type definitions keyed by fingerprint, in creation order"""

    def __init__(self):
        self.definitions = OrderedDict()
        self.used_names = set()

    def __iter__(self):
        return iter(self.definitions.values())

    def __len__(self):
        return len(self.definitions)

    def lookup(self, fingerprint) -> Optional[TypeDefinition]:
        return self.definitions.get(fingerprint)

    def allocate_name(self, preferred):
        """Returns `preferred`, or `preferred` + 1, 2, ... when already taken"""
        name = preferred
        index = 1
        while name in self.used_names:
            name = f"{preferred}{index}"
            index += 1
        self.used_names.add(name)
        return name

    def register(self, definition):
        self.definitions[definition.fingerprint] = definition


class SchemaContext:
    """State of a single compilation: registry, fingerprint memo, qualification"""

    def __init__(self, target_namespace=None):
        self.target_namespace = target_namespace
        self.registry = TypeRegistry()
        self.fingerprints = {}

    @property
    def qualified(self):
        return self.target_namespace is not None

    def qualify(self, type_name):
        if not self.qualified or type_name.startswith(("xs:", "tns:")):
            return type_name
        return "tns:" + type_name


# ---------------------------------------------------------------------------
# Compiler
# ---------------------------------------------------------------------------

class XsdTransformer:
    """
    Compiles the <XMLProfile> of a Boomi profile into an XSD schema.

    Structurally identical subtrees are compiled once into a named type and
    referenced wherever they occur. A transformer holds configuration only;
    every call to `compile` works on its own SchemaContext.
    """

    def __init__(self, merge_mode="permissive", share_types_across_names=True):
        if merge_mode not in MERGE_MODES:
            raise ValueError(f"Unknown merge mode: {merge_mode}")
        self.merge_mode = merge_mode
        self.share_types_across_names = share_types_across_names

    def convert(self, node):
        """
        Converts a profile document to XSD text

        Args:
            node (etree.Element): profile document, or any ancestor of <XMLProfile>

        Returns:
            str: XSD document
        """
        schema = self.compile(node)
        return etree.tostring(schema, pretty_print=True, xml_declaration=True, encoding='UTF-8').decode('utf-8')

    def compile(self, node):
        """
        Builds the xs:schema tree of a profile document

        Args:
            node (etree.Element): profile document, or any ancestor of <XMLProfile>

        Returns:
            etree.Element: <xs:schema>
        """
        xml_profile = find_first(node, 'XMLProfile')
        if xml_profile is None:
            raise ProfileStructureError("<XMLProfile> not found in input file")

        data_elements = find_first(xml_profile, 'DataElements')
        if data_elements is None:
            raise ProfileStructureError("<DataElements> not found in XMLProfile")

        namespace = get_attr(xml_profile, 'namespace')
        context = SchemaContext(namespace.strip() if namespace else None)

        declarations = []
        for name, nodes in group_by_name(direct_children_by_tag(data_elements, 'XMLElement')).items():
            merged = self.merge(nodes, context)
            type_name = self.build_or_get_type(merged, type_name_base(name), context)
            logger.info("root element <%s>: %s", name, type_name)
            declarations.append((name, context.qualify(type_name)))

        return self.emit(declarations, context.registry, context.target_namespace)

    def emit(self, declarations, registry, target_namespace=None):
        """
        Renders root element declarations followed by the registered types

        Args:
            declarations (list): (element name, qualified type name) pairs
            registry (TypeRegistry): types of the compilation
            target_namespace (str): namespace of the profile, None for unqualified

        Returns:
            etree.Element: <xs:schema>
        """
        nsmap = {'xs': XSD_NS}
        if target_namespace:
            nsmap['tns'] = target_namespace
        schema = etree.Element(XS + 'schema', nsmap=nsmap)

        if target_namespace:
            schema.set('targetNamespace', target_namespace)
            schema.set('elementFormDefault', "qualified")
        else:
            schema.set('elementFormDefault', "unqualified")

        for name, type_name in declarations:
            _xs(schema, 'element', name=name, type=type_name)

        for definition in registry:
            schema.append(copy.deepcopy(definition.body))

        return schema

    def merge(self, nodes, context):
        """
        Merges same-named sibling declarations (see merge_siblings).
        In strict mode, declarations that differ in structure are rejected.
        """
        merged = merge_siblings(nodes)
        if len(merged.declarations) > 1:
            structures = {self.fingerprint(node, context) for node in merged.declarations}
            if len(structures) > 1:
                if self.merge_mode == "strict":
                    raise MergeConflictError(merged.name, len(merged.declarations))
                logger.warning("%d declarations of <%s> differ in structure, using the first one",
                               len(merged.declarations), merged.name)
        return merged

    def merged_children(self, node, context):
        children = direct_children_by_tag(node, 'XMLElement')
        return [self.merge(nodes, context) for nodes in group_by_name(children).values()]

    def fingerprint(self, node, context):
        """
        Computes the structural digest of an element subtree.

        Two elements with the same digest compile to the same type body: the
        digest covers the element's primitive and facets, its attributes in
        declaration order, and its merged child groups both sorted by name
        and in sequence order. The element name itself only counts when
        types are not shared across names.

        Args:
            node (etree.Element): <XMLElement>
            context (SchemaContext): compilation state holding the memo

        Returns:
            str: hex digest
        """
        if node in context.fingerprints:
            return context.fingerprints[node]

        xsd_type = to_xsd(boomi_type(node))
        children = self.merged_children(node, context)
        parts = {
            'type': xsd_type,
            'facets': parse_facets(node, xsd_type),
            'attributes': [self.attribute_signature(attr) for attr in direct_children_by_tag(node, 'XMLAttribute')],
            'children': sorted(
                [child.name, child.occurrence.min_occurs, child.occurrence.max_occurs,
                 self.fingerprint(child.template, context)]
                for child in children
            ),
            'order': [child.name for child in children],
        }
        if not self.share_types_across_names:
            parts['name'] = node.get('name', '')

        canonical = json.dumps(parts, sort_keys=True, separators=(',', ':'))
        digest = hashlib.sha256(canonical.encode('utf-8')).hexdigest()
        context.fingerprints[node] = digest
        return digest

    def attribute_signature(self, attr):
        xsd_type = to_xsd(boomi_type(attr))
        return [attr.get('name', ''), xsd_type, parse_facets(attr, xsd_type), is_required(attr)]

    def build_or_get_type(self, merged, preferred_base, context):
        """
        Returns the name of the type compiled for an element, building and
        registering it when no structurally identical element was compiled
        before. Nested types are registered before the type using them.

        Args:
            merged (MergedElement): element to compile
            preferred_base (str): type name to use when free
            context (SchemaContext): compilation state

        Returns:
            str: unqualified type name
        """
        fingerprint = self.fingerprint(merged.template, context)
        existing = context.registry.lookup(fingerprint)
        if existing is not None:
            logger.debug("<%s> reuses %s", merged.name, existing.name)
            return existing.name

        type_name = context.registry.allocate_name(preferred_base)
        body = self.type_body(merged.template, type_name, context)
        context.registry.register(TypeDefinition(type_name, fingerprint, body))
        return type_name

    def type_body(self, node, type_name, context):
        """
        Renders the named type of an element

        Args:
            node (etree.Element): <XMLElement>
            type_name (str): name of the type
            context (SchemaContext): compilation state

        Returns:
            etree.Element: <xs:complexType> or <xs:simpleType>
        """

        # xs:complexType content (annotation?,(simpleContent|complexContent|((group|all|choice|sequence)?,((attribute|attributeGroup)*,anyAttribute?))))
        children = self.merged_children(node, context)
        attributes = direct_children_by_tag(node, 'XMLAttribute')
        xsd_type = to_xsd(boomi_type(node))

        if children:
            body = _xs(None, 'complexType', name=type_name)
            sequence = _xs(body, 'sequence')
            for child in children:
                self.particle(sequence, child, context)
            for attr in attributes:
                self.attribute(body, attr)
            return body

        if attributes:
            body = _xs(None, 'complexType', name=type_name)
            extension = _xs(_xs(body, 'simpleContent'), 'extension', base=xsd_type)
            for attr in attributes:
                self.attribute(extension, attr)
            return body

        facets = parse_facets(node, xsd_type)
        if facets and xsd_type == XSD_STRING:
            # a restriction of a built-in cannot live in a complexType
            body = _xs(None, 'simpleType', name=type_name)
            self.restriction(body, xsd_type, facets)
            return body

        body = _xs(None, 'complexType', name=type_name)
        _xs(_xs(body, 'simpleContent'), 'extension', base=xsd_type)
        return body

    def particle(self, sequence, merged, context):
        """
        Renders one xs:element of a sequence

        Args:
            sequence (etree.Element): <xs:sequence>
            merged (MergedElement): child element
            context (SchemaContext): compilation state
        """

        # xs:element content (annotation?,(simpleType|complexType)?,(unique|key|keyref)*)
        template = merged.template
        occurs = {
            'minOccurs': str(merged.occurrence.min_occurs),
            'maxOccurs': str(merged.occurrence.max_occurs),
        }

        if direct_children_by_tag(template, 'XMLElement'):
            type_name = self.build_or_get_type(merged, type_name_base(merged.name), context)
            _xs(sequence, 'element', name=merged.name, type=context.qualify(type_name), **occurs)
            return

        xsd_type = to_xsd(boomi_type(template))
        attributes = direct_children_by_tag(template, 'XMLAttribute')
        if attributes:
            # text facets do not apply to an extension
            element = _xs(sequence, 'element', name=merged.name, **occurs)
            simple_content = _xs(_xs(element, 'complexType'), 'simpleContent')
            extension = _xs(simple_content, 'extension', base=xsd_type)
            for attr in attributes:
                self.attribute(extension, attr)
            return

        facets = parse_facets(template, xsd_type)
        if facets and xsd_type == XSD_STRING:
            element = _xs(sequence, 'element', name=merged.name, **occurs)
            self.restriction(_xs(element, 'simpleType'), xsd_type, facets)
            return

        _xs(sequence, 'element', name=merged.name, type=xsd_type, **occurs)

    def attribute(self, parent, attr):
        """
        Renders an xs:attribute, with an inline restricted simpleType when
        the attribute carries facets

        Args:
            parent (etree.Element): <xs:complexType> or <xs:extension>
            attr (etree.Element): <XMLAttribute>
        """

        # xs:attribute attributes
        # @name: Specifies the name of the attribute
        # @type: Specifies a built-in data type. Cannot be present together with a simpleType child
        # @use: Optional. Values: optional, prohibited, required
        xsd_type = to_xsd(boomi_type(attr))
        facets = parse_facets(attr, xsd_type)
        use = {'use': "required"} if is_required(attr) else {}

        if facets:
            attribute = _xs(parent, 'attribute', name=attr.get('name', ''), **use)
            self.restriction(_xs(attribute, 'simpleType'), xsd_type, facets)
        else:
            _xs(parent, 'attribute', name=attr.get('name', ''), type=xsd_type, **use)

    def restriction(self, parent, base, facets):
        restriction = _xs(parent, 'restriction', base=base)
        for facet, value in facets:
            _xs(restriction, facet, value=str(value))
        return restriction


def render_type(definition):
    """Serializes a single registered type body"""
    return etree.tostring(definition.body, encoding='unicode')
