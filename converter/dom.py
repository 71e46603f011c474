# -*- coding: utf-8 -*-

from lxml import etree


def load_document(file_path):
    """
    Open and parse a profile document

    Args:
        file_path (str): Full path to the profile

    Returns:
        etree.Element: root element of the document
    """
    with open(file_path, 'rb') as file:
        content = file.read()
    return parse_document(content)


def parse_document(content):
    """
    Parse a profile document held in memory

    Args:
        content (bytes|str): XML text

    Returns:
        etree.Element: root element of the document
    """
    if isinstance(content, str):
        content = content.encode('utf-8')
    parser = etree.XMLParser(remove_blank_text=True, remove_comments=True)
    return etree.XML(content, parser)


def localname(node):
    if not isinstance(node.tag, str):
        return None
    return etree.QName(node.tag).localname


def find_first(node, tag):
    """
    Returns the first element named `tag` in document order, `node` included.
    Namespace prefixes are ignored: Boomi component exports wrap the profile
    in a namespaced <bns:Component> envelope.
    """
    for elem in node.iter():
        if localname(elem) == tag:
            return elem
    return None


def direct_children_by_tag(parent, tag):
    """
    Returns the direct children of `parent` named `tag`, in document order.
    Deeper descendants with the same name are not included.
    """
    return [child for child in parent if localname(child) == tag]


def first_direct_child(parent, tag):
    children = direct_children_by_tag(parent, tag)
    return children[0] if children else None


def get_attr(node, *keys):
    """
    Returns the value of the first attribute in `keys` that is present and
    not blank, or None.
    """
    for key in keys:
        value = node.get(key)
        if value is not None and value.strip():
            return value
    return None
