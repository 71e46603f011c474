# -*- coding: utf-8 -*-

from .dom import get_attr

XSD_STRING = "xs:string"

# Boomi primitive -> XSD built-in
XSD_TYPES = {
    'character': "xs:string",
    'string': "xs:string",
    'number': "xs:decimal",
    'decimal': "xs:decimal",
    'integer': "xs:integer",
    'date': "xs:date",
    'datetime': "xs:dateTime",
    'boolean': "xs:boolean",
}

# Boomi primitive -> JSON Schema type
JSON_TYPES = {
    'boolean': "boolean",
    'number': "number",
    'decimal': "number",
    'integer': "number",
}


def boomi_type(node):
    """
    Returns the declared Boomi primitive of an element or attribute:
    `dataType` when not blank, else `type` when not blank, else "string"
    """
    if node is None:
        return "string"
    return get_attr(node, 'dataType', 'type') or "string"


def to_xsd(data_type):
    """
    Converts a Boomi primitive name to its XSD built-in

    Args:
        data_type (str): Boomi primitive (e.g., 'character', 'number', 'datetime')

    Returns:
        str: qualified XSD type, "xs:string" when unknown
    """
    if data_type is None or not data_type.strip():
        return XSD_STRING
    return XSD_TYPES.get(data_type.strip().lower(), XSD_STRING)


def to_json_type(data_type):
    if data_type is None:
        return "string"
    return JSON_TYPES.get(data_type.strip().lower(), "string")
