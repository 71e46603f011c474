# -*- coding: utf-8 -*-

import logging

from .dom import direct_children_by_tag, find_first, first_direct_child, get_attr
from .errors import ProfileStructureError
from .mapping import boomi_type, to_json_type
from .occurrence import is_required

logger = logging.getLogger(__name__)

JSON_SCHEMA_VERSIONS = {
    'draft-04': "http://json-schema.org/draft-04/schema#",
    'draft-06': "http://json-schema.org/draft-06/schema#",
    'draft-07': "http://json-schema.org/draft-07/schema#",
    'draft-2019-09': "https://json-schema.org/draft/2019-09/schema",
    'draft-2020-12': "https://json-schema.org/draft/2020-12/schema",
}


def find_root_object(json_profile):
    """
    Returns the top-level <JSONObject> of a profile: either a direct child
    of <JSONProfile>, or the object under <DataElements>/<JSONRootValue>
    as exported by the platform
    """
    obj = first_direct_child(json_profile, 'JSONObject')
    if obj is not None:
        return obj
    data_elements = first_direct_child(json_profile, 'DataElements')
    if data_elements is None:
        return None
    root_value = first_direct_child(data_elements, 'JSONRootValue')
    if root_value is None:
        return None
    return first_direct_child(root_value, 'JSONObject')


def find_json_profile(node):
    json_profile = find_first(node, 'JSONProfile')
    if json_profile is None:
        raise ProfileStructureError("<JSONProfile> not found in input file")
    return json_profile


class JsonSchemaTransformer:

    def __init__(self, json_schema="draft-07"):
        if json_schema not in JSON_SCHEMA_VERSIONS:
            raise ValueError(f"Unknown JSON schema version: {json_schema}")
        self.json_schema = json_schema
        self.json_schema_uri = JSON_SCHEMA_VERSIONS[json_schema]
        # 'definitions' was renamed '$defs' in 2019-09
        self.defs_key = "$defs" if json_schema in ('draft-2019-09', 'draft-2020-12') else "definitions"

    def convert(self, node):
        """
        Converts the <JSONProfile> of a profile document to JSON Schema

        Args:
            node (etree.Element): profile document, or any ancestor of <JSONProfile>

        Returns:
            dict: JSON Schema
        """
        json_profile = find_json_profile(node)
        schema = {'$schema': self.json_schema_uri}

        obj = find_root_object(json_profile)
        if obj is None:
            logger.warning("<JSONProfile> declares no object")
            return schema

        object_schema = self.object_to_json(obj)
        name = get_attr(obj, 'name')
        if name:
            schema['$ref'] = f"#/{self.defs_key}/{name}"
            schema[self.defs_key] = {name: object_schema}
        else:
            schema.update(object_schema)

        return schema

    def object_to_json(self, obj):
        """
        Converts a <JSONObject> to an object schema

        Args:
            obj (etree.Element): <JSONObject>

        Returns:
            dict: JSON Schema representation
        """
        properties = {}
        required = []

        for entry in direct_children_by_tag(obj, 'JSONObjectEntry'):
            name = entry.get('name', '')
            properties[name] = self.entry_to_json(entry)
            if is_required(entry):
                required.append(name)

        object_schema = {'type': "object", 'properties': properties}
        if required:
            object_schema['required'] = required

        return object_schema

    def entry_to_json(self, entry):
        nested = first_direct_child(entry, 'JSONObject')
        if nested is not None:
            return self.object_to_json(nested)

        array = first_direct_child(entry, 'JSONArray')
        if array is not None:
            return self.array_to_json(array)

        return {'type': to_json_type(boomi_type(entry))}

    def array_to_json(self, array):
        """
        Converts a <JSONArray> to an array schema. Items are an object when
        the array holds a <JSONObject>, the described element when it holds a
        <JSONArrayElement>, else the primitive named by `itemType`.
        """
        obj = first_direct_child(array, 'JSONObject')
        if obj is not None:
            items = self.object_to_json(obj)
        else:
            element = first_direct_child(array, 'JSONArrayElement')
            if element is not None:
                items = self.entry_to_json(element)
            else:
                items = {'type': to_json_type(array.get('itemType'))}

        return {'type': "array", 'items': items}
