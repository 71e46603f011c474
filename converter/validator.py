# -*- coding: utf-8 -*-

import json
from lxml import etree
from jsonschema import (
    Draft4Validator, Draft6Validator, Draft7Validator,
    Draft201909Validator, Draft202012Validator
)


def validate_json_schema(schema_path):
    """
    Validates that a JSON file is a valid JSON schema according to its metaschema

    Args:
        schema_path (str): JSON schema to validate

    Returns:
        bool: True when no error was found
    """

    # Open the schema
    with open(schema_path, 'r', encoding='utf-8') as f:
        schema_to_validate = json.load(f)

    # Get validator class from schema version
    version = schema_to_validate.get('$schema', '')
    if "draft-04" in version:
        ValidatorClass = Draft4Validator
    elif "draft-06" in version:
        ValidatorClass = Draft6Validator
    elif "draft-07" in version:
        ValidatorClass = Draft7Validator
    elif "2019-09" in version:
        ValidatorClass = Draft201909Validator
    elif "2020-12" in version:
        ValidatorClass = Draft202012Validator
    else:
        ValidatorClass = Draft7Validator

    validator = ValidatorClass(ValidatorClass.META_SCHEMA)
    errors = sorted(validator.iter_errors(schema_to_validate), key=lambda e: [str(p) for p in e.path])

    if errors:
        print("❌ Errors found in JSON Schema:")
        for err in errors:
            path = ".".join(str(x) for x in err.path) if err.path else "(root)"
            print(f"- Path '{path}': {err.message}")
        return False

    print("✅ Valid JSON Schema.")
    return True


def validate_xsd(xsd_path):
    """
    Validates that a file is an XSD schema lxml can compile

    Args:
        xsd_path (str): XSD schema to validate

    Returns:
        bool: True when the schema compiles
    """
    try:
        etree.XMLSchema(etree.parse(xsd_path))
    except (etree.XMLSyntaxError, etree.XMLSchemaParseError) as e:
        print(f"❌ Errors found in XSD Schema:\n- {e}")
        return False

    print("✅ Valid XSD Schema.")
    return True
