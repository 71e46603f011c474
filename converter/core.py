# -*- coding: utf-8 -*-

import os
import json
from pathlib import Path

import yaml
from lxml import etree

from .config import Config
from .dom import find_first, load_document
from .json_schema import JsonSchemaTransformer
from .sample import JsonSampleGenerator, XmlSampleGenerator
from .transform import XS, XsdTransformer
from .validator import validate_json_schema, validate_xsd

# operation code -> output file suffix
OPERATIONS = {
    'xml-to-xsd': ".xsd",
    'xml-sample': "-sample.xml",
    'json-to-schema': ".schema.json",
    'json-sample': "-sample.json",
}


class ProfileConverter:

    def __init__(self, input_path, config=None):
        self.input_path = input_path
        self.config = config or Config()
        self.profile_filename = os.path.basename(input_path)

    @staticmethod
    def is_profile_file(file_path):
        """
        Checks if the given file is a Boomi profile.
        Checks if:
        - the file can be opened and parsed as XML.
        - it contains an <XMLProfile> or a <JSONProfile>.

        Args:
            file_path (str): Full path to the file to check.

        Returns:
            bool: True if the file is a profile, False otherwise.
        """
        try:
            root = load_document(file_path)
        except (OSError, etree.XMLSyntaxError):
            return False
        return find_first(root, 'XMLProfile') is not None or find_first(root, 'JSONProfile') is not None

    def output_path(self, operation):
        """
        Builds the output file name of an operation: the input base name with
        the operation suffix, next to the input or in `output_dir`

        Args:
            operation (str): operation code

        Returns:
            str: output file path
        """
        input_path = Path(self.input_path)
        output_dir = Path(self.config.output_dir) if self.config.output_dir else input_path.parent
        return str(output_dir / f"{input_path.stem}{OPERATIONS[operation]}")

    def run(self, operation):
        """
        Runs an operation on the profile and writes its result

        Args:
            operation (str): one of OPERATIONS

        Returns:
            str: path of the written file
        """
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")

        print(f"\nProfile\n  - path: {os.path.dirname(self.input_path) or '.'}\n  - filename: {self.profile_filename}")
        print(f"  - operation: {operation}")

        root = load_document(self.input_path)
        output_path = self.output_path(operation)
        if self.config.output_dir:
            os.makedirs(self.config.output_dir, exist_ok=True)

        if operation == 'xml-to-xsd':
            self.xml_to_xsd(root, output_path)
        elif operation == 'xml-sample':
            self.text_to_file(output_path, XmlSampleGenerator().generate(root))
        elif operation == 'json-to-schema':
            self.json_to_schema(root, output_path)
        else:
            self.json_to_file(output_path, JsonSampleGenerator().generate(root))

        return output_path

    def xml_to_xsd(self, root, output_path):
        transformer = XsdTransformer(
            merge_mode=self.config.merge_mode,
            share_types_across_names=self.config.share_types_across_names,
        )

        print(f"\nCreate XSD schema")
        schema = transformer.compile(root)
        print(f"  > elements: {len(schema.findall(XS + 'element'))}")
        print(f"  > complexType: {len(schema.findall(XS + 'complexType'))}")
        print(f"  > simpleType: {len(schema.findall(XS + 'simpleType'))}")

        self.xsd_to_file(output_path, schema)
        if self.config.validate_output:
            validate_xsd(output_path)

    def json_to_schema(self, root, output_path):
        transformer = JsonSchemaTransformer(self.config.json_schema_draft)

        print(f"\nCreate JSON schema\n  - version: {transformer.json_schema}\n  - metaschema: {transformer.json_schema_uri}")
        schema = transformer.convert(root)

        self.json_to_file(output_path, schema)
        if self.config.validate_output:
            validate_json_schema(output_path)

        if self.config.write_yaml:
            self.yaml_to_file(os.path.splitext(output_path)[0] + ".yaml", schema)

    def xsd_to_file(self, filename, tree):
        """
        Write XSD Schema to file

        Args:
            filename (str): filename
            tree (etree.Element): XML tree
        """
        xml_string = etree.tostring(tree, pretty_print=True, xml_declaration=True, encoding='UTF-8')
        with open(filename, "wb") as f:
            f.write(xml_string)
        print(f"✅ XSD file written in '{filename}'")

    def text_to_file(self, filename, text):
        with open(filename, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"✅ Sample written in '{filename}'")

    def json_to_file(self, filename, json_data):
        """
        Write JSON data to file

        Args:
            filename (str): filename
            json_data (dict): JSON data
        """
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(json_data, f, indent=4)
        print(f"✅ JSON representation written in '{filename}'")

    def yaml_to_file(self, filename, json_data):
        """
        Dump JSON data into yaml and save to file

        Args:
            filename (str): filename
            json_data (dict): JSON data
        """
        with open(filename, "w", encoding="utf-8") as f:
            yaml.dump(json_data, f, default_flow_style=False, indent=2, sort_keys=False)
        print(f"✅ JSON representation converted to YAML and written in '{filename}'")
