# -*- coding: utf-8 -*-
import logging
import os
import sys

from lxml import etree

from converter.config import load_config
from converter.core import OPERATIONS, ProfileConverter
from converter.errors import ConfigError, ProfileError

# Vars
operations = list(OPERATIONS)


def select_operation():
    """Prompts for an operation until a valid number is entered"""
    print("------------------------------")
    for i in range(len(operations)):
        print(f'{i:4}: {operations[i]}')
    print("------------------------------")

    while True:
        try:
            num = int(input("Select operation: "))
            if num < 0 or num >= len(operations):
                raise ValueError()
        except ValueError:
            print("This is not a valid operation.")
            continue
        else:
            return operations[num]


def main(argv=None):
    argv = sys.argv if argv is None else argv

    # Get profile from command-line argument
    if len(argv) < 2:
        print("usage:", argv[0], "<inputfile> [operation] [configfile]\n")
        return 2

    input_path = argv[1]

    try:
        config = load_config(argv[3] if len(argv) > 3 else None)
    except ConfigError as e:
        print(f"❌ {e}")
        return 2

    logging.basicConfig(level=config.log_level_number, format="%(levelname)s %(name)s: %(message)s")

    if not os.path.isfile(input_path):
        print(f"❌ Input file not found: {input_path}")
        return 3

    if not ProfileConverter.is_profile_file(input_path):
        print(f"❌ <inputfile> is not a valid Boomi profile")
        return 3

    # Get operation
    operation = argv[2].lower() if len(argv) > 2 else select_operation()
    if operation not in OPERATIONS:
        print(f"❌ Unknown operation: {operation}")
        return 4

    try:
        output_path = ProfileConverter(input_path, config).run(operation)
    except (ProfileError, etree.LxmlError, OSError) as e:
        print(f"❌ ERROR: {e}")
        return 5

    print(f"\nGenerated: {os.path.abspath(output_path)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
