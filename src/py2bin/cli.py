#!/usr/bin/env python3
"""
py2bin command line interface

Converts a Python script into a standalone executable:
    py2bin <python_script.py> [output_executable]
"""

import argparse
import logging
import sys
from typing import List, Optional

from .common import *
from .pipeline import Converter


class UsageError(Exception):
    pass


class ArgumentParser(argparse.ArgumentParser):
    """argparse that reports bad usage to the caller instead of exiting with 2"""

    def error(self, message):
        raise UsageError(message)


def print_usage(program_name: str):
    print("🐍 Python to Executable Converter")
    print(f"Usage: {program_name} <python_script.py> [output_executable]\n")
    print("Converts any Python3 script into a standalone executable file\n")
    print("Parameters:")
    print("  python_script     - Path to Python3 script (.py file)")
    print("  output_executable - Optional output executable name")
    print("                      (defaults to script name without .py)\n")
    print("Options:")
    print("  --interpreter PATH  Interpreter the executable runs the script with")
    print("  --compiler CC       C compiler used to build the executable")
    print("  --config FILE       Extra config.json5 to load")
    print("  -v, --verbose       Show each conversion step\n")
    print("Examples:")
    print(f"  {program_name} hello.py")
    print(f"  {program_name} script.py myapp")
    print(f"  {program_name} ~/projects/calculator.py ~/bin/calc\n")
    print("Features:")
    print("  • Creates self-contained executable")
    print("  • Bundles Python script inside executable")
    print("  • Forwards arguments and exit status")
    print("  • Requires the interpreter on the machine that runs it")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog = 'py2bin', add_help = False)

    parser.add_argument('script')
    parser.add_argument('output', nargs = '?')
    parser.add_argument('--interpreter')
    parser.add_argument('--compiler')
    parser.add_argument('--config')
    parser.add_argument('-v', '--verbose', action = 'store_true')
    parser.add_argument('-h', '--help', action = 'store_true')

    return parser


def setup_logging(verbose: bool):
    logging.basicConfig(
        level = logging.DEBUG if verbose else logging.WARNING,
        stream = sys.stdout,
        format = '%(levelname)s %(name)s: %(message)s',
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code"""
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()

    if '-h' in argv or '--help' in argv:
        print_usage(parser.prog)
        return 0

    try:
        args = parser.parse_args(argv)
    except UsageError:
        print_usage(parser.prog)
        return 1

    setup_logging(args.verbose)

    config = get_config()
    config.reset()
    init_config(argv)

    output = args.output or derive_output_path(args.script)

    print(f"🎯 Input:  {args.script}")
    print(f"🎯 Output: {output}")
    print()

    try:
        converter = Converter(interpreter = args.interpreter, compiler = args.compiler)
        artifact = converter.convert(args.script, output)

    except ConversionError as e:
        print(f"❌ Error: {e}")
        if e.hint:
            print(f"💡 {e.hint}")
        return 1

    print()
    print("🎉 Conversion completed successfully!")
    print("💡 You can now run the executable directly:")
    print(f"   {run_hint(artifact.path)}")

    return 0


if __name__ == '__main__':
    sys.exit(main())
