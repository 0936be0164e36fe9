"""
py2bin: Python scripts to standalone native executables

Embeds a script as a C string literal in a small launcher program and
compiles it; the launcher runs the script with the system interpreter.
"""

__version__ = "0.1.0"

from .common import ConversionError, Artifact, WrapperSource, get_config
from .codegen import escape_bytes, c_string_literal, WrapperGenerator
from .pipeline import Converter, Compiler, convert, resolve_interpreter

__all__ = [
    "ConversionError", "Artifact", "WrapperSource", "get_config",
    "escape_bytes", "c_string_literal", "WrapperGenerator",
    "Converter", "Compiler", "convert", "resolve_interpreter",
]
