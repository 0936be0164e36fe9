"""
Conversion pipeline

Orchestrates one script-to-executable conversion:
script → bytes → escaped literal → launcher.c → compiler → artifact
"""

import os
import logging
import tempfile
from typing import Optional

from ..common import *
from ..codegen import WrapperGenerator, escape_bytes
from .compiler import Compiler
from .interpreter import resolve_interpreter

logger = logging.getLogger(__name__)


class Converter:
    """Runs the conversion steps in order and stops at the first failure

    Every failure is raised as a ConversionError subclass. Whatever happens,
    the generated C file is removed and no partial executable is left behind.
    """

    def __init__(
        self,
        interpreter: Optional[str] = None,
        compiler: Optional[str | Compiler] = None,
        generator: Optional[WrapperGenerator] = None,
        temp_dir: Optional[str] = None,
    ):
        self.requested_interpreter = interpreter
        self.compiler = compiler
        self.generator = generator or WrapperGenerator()
        self.temp_dir = temp_dir
        self.step: Optional[ConversionStep] = None

    def _enter(self, step: ConversionStep):
        self.step = step
        logger.debug(f'Step {int(step)}: {step}')

    def convert(self, script_path: str, output_path: Optional[str] = None) -> Artifact:
        if output_path is None:
            output_path = derive_output_path(script_path)

        if os.path.abspath(output_path) == os.path.abspath(script_path):
            logger.warning(f"Output path equals the script path; '{script_path}' will be replaced by the executable")

        print(f"🐍 Converting '{script_path}' to executable...")

        self.verify_input(script_path)
        interpreter = self.verify_interpreter()
        self.verify_compiler()

        source = self.read_source(script_path)
        print(f"📊 Script size: {format_size(len(source))}")

        escaped = self.escape(source)
        del source

        fd, source_file = self.allocate_temp_source()
        try:
            self.generate(fd, escaped, script_path, interpreter)
            del escaped
            self.build(source_file, output_path)

        finally:
            self._remove(source_file)

        artifact = Artifact(path = output_path, size = os.path.getsize(output_path))
        print(f"✅ Successfully created '{artifact.path}' ({format_size(artifact.size)})")

        return artifact

    def verify_input(self, script_path: str):
        self._enter(ConversionStep.VerifyInputExists)

        if not os.path.exists(script_path):
            raise InputNotFound(f"Python script '{script_path}' not found", path = script_path)

    def verify_interpreter(self) -> str:
        self._enter(ConversionStep.VerifyInterpreterExists)

        interpreter = resolve_interpreter(self.requested_interpreter)
        logger.debug(f'Interpreter: {interpreter}')
        return interpreter

    def verify_compiler(self) -> Compiler:
        """Resolve the C compiler up front so a missing toolchain fails before any file is written"""
        if not isinstance(self.compiler, Compiler):
            self.compiler = Compiler(self.compiler)

        logger.debug(f'Compiler: {self.compiler.command}')
        return self.compiler

    def read_source(self, script_path: str) -> bytes:
        self._enter(ConversionStep.ReadSource)

        try:
            with open(script_path, 'rb') as f:
                return f.read()

        except MemoryError:
            raise AllocationFailure('Memory allocation failed', path = script_path)

        except OSError as e:
            raise ReadFailure.from_os_error(f"Cannot open file '{script_path}'", e, path = script_path)

    def escape(self, source: bytes) -> str:
        self._enter(ConversionStep.Escape)

        try:
            escaped = escape_bytes(source)
        except MemoryError:
            raise EscapeFailure('Failed to escape Python code', reason = 'out of memory')

        logger.debug(f'Escaped {len(source)} bytes into {len(escaped)} chars')
        return escaped

    def allocate_temp_source(self) -> tuple[int, str]:
        self._enter(ConversionStep.AllocateTempSourceFile)

        try:
            fd, path = tempfile.mkstemp(prefix = get_config().source_prefix, suffix = '.c', dir = self.temp_dir)
        except OSError as e:
            raise TempFileFailure.from_os_error('Cannot create temporary file', e)

        logger.debug(f'Launcher source: {path}')
        return fd, path

    def generate(self, fd: int, escaped: str, script_path: str, interpreter: str) -> WrapperSource:
        self._enter(ConversionStep.GenerateWrapper)

        try:
            with os.fdopen(fd, 'w', encoding = 'ascii') as f:
                wrapper = self.generator.generate(escaped, script_path, interpreter)
                WrapperGenerator.write(wrapper, f)

        except OSError as e:
            raise GenerationFailure.from_os_error('Cannot write temporary C file', e)

        return wrapper

    def build(self, source_file: str, output_path: str):
        """Compile into a sibling of `output_path` and move it into place once verified

        A failed build never touches an existing file at `output_path`.
        """
        self._enter(ConversionStep.Compile)
        compiler = self.verify_compiler()

        directory, name = os.path.split(output_path)
        try:
            fd, staging = tempfile.mkstemp(prefix = f'.{name}.', suffix = '.tmp', dir = directory or '.')
            os.close(fd)
        except OSError as e:
            raise CompileFailure.from_os_error(f"Cannot create '{output_path}'", e, path = output_path)

        try:
            print("🔨 Compiling executable...")
            compiler.compile(source_file, staging)

            self.verify_artifact(staging, output_path)

            try:
                os.replace(staging, output_path)
            except OSError as e:
                raise CompileFailure.from_os_error(f"Cannot create '{output_path}'", e, path = output_path)

        except ConversionError:
            self._remove(staging)
            raise

    def verify_artifact(self, path: str, output_path: Optional[str] = None):
        self._enter(ConversionStep.VerifyArtifact)
        output_path = output_path or path

        if not os.path.isfile(path) or os.path.getsize(path) == 0:
            raise ArtifactMissing('Failed to create executable', path = output_path)

    @classmethod
    def _remove(cls, path: str):
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f'Cannot remove {path}: {e.strerror}')


def convert(script_path: str, output_path: Optional[str] = None, **kwargs) -> Artifact:
    """Convert one script with a fresh Converter"""
    return Converter(**kwargs).convert(script_path, output_path)


__all__ = [
    'Converter',
    'convert',
]
