"""
Native compiler invocation

Builds the generated launcher source into an executable:
launcher.c → cc -O2 → artifact (mode 0755)
"""

import os
import shlex
import shutil
import logging
import subprocess
from typing import List, Optional

from ..common import *

logger = logging.getLogger(__name__)

COMPILER_HINT = 'Install clang or gcc, or pass --compiler'


def resolve_compiler(requested: Optional[str] = None) -> List[str]:
    """Compiler command line prefix: --compiler, then $CC, then config, then PATH search"""
    config = get_config()

    for source, value in (('--compiler', requested), ('CC', os.environ.get('CC')), ('config', config.compiler)):
        if not value:
            continue

        command = shlex.split(value)
        if command and shutil.which(command[0]) is not None:
            logger.debug(f'Compiler from {source}: {command}')
            return command

        raise CompileFailure(f"C compiler '{value}' not found", hint = COMPILER_HINT)

    for name in config.compiler_candidates:
        found = shutil.which(name)
        if found is not None:
            logger.debug(f'Compiler from PATH: {found}')
            return [found]

    raise CompileFailure(
        f"No C compiler found on PATH (tried {', '.join(config.compiler_candidates) or 'nothing'})",
        hint = COMPILER_HINT,
    )


class Compiler:
    """External C compiler, run in optimized mode"""

    def __init__(self, command: Optional[str] = None, flags: Optional[List[str]] = None):
        self.command = resolve_compiler(command)
        self.flags = get_config().compiler_flags if flags is None else list(flags)

    @property
    def name(self) -> str:
        return os.path.basename(self.command[0])

    def command_line(self, source_path: str, output_path: str) -> List[str]:
        return [*self.command, *self.flags, '-o', output_path, source_path]

    def compile(self, source_path: str, output_path: str):
        """Compile `source_path` into an executable at `output_path`

        Blocks until the compiler exits. Its diagnostics go straight to the
        terminal; only the exit status is checked.
        """
        cmd = self.command_line(source_path, output_path)
        logger.debug(f'Running: {shlex.join(cmd)}')

        try:
            result = subprocess.run(cmd)
        except OSError as e:
            raise CompileFailure.from_os_error(f'Cannot run {self.name}', e, path = output_path)

        if result.returncode != 0:
            raise CompileFailure(
                'Compilation failed',
                path = output_path,
                reason = f'{self.name} exited with status {result.returncode}',
            )

        try:
            os.chmod(output_path, 0o755)
        except OSError as e:
            raise CompileFailure.from_os_error(f"Cannot make '{output_path}' executable", e, path = output_path)


__all__ = [
    'resolve_compiler',
    'Compiler',
]
