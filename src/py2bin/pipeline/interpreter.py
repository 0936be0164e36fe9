'''Interpreter lookup for produced executables'''

import os
import shutil
import logging
from typing import Iterable, Optional

from ..common import *

logger = logging.getLogger(__name__)


def is_executable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def resolve_interpreter(requested: Optional[str] = None, candidates: Optional[Iterable[str]] = None) -> str:
    '''Absolute path of the interpreter to embed

    `requested` may be a path or a bare command name; without it the
    candidates are searched on PATH in order.
    '''
    config = get_config()
    if requested is None:
        requested = config.interpreter

    if requested:
        if os.sep in requested:
            path = os.path.abspath(os.path.expanduser(requested))
            if is_executable_file(path):
                return path

            raise InterpreterNotFound(f"Interpreter not found at {path}", path = path)

        found = shutil.which(requested)
        if found is None:
            raise InterpreterNotFound(f"Interpreter '{requested}' not found on PATH", path = requested)

        return os.path.abspath(found)

    if candidates is None:
        candidates = config.interpreter_candidates

    candidates = list(candidates)
    for name in candidates:
        found = shutil.which(name)
        logger.debug(f'Interpreter candidate {name}: {found}')
        if found is not None:
            return os.path.abspath(found)

    raise InterpreterNotFound(f"No interpreter found on PATH (tried {', '.join(candidates) or 'nothing'})")


__all__ = [
    'resolve_interpreter',
]
