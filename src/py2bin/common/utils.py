import os
import re

SCRIPT_SUFFIX = '.py'

_UNSAFE_TOKEN_CHARS = re.compile(r'[^A-Za-z0-9._-]')


def derive_output_path(script_path: str) -> str:
    '''Strip a trailing .py from the script path; otherwise return it unchanged'''
    if script_path.endswith(SCRIPT_SUFFIX) and len(script_path) > len(SCRIPT_SUFFIX):
        return script_path[:-len(SCRIPT_SUFFIX)]

    return script_path


def sanitize_name(text: str) -> str:
    '''Replace everything outside [A-Za-z0-9._-] with an underscore'''
    return _UNSAFE_TOKEN_CHARS.sub('_', text)


def naming_token(script_path: str) -> str:
    '''Base filename reduced to characters safe in a path and a C literal'''
    base = os.path.basename(script_path.rstrip(os.sep)) or 'script'
    return sanitize_name(base)


def format_size(size: int) -> str:
    return f'{size} bytes'


def run_hint(output_path: str) -> str:
    '''Command line that runs the produced executable from the current directory'''
    if os.path.isabs(output_path) or os.sep in output_path:
        return output_path

    return f'.{os.sep}{output_path}'


__all__ = [
    'derive_output_path',
    'sanitize_name',
    'naming_token',
    'format_size',
    'run_hint',
]
