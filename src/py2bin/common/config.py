'''Global configuration system supporting JSON5 files and command-line overrides'''

import json5
import argparse
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class Config:
    '''Global configuration singleton'''

    _instance = None
    _initialized = False

    # Default configuration values
    _defaults = {
        'interpreter'               : None,
        'interpreter_candidates'    : ['python3', 'python'],
        'compiler'                  : None,
        'compiler_candidates'       : ['clang', 'cc', 'gcc'],
        'compiler_flags'            : ['-O2'],
        'temp_prefix'               : 'pyexe_',
        'source_prefix'             : 'python2exe_',
        'launch_failure_code'       : 1,
    }

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.reset()
            self._initialized = True

    def reset(self):
        '''Drop every loaded file and override, back to built-in defaults'''
        self._config = {k: (list(v) if isinstance(v, list) else v) for k, v in self._defaults.items()}
        self._cli_overrides = {}

    def load_file(self, filepath: str | Path) -> bool:
        '''Load configuration from JSON5 file'''
        filepath = Path(filepath).expanduser()
        if not filepath.exists():
            return False

        try:
            with open(filepath, 'r', encoding = 'utf-8') as f:
                data = json5.loads(f.read())

        except (OSError, ValueError) as e:
            print(f"Warning: Failed to load config from {filepath}: {e}")
            return False

        if not isinstance(data, dict):
            print(f"Warning: Ignoring config {filepath}: top level must be an object")
            return False

        logger.debug(f'Loaded config {filepath}: {sorted(data)}')
        self._config.update(data)
        return True

    def load_defaults(self):
        '''Load default configuration files'''
        # Load project config
        project_config = Path(__file__).parent.parent / 'config.json5'
        self.load_file(project_config)

        # Load user config (overrides project config)
        user_config = Path.home() / '.py2bin' / 'config.json5'
        self.load_file(user_config)

    def parse_args(self, args: list[str] = None):
        '''Parse command-line arguments and override config'''
        parser = argparse.ArgumentParser(
            description = 'py2bin configuration',
            add_help = False
        )

        parser.add_argument(
            '--config',
            type = str,
            help = 'Path to config file'
        )

        parser.add_argument(
            '--interpreter',
            type = str,
            help = 'Interpreter the produced executable runs the script with'
        )

        parser.add_argument(
            '--compiler',
            type = str,
            help = 'C compiler used to build the launcher'
        )

        # Parse known args, ignore unknown
        parsed, _ = parser.parse_known_args(args)

        # Load config file if specified
        if parsed.config:
            if not self.load_file(parsed.config):
                print(f"Warning: Config file {parsed.config} not loaded")

        # Apply command-line overrides
        if parsed.interpreter:
            self._cli_overrides['interpreter'] = parsed.interpreter

        if parsed.compiler:
            self._cli_overrides['compiler'] = parsed.compiler

    def get(self, key: str, default: Any = None) -> Any:
        '''Get configuration value'''
        # CLI overrides have highest priority
        if key in self._cli_overrides:
            return self._cli_overrides[key]

        # Then config file values
        if key in self._config:
            return self._config[key]

        # Finally default value
        return default

    def set(self, key: str, value: Any):
        '''Set configuration value at runtime'''
        self._config[key] = value

    @property
    def interpreter(self) -> str | None:
        return self.get('interpreter')

    @property
    def interpreter_candidates(self) -> list[str]:
        return list(self.get('interpreter_candidates') or [])

    @property
    def compiler(self) -> str | None:
        return self.get('compiler')

    @property
    def compiler_candidates(self) -> list[str]:
        return list(self.get('compiler_candidates') or [])

    @property
    def compiler_flags(self) -> list[str]:
        return [str(flag) for flag in self.get('compiler_flags') or []]

    @property
    def temp_prefix(self) -> str:
        '''Prefix of the script file a produced executable writes at run time'''
        return self.get('temp_prefix')

    @property
    def source_prefix(self) -> str:
        '''Prefix of the generated C file written while compiling'''
        return self.get('source_prefix')

    @property
    def launch_failure_code(self) -> Any:
        '''Raw value; WrapperGenerator checks it is an exit code'''
        return self.get('launch_failure_code')


# Global config instance
_config = Config()


def get_config() -> Config:
    '''Get global config instance'''
    return _config


def init_config(args: list[str] = None):
    '''Initialize configuration system'''
    _config.load_defaults()
    if args is not None:
        _config.parse_args(args)


# Auto-load defaults on import
_config.load_defaults()


__all__ = [
    'Config',
    'get_config',
    'init_config',
]
