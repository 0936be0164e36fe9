#!/usr/bin/env python3
'''Unit tests for the configuration system'''

from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from contextlib import redirect_stdout
from io import StringIO
from py2bin.common import *
import tempfile
import unittest


class TestConfig(unittest.TestCase):
    '''Test defaults, JSON5 files and command-line overrides'''

    def setUp(self):
        self.config = get_config()
        self.config.reset()
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.addCleanup(self.config.reset)

    def write(self, name: str, content: str) -> Path:
        path = Path(self.tmp.name) / name
        path.write_text(content, encoding = 'utf-8')
        return path

    def test_singleton(self):
        self.assertIs(Config(), self.config)

    def test_defaults(self):
        self.assertIsNone(self.config.interpreter)
        self.assertEqual(self.config.interpreter_candidates, ['python3', 'python'])
        self.assertEqual(self.config.compiler_candidates, ['clang', 'cc', 'gcc'])
        self.assertEqual(self.config.compiler_flags, ['-O2'])
        self.assertEqual(self.config.temp_prefix, 'pyexe_')
        self.assertEqual(self.config.source_prefix, 'python2exe_')
        self.assertEqual(self.config.launch_failure_code, 1)

    def test_packaged_config_loads(self):
        packaged = Path(__file__).parent.parent / 'src' / 'py2bin' / 'config.json5'
        self.assertTrue(self.config.load_file(packaged))
        self.assertEqual(self.config.temp_prefix, 'pyexe_')

    def test_load_json5_file(self):
        path = self.write('config.json5', '''
            // comments and trailing commas are fine
            {
                interpreter: '/opt/python/bin/python3',
                compiler_flags: ['-O3', '-s'],
                launch_failure_code: 127,
            }
        ''')

        self.assertTrue(self.config.load_file(path))
        self.assertEqual(self.config.interpreter, '/opt/python/bin/python3')
        self.assertEqual(self.config.compiler_flags, ['-O3', '-s'])
        self.assertEqual(self.config.launch_failure_code, 127)
        self.assertEqual(self.config.temp_prefix, 'pyexe_')

    def test_missing_file(self):
        self.assertFalse(self.config.load_file(Path(self.tmp.name) / 'nope.json5'))

    def test_invalid_file_is_skipped(self):
        path = self.write('bad.json5', '{ interpreter: ')
        out = StringIO()
        with redirect_stdout(out):
            self.assertFalse(self.config.load_file(path))

        self.assertIn('Warning: Failed to load config', out.getvalue())
        self.assertIsNone(self.config.interpreter)

    def test_non_object_file_is_skipped(self):
        path = self.write('list.json5', '[1, 2]')
        with redirect_stdout(StringIO()):
            self.assertFalse(self.config.load_file(path))

    def test_cli_overrides_file(self):
        path = self.write('config.json5', "{ interpreter: '/from/file', compiler: 'gcc' }")
        self.config.parse_args(['script.py', '--config', str(path), '--interpreter', '/from/cli'])

        self.assertEqual(self.config.interpreter, '/from/cli')
        self.assertEqual(self.config.compiler, 'gcc')

    def test_get_and_set(self):
        self.assertEqual(self.config.get('missing', 42), 42)
        self.config.set('temp_prefix', 'tool_')
        self.assertEqual(self.config.temp_prefix, 'tool_')

    def test_reset_drops_overrides(self):
        self.config.parse_args(['--compiler', 'tcc'])
        self.assertEqual(self.config.compiler, 'tcc')
        self.config.reset()
        self.assertIsNone(self.config.compiler)


class TestUtils(unittest.TestCase):
    '''Test path helpers'''

    def test_derive_output_path(self):
        self.assertEqual(derive_output_path('hello.py'), 'hello')
        self.assertEqual(derive_output_path('dir/calc.py'), 'dir/calc')
        self.assertEqual(derive_output_path('archive.py.py'), 'archive.py')
        self.assertEqual(derive_output_path('script'), 'script')
        self.assertEqual(derive_output_path('script.pyw'), 'script.pyw')
        self.assertEqual(derive_output_path('.py'), '.py')

    def test_naming_token(self):
        self.assertEqual(naming_token('/a/b/hello.py'), 'hello.py')
        self.assertEqual(naming_token('wéird name.py'), 'w_ird_name.py')
        self.assertEqual(naming_token(''), 'script')

    def test_run_hint(self):
        self.assertEqual(run_hint('hello'), './hello')
        self.assertEqual(run_hint('bin/hello'), 'bin/hello')
        self.assertEqual(run_hint('/usr/local/bin/hello'), '/usr/local/bin/hello')


if __name__ == '__main__':
    unittest.main()
