#!/usr/bin/env python3
'''Unit tests for the command line interface'''

from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from contextlib import redirect_stdout
from io import StringIO
from py2bin.common import *
from py2bin.cli import main
from test_resolution import COPY_COMPILER, FAILING_COMPILER, make_executable
import os
import tempfile
import unittest


class TestCli(unittest.TestCase):
    '''Test argument handling, exit codes and stdout reporting'''

    def setUp(self):
        get_config().reset()
        self.addCleanup(get_config().reset)
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = tmp.name

        self.interpreter = make_executable(self.dir, 'python3')
        self.script = os.path.join(self.dir, 'hello.py')
        Path(self.script).write_text('print("hi")\n')

    def run_main(self, *argv: str) -> int:
        out = StringIO()
        with redirect_stdout(out):
            code = main(list(argv))

        self.stdout = out.getvalue()
        return code

    def test_no_arguments(self):
        self.assertEqual(self.run_main(), 1)
        self.assertIn('Usage: py2bin <python_script.py> [output_executable]', self.stdout)

    def test_too_many_arguments(self):
        self.assertEqual(self.run_main('a.py', 'b', 'c'), 1)
        self.assertIn('Usage:', self.stdout)

    def test_help(self):
        self.assertEqual(self.run_main('--help'), 0)
        self.assertIn('Examples:', self.stdout)

    def test_missing_script(self):
        missing = os.path.join(self.dir, 'nope.py')
        self.assertEqual(self.run_main(missing, '--interpreter', self.interpreter), 1)

        self.assertIn(f"❌ Error: Python script '{missing}' not found", self.stdout)
        self.assertFalse(os.path.exists(os.path.join(self.dir, 'nope')))

    def test_missing_interpreter_hint(self):
        code = self.run_main(self.script, '--interpreter', os.path.join(self.dir, 'none', 'python3'))
        self.assertEqual(code, 1)
        self.assertIn('❌ Error: Interpreter not found', self.stdout)
        self.assertIn('💡', self.stdout)

    def test_success_default_output(self):
        cc = make_executable(self.dir, 'copycc', COPY_COMPILER)
        code = self.run_main(self.script, '--compiler', cc, '--interpreter', self.interpreter)

        output = os.path.join(self.dir, 'hello')
        self.assertEqual(code, 0)
        self.assertTrue(os.path.isfile(output))
        self.assertIn(f'🎯 Output: {output}', self.stdout)
        self.assertIn('🎉 Conversion completed successfully!', self.stdout)
        self.assertIn(f'   {output}', self.stdout)

    def test_success_explicit_output(self):
        cc = make_executable(self.dir, 'copycc', COPY_COMPILER)
        output = os.path.join(self.dir, 'myapp')
        self.assertEqual(self.run_main(self.script, output, '--compiler', cc, '--interpreter', self.interpreter), 0)
        self.assertTrue(os.path.isfile(output))

    def test_compile_failure(self):
        cc = make_executable(self.dir, 'badcc', FAILING_COMPILER)
        code = self.run_main(self.script, '--compiler', cc, '--interpreter', self.interpreter)

        self.assertEqual(code, 1)
        self.assertIn('❌ Error: Compilation failed', self.stdout)
        self.assertFalse(os.path.exists(os.path.join(self.dir, 'hello')))

    def test_config_file(self):
        cc = make_executable(self.dir, 'copycc', COPY_COMPILER)
        config = os.path.join(self.dir, 'config.json5')
        Path(config).write_text(f"{{ interpreter: '{self.interpreter}', temp_prefix: 'mytool_' }}")

        self.assertEqual(self.run_main(self.script, '--config', config, '--compiler', cc), 0)
        launcher = Path(os.path.join(self.dir, 'hello')).read_text()
        self.assertIn('temp_prefix[] = "mytool_";', launcher)

    def test_invalid_launch_failure_code_in_config(self):
        cc = make_executable(self.dir, 'copycc', COPY_COMPILER)
        config = os.path.join(self.dir, 'config.json5')
        Path(config).write_text('{ launch_failure_code: 300 }')

        code = self.run_main(self.script, '--config', config, '--compiler', cc, '--interpreter', self.interpreter)

        self.assertEqual(code, 1)
        self.assertIn('❌ Error: launch_failure_code must be an integer in 0..255, got 300', self.stdout)
        self.assertFalse(os.path.exists(os.path.join(self.dir, 'hello')))


if __name__ == '__main__':
    unittest.main()
