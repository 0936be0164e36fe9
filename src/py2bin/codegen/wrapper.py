'''Launcher source generator - embedded script to a compilable C program'''

import logging
from string import Template
from typing import Optional, TextIO

from ..common import *
from .escape import escape_bytes, escape_text

logger = logging.getLogger(__name__)


# Runs on POSIX: mkstemp, fork/execv, waitpid.
LAUNCHER_TEMPLATE = Template('''\
/* Generated by py2bin from ${token}. Do not edit. */
#define _DEFAULT_SOURCE

#include <errno.h>
#include <limits.h>
#include <signal.h>
#include <stdio.h>
#include <stdlib.h>
#include <string.h>
#include <sys/stat.h>
#include <sys/types.h>
#include <sys/wait.h>
#include <unistd.h>

#ifndef PATH_MAX
#define PATH_MAX 4096
#endif

#define LAUNCH_FAILURE ${launch_failure_code}

/* Embedded script */
static const char script_source[] = "${script}";

static const char interpreter_path[] = "${interpreter}";
static const char temp_prefix[] = "${temp_prefix}";
static const char temp_token[] = "${token}";

static char temp_path[PATH_MAX];

static void remove_temp_file(void)
{
    if (temp_path[0] != '\\0') {
        unlink(temp_path);
        temp_path[0] = '\\0';
    }
}

static int create_temp_file(void)
{
    const char *dir = getenv("TMPDIR");
    if (dir == NULL || dir[0] == '\\0') {
        dir = "/tmp";
    }

    int n = snprintf(temp_path, sizeof(temp_path), "%s/%s%s_XXXXXX", dir, temp_prefix, temp_token);
    if (n < 0 || (size_t)n >= sizeof(temp_path)) {
        temp_path[0] = '\\0';
        fprintf(stderr, "Error creating temporary file: path too long\\n");
        return -1;
    }

    int fd = mkstemp(temp_path);
    if (fd == -1) {
        fprintf(stderr, "Error creating temporary file: %s\\n", strerror(errno));
        temp_path[0] = '\\0';
        return -1;
    }

    return fd;
}

static int write_script(int fd)
{
    FILE *fp = fdopen(fd, "w");
    if (fp == NULL) {
        fprintf(stderr, "Error opening temporary file: %s\\n", strerror(errno));
        close(fd);
        return -1;
    }

    if (fputs(script_source, fp) == EOF) {
        fprintf(stderr, "Error writing to temporary file: %s\\n", strerror(errno));
        fclose(fp);
        return -1;
    }

    if (fclose(fp) != 0) {
        fprintf(stderr, "Error writing to temporary file: %s\\n", strerror(errno));
        return -1;
    }

    chmod(temp_path, 0755);
    return 0;
}

static int run_interpreter(int argc, char *argv[])
{
    char **child_argv = malloc((size_t)(argc + 2) * sizeof(char *));
    if (child_argv == NULL) {
        fprintf(stderr, "Memory allocation failed\\n");
        return LAUNCH_FAILURE;
    }

    child_argv[0] = (char *)interpreter_path;
    child_argv[1] = temp_path;
    for (int i = 1; i < argc; i++) {
        child_argv[i + 1] = argv[i];
    }
    child_argv[argc + 1] = NULL;

    /* Like system(3): the child gets terminal signals, we wait and clean up */
    struct sigaction ignore, saved_int, saved_quit;
    memset(&ignore, 0, sizeof(ignore));
    ignore.sa_handler = SIG_IGN;
    sigemptyset(&ignore.sa_mask);
    sigaction(SIGINT, &ignore, &saved_int);
    sigaction(SIGQUIT, &ignore, &saved_quit);

    pid_t pid = fork();
    if (pid == 0) {
        sigaction(SIGINT, &saved_int, NULL);
        sigaction(SIGQUIT, &saved_quit, NULL);
        execv(interpreter_path, child_argv);
        fprintf(stderr, "Error launching %s: %s\\n", interpreter_path, strerror(errno));
        _exit(LAUNCH_FAILURE);
    }

    int status = 0;
    int failed = 0;

    if (pid == -1) {
        fprintf(stderr, "Error launching %s: %s\\n", interpreter_path, strerror(errno));
        failed = 1;
    } else {
        while (waitpid(pid, &status, 0) == -1) {
            if (errno != EINTR) {
                fprintf(stderr, "Error waiting for %s: %s\\n", interpreter_path, strerror(errno));
                failed = 1;
                break;
            }
        }
    }

    sigaction(SIGINT, &saved_int, NULL);
    sigaction(SIGQUIT, &saved_quit, NULL);
    free(child_argv);

    if (failed) {
        return LAUNCH_FAILURE;
    }

    if (WIFEXITED(status)) {
        return WEXITSTATUS(status);
    }

    if (WIFSIGNALED(status)) {
        return 128 + WTERMSIG(status);
    }

    return LAUNCH_FAILURE;
}

int main(int argc, char *argv[])
{
    int fd = create_temp_file();
    if (fd == -1) {
        return 1;
    }

    if (write_script(fd) != 0) {
        remove_temp_file();
        return 1;
    }

    int code = run_interpreter(argc, argv);
    remove_temp_file();

    return code;
}
''')


class WrapperGenerator:
    '''Builds the C launcher that re-creates and runs an embedded script'''

    def __init__(self, temp_prefix: Optional[str] = None, launch_failure_code: Optional[int] = None):
        config = get_config()
        self.temp_prefix = config.temp_prefix if temp_prefix is None else temp_prefix
        self.launch_failure_code = config.launch_failure_code if launch_failure_code is None else launch_failure_code

        code = self.launch_failure_code
        if isinstance(code, bool) or not isinstance(code, int) or not 0 <= code <= 255:
            raise GenerationFailure(f'launch_failure_code must be an integer in 0..255, got {code!r}')

    def generate(self, escaped: str, script_path: str, interpreter: str) -> WrapperSource:
        '''Substitute an already escaped script into the launcher template

        `script_path` only seeds the run-time temp file name; `interpreter`
        is embedded as-is and should be absolute.
        '''
        token = naming_token(script_path)

        text = LAUNCHER_TEMPLATE.substitute(
            script              = escaped,
            interpreter         = escape_text(interpreter),
            temp_prefix         = sanitize_name(self.temp_prefix),
            token               = token,
            launch_failure_code = self.launch_failure_code,
        )

        logger.debug(f'Generated launcher for {token}: {len(text)} chars, interpreter {interpreter}')

        return WrapperSource(text = text, token = token, interpreter = interpreter)

    def generate_from_bytes(self, source: bytes, script_path: str, interpreter: str) -> WrapperSource:
        return self.generate(escape_bytes(source), script_path, interpreter)

    @classmethod
    def write(cls, wrapper: WrapperSource, fp: TextIO):
        fp.write(wrapper.text)
        fp.flush()


__all__ = [
    'LAUNCHER_TEMPLATE',
    'WrapperGenerator',
]
