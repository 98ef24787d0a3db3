"""
Subprocess Runner Adapter

Architectural Intent:
- Infrastructure adapter implementing CommandRunnerPort
- Runs work units with subprocess, relaying merged stdout/stderr line by line
- Output is relayed as raw bytes; a tool printing non-UTF-8 paths is passed through unchanged
- Drops diagnostic lines matching configured substrings; they never affect the exit status
"""

import logging
import os
import shlex
import subprocess
import sys
from typing import BinaryIO, Mapping, Optional, Sequence

from venvhooks.domain.ports.command_runner_port import CommandRunnerPort

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


class SubprocessCommandRunner(CommandRunnerPort):
    def __init__(self, stream: Optional[BinaryIO] = None):
        self._stream = stream

    @property
    def stream(self) -> BinaryIO:
        if self._stream is not None:
            return self._stream
        # resolved lazily so pytest's capsys sees the output
        sys.stdout.flush()
        return sys.stdout.buffer

    def run(
        self,
        argv: Sequence[str],
        env: Optional[Mapping[str, str]] = None,
        cwd: Optional[str] = None,
        output_filters: Sequence[str] = (),
        quiet: bool = False,
    ) -> int:
        command = shlex.join(argv)
        logger.info("Running %s", command)

        full_env = dict(os.environ)
        if env:
            full_env.update(env)
        filters = [os.fsencode(f) for f in output_filters]

        try:
            proc = subprocess.Popen(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                env=full_env,
                cwd=cwd,
            )
        except FileNotFoundError:
            logger.error("Command not found: %s", argv[0])
            return COMMAND_NOT_FOUND

        stream = None if quiet else self.stream
        with proc:
            for line in proc.stdout:
                if stream is None:
                    continue
                if any(f in line for f in filters):
                    logger.debug(
                        "Filtered output: %s",
                        line.rstrip().decode(errors="replace"),
                    )
                    continue
                stream.write(line)
            if stream is not None:
                stream.flush()
            returncode = proc.wait()

        if returncode < 0:
            # killed by signal, report it the way a shell would
            returncode = 128 - returncode
        logger.info(
            "%s exited with status %d",
            command,
            returncode,
            extra={"command": command, "exit_code": returncode},
        )
        return returncode
