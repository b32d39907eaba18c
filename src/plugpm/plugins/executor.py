"""Package-manager runner: spawn npm, mirror its output live, capture it for the result."""

from __future__ import annotations

import io
import os
import shutil
import subprocess
import sys
import threading
from pathlib import Path
from typing import IO, Sequence

from .models import Operation, ProcessResult

CHUNK_SIZE = 64 * 1024


class PluginManagerError(Exception):
    """Base error for plugin management."""


class PackageManagerNotFound(PluginManagerError):
    """The package-manager executable could not be started."""

    def __init__(self, command: str, cause: BaseException | None = None):
        self.command = command
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"{command} is not installed or cannot be started{detail}")


def build_args(
    operation: Operation | str,
    specifiers: Sequence[str],
    registry: str = "",
    proxy: str = "",
) -> list[str]:
    """``<op> <spec>... --color=always --save [--registry=..] [--proxy=..]``."""
    args = [str(Operation(operation)), *specifiers, "--color=always", "--save"]
    if registry:
        args.append(f"--registry={registry}")
    if proxy:
        args.append(f"--proxy={proxy}")
    return args


def _default_sink(stream: IO | None) -> IO | None:
    if stream is None:
        return None
    return getattr(stream, "buffer", stream)


def _forward(sink: IO | None, chunk: bytes) -> None:
    if sink is None:
        return
    try:
        if isinstance(sink, io.TextIOBase):
            sink.write(chunk.decode("utf-8", errors="replace"))
        else:
            sink.write(chunk)
        sink.flush()
    except (OSError, ValueError):
        # parent stream closed; the child output is still captured
        return


class NpmRunner:
    """Run one package-manager command per call.

    Both child streams are drained by their own thread. Every chunk goes to the
    matching pass-through sink and to a shared buffer in arrival order, so the
    captured output interleaves stdout and stderr the way the OS delivered them.
    There is no timeout: a hung child blocks ``run`` until it exits.
    """

    def __init__(
        self,
        command: str | Sequence[str] = "npm",
        registry: str = "",
        stdout: IO | None = None,
        stderr: IO | None = None,
        passthrough: bool = True,
    ):
        self.command = [command] if isinstance(command, str) else list(command)
        if not self.command:
            raise ValueError("package-manager command must not be empty")
        self.registry = registry
        self.stdout = stdout
        self.stderr = stderr
        self.passthrough = passthrough

    def argv(
        self, operation: Operation | str, specifiers: Sequence[str], proxy: str = ""
    ) -> list[str]:
        exe, *prefix = self.command
        exe = shutil.which(exe) or exe
        return [exe, *prefix, *build_args(operation, specifiers, self.registry, proxy)]

    def _sinks(self) -> tuple[IO | None, IO | None]:
        if not self.passthrough:
            return None, None
        out = self.stdout if self.stdout is not None else _default_sink(sys.stdout)
        err = self.stderr if self.stderr is not None else _default_sink(sys.stderr)
        return out, err

    def run(
        self,
        operation: Operation | str,
        specifiers: Sequence[str],
        cwd: str | Path,
        proxy: str = "",
        env: dict[str, str] | None = None,
    ) -> ProcessResult:
        """Run the command and wait for it. Raises PackageManagerNotFound on launch failure."""
        argv = self.argv(operation, specifiers, proxy)
        child_env = {**os.environ, **{k: str(v) for k, v in (env or {}).items()}}
        try:
            proc = subprocess.Popen(
                argv,
                cwd=str(cwd),
                env=child_env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise PackageManagerNotFound(self.command[0], e) from e

        chunks: list[bytes] = []
        lock = threading.Lock()
        out_sink, err_sink = self._sinks()

        def _drain(pipe: IO[bytes], sink: IO | None) -> None:
            with pipe:
                while chunk := pipe.read1(CHUNK_SIZE):
                    with lock:
                        chunks.append(chunk)
                    _forward(sink, chunk)

        readers = [
            threading.Thread(target=_drain, args=(proc.stdout, out_sink), daemon=True),
            threading.Thread(target=_drain, args=(proc.stderr, err_sink), daemon=True),
        ]
        for t in readers:
            t.start()
        for t in readers:
            t.join()
        exit_code = proc.wait()

        output = b"".join(chunks).decode("utf-8", errors="replace")
        return ProcessResult(exit_code=exit_code, output=output)
