"""Database client launcher — builds the client command line and runs it."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field

from connect_db.config import ConnectionMode, Settings
from connect_db.errors import LaunchError
from connect_db.url import mask_password, parse_connection_url

logger = logging.getLogger(__name__)


@dataclass
class ClientCommand:
    argv: list[str]
    env: dict[str, str] = field(default_factory=dict, repr=False)

    @property
    def executable(self) -> str:
        return self.argv[0]

    def display(self) -> str:
        """Command line safe to log: URLs masked, env omitted."""
        return " ".join(mask_password(arg) for arg in self.argv)


def build_command(url: str, settings: Settings) -> ClientCommand:
    """Turn a resolved connection URL into the client invocation.

    In ``url`` mode the URL is the client's sole positional argument. In
    ``params`` mode it is split into ``-h/-p/-U/-d`` flags and the password
    travels in ``PGPASSWORD``.
    """
    if settings.connection_mode is ConnectionMode.PARAMS:
        params = parse_connection_url(url)
        logger.info(
            "Connecting to database '%s' at %s:%s as %s",
            params.database,
            params.host,
            params.port,
            params.username,
        )
        return ClientCommand(
            argv=[
                settings.client,
                "-h", params.host,
                "-p", params.port,
                "-U", params.username,
                "-d", params.database,
            ],
            env={"PGPASSWORD": params.password},
        )

    logger.info("Connection string: %s", mask_password(url))
    return ClientCommand(argv=[settings.client, url])


def _exit_status(returncode: int) -> int:
    # subprocess reports death-by-signal as -signum; shells report 128 + signum
    if returncode < 0:
        return 128 - returncode
    return returncode


@contextmanager
def _sigint_deferred_to_child():
    """Leave Ctrl-C to the client; the launcher just keeps waiting for it.

    The terminal delivers SIGINT to the whole foreground process group. The
    launcher's own copy goes to a no-op handler, so the wait continues and
    the client decides what an interrupt means. A Python-level handler (not
    ``SIG_IGN``) is used so the child still gets the default disposition
    after exec.
    """
    try:
        previous = signal.signal(signal.SIGINT, lambda signum, frame: None)
    except ValueError:
        # not the main thread; leave signal handling alone
        yield
        return
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


def launch(command: ClientCommand, *, replace_process: bool = False) -> int:
    """Run the client attached to the current terminal and return its exit status.

    stdin, stdout and stderr are inherited. There is no timeout. With
    ``replace_process`` the launcher execs into the client and only returns by
    raising.

    Raises:
        LaunchError: the client executable is missing or cannot be executed.
    """
    env = {**os.environ, **command.env} if command.env else None
    logger.debug("Running %s", command.display())

    if replace_process:
        sys.stdout.flush()
        sys.stderr.flush()
        try:
            os.execvpe(command.executable, command.argv, env if env is not None else os.environ)
        except OSError as exc:
            raise LaunchError(f"failed to exec {command.executable}: {exc}") from exc

    try:
        with _sigint_deferred_to_child():
            completed = subprocess.run(command.argv, env=env, check=False)
    except OSError as exc:
        raise LaunchError(f"failed to start {command.executable}: {exc}") from exc

    status = _exit_status(completed.returncode)
    logger.debug("%s exited with status %d", command.executable, status)
    return status
