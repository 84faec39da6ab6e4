"""The bank front desk: logs users in or sends them to account creation."""

from __future__ import annotations

import argparse
import os
import re
import shlex
import subprocess
import sys
from os import PathLike
from pathlib import Path
from typing import Callable, Iterable, Iterator, TextIO

from bancosim.accounts import AccountTable, init_accounts, load_accounts
from bancosim.config import Config, read_config
from bancosim.logbook import append_log

FIFO_PATH = "fifo_bancoMonitor"
DEFAULT_CONFIG = "config.txt"
EXIT_OPTION = 1
TERMINAL = ("gnome-terminal", "--", "bash", "-c")

BANNER = (
    "+-----------------------------+\n"
    "|    Bienvenido al Banco      |\n"
    "|  salir(1)                   |\n"
    "+-----------------------------+\n"
    "Introduce tu número de cuenta:\n"
)

_INT_PREFIX = re.compile(r"[+-]?\d+")

Launcher = Callable[[list], object]


def _spawn(argv: list[str]) -> subprocess.Popen:
    return subprocess.Popen(argv)


class Bank:
    """Dispatches account numbers to user sessions or to account creation.

    ``launcher`` receives the full command line of each program to start.
    """

    def __init__(
        self,
        config: Config,
        table: AccountTable | None = None,
        launcher: Launcher | None = None,
    ) -> None:
        self.config = config
        self.table = table if table is not None else AccountTable()
        self.launcher = launcher if launcher is not None else _spawn

    def _refresh(self) -> None:
        path = Path(self.config.accounts_file) if self.config.accounts_file else None
        if path is not None and path.is_file():
            self.table = load_accounts(path)

    def find_account(self, number: int) -> int | None:
        """Return the position of the account with this number, or None."""
        try:
            return self.table.index_of(number)
        except KeyError:
            return None

    def session_command(self, position: int) -> list[str]:
        """Command line that opens a user session on the account at ``position``."""
        shell = " ".join(
            shlex.quote(part)
            for part in (
                self.config.user_path,
                self.config.log_file,
                self.config.accounts_file,
                str(position),
            )
        )
        return [*TERMINAL, f"{shell}; exit"]

    def create_user_command(self, number: int) -> list[str]:
        """Command line that creates a new account with this number."""
        shell = " ".join(
            shlex.quote(part)
            for part in (
                self.config.create_user_path,
                str(number),
                self.config.log_file,
                "--accounts-file",
                self.config.accounts_file,
            )
        )
        return [*TERMINAL, shell]

    def _launch(self, argv: list[str], failure: str) -> None:
        try:
            self.launcher(argv)
        except OSError:
            if self.config.log_file:
                append_log(failure, self.config.log_file)
            raise

    def handle(self, number: int) -> list[str]:
        """Start a session for a known account or account creation otherwise.

        Returns the command line that was started.
        """
        self._refresh()
        position = self.find_account(number)
        if position is not None:
            argv = self.session_command(position)
            self._launch(argv, "Error al crear un usuario")
        else:
            argv = self.create_user_command(number)
            self._launch(argv, "Error al iniciar el proceso de creación de usuario")
        return argv

    def run(self, lines: Iterable[str], out: TextIO) -> bool:
        """Run the bank menu on ``lines``.

        Returns True when the user chose to leave, False when input ran out.
        """
        source: Iterator[str] = iter(lines)
        while True:
            out.write(BANNER)
            text = next((line.strip() for line in source if line.strip()), None)
            if text is None:
                return False
            match = _INT_PREFIX.match(text)
            if match is None:
                out.write("Número de cuenta inválido\n")
                continue
            number = int(match.group(0))
            if number == EXIT_OPTION:
                return True
            self._refresh()
            if self.find_account(number) is not None:
                out.write("Nuevo usuario conectado. Iniciando sesión...\n")
            self.handle(number)


def ensure_fifo(path: str | PathLike) -> Path:
    """Create the named pipe at ``path`` unless it already exists."""
    try:
        os.mkfifo(path, 0o666)
    except FileExistsError:
        pass
    return Path(path)


def main(argv: list[str] | None = None) -> int:
    """Read the configuration, prepare the accounts and run the bank menu."""
    parser = argparse.ArgumentParser(description="Bank front desk.")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="configuration file")
    parser.add_argument("--fifo", default=FIFO_PATH, help="named pipe for monitor alerts")
    args = parser.parse_args(argv)

    try:
        config = read_config(args.config)
    except OSError as exc:
        print(f"Error al abrir {args.config}: {exc}", file=sys.stderr)
        return 1

    try:
        init_accounts(config.accounts_file)
        table = load_accounts(config.accounts_file)
    except (OSError, ValueError) as exc:
        print(f"Error al leer las cuentas: {exc}", file=sys.stderr)
        return 1

    try:
        ensure_fifo(args.fifo)
    except OSError:
        if config.log_file:
            append_log("Error al crear la tubería", config.log_file)
        return 1

    bank = Bank(config, table)
    try:
        bank.run(sys.stdin, sys.stdout)
    except OSError as exc:
        print(f"Error al iniciar un proceso: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())