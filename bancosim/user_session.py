"""A logged-in user's operations on an account and the user menu."""

from __future__ import annotations

import argparse
import re
import sys
import threading
from os import PathLike
from typing import Iterable, Iterator, TextIO

from bancosim.accounts import (
    TRANSACTIONS_DIR,
    Account,
    AccountTable,
    load_accounts,
    transactions_log_path,
)
from bancosim.logbook import append_log, timestamp

_TRANSACTIONS_LOCK = threading.Lock()

_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

MENU = (
    "+--------------------------------------+\n"
    "|             MENÚ USUARIO             |\n"
    "|             1. Depositar             |\n"
    "|             2. Retirar               |\n"
    "|             3. Consultar saldo       |\n"
    "|             4. Transferencia         |\n"
    "|             5. Salir                 |\n"
    "+--------------------------------------+\n"
    "\nSeleccione una opción: "
)


class InvalidAmount(ValueError):
    """The amount is not a positive number."""


class InsufficientFunds(Exception):
    """The account balance does not cover the amount."""


class UnknownAccount(LookupError):
    """No account has the requested number."""


class UserSession:
    """Operations of one user on the account at ``position`` in ``table``."""

    def __init__(
        self,
        table: AccountTable,
        position: int,
        log_path: str | PathLike,
        base_dir: str | PathLike = TRANSACTIONS_DIR,
    ) -> None:
        self.table = table
        self.position = position
        self.log_path = log_path
        self.base_dir = base_dir

    @property
    def account(self) -> Account:
        return self.table[self.position]

    def _record(self, account: Account, text: str) -> None:
        with _TRANSACTIONS_LOCK:
            append_log(
                f"[{timestamp()}] {text}\n", transactions_log_path(account.number, self.base_dir)
            )

    @staticmethod
    def _check_amount(amount: float) -> None:
        if not amount > 0:
            raise InvalidAmount(f"invalid amount: {amount}")

    def login(self) -> Account:
        """Log the start of the session and return the account."""
        append_log(
            f"[{timestamp()}] Inicio de sesión de cuenta: {self.account.number}\n", self.log_path
        )
        return self.account

    def logout(self) -> None:
        """Log the end of the session."""
        append_log(
            f"[{timestamp()}] Cierre de sesión de cuenta: {self.account.number}\n", self.log_path
        )

    def deposit(self, amount: float) -> float:
        """Add ``amount`` to the balance; return the new balance."""
        self._check_amount(amount)
        account = self.account
        account.balance += amount
        account.transactions += 1
        self._record(account, f"Deposito: +{amount:.2f}")
        return account.balance

    def withdraw(self, amount: float) -> float:
        """Take ``amount`` from the balance; return the new balance."""
        self._check_amount(amount)
        account = self.account
        if account.balance < amount:
            raise InsufficientFunds(f"balance {account.balance:.2f} below {amount:.2f}")
        account.balance -= amount
        account.transactions += 1
        self._record(account, f"Retiro: -{amount:.2f}")
        return account.balance

    def balance(self) -> float:
        """Return the current balance."""
        return self.account.balance

    def transfer(self, destination: int, amount: float) -> float:
        """Move ``amount`` to account ``destination``; return the new balance."""
        try:
            target = self.table[self.table.index_of(destination)]
        except KeyError:
            raise UnknownAccount(destination) from None
        self._check_amount(amount)
        source = self.account
        if source.balance < amount:
            raise InsufficientFunds(f"balance {source.balance:.2f} below {amount:.2f}")
        source.balance -= amount
        source.transactions += 1
        target.balance += amount
        target.transactions += 1
        self._record(source, f"Transferencia a cuenta {destination}: -{amount:.2f}")
        return source.balance


def _next_input(lines: Iterator[str]) -> str | None:
    for line in lines:
        text = line.strip()
        if text:
            return text
    return None


def _parse(pattern: re.Pattern[str], text: str | None, kind: type) -> int | float | None:
    if text is None:
        return None
    match = pattern.match(text)
    return kind(match.group(0)) if match else None


def _read_amount(lines: Iterator[str], out: TextIO, prompt: str) -> float | None:
    out.write(prompt)
    return _parse(_FLOAT_PREFIX, _next_input(lines), float)


def run_menu(session: UserSession, lines: Iterable[str], out: TextIO) -> bool:
    """Run the user menu on ``lines``.

    Returns True when the user chose to leave, False when input ran out.
    """
    lines = iter(lines)
    account = session.account
    out.write(f"Bienvenido, {account.holder} (Cuenta: {account.number})\n")
    while True:
        out.write(MENU)
        text = _next_input(lines)
        if text is None:
            return False
        option = _parse(_INT_PREFIX, text, int)
        if option is None:
            out.write("Opción inválida\n")
            continue
        try:
            if option == 1:
                amount = _read_amount(lines, out, "Ingrese la cantidad que quiere depositar: ")
                if amount is None:
                    raise InvalidAmount("unreadable amount")
                balance = session.deposit(amount)
                out.write(f"Deposito realizado con éxito. Nuevo saldo: {balance:.2f}\n")
            elif option == 2:
                amount = _read_amount(lines, out, "Ingrese la cantidad a retirar: ")
                if amount is None:
                    raise InvalidAmount("unreadable amount")
                balance = session.withdraw(amount)
                out.write(f"Retiro realizado con éxito. Nuevo saldo: {balance:.2f}\n")
            elif option == 3:
                out.write(f"Saldo actual: {session.balance():.2f}\n")
            elif option == 4:
                out.write("Ingrese el número de cuenta destino: ")
                destination = _parse(_INT_PREFIX, _next_input(lines), int)
                if destination is None:
                    out.write("Número de cuenta inválido\n")
                    continue
                amount = _read_amount(lines, out, "Ingrese la cantidad a transferir: ")
                if amount is None:
                    raise InvalidAmount("unreadable amount")
                balance = session.transfer(destination, amount)
                out.write(f"Transferencia realizada con éxito. Nuevo saldo: {balance:.2f}\n")
            elif option == 5:
                out.write("Cerrando la cuenta...\n")
                session.logout()
                return True
            else:
                out.write("Opción no válida\n")
        except InvalidAmount:
            out.write("Cantidad inválida\n")
        except InsufficientFunds:
            out.write("Fondos insuficientes\n")
        except UnknownAccount:
            out.write("Cuenta destino no encontrada\n")


def main(argv: list[str] | None = None) -> int:
    """Open a session on an account and run the user menu on standard input."""
    parser = argparse.ArgumentParser(description="Bank user session.")
    parser.add_argument("log", help="bank log file")
    parser.add_argument("accounts_file", help="accounts file")
    parser.add_argument("position", type=int, help="position of the account in the file")
    parser.add_argument("--base-dir", default=TRANSACTIONS_DIR)
    args = parser.parse_args(argv)

    try:
        table = load_accounts(args.accounts_file)
    except (OSError, ValueError) as exc:
        print(f"Error al leer las cuentas: {exc}", file=sys.stderr)
        return 1
    if not 0 <= args.position < len(table):
        print(f"Posición de cuenta inválida: {args.position}", file=sys.stderr)
        return 1

    session = UserSession(table, args.position, args.log, args.base_dir)
    session.login()
    try:
        run_menu(session, sys.stdin, sys.stdout)
    finally:
        table.save(args.accounts_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())