"""Accounts, the account table and the accounts file."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Iterator

MAX_ACCOUNTS = 100
TRANSACTIONS_DIR = "transacciones"
TRANSACTIONS_LOG = "transacciones.log"

_ACCOUNT_LINE = re.compile(
    r"\s*([+-]?\d+),([^,\n]+),\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?),\s*([+-]?\d+)"
)

_DEFAULT_ACCOUNTS = (
    (1001, "John Doe", 5000.00),
    (1002, "Jane Smith", 3000.00),
    (1003, "Alice Johnson", 7000.00),
)


@dataclass
class Account:
    """One bank account."""

    number: int
    holder: str
    balance: float = 0.0
    transactions: int = 0


@dataclass
class AccountTable:
    """The accounts known to the bank, in file order."""

    accounts: list[Account] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.accounts) > MAX_ACCOUNTS:
            raise ValueError(f"at most {MAX_ACCOUNTS} accounts are supported")

    def __len__(self) -> int:
        return len(self.accounts)

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts)

    def __getitem__(self, position: int) -> Account:
        return self.accounts[position]

    def find(self, number: int) -> Account | None:
        """Return the first account with this number, or None."""
        return next((acc for acc in self.accounts if acc.number == number), None)

    def index_of(self, number: int) -> int:
        """Return the position of the account; raises KeyError if absent."""
        for position, account in enumerate(self.accounts):
            if account.number == number:
                return position
        raise KeyError(number)

    def save(self, path: str | PathLike) -> None:
        """Write every account to ``path``, one line each."""
        with open(path, "w", encoding="utf-8") as handle:
            handle.writelines(_format_line(acc) for acc in self.accounts)


def _format_line(account: Account) -> str:
    return f"{account.number},{account.holder},{account.balance:.2f},{account.transactions}\n"


def parse_account_line(line: str) -> Account:
    """Parse ``number,holder,balance,transactions``; raises ValueError."""
    match = _ACCOUNT_LINE.match(line)
    if match is None:
        raise ValueError(f"malformed account line: {line!r}")
    number, holder, balance, transactions = match.groups()
    return Account(int(number), holder.strip(), float(balance), int(transactions))


def load_accounts(path: str | PathLike) -> AccountTable:
    """Read every non-blank line of the accounts file into a table."""
    with open(path, encoding="utf-8") as handle:
        accounts = [parse_account_line(line) for line in handle if line.strip()]
    return AccountTable(accounts)


def transactions_log_path(number: int, base_dir: str | PathLike = TRANSACTIONS_DIR) -> Path:
    """Path of the per-account transactions log."""
    return Path(base_dir) / str(number) / TRANSACTIONS_LOG


def _create_transactions_log(number: int, base_dir: str | PathLike) -> None:
    log_path = transactions_log_path(number, base_dir)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    log_path.write_text("", encoding="utf-8")


def init_accounts(
    path: str | PathLike, base_dir: str | PathLike = TRANSACTIONS_DIR
) -> list[Account]:
    """Fill an empty accounts file with the default accounts.

    Returns the accounts written, or an empty list when the file already
    held data.
    """
    with open(path, "a", encoding="utf-8") as handle:
        handle.seek(0, 2)
        if handle.tell() != 0:
            print("El archivo ya contiene cuentas. ")
            return []
        accounts = [Account(number, holder, balance) for number, holder, balance in _DEFAULT_ACCOUNTS]
        handle.writelines(_format_line(acc) for acc in accounts)

    for account in accounts:
        _create_transactions_log(account.number, base_dir)
    print(f"Cuentas inicializadas correctamente en {path}.")
    return accounts