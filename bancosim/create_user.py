"""Creation of a new bank account."""

from __future__ import annotations

import argparse
import sys
from os import PathLike

from bancosim.accounts import TRANSACTIONS_DIR, Account, transactions_log_path
from bancosim.logbook import append_log, timestamp

DEFAULT_ACCOUNTS_FILE = "cuentas.txt"


def create_user(
    number: int,
    holder: str,
    log_path: str | PathLike,
    accounts_file: str | PathLike = DEFAULT_ACCOUNTS_FILE,
    base_dir: str | PathLike = TRANSACTIONS_DIR,
) -> Account:
    """Add an account with zero balance and an empty transactions log."""
    holder = holder.strip()
    if not holder or "," in holder or "\n" in holder:
        raise ValueError(f"invalid account holder: {holder!r}")

    append_log(f"[{timestamp()}] Usuario con número de cuenta {number} creado.\n", log_path)

    account = Account(number, holder)
    with open(accounts_file, "a", encoding="utf-8") as handle:
        handle.write(
            f"{account.number}, {account.holder}, {account.balance:.2f}, {account.transactions}\n"
        )

    log_file = transactions_log_path(number, base_dir)
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.write_text("", encoding="utf-8")

    append_log(
        f"[{timestamp()}] Cierre de sesión de creación de cuenta: {number}\n\n", log_path
    )
    return account


def main(argv: list[str] | None = None) -> int:
    """Prompt for the holder's name and create the account."""
    parser = argparse.ArgumentParser(description="Create a new bank account.")
    parser.add_argument("number", type=int, help="account number")
    parser.add_argument("log", help="bank log file")
    parser.add_argument("--accounts-file", default=DEFAULT_ACCOUNTS_FILE)
    parser.add_argument("--base-dir", default=TRANSACTIONS_DIR)
    args = parser.parse_args(argv)

    print("+-----------------------------+")
    print("| Menu de creación de usuario |")
    print("+-----------------------------+")
    try:
        words = input("Ingrese Titular: ").split()
    except EOFError:
        words = []
    holder = words[0] if words else ""

    print("+------------------------------------------------------+")
    print("|   Su saldo y numero de transacciones empezara en 0.  |")
    try:
        create_user(args.number, holder, args.log, args.accounts_file, args.base_dir)
    except (OSError, ValueError) as exc:
        print(f"Error al crear el usuario: {exc}", file=sys.stderr)
        return 1
    print("|   Usuario guardado con éxito.                        |")
    print("+------------------------------------------------------+")
    return 0


if __name__ == "__main__":
    sys.exit(main())