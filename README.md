# bancosim

A small terminal bank. Accounts live in a plain text file, one per line
(`number,holder,balance,transactions`). Every account has its own
transaction log at `transacciones/<number>/transacciones.log`, and a
shared log file records logins, logouts and account creation. The
program's prompts and messages are in Spanish.

## Installing

```
pip install .
```

Running the tests:

```
pip install ".[test]"
pytest
```

## Commands

| Command                | What it does |
|------------------------|--------------|
| `bancosim`             | The bank front desk. Asks for an account number; for a known number it starts a user session, for an unknown one it starts account creation. Entering `1` quits. |
| `bancosim-user`        | A user session on one account: deposit, withdraw, check the balance, transfer, log out. |
| `bancosim-create-user` | Asks for the holder's name and creates an account with a zero balance and an empty transaction log. |
| `bancosim-monitor`     | Reads a transactions file and sends alerts for consecutive withdrawals or transfers on the same account. |

### `bancosim`

```
bancosim [--config config.txt] [--fifo fifo_bancoMonitor]
```

Reads the configuration file (default `config.txt`), fills the accounts
file with three starter accounts (1001, 1002, 1003) if it is empty, loads
the accounts and creates the named pipe given by `--fifo` if it does not
exist yet. It then reads account numbers from standard input.

Each program it starts is run as
`gnome-terminal -- bash -c "<command>"`, so a new terminal window opens:

* known account: `RUTA_USUARIO <log file> <accounts file> <position>; exit`
* unknown account: `RUTA_CREARUSUARIO <number> <log file> --accounts-file <accounts file>`

The accounts file is read again before each number is looked up, so
accounts created meanwhile are found.

### `bancosim-user`

```
bancosim-user LOG ACCOUNTS_FILE POSITION [--base-dir transacciones]
```

Opens a session on the account at `POSITION` (counted from 0) in the
accounts file, writes a login line to `LOG` and shows the menu:

1. Depositar — add an amount to the balance
2. Retirar — take an amount from the balance, if it covers it
3. Consultar saldo — show the balance
4. Transferencia — move an amount to another account number
5. Salir — write a logout line to `LOG` and leave

Every deposit, withdrawal and outgoing transfer is appended to the
account's transaction log under `--base-dir`. When the session ends (by
option 5 or end of input) the whole account table is written back to the
accounts file.

### `bancosim-create-user`

```
bancosim-create-user NUMBER LOG [--accounts-file cuentas.txt] [--base-dir transacciones]
```

Prompts for the holder's name (only its first word is used), appends the
new account to the accounts file, creates
`<base-dir>/<NUMBER>/transacciones.log` and writes creation lines to `LOG`.

### `bancosim-monitor`

```
bancosim-monitor WITHDRAWAL_THRESHOLD TRANSFER_THRESHOLD TRANSACTIONS_FILE
                 [--fifo fifo_bancoMonitor] [--interval 60] [--once]
```

Reads `TRANSACTIONS_FILE` every `--interval` seconds (or once, with
`--once`). It expects lines of the form

```
[2024-01-01 10:00:00] Retiro en cuenta 1001: ...
[2024-01-01 10:01:00] Transferencia en cuenta 1001: ...
```

When the count of consecutive withdrawals (or transfers) on the same
account reaches its threshold, an alert such as
`ALERTA: Retiros consecutivos en cuenta 1001 excede el límite de 3`
is written to the named pipe, followed by a NUL byte. Opening the pipe for
writing waits until some process opens it for reading.

## Configuration

`bancosim` reads these keys; lines starting with `#` are ignored:

```
LIMITE_RETIRO=5000
LIMITE_TRANSFERENCIA=10000
UMBRAL_RETIROS=3
UMBRAL_TRANSFERENCIAS=3
NUM_HILOS=4
ARCHIVO_CUENTAS=cuentas.txt
ARCHIVO_LOG=banco.log
ARCHIVO_TRANSACCIONES=transacciones.log
RUTA_USUARIO=bancosim-user
RUTA_CREARUSUARIO=bancosim-create-user
RUTA_MONITOR=bancosim-monitor
MAX_USUARIOS=100
```

They are read into `bancosim.config.Config` by `read_config(path)`.

## Using it as a library

```python
from bancosim.accounts import load_accounts
from bancosim.user_session import UserSession, InsufficientFunds

table = load_accounts("cuentas.txt")
session = UserSession(table, 0, "banco.log")
session.login()
session.deposit(250.0)
try:
    session.withdraw(1_000_000.0)
except InsufficientFunds:
    print("not enough money")
session.transfer(1002, 100.0)
print(session.balance())
session.logout()
table.save("cuentas.txt")
```

Amounts that are zero or negative raise `InvalidAmount`; transfers to an
account number that is not in the table raise `UnknownAccount`. The
account's transaction log directory must already exist
(`init_accounts` and `create_user` create it).

Other entry points:

* `bancosim.accounts`: `Account`, `AccountTable` (`find`, `index_of`,
  `save`), `parse_account_line`, `load_accounts`, `transactions_log_path`,
  `init_accounts`.
* `bancosim.create_user.create_user(number, holder, log_path, accounts_file, base_dir)`.
* `bancosim.monitor`: `TransactionMonitor(withdrawal_threshold, transfer_threshold)`
  with `scan(lines)` and `check_file(path)` returning a list of `Alert`;
  `parse_transaction_line(line)`.
* `bancosim.bank.Bank(config, table, launcher)` with `find_account`,
  `session_command`, `create_user_command`, `handle` and `run`;
  `ensure_fifo(path)`.
* `bancosim.logbook`: `timestamp()` and `append_log(message, path)`.

## What it does not do

* The front desk does not start the monitor and does not read alerts from
  the named pipe; it only creates the pipe. Run `bancosim-monitor` and a
  reader of the pipe yourself.
* The monitor reads one transactions file in the
  `<operation> en cuenta <number>:` form; the per-account logs written by
  user sessions are in a different form and are not what it reads.
* `LIMITE_RETIRO`, `LIMITE_TRANSFERENCIA`, `NUM_HILOS` and `MAX_USUARIOS`
  are read but not enforced.
* New windows are opened with `gnome-terminal` only.
* Concurrent sessions on the same accounts file are not coordinated: each
  session writes its own copy of the table back when it ends.