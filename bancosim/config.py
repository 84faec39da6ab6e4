"""Bank configuration read from a ``KEY=value`` text file."""

from __future__ import annotations

import re
from dataclasses import dataclass
from os import PathLike

_INT_VALUE = re.compile(r"\s*([+-]?\d+)")


@dataclass
class Config:
    """Settings shared by the bank, the user sessions and the monitor."""

    withdrawal_limit: int = 0
    transfer_limit: int = 0
    withdrawal_threshold: int = 0
    transfer_threshold: int = 0
    num_threads: int = 0
    accounts_file: str = ""
    log_file: str = ""
    transactions_file: str = ""
    user_path: str = ""
    create_user_path: str = ""
    monitor_path: str = ""
    max_users: int = 0


# Checked in this order; the first key contained in a line decides
# which setting the line is for.
_KEYS = (
    ("LIMITE_RETIRO", "withdrawal_limit", int),
    ("LIMITE_TRANSFERENCIA", "transfer_limit", int),
    ("UMBRAL_RETIROS", "withdrawal_threshold", int),
    ("UMBRAL_TRANSFERENCIAS", "transfer_threshold", int),
    ("NUM_HILOS", "num_threads", int),
    ("ARCHIVO_CUENTAS", "accounts_file", str),
    ("ARCHIVO_LOG", "log_file", str),
    ("ARCHIVO_TRANSACCIONES", "transactions_file", str),
    ("RUTA_USUARIO", "user_path", str),
    ("RUTA_CREARUSUARIO", "create_user_path", str),
    ("RUTA_MONITOR", "monitor_path", str),
    ("MAX_USUARIOS", "max_users", int),
)


def _parse_value(text: str, kind: type) -> int | str | None:
    if kind is int:
        match = _INT_VALUE.match(text)
        return int(match.group(1)) if match else None
    tokens = text.split(maxsplit=1)
    return tokens[0] if tokens else None


def read_config(path: str | PathLike) -> Config:
    """Read a configuration file; raises OSError if it cannot be opened."""
    config = Config()
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            if line.startswith("#") or len(line) < 3:
                continue
            for key, attribute, kind in _KEYS:
                if key not in line:
                    continue
                prefix = key + "="
                if line.startswith(prefix):
                    value = _parse_value(line[len(prefix):], kind)
                    if value is not None:
                        setattr(config, attribute, value)
                break
    return config