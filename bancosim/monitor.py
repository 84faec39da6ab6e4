"""Watches a transactions file and raises alerts on runs of operations."""

from __future__ import annotations

import argparse
import os
import re
import sys
import time
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable

WITHDRAWAL = "Retiro"
TRANSFER = "Transferencia"
FIFO_PATH = "fifo_bancoMonitor"
CHECK_INTERVAL = 60.0

_LINE = re.compile(r"\[[^\]]+\]\s*(\S+)(?:\s*en\s*cuenta\s*([+-]?\d+))?")

_ALERT_TEXT = {
    WITHDRAWAL: "ALERTA: Retiros consecutivos en cuenta {account} excede el límite de {threshold} \n",
    TRANSFER: "ALERTA: Transferencias consecutivas en cuenta {account} excede el límite de {threshold} \n",
}


@dataclass(frozen=True)
class Alert:
    """A run of consecutive operations on one account that reached a threshold."""

    kind: str
    account: int
    threshold: int

    @property
    def message(self) -> str:
        return _ALERT_TEXT[self.kind].format(account=self.account, threshold=self.threshold)


def parse_transaction_line(line: str) -> tuple[str | None, int | None]:
    """Parse ``[timestamp] <operation> en cuenta <n>:``.

    Returns the operation word and the account number; either is None when
    that part of the line could not be read.
    """
    match = _LINE.match(line)
    if match is None:
        return None, None
    kind, account = match.groups()
    return kind, int(account) if account is not None else None


@dataclass
class TransactionMonitor:
    """Counts consecutive withdrawals and transfers on the same account.

    The counters and the last account seen persist between scans; a line
    that cannot be read fully keeps the values of the previous line.
    """

    withdrawal_threshold: int
    transfer_threshold: int
    counts: dict[str, int] = field(default_factory=lambda: {WITHDRAWAL: 0, TRANSFER: 0})
    current_account: int = 0
    _kind: str | None = None
    _account: int = 0

    def _threshold(self, kind: str) -> int:
        return self.withdrawal_threshold if kind == WITHDRAWAL else self.transfer_threshold

    def _observe(self, kind: str | None, account: int) -> Alert | None:
        if kind not in self.counts:
            return None
        if self.current_account == 0:
            self.current_account = account
            return None
        if self.current_account != account:
            self.counts[kind] = 1
            self.current_account = account
            return None
        self.counts[kind] += 1
        threshold = self._threshold(kind)
        if self.counts[kind] >= threshold:
            return Alert(kind, account, threshold)
        return None

    def scan(self, lines: Iterable[str]) -> list[Alert]:
        """Feed transaction lines through the counters; return the alerts raised."""
        alerts = []
        for line in lines:
            kind, account = parse_transaction_line(line)
            if kind is not None:
                self._kind = kind
            if account is not None:
                self._account = account
            alert = self._observe(self._kind, self._account)
            if alert is not None:
                alerts.append(alert)
        return alerts

    def check_file(self, path: str | PathLike) -> list[Alert]:
        """Scan a transactions file; raises OSError if it cannot be opened."""
        with open(path, encoding="utf-8", errors="replace") as handle:
            return self.scan(handle)


def _send_alert(fifo: str | PathLike, alert: Alert) -> None:
    descriptor = os.open(fifo, os.O_WRONLY)
    try:
        os.write(descriptor, alert.message.encode("utf-8") + b"\0")
    finally:
        os.close(descriptor)


def main(argv: list[str] | None = None) -> int:
    """Check the transactions file periodically and send alerts to the bank."""
    parser = argparse.ArgumentParser(description="Monitor bank transactions.")
    parser.add_argument("withdrawal_threshold", type=int)
    parser.add_argument("transfer_threshold", type=int)
    parser.add_argument("transactions_file")
    parser.add_argument("--fifo", default=FIFO_PATH)
    parser.add_argument("--interval", type=float, default=CHECK_INTERVAL)
    parser.add_argument("--once", action="store_true", help="check a single time and stop")
    args = parser.parse_args(argv)

    monitor = TransactionMonitor(args.withdrawal_threshold, args.transfer_threshold)
    while True:
        try:
            alerts = monitor.check_file(args.transactions_file)
        except OSError as exc:
            print(f"Error al abrir el archivo de transacciones: {exc}", file=sys.stderr)
        else:
            print(f"Revisando transacciones en {args.transactions_file}:")
            for alert in alerts:
                try:
                    _send_alert(args.fifo, alert)
                except OSError as exc:
                    print(f"Error al abrir la tubería {args.fifo}: {exc}", file=sys.stderr)
                    return 1
        if args.once:
            return 0
        time.sleep(args.interval)


if __name__ == "__main__":
    sys.exit(main())