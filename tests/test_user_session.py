import io
import re

import pytest

from bancosim.accounts import Account, AccountTable, load_accounts, transactions_log_path
from bancosim.user_session import (
    InsufficientFunds,
    InvalidAmount,
    UnknownAccount,
    UserSession,
    main,
    run_menu,
)

STAMP = r"\[\d{4}-\d\d-\d\d \d\d:\d\d:\d\d\]"


@pytest.fixture
def base_dir(tmp_path):
    base = tmp_path / "tx"
    for number in (1001, 1002):
        path = transactions_log_path(number, base)
        path.parent.mkdir(parents=True)
        path.write_text("", encoding="utf-8")
    return base


@pytest.fixture
def table():
    return AccountTable([Account(1001, "John Doe", 5000.0), Account(1002, "Jane Smith", 3000.0)])


@pytest.fixture
def session(table, base_dir, tmp_path):
    return UserSession(table, 0, tmp_path / "banco.log", base_dir)


def read_tx(base_dir, number):
    return transactions_log_path(number, base_dir).read_text(encoding="utf-8")


def test_deposit_updates_account_and_log(session, base_dir):
    new_balance = session.deposit(50)
    assert new_balance == pytest.approx(5000.0 + 50)
    assert session.account.transactions == 1
    assert re.fullmatch(STAMP + r" Deposito: \+50\.00\n", read_tx(base_dir, 1001))


def test_deposit_rejects_non_positive(session):
    with pytest.raises(InvalidAmount):
        session.deposit(0)
    with pytest.raises(InvalidAmount):
        session.deposit(-3)
    assert session.balance() == 5000.0


def test_withdraw_updates_account_and_log(session, base_dir):
    new_balance = session.withdraw(100)
    assert new_balance == pytest.approx(5000.0 - 100)
    assert re.fullmatch(STAMP + r" Retiro: -100\.00\n", read_tx(base_dir, 1001))


def test_withdraw_insufficient_funds_leaves_state(session, base_dir):
    with pytest.raises(InsufficientFunds):
        session.withdraw(5000.01)
    assert session.balance() == 5000.0
    assert session.account.transactions == 0
    assert read_tx(base_dir, 1001) == ""


def test_transfer_conserves_money(session, table, base_dir):
    total = sum(acc.balance for acc in table)
    session.transfer(1002, 250)
    assert sum(acc.balance for acc in table) == pytest.approx(total)
    assert table[1].transactions == 1
    assert re.fullmatch(STAMP + r" Transferencia a cuenta 1002: -250\.00\n", read_tx(base_dir, 1001))
    assert read_tx(base_dir, 1002) == ""


def test_transfer_unknown_destination(session):
    with pytest.raises(UnknownAccount):
        session.transfer(4242, 10)
    assert session.balance() == 5000.0


def test_transfer_insufficient_funds(session, table):
    with pytest.raises(InsufficientFunds):
        session.transfer(1002, 6000)
    assert table[1].balance == 3000.0


def test_login_and_logout_write_bank_log(session, tmp_path):
    assert session.login().number == 1001
    session.logout()
    lines = (tmp_path / "banco.log").read_text(encoding="utf-8").splitlines()
    assert re.fullmatch(STAMP + r" Inicio de sesión de cuenta: 1001", lines[0])
    assert re.fullmatch(STAMP + r" Cierre de sesión de cuenta: 1001", lines[1])


def test_run_menu_balance_and_exit(session):
    out = io.StringIO()
    assert run_menu(session, ["3\n", "5\n"], out) is True
    text = out.getvalue()
    assert "Bienvenido, John Doe (Cuenta: 1001)" in text
    assert "Saldo actual: 5000.00\n" in text
    assert "Cerrando la cuenta...\n" in text


def test_run_menu_invalid_inputs(session):
    out = io.StringIO()
    assert run_menu(session, ["abc\n", "9\n", "1\n", "-5\n", "2\n", "999999\n"], out) is False
    text = out.getvalue()
    assert "Opción inválida\n" in text
    assert "Opción no válida\n" in text
    assert "Cantidad inválida\n" in text
    assert "Fondos insuficientes\n" in text
    assert session.balance() == 5000.0


def test_run_menu_transfer(session, table):
    out = io.StringIO()
    run_menu(session, ["4", "1002", "100", "5"], out)
    assert f"Nuevo saldo: {session.balance():.2f}" in out.getvalue()
    assert table[1].balance == pytest.approx(3000.0 + 100)


def test_main_persists_changes(tmp_path, base_dir, table, monkeypatch):
    accounts_file = tmp_path / "cuentas.txt"
    table.save(accounts_file)
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n25\n5\n"))
    code = main([str(tmp_path / "banco.log"), str(accounts_file), "0", "--base-dir", str(base_dir)])
    assert code == 0
    reloaded = load_accounts(accounts_file)
    assert reloaded[0].balance == pytest.approx(5000.0 + 25)
    assert reloaded[0].transactions == 1


def test_main_rejects_bad_position(tmp_path, table):
    accounts_file = tmp_path / "cuentas.txt"
    table.save(accounts_file)
    assert main([str(tmp_path / "banco.log"), str(accounts_file), "7"]) == 1