import pytest

from bancosim.config import Config, read_config


def _write(tmp_path, text):
    path = tmp_path / "config.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_reads_all_settings(tmp_path):
    path = _write(
        tmp_path,
        "LIMITE_RETIRO=5000\n"
        "LIMITE_TRANSFERENCIA=10000\n"
        "UMBRAL_RETIROS=3\n"
        "UMBRAL_TRANSFERENCIAS=5\n"
        "NUM_HILOS=4\n"
        "ARCHIVO_CUENTAS=cuentas.txt\n"
        "ARCHIVO_LOG=banco.log\n"
        "ARCHIVO_TRANSACCIONES=transacciones.log\n"
        "RUTA_USUARIO=./usuario\n"
        "RUTA_CREARUSUARIO=./crearUsuario\n"
        "RUTA_MONITOR=./monitor\n"
        "MAX_USUARIOS=50\n",
    )
    config = read_config(path)
    assert config == Config(
        withdrawal_limit=5000,
        transfer_limit=10000,
        withdrawal_threshold=3,
        transfer_threshold=5,
        num_threads=4,
        accounts_file="cuentas.txt",
        log_file="banco.log",
        transactions_file="transacciones.log",
        user_path="./usuario",
        create_user_path="./crearUsuario",
        monitor_path="./monitor",
        max_users=50,
    )


def test_comments_and_short_lines_are_skipped(tmp_path):
    path = _write(tmp_path, "#LIMITE_RETIRO=9\n\nx\nLIMITE_RETIRO=7\n")
    assert read_config(path).withdrawal_limit == 7


def test_missing_settings_keep_defaults(tmp_path):
    path = _write(tmp_path, "NUM_HILOS=2\n")
    config = read_config(path)
    assert config.num_threads == 2
    assert config.accounts_file == Config().accounts_file
    assert config.max_users == Config().max_users


def test_key_not_at_line_start_is_ignored(tmp_path):
    path = _write(tmp_path, "X LIMITE_RETIRO=5\n")
    assert read_config(path).withdrawal_limit == Config().withdrawal_limit


def test_string_value_stops_at_whitespace(tmp_path):
    path = _write(tmp_path, "ARCHIVO_LOG=banco.log  extra words\n")
    assert read_config(path).log_file == "banco.log"


def test_create_user_path_does_not_set_user_path(tmp_path):
    path = _write(tmp_path, "RUTA_CREARUSUARIO=./crear\n")
    config = read_config(path)
    assert config.create_user_path == "./crear"
    assert config.user_path == Config().user_path


def test_non_numeric_value_leaves_default(tmp_path):
    path = _write(tmp_path, "MAX_USUARIOS=abc\n")
    assert read_config(path).max_users == Config().max_users


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_config(tmp_path / "absent.txt")