import json

from typer.testing import CliRunner

from conftest import ADDR_B, ADDRESS, PRIVATE_KEY, PUBLIC_KEY, SIGNER_PRIVATE_KEY
from pokt_sdk.address import get_address_from_public_key
from pokt_sdk.cli.main import app, main
from pokt_sdk.version import __version__

runner = CliRunner()


def test_version(clean_env):
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert result.stdout.strip() == f"pokt-sdk {__version__}"


def test_pubkey_and_address(clean_env):
    result = runner.invoke(app, ["pubkey", PRIVATE_KEY])
    assert result.exit_code == 0
    assert result.stdout.strip() == PUBLIC_KEY

    result = runner.invoke(app, ["address", PUBLIC_KEY])
    assert result.exit_code == 0
    assert result.stdout.strip() == ADDRESS


def test_offline_send_prints_raw_request(clean_env):
    result = runner.invoke(
        app,
        ["--chain-id", "testnet", "send", "--to", ADDR_B, "--amount", "1000000", "--memo", "cli"],
        env={"POKT_PRIVATE_KEY": SIGNER_PRIVATE_KEY},
    )
    assert result.exit_code == 0, result.output
    out = json.loads(result.stdout)
    assert out["address"] == get_address_from_public_key(SIGNER_PRIVATE_KEY[64:])
    assert b"cli" in bytes.fromhex(out["raw_hex_bytes"])


def test_invalid_chain_exits_nonzero(clean_env):
    result = runner.invoke(app, ["--chain-id", "devnet", "version"])
    assert result.exit_code != 0


def test_main_reports_sdk_errors(clean_env, capsys):
    assert main(["--chain-id", "devnet", "version"]) == 1
    assert "devnet" in capsys.readouterr().err


def test_main_success(clean_env, capsys):
    assert main(["version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_main_usage_error_exits_with_usage_code(clean_env, capsys):
    assert main(["send", "--amount", "1"]) == 2
    assert "private-key" in capsys.readouterr().err


def test_main_reports_unexpected_errors(clean_env, capsys):
    assert main(["pubkey", "zz"]) == 1
    assert capsys.readouterr().err.startswith("error: ")
