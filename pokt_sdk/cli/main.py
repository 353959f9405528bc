"""
pokt_sdk.cli.main
=================

`pokt-sdk`: key derivation and transaction building from the shell.

Examples
--------
    $ pokt-sdk version
    $ pokt-sdk pubkey 1f8c...6cc3
    $ pokt-sdk address b243...6cc3
    $ pokt-sdk send --private-key 1f8c... --to 5f80... --amount 1000000
    $ pokt-sdk --rpc https://node:8081 --chain-id testnet send ... --broadcast

Configuration
-------------
- RPC URL      : `--rpc` or env `POKT_RPC_URL` (default: http://127.0.0.1:8081)
- Chain ID     : `--chain-id` or env `POKT_CHAIN_ID` (default: mainnet)
- HTTP Timeout : `--timeout` or env `POKT_TIMEOUT` seconds (default: 10.0)
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Optional

import typer

from ..address import get_address_from_public_key, public_key_from_private_hex
from ..config import SDKConfig
from ..provider import JsonRpcProvider
from ..tx.builder import TransactionBuilder
from ..version import __version__ as SDK_VERSION
from ..wallet.signer import KeyManager

app = typer.Typer(
    name="pokt-sdk",
    help="Pocket signing SDK CLI: derive keys and addresses, build and broadcast transactions.",
    no_args_is_help=True,
    add_completion=False,
)

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    config: SDKConfig


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(obj, indent=2, ensure_ascii=False))


@app.callback()
def _root(
    ctx: typer.Context,
    rpc: Optional[str] = typer.Option(None, "--rpc", help="Pocket node RPC URL."),
    chain_id: Optional[str] = typer.Option(None, "--chain-id", help="mainnet, testnet or localnet."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="HTTP timeout in seconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr."),
) -> None:
    """Resolve the effective configuration (flags override POKT_* env)."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    overrides = {
        k: v
        for k, v in (("rpc_url", rpc), ("chain_id", chain_id), ("request_timeout", timeout))
        if v is not None
    }
    ctx.obj = Ctx(config=SDKConfig.with_overrides(SDKConfig.from_env(), **overrides))


@app.command("version")
def version() -> None:
    """Print the SDK version."""
    typer.echo(f"pokt-sdk {SDK_VERSION}")


@app.command("pubkey")
def pubkey(private_key: str = typer.Argument(..., help="64-byte private key (hex).")) -> None:
    """Print the public key embedded in a private key."""
    typer.echo(public_key_from_private_hex(private_key))


@app.command("address")
def address(public_key: str = typer.Argument(..., help="32-byte public key (hex).")) -> None:
    """Print the account address of a public key."""
    typer.echo(get_address_from_public_key(public_key))


@app.command("send")
def send(
    ctx: typer.Context,
    private_key: str = typer.Option(..., "--private-key", envvar="POKT_PRIVATE_KEY", help="Signer private key (hex)."),
    to: str = typer.Option(..., "--to", help="Recipient address (hex)."),
    amount: str = typer.Option(..., "--amount", help="Amount in uPOKT."),
    fee: Optional[str] = typer.Option(None, "--fee", help="Fee in uPOKT (default from config)."),
    memo: str = typer.Option("", "--memo"),
    broadcast: bool = typer.Option(False, "--broadcast", help="Submit to the node instead of printing."),
) -> None:
    """Build (and optionally broadcast) a MsgSend transaction."""
    cfg: SDKConfig = ctx.obj.config

    async def _go() -> Any:
        async with JsonRpcProvider(
            cfg.rpc_url, cfg.dispatchers, timeout=cfg.request_timeout, retry_attempts=cfg.retry_attempts
        ) as provider:
            builder = TransactionBuilder(
                provider,
                KeyManager.from_private_key(private_key),
                cfg.chain_id,
                activation=cfg.activation(),
            )
            msg = builder.send(to_address=to, amount=amount)
            raw = await builder.create_transaction(msg, fee=fee or cfg.default_fee, memo=memo)
            if not broadcast:
                return raw.to_json()
            resp = await builder.submit_raw_transaction(raw)
            return {"txhash": resp.tx_hash, "logs": resp.logs}

    _print_json(asyncio.run(_go()))


def main(argv: Optional[list[str]] = None) -> int:
    """
    Run the CLI. Returns an integer exit code.
    """
    try:
        app(prog_name="pokt-sdk", args=argv)
    except SystemExit as e:
        # usage errors are rendered by the parser and exit with 2
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except Exception as e:
        typer.echo(f"error: {e}", err=True)
        return 1
    return 0


def run(argv: Optional[list[str]] = None) -> int:
    """Console-script entry point."""
    return main(argv)


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
