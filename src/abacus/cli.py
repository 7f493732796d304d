"""
Abacus CLI

Command-line interface for the on-chain Counter contract.

Commands:
  connect         - Validate wallet, network and contract deployment
  read            - Show the counter value
  increment       - Increase the counter (waits for confirmation)
  decrement       - Decrease the counter (waits for confirmation)
  reset           - Reset the counter to zero (waits for confirmation)
  owner           - Show the contract owner
  whoami          - Show the active wallet account
  network         - Show the wallet's active network
  debug           - Inspect bytecode at the configured address
  switch-network  - Move the wallet onto the required network
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import click

from .config import load_settings


# ============ Constants ============

VERSION = "0.1.0"


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="abacus")
@click.option(
    "--wallet-url",
    envvar="ABACUS_WALLET_URL",
    default=None,
    help="Wallet provider JSON-RPC endpoint",
)
@click.option(
    "--contract",
    envvar="COUNTER_ADDRESS",
    default=None,
    help="Counter contract address",
)
@click.option(
    "--network",
    "network_key",
    envvar="ABACUS_NETWORK",
    default=None,
    help="Required network name from the network table",
)
@click.option("--verbose", "-v", is_flag=True, help="Log provider traffic")
@click.pass_context
def cli(
    ctx: click.Context,
    wallet_url: Optional[str],
    contract: Optional[str],
    network_key: Optional[str],
    verbose: bool,
) -> None:
    """Abacus - drive the on-chain Counter through your wallet."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except KeyError as exc:
        raise click.ClickException(str(exc.args[0])) from exc

    overrides = {}
    if wallet_url:
        overrides["wallet_url"] = wallet_url
    if contract:
        overrides["contract_address"] = contract
    if network_key:
        try:
            overrides["network"] = settings.networks.get(network_key)
        except KeyError as exc:
            raise click.BadParameter(str(exc.args[0]), param_hint="--network") from exc
    ctx.obj = {"settings": dataclasses.replace(settings, **overrides)}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .theurgy.counter import decrement, increment, read, reset
from .theurgy.divine import debug, network, owner, whoami
from .theurgy.reconcile import switch_network
from .theurgy.runtime import connected_gateway, run

cli.add_command(read)
cli.add_command(increment)
cli.add_command(decrement)
cli.add_command(reset)
cli.add_command(owner)
cli.add_command(whoami)
cli.add_command(network)
cli.add_command(debug)
cli.add_command(switch_network)


# ============ Connect ============


@cli.command()
@click.pass_context
def connect(ctx: click.Context) -> None:
    """Validate wallet, network and contract deployment."""
    settings = ctx.obj["settings"]

    async def _connect() -> tuple[str, str, int]:
        gateway = await connected_gateway(settings)
        address = await gateway.get_wallet_address()
        info = await gateway.get_network_info()
        return address, info.name, info.chain_id

    address, name, chain_id = run(_connect)
    click.secho("Connected.", fg="green")
    click.echo(f"  Account:  {address}")
    click.echo(f"  Network:  {name} ({chain_id})")
    click.echo(f"  Contract: {settings.contract_address}")
