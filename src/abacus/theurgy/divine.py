"""
Theurgy Divine - inspect the session without changing anything.

- owner:   contract owner
- whoami:  active wallet account
- network: chain the wallet is on, and whether it is the required one
- debug:   bytecode snapshot at the configured address (works without a
           valid session, to explain connection failures)
"""

from __future__ import annotations

import click

from ..counter.gateway import ContractDebugInfo, ContractGateway
from ..counter.session import SessionManager
from ..pneuma.rpc import NetworkInfo
from .runtime import connected_gateway, run, settings_from


@click.command()
@click.pass_context
def owner(ctx: click.Context) -> None:
    """Show the contract owner."""
    settings = settings_from(ctx)

    async def _owner() -> str:
        gateway = await connected_gateway(settings)
        return await gateway.get_owner()

    click.echo(f"Owner: {run(_owner)}")


@click.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show the active wallet account."""
    settings = settings_from(ctx)

    async def _whoami() -> str:
        gateway = await connected_gateway(settings)
        return await gateway.get_wallet_address()

    click.echo(f"Address: {run(_whoami)}")


@click.command()
@click.pass_context
def network(ctx: click.Context) -> None:
    """Show the wallet's active network."""
    settings = settings_from(ctx)

    async def _network() -> NetworkInfo:
        gateway = await connected_gateway(settings)
        return await gateway.get_network_info()

    info = run(_network)
    known = settings.networks.by_chain_id(info.chain_id)
    click.echo(f"  Network:  {known.name if known else info.name}")
    click.echo(f"  Chain ID: {info.chain_id}")
    if info.chain_id != settings.network.chain_id:
        click.secho(
            f"  Required: {settings.network.name} ({settings.network.chain_id}). "
            f"Run 'abacus switch-network'.",
            fg="yellow",
        )


@click.command()
@click.pass_context
def debug(ctx: click.Context) -> None:
    """Show what the chain holds at the configured contract address."""
    settings = settings_from(ctx)

    async def _debug() -> ContractDebugInfo:
        gateway = ContractGateway(SessionManager.from_settings(settings))
        return await gateway.get_contract_debug_info()

    info = run(_debug)
    code = info.raw_bytecode_hex
    preview = code if len(code) <= 66 else code[:66] + "..."

    click.echo("=== Abacus Debug ===")
    click.echo("")
    click.echo(f"  Contract:  {info.contract_address}")
    click.echo(f"  Network:   {info.network_info.name} ({info.network_info.chain_id})")
    click.echo(f"  Bytecode:  {preview}")
    if info.is_deployed:
        click.secho("  Deployed:  yes", fg="green")
    else:
        click.secho("  Deployed:  no", fg="red")
        click.secho(
            "  Wrong network or wrong COUNTER_ADDRESS. "
            f"Expected network: {settings.network.name}.",
            fg="yellow",
        )
