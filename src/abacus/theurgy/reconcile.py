"""
Theurgy Reconcile - move the wallet onto the contract's network.
"""

from __future__ import annotations

import click

from ..counter.network import NetworkReconciler
from ..counter.session import SessionManager
from .runtime import run, settings_from


@click.command("switch-network")
@click.pass_context
def switch_network(ctx: click.Context) -> None:
    """Ask the wallet to switch to the required network.

    The wallet may prompt for approval; this waits until it is answered.
    """
    settings = settings_from(ctx)
    required = settings.network

    async def _switch() -> bool:
        provider = SessionManager.from_settings(settings).open_provider()
        reconciler = NetworkReconciler(provider.wallet, required)
        if not await reconciler.needs_switch():
            return False
        await reconciler.reconcile()
        return True

    click.echo(f"Target: {required.name} ({required.chain_id_hex})")
    if run(_switch):
        click.secho(f"SUCCESS: Wallet switched to {required.name}", fg="green")
    else:
        click.echo(f"Wallet is already on {required.name}.")
