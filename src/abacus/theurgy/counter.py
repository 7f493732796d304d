"""
Theurgy Counter - read and mutate the on-chain counter.

Each mutating command waits for the transaction to be mined before
printing the new value.
"""

from __future__ import annotations

import click

from .runtime import connected_gateway, run, settings_from


@click.command()
@click.pass_context
def read(ctx: click.Context) -> None:
    """Show the current counter value."""
    settings = settings_from(ctx)

    async def _read() -> int:
        gateway = await connected_gateway(settings)
        return await gateway.read_counter()

    value = run(_read)
    click.echo(f"Counter: {value}")


def _mutation(name: str, action: str, help_text: str) -> click.Command:
    @click.command(name=name, help=help_text)
    @click.pass_context
    def command(ctx: click.Context) -> None:
        settings = settings_from(ctx)

        async def _send() -> tuple[str, int, int]:
            gateway = await connected_gateway(settings)
            receipt = await getattr(gateway, action)()
            value = await gateway.read_counter()
            return receipt.tx_hash, receipt.block_number, value

        click.echo("Waiting for wallet confirmation...")
        tx_hash, block, value = run(_send)
        click.secho("SUCCESS: Transaction confirmed!", fg="green")
        click.echo(f"  TX: {tx_hash}")
        click.echo(f"  Block: {block}")
        click.echo(f"  Counter: {value}")

    return command


increment = _mutation("increment", "increment_counter", "Increase the counter by one.")
decrement = _mutation("decrement", "decrement_counter", "Decrease the counter by one.")
reset = _mutation("reset", "reset_counter", "Reset the counter to zero.")
