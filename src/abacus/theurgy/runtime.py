"""
Shared plumbing for CLI commands: settings, session bootstrap and error
reporting.
"""

from __future__ import annotations

import asyncio
import sys
from typing import Any, Awaitable, Callable, TypeVar

import click

from ..config import Settings
from ..counter.gateway import ContractGateway
from ..counter.session import SessionManager
from ..errors import CounterError
from ..pneuma.rpc import ProviderRpcError

T = TypeVar("T")


def settings_from(ctx: click.Context) -> Settings:
    return ctx.find_root().obj["settings"]


def run(coro_factory: Callable[[], Awaitable[T]]) -> T:
    """Run a coroutine, turning session errors into a non-zero exit."""
    try:
        return asyncio.run(_await(coro_factory))
    except CounterError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(exc.exit_code)
    except ProviderRpcError as exc:
        click.secho(f"ERROR: Wallet provider error: {exc}", fg="red")
        sys.exit(1)


async def _await(coro_factory: Callable[[], Awaitable[Any]]) -> Any:
    return await coro_factory()


async def connected_gateway(settings: Settings) -> ContractGateway:
    sessions = SessionManager.from_settings(settings)
    await sessions.connect()
    return ContractGateway(sessions)
