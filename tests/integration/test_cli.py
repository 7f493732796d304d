"""
CLI integration tests using Click's test runner.

The wallet provider is replaced by the in-memory FakeWallet, so every
command runs end-to-end without network access.
"""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from abacus.cli import cli
from abacus.errors import ContractNotDeployedError, InvalidAddressError, WalletEnvironmentError
from abacus.pneuma.rpc import ProviderRpcError

from conftest import ACCOUNT, MAINNET, OWNER, FakeWallet

CONFIG_KEYS = ("ABACUS_WALLET_URL", "COUNTER_ADDRESS", "ABACUS_NETWORK", "PRIVATE_KEY")


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def fake_wallet(tmp_path: Path):
    """Route provider discovery to a FakeWallet with a clean environment."""
    wallet = FakeWallet(counter=3)
    env = {k: v for k, v in os.environ.items() if k not in CONFIG_KEYS}
    with patch.dict(os.environ, env, clear=True):
        with patch("abacus.config.ABACUS_ENV", tmp_path / ".env"):
            with patch(
                "abacus.counter.session.discover_injected_provider",
                lambda url: wallet,
            ):
                yield wallet


class TestVersionAndHelp:
    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_help_lists_commands(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        for command in ("connect", "read", "increment", "switch-network", "debug"):
            assert command in result.output


class TestCounterCommands:
    def test_connect(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["connect"])
        assert result.exit_code == 0, result.output
        assert "Connected." in result.output
        assert ACCOUNT in result.output
        assert "sepolia (11155111)" in result.output

    def test_read(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["read"])
        assert result.exit_code == 0, result.output
        assert "Counter: 3" in result.output

    @pytest.mark.parametrize(
        "command,expected",
        [("increment", 4), ("decrement", 2), ("reset", 0)],
    )
    def test_mutations(self, runner: CliRunner, fake_wallet: FakeWallet, command: str, expected: int) -> None:
        result = runner.invoke(cli, [command])
        assert result.exit_code == 0, result.output
        assert "Transaction confirmed" in result.output
        assert f"Counter: {expected}" in result.output
        assert fake_wallet.counter == expected

    def test_rejected_transaction(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        fake_wallet.errors["eth_sendTransaction"] = ProviderRpcError(4001, "User denied transaction signature.")
        result = runner.invoke(cli, ["increment"])
        assert result.exit_code == 9
        assert "user_rejected" in result.output

    def test_owner_and_whoami(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        assert OWNER in runner.invoke(cli, ["owner"]).output
        assert ACCOUNT in runner.invoke(cli, ["whoami"]).output


class TestFailures:
    def test_no_wallet(self, runner: CliRunner, tmp_path: Path) -> None:
        env = {k: v for k, v in os.environ.items() if k not in CONFIG_KEYS}
        with patch.dict(os.environ, env, clear=True):
            with patch("abacus.config.ABACUS_ENV", tmp_path / ".env"):
                result = runner.invoke(cli, ["read"])
        assert result.exit_code == WalletEnvironmentError.exit_code
        assert "ABACUS_WALLET_URL" in result.output

    def test_invalid_contract_option(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["--contract", "0x1234", "read"])
        assert result.exit_code == InvalidAddressError.exit_code
        assert fake_wallet.requests == []

    def test_wrong_network(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        fake_wallet.chain_id = MAINNET
        result = runner.invoke(cli, ["read"])
        assert result.exit_code == ContractNotDeployedError.exit_code

    def test_unknown_network_option(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["--network", "goerli", "read"])
        assert result.exit_code != 0
        assert "goerli" in result.output


class TestDiagnostics:
    def test_network_warns_on_wrong_chain(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["connect"])
        assert result.exit_code == 0

        fake_wallet.chain_id = MAINNET
        fake_wallet.deployed_chains.add(MAINNET)
        result = runner.invoke(cli, ["network"])
        assert result.exit_code == 0, result.output
        assert "Chain ID: 1" in result.output
        assert "switch-network" in result.output

    def test_network_uses_table_name(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["network"])
        assert result.exit_code == 0, result.output
        assert "Network:  Sepolia Test Network" in result.output
        assert "Required:" not in result.output

    def test_debug_when_not_deployed(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        fake_wallet.chain_id = MAINNET
        result = runner.invoke(cli, ["debug"])
        assert result.exit_code == 0, result.output
        assert "Deployed:  no" in result.output
        assert "Sepolia Test Network" in result.output

    def test_debug_when_deployed(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["debug"])
        assert result.exit_code == 0, result.output
        assert "Deployed:  yes" in result.output

    def test_switch_network_registers_chain(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        fake_wallet.chain_id = MAINNET
        fake_wallet.known_chains = {MAINNET}

        result = runner.invoke(cli, ["switch-network"])

        assert result.exit_code == 0, result.output
        assert "switched to Sepolia Test Network" in result.output
        assert "wallet_addEthereumChain" in fake_wallet.methods

    def test_switch_network_noop(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        result = runner.invoke(cli, ["switch-network"])
        assert result.exit_code == 0
        assert "already on" in result.output
        assert "wallet_switchEthereumChain" not in fake_wallet.methods

    def test_switch_network_rejected(self, runner: CliRunner, fake_wallet: FakeWallet) -> None:
        fake_wallet.chain_id = MAINNET
        fake_wallet.errors["wallet_switchEthereumChain"] = ProviderRpcError(4001, "User rejected")
        result = runner.invoke(cli, ["switch-network"])
        assert result.exit_code == 10
