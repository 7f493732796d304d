"""
Counter - session, gateway and network reconciliation for the Counter
contract.

Typical use::

    sessions = SessionManager.from_settings(load_settings())
    await sessions.connect()
    gateway = ContractGateway(sessions)
    await gateway.increment_counter()
    value = await gateway.read_counter()

Writes on one gateway are serialized; issuing writes for the same account
from several gateways at once can still collide on nonces.
"""

from .contract import CounterContract
from .gateway import ContractDebugInfo, ContractGateway
from .network import NetworkReconciler
from .session import Connected, Disconnected, SessionManager, SessionState

__all__ = [
    "Connected",
    "ContractDebugInfo",
    "ContractGateway",
    "CounterContract",
    "Disconnected",
    "NetworkReconciler",
    "SessionManager",
    "SessionState",
]
