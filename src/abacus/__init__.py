__all__ = [
    # Session
    "SessionManager",
    "SessionState",
    "Connected",
    "Disconnected",
    "ContractGateway",
    "ContractDebugInfo",
    "CounterContract",
    "NetworkReconciler",
    # Configuration
    "Settings",
    "load_settings",
    "NetworkDescriptor",
    "NetworkTable",
    # Provider layer
    "HttpWalletProvider",
    "ChainProvider",
    "NetworkInfo",
    "ProviderErrorKind",
    "ProviderRpcError",
    "TransactionReceipt",
    "PendingTransaction",
    # Errors
    "CounterError",
    "WalletEnvironmentError",
    "SignerUnavailableError",
    "InvalidAddressError",
    "ContractNotDeployedError",
    "NotConnectedError",
    "StaleDeploymentError",
    "ReadFailedError",
    "TransactionFailedError",
    "TransactionFailureReason",
    "NetworkSwitchError",
]

from .catalog.models import NetworkDescriptor, NetworkTable
from .config import Settings, load_settings
from .counter import (
    Connected,
    ContractDebugInfo,
    ContractGateway,
    CounterContract,
    Disconnected,
    NetworkReconciler,
    SessionManager,
    SessionState,
)
from .errors import (
    ContractNotDeployedError,
    CounterError,
    InvalidAddressError,
    NetworkSwitchError,
    NotConnectedError,
    ReadFailedError,
    SignerUnavailableError,
    StaleDeploymentError,
    TransactionFailedError,
    TransactionFailureReason,
    WalletEnvironmentError,
)
from .pneuma.rpc import (
    ChainProvider,
    HttpWalletProvider,
    NetworkInfo,
    ProviderErrorKind,
    ProviderRpcError,
    TransactionReceipt,
)
from .pneuma.tx import PendingTransaction
