"""
Infrastructure layer for the Solana DEX client

Provides:
- RpcClient: JSON-RPC wrapper with endpoint fallback
- Signer: Transaction signing abstraction (local keypair)
- TxBuilder: Transaction assembly, sending and ordered submission
- CorrelationContext: Correlation IDs for log tracing
"""

from .rpc import RpcClient, RpcClientConfig
from .solana_signer import (
    Signer,
    LocalSigner,
    create_signer,
)
from .tx_builder import TxBuilder, TxBuilderConfig
from .correlation import (
    CorrelationContext,
    generate_correlation_id,
    get_correlation_id,
    log_with_correlation,
)

__all__ = [
    "RpcClient",
    "RpcClientConfig",
    "Signer",
    "LocalSigner",
    "create_signer",
    "TxBuilder",
    "TxBuilderConfig",
    "CorrelationContext",
    "generate_correlation_id",
    "get_correlation_id",
    "log_with_correlation",
]
