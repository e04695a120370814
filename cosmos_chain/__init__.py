"""
Cosmos chain SDK for Python

Async client for Cosmos SDK chains over gRPC and the consensus RPC.

- Queries: auth, authz, bank, distribution, evidence, feegrant, gov, mint,
  params, slashing, staking, tendermint and tx
- Transactions: module messages, direct-mode signing, broadcast and
  wait-for-inclusion
"""

from .client import ChainClient
from .config import ChainConfig
from .pool import SubClientPool
from .transport import TendermintRpc, open_channel, parse_grpc_endpoint, parse_rpc_endpoint
from .tx import FeeInfo, SignedTx, UnsignedTx, sign_tx, verify_signed_tx
from .keys import Ed25519Signer, PublicKey, Secp256k1Signer, Signer, SignerContext
from .address import decode_address, encode_address, validate_address
from .airdrop import (
    Payment,
    PaymentsFile,
    airdrop_gas,
    multi_send_from_payments,
    read_payments_toml,
    write_payments_toml,
)
from .registry import ChainRegistry, fetch_chain_config, fetch_chain_info
from .types import (
    AccountsPage,
    BaseAccount,
    BroadcastMode,
    BroadcastResult,
    Coin,
    CoinsPage,
    PageRequest,
    TxInfo,
)
from .errors import (
    SdkError,
    InvalidConfigError,
    EndpointInvalidError,
    ConnectFailedError,
    NetworkError,
    TransportError,
    RpcStatusError,
    OperationCancelledError,
    DecodeError,
    EmptyResultError,
    InvalidInputError,
    SigningFailedError,
    TransactionFailedError,
    CheckTxRejectedError,
    DeliverTxRejectedError,
    TxTimeoutError,
    UnauthorizedError,
    RegistryError,
)

__version__ = "0.3.0"
__all__ = [
    # Core classes
    "ChainClient",
    "ChainConfig",
    "SubClientPool",
    "TendermintRpc",
    "open_channel",
    "parse_grpc_endpoint",
    "parse_rpc_endpoint",
    # Transactions
    "UnsignedTx",
    "SignedTx",
    "FeeInfo",
    "sign_tx",
    "verify_signed_tx",
    # Keys and addresses
    "PublicKey",
    "Signer",
    "SignerContext",
    "Secp256k1Signer",
    "Ed25519Signer",
    "decode_address",
    "encode_address",
    "validate_address",
    # Airdrops and registry
    "Payment",
    "PaymentsFile",
    "airdrop_gas",
    "multi_send_from_payments",
    "read_payments_toml",
    "write_payments_toml",
    "ChainRegistry",
    "fetch_chain_config",
    "fetch_chain_info",
    # Types
    "AccountsPage",
    "BaseAccount",
    "BroadcastMode",
    "BroadcastResult",
    "Coin",
    "CoinsPage",
    "PageRequest",
    "TxInfo",
    # Errors
    "SdkError",
    "InvalidConfigError",
    "EndpointInvalidError",
    "ConnectFailedError",
    "NetworkError",
    "TransportError",
    "RpcStatusError",
    "OperationCancelledError",
    "DecodeError",
    "EmptyResultError",
    "InvalidInputError",
    "SigningFailedError",
    "TransactionFailedError",
    "CheckTxRejectedError",
    "DeliverTxRejectedError",
    "TxTimeoutError",
    "UnauthorizedError",
    "RegistryError",
]
