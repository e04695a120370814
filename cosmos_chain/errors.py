"""Exception classes for the Cosmos chain SDK"""

from typing import Optional


class SdkError(Exception):
    """Base SDK error"""

    pass


class InvalidConfigError(SdkError):
    """Invalid configuration error"""

    def __init__(self, message: str):
        super().__init__(f"Invalid configuration: {message}")


class EndpointInvalidError(SdkError):
    """Endpoint URL failed syntactic checks"""

    def __init__(self, endpoint: str, reason: str):
        self.endpoint = endpoint
        self.reason = reason
        super().__init__(f"Invalid endpoint {endpoint!r}: {reason}")


class ConnectFailedError(SdkError):
    """Transport refused or dropped the connection"""

    def __init__(self, endpoint: str, message: str):
        self.endpoint = endpoint
        super().__init__(f"Could not connect to {endpoint}: {message}")


class NetworkError(SdkError):
    """Network-related error"""

    def __init__(self, message: str):
        super().__init__(f"Network error: {message}")


class TransportError(NetworkError):
    """In-flight connection or stream failure"""

    def __init__(self, endpoint: str, message: str):
        self.endpoint = endpoint
        super().__init__(f"{endpoint}: {message}")


class RpcStatusError(SdkError):
    """Typed error status returned by the server"""

    def __init__(self, endpoint: str, code: str, message: str):
        self.endpoint = endpoint
        self.code = code
        self.message = message
        super().__init__(f"RPC error from {endpoint}: {code}: {message}")


class OperationCancelledError(SdkError):
    """The call was cancelled before the server answered"""

    def __init__(self, endpoint: str, message: str = ""):
        self.endpoint = endpoint
        super().__init__(f"Call to {endpoint} cancelled {message}".rstrip())


class DecodeError(SdkError):
    """Wire data did not decode into the expected message"""

    def __init__(self, message: str):
        super().__init__(f"Decode error: {message}")


class EmptyResultError(SdkError):
    """The server replied successfully but a required field is absent"""

    def __init__(self, message: str):
        super().__init__(f"Empty result: {message}")


class InvalidInputError(SdkError):
    """User-supplied value failed validation"""

    def __init__(self, message: str):
        super().__init__(f"Invalid input: {message}")


class SigningFailedError(SdkError):
    """The signer refused to sign"""

    def __init__(self, message: str):
        super().__init__(f"Signing failed: {message}")


class TransactionFailedError(SdkError):
    """Transaction failed error"""

    def __init__(self, message: str, tx_hash: Optional[str] = None, result=None):
        self.tx_hash = tx_hash
        self.result = result
        if tx_hash:
            message = f"{message} (tx {tx_hash})"
        super().__init__(f"Transaction failed: {message}")


class CheckTxRejectedError(TransactionFailedError):
    """Node rejected the transaction during mempool admission"""

    def __init__(self, code: int, log: str, tx_hash: Optional[str] = None, result=None):
        self.code = code
        self.log = log
        super().__init__(f"rejected by CheckTx with code {code}: {log}", tx_hash, result)


class DeliverTxRejectedError(TransactionFailedError):
    """Transaction was included in a block but failed on-chain"""

    def __init__(self, code: int, log: str, tx_hash: Optional[str] = None, result=None):
        self.code = code
        self.log = log
        super().__init__(f"rejected by DeliverTx with code {code}: {log}", tx_hash, result)


class TxTimeoutError(SdkError):
    """
    No final result within the wait window.

    Not a failure: the transaction may still be included. Query it by hash
    before retrying.
    """

    def __init__(self, tx_hash: str, message: str = "timed out waiting for inclusion"):
        self.tx_hash = tx_hash
        super().__init__(f"Transaction {tx_hash}: {message}")


class UnauthorizedError(SdkError):
    """No usable authz grant exists for the requested action"""

    def __init__(self, message: str):
        super().__init__(f"Unauthorized: {message}")


class RegistryError(NetworkError):
    """Chain registry lookup failed"""

    def __init__(self, message: str):
        super().__init__(f"chain registry: {message}")
