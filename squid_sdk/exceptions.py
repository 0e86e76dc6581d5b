"""
Exceptions for the Squid SDK.
"""
from typing import Optional, Union


class SquidError(Exception):
    """Base exception for all Squid SDK errors."""
    pass


class NotInitializedError(SquidError):
    """Raised when an operation is attempted before Squid.init() has completed."""

    def __init__(self, message: str = "Squid SDK must be initialized! Please call the Squid.init method"):
        super().__init__(message)


class NotFoundError(SquidError):
    """Raised when a chain or token is not present in the loaded metadata."""

    def __init__(
        self,
        message: str,
        chain_id: Optional[Union[str, int]] = None,
        token_address: Optional[str] = None
    ):
        self.chain_id = chain_id
        self.token_address = token_address
        super().__init__(message)


class MissingTransactionRequestError(SquidError):
    """Raised when a route carries no executable transaction request."""

    def __init__(self, message: str = "transactionRequest param not found in route object"):
        super().__init__(message)


class UnsupportedChainFamilyError(SquidError):
    """Raised when no handler supports the resolved chain family for an operation."""

    def __init__(self, chain_type: str, operation: Optional[str] = None):
        self.chain_type = chain_type
        self.operation = operation
        if operation:
            message = f"Method {operation} not supported given chain type {chain_type}"
        else:
            message = f"Method not supported given chain type {chain_type}"
        super().__init__(message)


class InsufficientBalanceError(SquidError):
    """Raised when an account holds less than the amount a route requires."""

    def __init__(
        self,
        account: str,
        chain_id: Union[str, int],
        amount: Optional[int] = None,
        balance: Optional[int] = None
    ):
        self.account = account
        self.chain_id = chain_id
        self.amount = amount
        self.balance = balance
        super().__init__(f"Insufficient funds for account: {account} on chain {chain_id}")


class UpstreamServiceError(SquidError):
    """Raised when the routing service answers with a non-success status.

    The message is the service's own error text, passed through verbatim.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, request_id: Optional[str] = None):
        self.status_code = status_code
        self.request_id = request_id
        super().__init__(message)


class TransportError(SquidError):
    """Raised when the routing service cannot be reached."""
    pass


class TransactionError(SquidError):
    """Raised when signing, sending or confirming a transaction fails."""
    pass


class UnsupportedMessageTypeError(SquidError):
    """Raised when a Cosmos transaction request carries an unknown message type."""

    def __init__(self, type_url: str):
        self.type_url = type_url
        super().__init__(f"Cosmos message {type_url} not supported")
