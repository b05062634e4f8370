"""
Custom exceptions for daily sales accounting.
"""


class AccountingError(Exception):
    """Base exception for accounting-related errors."""

    code = "accounting_error"
    retryable = False


class AlreadyFinalized(AccountingError):
    """Raised when a finalized daily sales record would be written again."""

    code = "already_finalized"

    def __init__(self, store_location_id, accounting_date, message=None):
        self.store_location_id = store_location_id
        self.accounting_date = accounting_date
        if message is None:
            message = (
                f"Daily sales for store {store_location_id} on {accounting_date} "
                f"are already finalized"
            )
        super().__init__(message)


class NotCalculated(AccountingError):
    """Raised when finalizing a day that has never been calculated."""

    code = "not_calculated"

    def __init__(self, store_location_id, accounting_date, message=None):
        self.store_location_id = store_location_id
        self.accounting_date = accounting_date
        if message is None:
            message = (
                f"Daily sales for store {store_location_id} on {accounting_date} "
                f"have not been calculated"
            )
        super().__init__(message)


class TransientAccountingError(AccountingError):
    """A failure that may succeed when the same call is repeated later."""

    code = "transient_accounting_error"
    retryable = True


class OrderFetchTimeout(TransientAccountingError):
    """Raised when reading the orders of a period exceeds its deadline."""

    code = "order_fetch_timeout"

    def __init__(self, store_location_id, accounting_date, timeout, message=None):
        self.store_location_id = store_location_id
        self.accounting_date = accounting_date
        self.timeout = timeout
        if message is None:
            message = (
                f"Fetching orders for store {store_location_id} on {accounting_date} "
                f"exceeded {timeout} seconds"
            )
        super().__init__(message)


class OrderStoreUnavailable(TransientAccountingError):
    """Raised when the order database cannot be reached."""

    code = "order_store_unavailable"

    def __init__(self, store_location_id, accounting_date, message=None):
        self.store_location_id = store_location_id
        self.accounting_date = accounting_date
        if message is None:
            message = (
                f"Orders for store {store_location_id} on {accounting_date} "
                f"could not be read"
            )
        super().__init__(message)
