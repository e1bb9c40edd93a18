"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidEntryError(DomainException):
    """Ledger entry has a negative amount or an unparsable date"""

    pass


class InvalidRateError(DomainException):
    """Tax rate is outside the 0-100 percent range"""

    pass


class InvalidAmountError(DomainException):
    """Monetary input amount is negative or not a finite number"""

    pass


class InvalidPeriodError(DomainException):
    """Cash-flow period has a negative inflow or outflow"""

    pass


class InvalidTransferError(DomainException):
    """Transfer request is malformed (same accounts, non-positive amount)"""

    pass


class InvalidTransitionError(DomainException):
    """Transfer is already settled and cannot change status again"""

    pass


class InsufficientFundsError(DomainException):
    """Source account balance does not cover the transfer amount"""

    pass


class DataSourceError(DomainException):
    """Upstream data source returned an error or is unavailable"""

    pass


class TransferNotFoundError(DomainException):
    """No stored transfer matches the requested identifier"""

    pass


class UnknownAccountError(DomainException):
    """Account is not known to the data source"""

    pass
