
class LedgerError(Exception):
    """
    The base exception for the ledger. The fmt directive
    will be overloaded by the inheriting classes

    :ivar msg: The message associated with the error
    """
    fmt = 'An unspecified error occurred'

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs

    @property
    def name(self):
        return self.__class__.__name__


class ConfigError(LedgerError):
    """
    The ledger could not be constructed with the given
    parameters

    :ivar reason: Why the parameters were rejected
    """
    fmt = 'Invalid ledger configuration: {reason}'


class Unauthorized(LedgerError):
    """
    The caller is not the administrative owner of the ledger

    :ivar caller: The account that invoked the operation
    """
    fmt = "Caller '{caller}' is not the owner"


class Paused(LedgerError):
    fmt = 'Ledger is paused'


class NotPaused(LedgerError):
    fmt = 'Ledger is not paused'


class InvalidRecipient(LedgerError):
    """
    Tokens and ownership can never be sent to the zero account

    :ivar to: The rejected recipient
    """
    fmt = "Invalid recipient '{to}'"


class SupplyExhausted(LedgerError):
    """
    Every token the ledger may ever create has been minted

    :ivar max_supply: The supply ceiling of the ledger
    """
    fmt = 'Max supply of {max_supply} reached'


class NonexistentToken(LedgerError):
    """
    The token was never minted or has been burned

    :ivar token_id: The requested token id
    """
    fmt = "Token '{token_id}' does not exist"


class OwnershipMismatch(LedgerError):
    """
    The stated owner of a token does not match the recorded one

    :ivar token_id: The token being transferred
    :ivar sender: The stated owner
    """
    fmt = "Token '{token_id}' is not owned by '{sender}'"


class NotAuthorized(LedgerError):
    """
    The caller is neither the token owner, its approved delegate,
    nor an operator of the owner

    :ivar caller: The account that invoked the operation
    :ivar token_id: The token being acted upon
    """
    fmt = "Caller '{caller}' is not token owner or approved for token '{token_id}'"


class InvalidApproval(LedgerError):
    fmt = "Cannot approve '{account}' for itself"


class InvalidTokenURI(LedgerError):
    fmt = 'Token URI must be a string, got {type}'


class PrivateMethod(LedgerError):
    fmt = "Private method '{function}' not callable"


class UnknownFunction(LedgerError):
    fmt = "Ledger has no exported function '{function}'"


class InvalidAccount(LedgerError):
    """
    Accounts are non-empty strings without key separators

    :ivar account: The rejected account
    """
    fmt = "Invalid account '{account}'"
