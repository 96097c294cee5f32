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

    def __eq__(self, other):
        return type(self) is type(other) and self.kwargs == other.kwargs

    def __hash__(self):
        return hash((type(self), tuple(sorted(self.kwargs.items()))))


class InsufficientBalance(LedgerError):
    """
    A debit exceeds the current balance of the source

    :ivar account: The identity being debited
    :ivar balance: The balance at the time of the attempt
    :ivar value: The amount requested
    """
    fmt = "Balance of '{account}' is {balance}, cannot debit {value}"


class InsufficientApproval(LedgerError):
    """
    A delegated transfer exceeds the remaining allowance

    :ivar owner: The identity whose funds are spent
    :ivar spender: The identity spending them
    :ivar allowance: The remaining allowance
    :ivar value: The amount requested
    """
    fmt = "Allowance of '{spender}' over '{owner}' is {allowance}, cannot spend {value}"


class IllegalManager(LedgerError):
    """
    A privileged operation was attempted by an identity other
    than the ledger owner

    :ivar caller: The identity that attempted the operation
    """
    fmt = "Caller '{caller}' is not the ledger owner"


class AmountOverflow(LedgerError):
    """
    An amount is not an integer in [0, MAX_AMOUNT], or an arithmetic
    result would leave that range.
    """
    fmt = 'Amount {value} is outside of the range [0, {maximum}]'


class InvalidIdentity(LedgerError):
    fmt = "Identity '{identity}' cannot be used as a storage key: {reason}"


class LedgerExists(LedgerError):
    """
    When attempting to deploy a ledger, found that one
    already exists under that name in the database

    :ivar name: The name of the ledger submitted.
    """
    fmt = "Ledger with name '{name}' already exists in the database"


class LedgerNotFound(LedgerError):
    fmt = "No ledger with name '{name}' has been deployed"


class PrivateFunctionCall(LedgerError):
    fmt = "Function '{function}' is not callable from outside the ledger"
