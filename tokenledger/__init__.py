from tokenledger.client import LedgerClient
from tokenledger.ledger import Ledger
from tokenledger.events import Transfer, Approval
from tokenledger.exceptions import (
    LedgerError,
    InsufficientBalance,
    InsufficientApproval,
    IllegalManager,
    AmountOverflow,
)

__version__ = '1.0.0'
