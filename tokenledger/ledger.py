import hashlib
from tokenledger import config
from tokenledger.db.driver import ContractDriver
from tokenledger.db.orm import Variable, Hash
from tokenledger.events import Transfer, Approval
from tokenledger.exceptions import (
    InsufficientBalance,
    InsufficientApproval,
    IllegalManager,
    AmountOverflow,
    InvalidIdentity,
    LedgerExists,
    LedgerNotFound,
)
from tokenledger.execution.runtime import rt
from tokenledger.logger import get_logger

log = get_logger('LEDGER')


def validate_amount(value):
    # bool is an int subclass but never an amount
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= config.MAX_AMOUNT:
        raise AmountOverflow(value=value, maximum=config.MAX_AMOUNT)
    return value


def checked_add(a, b):
    return validate_amount(a + b)


def checked_sub(a, b):
    return validate_amount(a - b)


def identity_error(identity):
    """Returns the reason ``identity`` cannot be an account, or None if it can."""
    if identity is None:
        return 'identity is missing'

    # bool is an int subclass, and floats compare equal to ints they are not
    if isinstance(identity, bool) or not isinstance(identity, (str, int, bytes)):
        return 'unsupported identity type {}'.format(type(identity).__name__)

    return None


def validate_identity(identity):
    reason = identity_error(identity)
    if reason is not None:
        raise InvalidIdentity(identity=identity, reason=reason)
    return identity


def storage_key(identity):
    """
    Maps an identity to a hash key that is distinct for every distinct identity.

    The payload is tagged with its type and hex encoded, so ``7``, ``'7'`` and
    ``b'7'`` land on different keys and delimiters inside an identity never
    reach the driver. Keys too long for an allowance pair are replaced by the
    sha3 digest of the tagged key.
    """
    if isinstance(identity, bytes):
        key = 'b_' + identity.hex()
    elif isinstance(identity, str):
        key = 's_' + identity.encode('utf-8', 'surrogatepass').hex()
    else:
        key = 'i_' + str(identity)

    if len(key) > config.MAX_IDENTITY_KEY_SIZE:
        key = 'h_' + hashlib.sha3_256(key.encode()).hexdigest()

    return key


class Ledger:
    """
    Fungible token ledger over a key-value driver.

    State lives under the ledger's name: ``<name>.total_supply``,
    ``<name>.owner``, ``<name>.balances:<key>`` and
    ``<name>.allowances:<key>:<key>``, where ``<key>`` is the
    ``storage_key`` of an identity. Every public operation checks all of its
    preconditions before it writes anything, so a raised error leaves the
    stored state untouched.

    The invoking identity is read from ``rt.context.caller`` and events are
    emitted to ``rt.events``. When used without the executor, drain
    ``rt.events`` after each operation to read that operation's events.
    """

    def __init__(self, name=config.DEFAULT_LEDGER_NAME, driver: ContractDriver=None):
        assert config.DELIMITER not in name and config.INDEX_SEPARATOR not in name, \
            'Illegal character in ledger name {}.'.format(name)

        if driver is None:
            driver = rt.env.get('__Driver') or ContractDriver()

        self.name = name
        self.driver = driver

        self._total_supply = Variable(name, config.TOTAL_SUPPLY_KEY, driver=driver, default_value=0)
        self._owner = Variable(name, config.OWNER_KEY, driver=driver)
        self.balances = Hash(name, config.BALANCES_KEY, driver=driver, default_value=0)
        self.allowances = Hash(name, config.ALLOWANCES_KEY, driver=driver, default_value=0)

    @classmethod
    def new(cls, initial_supply, name=config.DEFAULT_LEDGER_NAME, driver: ContractDriver=None):
        ledger = cls(name=name, driver=driver)
        ledger._construct(initial_supply)
        return ledger

    def _construct(self, initial_supply):
        validate_amount(initial_supply)
        caller = self._caller()

        if self.driver.ledger_exists(self.name):
            raise LedgerExists(name=self.name)

        self._owner.set(caller)
        self._total_supply.set(initial_supply)
        self._mint_to(caller, initial_supply)

        log.info('Ledger {} created by {} with supply {}'.format(self.name, caller, initial_supply))

    def _caller(self):
        return validate_identity(rt.context.caller)

    def _require_deployed(self):
        if self._owner.get() is None:
            raise LedgerNotFound(name=self.name)

    def _require_owner(self, caller):
        if caller != self.owner():
            raise IllegalManager(caller=caller)

    def _require_balance(self, account, value):
        balance = self.balance_of(account)
        if balance < value:
            raise InsufficientBalance(account=account, balance=balance, value=value)

    # Queries

    def owner(self):
        return self._owner.get()

    def total_supply(self):
        return self._total_supply.get()

    def balance_of(self, who):
        if identity_error(who) is not None:
            return 0
        return self.balances[storage_key(who)]

    def allowance(self, owner, spender):
        if identity_error(owner) is not None or identity_error(spender) is not None:
            return 0
        return self.allowances[storage_key(owner), storage_key(spender)]

    approval = allowance

    # Transitions

    def transfer(self, to, value):
        self._require_deployed()
        validate_amount(value)
        caller = self._caller()
        validate_identity(to)

        self._require_balance(caller, value)

        self._move(caller, to, value)

    def approve(self, spender, value):
        self._require_deployed()
        validate_amount(value)
        caller = self._caller()
        validate_identity(spender)

        self.allowances[storage_key(caller), storage_key(spender)] = value

        rt.emit(Approval(owner=caller, spender=spender, value=value))

    def transfer_from(self, sender, to, value):
        self._require_deployed()
        validate_amount(value)
        caller = self._caller()
        validate_identity(sender)
        validate_identity(to)

        approved = self.allowance(sender, caller)
        if approved < value:
            raise InsufficientApproval(owner=sender, spender=caller, allowance=approved, value=value)

        self._require_balance(sender, value)

        self.allowances[storage_key(sender), storage_key(caller)] = checked_sub(approved, value)
        self._move(sender, to, value)

    def mint(self, value):
        self._require_deployed()
        validate_amount(value)
        caller = self._caller()

        self._require_owner(caller)

        supply = checked_add(self.total_supply(), value)

        self._total_supply.set(supply)
        self._mint_to(caller, value)

        log.info('Minted {} on {}, supply is now {}'.format(value, self.name, supply))

    def burn(self, value):
        self._require_deployed()
        validate_amount(value)
        caller = self._caller()

        self._require_owner(caller)
        self._require_balance(caller, value)

        supply = checked_sub(self.total_supply(), value)

        self._total_supply.set(supply)
        self._burn_from(caller, value)

        log.info('Burned {} on {}, supply is now {}'.format(value, self.name, supply))

    # Balance primitives. They do not check sufficiency, callers validate first.

    def _credit(self, account, value):
        key = storage_key(account)
        self.balances[key] = checked_add(self.balances[key], value)

    def _debit(self, account, value):
        key = storage_key(account)
        self.balances[key] = checked_sub(self.balances[key], value)

    def _mint_to(self, receiver, value):
        self._credit(receiver, value)
        rt.emit(Transfer(sender=None, receiver=receiver, value=value))

    def _burn_from(self, sender, value):
        self._debit(sender, value)
        rt.emit(Transfer(sender=sender, receiver=None, value=value))

    def _move(self, sender, receiver, value):
        self._debit(sender, value)
        self._credit(receiver, value)
        rt.emit(Transfer(sender=sender, receiver=receiver, value=value))
