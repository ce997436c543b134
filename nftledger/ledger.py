from nftledger.db.orm import Variable, Hash
from nftledger.db.driver import LedgerDriver
from nftledger.execution.runtime import Runtime
from nftledger.exceptions import ConfigError, Unauthorized, Paused, NotPaused, InvalidRecipient, SupplyExhausted, \
    NonexistentToken, OwnershipMismatch, NotAuthorized, InvalidApproval, InvalidTokenURI, InvalidAccount
from nftledger import config


def is_zero(account):
    return account is None or account == '' or account == config.ZERO_ADDRESS


def is_account(account):
    return isinstance(account, str) and account != '' and \
           config.DELIMITER not in account and config.INDEX_SEPARATOR not in account and \
           len(account) <= config.MAX_ACCOUNT_SIZE


def is_token_id(token_id):
    return isinstance(token_id, int) and not isinstance(token_id, bool) and token_id > 0


class Ledger:
    """
    Ownership ledger for a bounded collection of non-fungible tokens.

    All state lives in ORM datums on the driver, so every write made by an
    operation stays pending until the executor commits it. Operations read
    the invoking account from the runtime context and raise a LedgerError
    subclass when a precondition does not hold.
    """

    # Operations reachable through the executor
    EXPORTS = {
        'construct',
        'mint', 'safe_mint', 'mint_batch', 'safe_mint_batch',
        'transfer_from', 'safe_transfer_from',
        'approve', 'set_approval_for_all',
        'burn',
        'pause', 'unpause',
        'transfer_ownership', 'renounce_ownership',
        'owner_of', 'balance_of', 'token_uri', 'get_approved', 'is_approved_for_all',
        'exists', 'tokens_of_owner',
        'name', 'symbol', 'max_supply', 'total_supply', 'minted_count', 'owner', 'paused',
    }

    def __init__(self, name: str, driver: LedgerDriver, runtime: Runtime):
        self.this = name
        self.driver = driver
        self.rt = runtime
        self.ctx = runtime.context

        self._token_name = Variable(name, config.NAME_KEY, driver=driver)
        self._symbol = Variable(name, config.SYMBOL_KEY, driver=driver)
        self._max_supply = Variable(name, config.MAX_SUPPLY_KEY, driver=driver)
        self._owner = Variable(name, config.OWNER_KEY, driver=driver)

        self._paused = Variable(name, 'paused', driver=driver, default_value=False)
        self._minted_count = Variable(name, 'minted_count', driver=driver, default_value=0)
        self._total_supply = Variable(name, 'total_supply', driver=driver, default_value=0)

        self._owners = Hash(name, 'owners', driver=driver)
        self._uris = Hash(name, 'uris', driver=driver)
        self._approvals = Hash(name, 'approvals', driver=driver)
        self._balances = Hash(name, 'balances', driver=driver, default_value=0)
        self._operators = Hash(name, 'operators', driver=driver, default_value=False)

    def _emit(self, event, **data):
        self.rt.events.emit(event, **data)

    # Construction

    def construct(self, name: str, symbol: str, max_supply: int):
        if self.driver.ledger_exists(self.this):
            raise ConfigError(reason="ledger '{}' already exists".format(self.this))

        if not isinstance(name, str) or not isinstance(symbol, str):
            raise ConfigError(reason='name and symbol must be strings')

        if not is_token_id(max_supply):
            raise ConfigError(reason='max_supply must be a positive integer, got {!r}'.format(max_supply))

        owner = self.ctx.signer
        if is_zero(owner):
            raise ConfigError(reason='ledger must be constructed by a non-zero account')

        if not is_account(owner):
            raise ConfigError(reason='invalid owner account {!r}'.format(owner))

        self._token_name.set(name)
        self._symbol.set(symbol)
        self._max_supply.set(max_supply)
        self._owner.set(owner)

        self._paused.set(False)
        self._minted_count.set(0)
        self._total_supply.set(0)

        self._emit('OwnershipTransferred', previous_owner=config.ZERO_ADDRESS, new_owner=owner)

    # Access control

    def _only_owner(self):
        if self.ctx.caller != self._owner.get() or is_zero(self.ctx.caller):
            raise Unauthorized(caller=self.ctx.caller)

    def _when_not_paused(self):
        if self._paused.get():
            raise Paused()

    def _require_token(self, token_id):
        if not is_token_id(token_id):
            raise NonexistentToken(token_id=token_id)

        owner = self._owners[token_id]
        if owner is None:
            raise NonexistentToken(token_id=token_id)

        return owner

    def _require_account(self, account):
        if not is_account(account):
            raise InvalidAccount(account=account)

    def _require_recipient(self, to):
        if is_zero(to):
            raise InvalidRecipient(to=to)

        self._require_account(to)

    def _is_operator(self, owner, operator):
        return is_account(owner) and is_account(operator) and self._operators[owner, operator] is True

    def _is_approved_or_owner(self, spender, token_id, owner):
        # The zero account holds no rights, and an unset approval grants nothing
        if is_zero(spender) or not is_account(spender):
            return False

        approved = self._approvals[token_id]

        return spender == owner or \
               (approved is not None and spender == approved) or \
               self._is_operator(owner, spender)

    # Minting

    def _mint(self, to, uri):
        self._require_recipient(to)

        if not isinstance(uri, str):
            raise InvalidTokenURI(type=type(uri).__name__)

        minted = self._minted_count.get()
        max_supply = self._max_supply.get()

        if minted >= max_supply:
            raise SupplyExhausted(max_supply=max_supply)

        token_id = minted + 1

        self._owners[token_id] = to
        self._uris[token_id] = uri

        self._minted_count.set(token_id)
        self._total_supply.set(self._total_supply.get() + 1)
        self._balances[to] += 1

        self._emit('Transfer', sender=config.ZERO_ADDRESS, to=to, token_id=token_id)
        self._emit('Minted', to=to, token_id=token_id, uri=uri)

        return token_id

    def mint(self, to, uri):
        self._only_owner()
        self._when_not_paused()

        return self._mint(to, uri)

    def mint_batch(self, to, uris):
        self._only_owner()
        self._when_not_paused()

        self._require_recipient(to)

        if not isinstance(uris, (list, tuple)):
            raise InvalidTokenURI(type=type(uris).__name__)

        return [self._mint(to, uri) for uri in uris]

    safe_mint = mint
    safe_mint_batch = mint_batch

    # Transfers and approvals

    def transfer_from(self, sender, to, token_id):
        owner = self._require_token(token_id)

        if sender != owner:
            raise OwnershipMismatch(token_id=token_id, sender=sender)

        self._require_recipient(to)

        if not self._is_approved_or_owner(self.ctx.caller, token_id, owner):
            raise NotAuthorized(caller=self.ctx.caller, token_id=token_id)

        del self._approvals[token_id]

        self._balances[sender] -= 1
        self._balances[to] += 1
        self._owners[token_id] = to

        self._emit('Transfer', sender=sender, to=to, token_id=token_id)

    safe_transfer_from = transfer_from

    def approve(self, to, token_id):
        owner = self._require_token(token_id)
        caller = self.ctx.caller

        if caller != owner and not self._is_operator(owner, caller):
            raise NotAuthorized(caller=caller, token_id=token_id)

        if to == owner:
            raise InvalidApproval(account=to)

        if is_zero(to):
            del self._approvals[token_id]
            to = config.ZERO_ADDRESS
        else:
            self._require_account(to)
            self._approvals[token_id] = to

        self._emit('Approval', owner=owner, approved=to, token_id=token_id)

    def set_approval_for_all(self, operator, approved):
        caller = self.ctx.caller

        if is_zero(caller) or not is_account(caller):
            raise InvalidAccount(account=caller)

        if operator == caller:
            raise InvalidApproval(account=operator)

        self._require_account(operator)

        approved = bool(approved)

        if approved:
            self._operators[caller, operator] = True
        else:
            del self._operators[caller, operator]

        self._emit('ApprovalForAll', owner=caller, operator=operator, approved=approved)

    # Burning

    def burn(self, token_id):
        owner = self._require_token(token_id)

        if not self._is_approved_or_owner(self.ctx.caller, token_id, owner):
            raise NotAuthorized(caller=self.ctx.caller, token_id=token_id)

        del self._approvals[token_id]
        del self._owners[token_id]
        del self._uris[token_id]

        self._balances[owner] -= 1
        self._total_supply.set(self._total_supply.get() - 1)

        self._emit('Transfer', sender=owner, to=config.ZERO_ADDRESS, token_id=token_id)

    # Administration

    def pause(self):
        self._only_owner()

        if self._paused.get():
            raise Paused()

        self._paused.set(True)
        self._emit('PauseChanged', paused=True)

    def unpause(self):
        self._only_owner()

        if not self._paused.get():
            raise NotPaused()

        self._paused.set(False)
        self._emit('PauseChanged', paused=False)

    def transfer_ownership(self, new_owner):
        self._only_owner()

        self._require_recipient(new_owner)
        self._set_owner(new_owner)

    def renounce_ownership(self):
        self._only_owner()
        self._set_owner(config.ZERO_ADDRESS)

    def _set_owner(self, new_owner):
        previous = self._owner.get()
        self._owner.set(new_owner)
        self._emit('OwnershipTransferred', previous_owner=previous, new_owner=new_owner)

    # Queries

    def owner_of(self, token_id):
        return self._require_token(token_id)

    def token_uri(self, token_id):
        self._require_token(token_id)
        return self._uris[token_id]

    def get_approved(self, token_id):
        self._require_token(token_id)
        return self._approvals[token_id]

    def balance_of(self, account):
        if is_zero(account) or not is_account(account):
            return 0
        return self._balances[account]

    def is_approved_for_all(self, owner, operator):
        return self._is_operator(owner, operator)

    def exists(self, token_id):
        return is_token_id(token_id) and self._owners[token_id] is not None

    def tokens_of_owner(self, account):
        if is_zero(account):
            return []
        return sorted(int(k) for k, v in self._owners.items().items() if v == account)

    def name(self):
        return self._token_name.get()

    def symbol(self):
        return self._symbol.get()

    def max_supply(self):
        return self._max_supply.get()

    def total_supply(self):
        return self._total_supply.get()

    def minted_count(self):
        return self._minted_count.get()

    def owner(self):
        return self._owner.get()

    def paused(self):
        return self._paused.get()
