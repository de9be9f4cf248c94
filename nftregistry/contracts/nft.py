"""
Ownership and authorization bookkeeping for a capped, fee-gated NFT collection.

State lives in four components that share one ContractDriver:

    Registry          owners[token_id], balances[account]
    SupplyController  total_supply, FEE, MAX_SUPPLY
    ApprovalStore     approvals[token_id], operators[owner, operator]
    TransferEngine    moves a token once the caller's standing is proven

NFT composes them and exports the public functions. Every exported function
checks all of its preconditions before the first write, so a failure never
leaves partial state even before the executor rolls the driver back.
"""
from nftregistry import config
from nftregistry.db.orm import Variable, Hash
from nftregistry.events import Transfer, Approval, ApprovalForAll
from nftregistry.exceptions import (
    ZeroAddress, InvalidAddress, InvalidArgument, InvalidToken, NotAuthorized, NotExpectedValue, MaxSupplyReached
)
from nftregistry.execution.access import export


def is_zero_address(address):
    return address is None or address == config.ZERO_ADDRESS


def is_address(address):
    return isinstance(address, str) and address != '' \
        and config.DELIMITER not in address \
        and config.INDEX_SEPARATOR not in address \
        and len(address) <= config.MAX_KEY_SIZE


def require_address(address, argument):
    if is_zero_address(address):
        raise ZeroAddress(argument=argument, address=address)

    if not is_address(address):
        raise InvalidAddress(argument=argument, address=address)

    return address


def is_token_id(token_id):
    # Ids too wide to fit a storage key can never have been minted
    return isinstance(token_id, int) and not isinstance(token_id, bool) \
        and 0 <= token_id < 10 ** config.MAX_KEY_SIZE


def fits_key(*parts):
    return len(config.DELIMITER.join(parts)) <= config.MAX_KEY_SIZE


class Registry:
    def __init__(self, contract, driver):
        self.owners = Hash(contract, 'owners', driver=driver)
        self.balances = Hash(contract, 'balances', driver=driver, default_value=0)

    def owner(self, token_id):
        # None means unminted
        if not is_token_id(token_id):
            return None
        return self.owners[token_id]

    def owner_of(self, token_id):
        owner = self.owner(token_id)
        if owner is None:
            raise InvalidToken(token_id=token_id)
        return owner

    def balance_of(self, account):
        require_address(account, 'account')
        return self.balances[account]

    def assign(self, token_id, owner):
        self.owners[token_id] = owner
        self.balances[owner] += 1

    def move(self, token_id, sender, to):
        self.balances[sender] -= 1
        self.balances[to] += 1
        self.owners[token_id] = to


class SupplyController:
    def __init__(self, contract, driver, fee=config.FEE, max_supply=config.MAX_SUPPLY,
                 enforce_max_supply=config.ENFORCE_MAX_SUPPLY):
        self.total_supply = Variable(contract, 'total_supply', driver=driver, t=int, default_value=0)
        self.fee = fee
        self.max_supply = max_supply
        self.enforce_max_supply = enforce_max_supply

    def current(self):
        return self.total_supply.get()

    def check_payment(self, payment):
        if isinstance(payment, bool) or not isinstance(payment, int) or payment != self.fee:
            raise NotExpectedValue(expected=self.fee, received=payment)

    def check_capacity(self):
        # The deployed contract never compared total_supply to MAX_SUPPLY. The cap is enforced
        # unless enforce_max_supply is turned off to reproduce that.
        if self.enforce_max_supply and self.current() >= self.max_supply:
            raise MaxSupplyReached(max_supply=self.max_supply)

    def next_token_id(self):
        token_id = self.current()
        self.total_supply.set(token_id + 1)
        return token_id


class ApprovalStore:
    def __init__(self, contract, driver):
        self.approvals = Hash(contract, 'approvals', driver=driver)
        self.operators = Hash(contract, 'operators', driver=driver, default_value=False)

    def get_approved(self, token_id):
        if not is_token_id(token_id):
            return config.ZERO_ADDRESS

        approved = self.approvals[token_id]
        if approved is None:
            return config.ZERO_ADDRESS
        return approved

    def is_approved_for_all(self, owner, operator):
        if not is_address(owner) or not is_address(operator) or not fits_key(owner, operator):
            return False
        return self.operators[owner, operator] is True

    def set_approved(self, token_id, address):
        if is_zero_address(address):
            self.clear(token_id)
        else:
            self.approvals[token_id] = address

    def clear(self, token_id):
        del self.approvals[token_id]

    def set_operator(self, owner, operator, approved):
        self.operators[owner, operator] = approved


def is_authorized(approvals: ApprovalStore, caller, owner, token_id, include_approved=True):
    """True when caller is the owner, an operator of the owner or, when include_approved is set,
    the address approved for token_id. approve() passes include_approved=False since an approved
    address may move the token but may not hand the approval on."""
    if owner is None or caller is None:
        return False

    if caller == owner:
        return True

    if include_approved and approvals.get_approved(token_id) == caller:
        return True

    return approvals.is_approved_for_all(owner, caller)


class TransferEngine:
    def __init__(self, registry: Registry, approvals: ApprovalStore, events):
        self.registry = registry
        self.approvals = approvals
        self.events = events

    def transfer(self, caller, sender, to, token_id):
        require_address(to, 'to')

        owner = self.registry.owner(token_id)
        if owner is None or sender != owner:
            raise NotAuthorized(caller=caller, action='transfer', token_id=token_id, sender=sender, owner=owner)

        if not is_authorized(self.approvals, caller, owner, token_id):
            raise NotAuthorized(caller=caller, action='transfer', token_id=token_id, sender=sender, owner=owner)

        self.registry.move(token_id, sender, to)
        self.approvals.clear(token_id)
        self.events.emit(Transfer(sender, to, token_id))


class NFT:
    def __init__(self, driver, events, name=config.CONTRACT_NAME, fee=config.FEE,
                 max_supply=config.MAX_SUPPLY, enforce_max_supply=config.ENFORCE_MAX_SUPPLY):
        self.name = name
        self.events = events

        self.registry = Registry(name, driver)
        self.supply = SupplyController(name, driver, fee=fee, max_supply=max_supply,
                                       enforce_max_supply=enforce_max_supply)
        self.approvals = ApprovalStore(name, driver)
        self.engine = TransferEngine(self.registry, self.approvals, events)

    @property
    def FEE(self):
        return self.supply.fee

    @property
    def MAX_SUPPLY(self):
        return self.supply.max_supply

    @export
    def mint(self, caller, payment=None):
        require_address(caller, 'caller')
        self.supply.check_payment(payment)
        self.supply.check_capacity()

        token_id = self.supply.next_token_id()
        self.registry.assign(token_id, caller)
        self.events.emit(Transfer(config.ZERO_ADDRESS, caller, token_id))

        return token_id

    @export
    def owner_of(self, caller, token_id=None):
        return self.registry.owner_of(token_id)

    @export
    def balance_of(self, caller, account=None):
        return self.registry.balance_of(account)

    @export
    def get_approved(self, caller, token_id=None):
        return self.approvals.get_approved(token_id)

    @export
    def is_approved_for_all(self, caller, owner=None, operator=None):
        return self.approvals.is_approved_for_all(owner, operator)

    @export
    def approve(self, caller, to=None, token_id=None):
        if not is_zero_address(to):
            require_address(to, 'to')

        owner = self.registry.owner(token_id)
        if not is_authorized(self.approvals, caller, owner, token_id, include_approved=False):
            raise NotAuthorized(caller=caller, action='approve', token_id=token_id, owner=owner)

        self.approvals.set_approved(token_id, to)
        self.events.emit(Approval(owner, to if to is not None else config.ZERO_ADDRESS, token_id))

    @export
    def set_approval_for_all(self, caller, operator=None, approved=False):
        require_address(caller, 'caller')
        require_address(operator, 'operator')
        if not fits_key(caller, operator):
            raise InvalidAddress(argument='operator', address=operator)

        if not isinstance(approved, bool):
            raise InvalidArgument(argument='approved', value=approved)

        self.approvals.set_operator(caller, operator, approved)
        self.events.emit(ApprovalForAll(caller, operator, approved))

    @export
    def transfer_from(self, caller, sender=None, to=None, token_id=None):
        self.engine.transfer(caller, sender, to, token_id)

    @export
    def total_supply(self, caller):
        return self.supply.current()

    @export
    def fee(self, caller):
        return self.supply.fee

    @export
    def max_supply(self, caller):
        return self.supply.max_supply
