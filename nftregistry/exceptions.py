from enum import Enum


class ErrorKind(Enum):
    VALIDATION = 'validation'
    NOT_FOUND = 'not_found'
    AUTHORIZATION = 'authorization'
    PAYMENT = 'payment'
    SUPPLY = 'supply'


class RegistryError(Exception):
    """
    The base exception for the registry. The fmt directive
    will be overloaded by the inheriting classes

    :ivar kind: The ErrorKind callers can branch on
    :ivar kwargs: The offending values (address, token id, amounts)
    """
    fmt = 'An unspecified error occurred'
    kind = None

    def __init__(self, **kwargs):
        msg = self.fmt.format(**kwargs)
        Exception.__init__(self, msg)
        self.kwargs = kwargs

    def to_dict(self):
        return {
            'error': str(self),
            'kind': self.kind.value if self.kind is not None else None,
            'details': self.kwargs
        }


class ZeroAddress(RegistryError):
    """
    A zero or absent address was supplied where a real one is required

    :ivar argument: The name of the offending argument
    """
    fmt = "Argument '{argument}' must not be the zero address"
    kind = ErrorKind.VALIDATION


class InvalidToken(RegistryError):
    """
    No owner is recorded for the token

    :ivar token_id: The token that was queried
    """
    fmt = 'Token {token_id} has no recorded owner'
    kind = ErrorKind.NOT_FOUND


class NotAuthorized(RegistryError):
    """
    The caller has no standing over the token, or the stated
    sender is not its recorded owner
    """
    fmt = '{caller} is not authorized to {action} token {token_id}'
    kind = ErrorKind.AUTHORIZATION


class NotExpectedValue(RegistryError):
    fmt = 'Expected a payment of exactly {expected}, received {received}'
    kind = ErrorKind.PAYMENT


class MaxSupplyReached(RegistryError):
    fmt = 'Maximum supply of {max_supply} tokens has been minted'
    kind = ErrorKind.SUPPLY


class FunctionNotExported(RegistryError):
    fmt = "Function '{function_name}' is not exported by contract '{contract_name}'"
    kind = ErrorKind.VALIDATION


class InvalidAddress(RegistryError):
    fmt = "Argument '{argument}' is not a valid address: {address!r}"
    kind = ErrorKind.VALIDATION


class InvalidArgument(RegistryError):
    fmt = "Argument '{argument}' has an invalid value: {value!r}"
    kind = ErrorKind.VALIDATION
