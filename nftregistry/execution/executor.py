import threading
import traceback
from copy import deepcopy

from nftregistry.db.driver import ContractDriver
from nftregistry.events import EventLog
from nftregistry.exceptions import FunctionNotExported, RegistryError
from nftregistry.execution.access import is_exported
from nftregistry.logger import get_logger
from nftregistry import config

log = get_logger('Executor')


class Executor:
    """
    Runs contract functions one at a time against a shared driver.

    Each call holds the executor lock from dispatch to commit, so no call ever
    observes another's half-applied writes. With auto_commit the pending writes
    and events are committed on success and dropped on failure; without it the
    caller settles them through commit() or rollback().
    """
    def __init__(self, driver=None, events=None):
        self.driver = driver

        if not self.driver:
            self.driver = ContractDriver()

        self.events = events or EventLog()
        self.contracts = {}
        self.lock = threading.RLock()

    def register(self, contract):
        self.contracts[contract.name] = contract
        return contract

    def _resolve(self, contract_name, function_name):
        contract = self.contracts.get(contract_name)

        if contract is None or function_name.startswith(config.PRIVATE_METHOD_PREFIX):
            raise FunctionNotExported(function_name=function_name, contract_name=contract_name)

        func = getattr(contract, function_name, None)
        if not is_exported(func):
            raise FunctionNotExported(function_name=function_name, contract_name=contract_name)

        return func

    def execute(self, sender, function_name, kwargs=None,
                contract_name=config.CONTRACT_NAME,
                auto_commit=True) -> dict:

        kwargs = kwargs or {}

        with self.lock:
            log.debug('{} calling {}.{}({})'.format(sender, contract_name, function_name, kwargs))

            try:
                func = self._resolve(contract_name, function_name)
                result = func(caller=sender, **kwargs)
                status_code = 0
            except Exception as e:
                result = e
                status_code = 1

                log.error(str(e))
                if not isinstance(e, RegistryError):
                    log.error(traceback.format_exc())

                if auto_commit:
                    self.driver.clear_pending_state()
                    self.events.discard()

            output = {
                'status_code': status_code,
                'result': result,
                'writes': deepcopy(self.driver.pending_writes),
                'events': list(self.events.pending),
            }

            if status_code == 0 and auto_commit:
                self.commit()

        return output

    def commit(self):
        with self.lock:
            self.driver.commit()
            self.events.commit()

    def rollback(self):
        with self.lock:
            self.driver.clear_pending_state()
            self.events.discard()
