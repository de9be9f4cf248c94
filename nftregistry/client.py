from functools import partial

from nftregistry.contracts.nft import NFT
from nftregistry.db.driver import ContractDriver
from nftregistry.execution.access import exported_functions
from nftregistry.execution.executor import Executor
from nftregistry import config


class AbstractContract:
    def __init__(self, name, signer, executor: Executor, funcs):
        self.name = name
        self.signer = signer
        self.executor = executor
        self.functions = funcs

        # set up virtual functions
        for f in funcs:
            func, kwargs = f

            # each function is a partial that allows kwarg overloading and overriding
            setattr(self, func, partial(self._abstract_function_call,
                                        executor=self.executor,
                                        contract_name=self.name,
                                        func=func))

    def keys(self):
        return self.executor.driver.keys(self.name)

    def quick_read(self, variable, key=None, args=None):
        a = []

        if key is not None:
            a.append(key)

        if args is not None and isinstance(args, list):
            for arg in args:
                a.append(arg)

        k = self.executor.driver.make_key(contract=self.name, variable=variable, args=a)
        return self.executor.driver.get(k, save=False)

    def _abstract_function_call(self, executor, contract_name, func, signer=None, **kwargs):
        output = executor.execute(sender=signer or self.signer,
                                  contract_name=contract_name,
                                  function_name=func,
                                  kwargs=kwargs)

        if output['status_code'] == 1:
            raise output['result']

        return output['result']


class RegistryClient:
    def __init__(self, signer='sys',
                 driver=None,
                 fee=config.FEE,
                 max_supply=config.MAX_SUPPLY,
                 enforce_max_supply=config.ENFORCE_MAX_SUPPLY):

        self.raw_driver = driver or ContractDriver()
        self.executor = Executor(driver=self.raw_driver)
        self.signer = signer

        self.nft = self.executor.register(NFT(driver=self.raw_driver,
                                              events=self.executor.events,
                                              fee=fee,
                                              max_supply=max_supply,
                                              enforce_max_supply=enforce_max_supply))

        self.contract = self.get_contract(self.nft.name)

    def get_contract(self, name):
        contract = self.executor.contracts.get(name)

        if contract is None:
            return None

        return AbstractContract(name=name,
                                signer=self.signer,
                                executor=self.executor,
                                funcs=exported_functions(contract))

    def get_methods(self):
        return [{'name': name, 'arguments': kwargs} for name, kwargs in self.contract.functions]

    @property
    def events(self):
        return self.executor.events.history

    def subscribe(self, callback):
        self.executor.events.subscribe(callback)

    def flush(self):
        self.raw_driver.flush()
        self.executor.events.clear()

    def get_var(self, variable, arguments=[]):
        key = self.raw_driver.make_key(self.nft.name, variable, arguments)
        return self.raw_driver.get(key, save=False)

    def __getattr__(self, item):
        # Exported functions are reachable straight off the client: client.mint(payment=...)
        contract = self.__dict__.get('contract')
        if contract is not None and item in dict(contract.functions):
            return getattr(contract, item)
        raise AttributeError(item)
