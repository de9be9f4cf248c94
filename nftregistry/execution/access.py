import inspect

from nftregistry import config


def export(func):
    setattr(func, config.EXPORT_ATTRIBUTE, True)
    return func


def is_exported(func):
    return callable(func) and getattr(func, config.EXPORT_ATTRIBUTE, False) is True


def exported_functions(contract):
    # [(name, [kwargs the caller supplies]), ...]; the executor provides `caller` itself
    funcs = []
    for name, member in inspect.getmembers(contract, predicate=inspect.ismethod):
        if name.startswith(config.PRIVATE_METHOD_PREFIX) or not is_exported(member):
            continue

        kwargs = [p for p in inspect.signature(member).parameters if p != 'caller']
        funcs.append((name, kwargs))

    return funcs
