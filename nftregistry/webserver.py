from sanic import Sanic
from sanic.response import json, text
from sanic_ext import Extend

from nftregistry.client import RegistryClient
from nftregistry.events import event_to_dict
from nftregistry.exceptions import ErrorKind, RegistryError, FunctionNotExported, InvalidArgument
from nftregistry.logger import get_logger
from nftregistry import config

log = get_logger('Webserver')

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.PAYMENT: 402,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.SUPPLY: 409,
}

app = Sanic('nftregistry')
app.config.CORS_ORIGINS = '*'
Extend(app)

client = RegistryClient()


def error_response(e: RegistryError):
    return json(e.to_dict(), status=STATUS_BY_KIND.get(e.kind, 500))


def call(function_name, sender=None, **kwargs):
    output = client.executor.execute(sender=sender or client.signer,
                                     function_name=function_name,
                                     kwargs=kwargs)

    if output['status_code'] == 1:
        raise output['result']

    return output


@app.exception(RegistryError)
async def handle_registry_error(request, exception):
    return error_response(exception)


@app.route("/", methods=["GET",])
async def index(request):
    return text("I\'m a teapot", status=418)


@app.route('/methods', methods=['GET'])
async def get_methods(request):
    return json({'methods': client.get_methods()})


@app.route('/variables/<variable>', methods=['GET'])
async def get_variable(request, variable):
    key = request.args.get('key')

    if key is None:
        response = client.get_var(variable)
    else:
        response = client.get_var(variable, key.split(','))

    if response is None:
        return json({'value': None}, status=404)
    return json({'value': response}, status=200)


@app.route('/supply', methods=['GET'])
async def get_supply(request):
    return json({
        'total_supply': call('total_supply')['result'],
        'max_supply': client.nft.MAX_SUPPLY,
        'fee': client.nft.FEE,
    })


@app.route('/tokens/<token_id:int>/owner', methods=['GET'])
async def get_owner(request, token_id):
    output = call('owner_of', token_id=token_id)
    return json({'token_id': token_id, 'owner': output['result']})


@app.route('/tokens/<token_id:int>/approved', methods=['GET'])
async def get_approved(request, token_id):
    output = call('get_approved', token_id=token_id)
    return json({'token_id': token_id, 'approved': output['result']})


@app.route('/accounts/<account>/balance', methods=['GET'])
async def get_balance(request, account):
    output = call('balance_of', account=account)
    return json({'account': account, 'balance': output['result']})


@app.route('/accounts/<owner>/operators/<operator>', methods=['GET'])
async def get_operator(request, owner, operator):
    output = call('is_approved_for_all', owner=owner, operator=operator)
    return json({'owner': owner, 'operator': operator, 'approved': output['result']})


# Expects json object such that:
'''
{
    'sender': 'string',
    'function': 'string',
    'kwargs': {}
}
'''
@app.route('/transactions', methods=['POST'])
async def submit_transaction(request):
    payload = request.json

    if not isinstance(payload, dict) or payload.get('sender') is None or payload.get('function') is None:
        return error_response(InvalidArgument(argument='payload', value=payload))

    kwargs = payload.get('kwargs') or {}
    if not isinstance(kwargs, dict):
        return error_response(InvalidArgument(argument='kwargs', value=kwargs))

    function_name = payload['function']
    functions = dict(client.contract.functions)
    if function_name not in functions:
        return error_response(FunctionNotExported(function_name=function_name, contract_name=client.nft.name))

    unexpected = set(kwargs) - set(functions[function_name])
    if unexpected:
        return error_response(InvalidArgument(argument='kwargs', value=sorted(unexpected)))

    output = call(function_name, sender=payload['sender'], **kwargs)

    return json({
        'result': output['result'],
        'events': [event_to_dict(e) for e in output['events']],
    }, status=200)


def start_webserver():
    log.info('Starting registry web server on port {}'.format(config.WEB_SERVER_PORT))
    app.run(host=config.WEB_SERVER_HOST, port=config.WEB_SERVER_PORT, workers=config.NUM_WORKERS,
            debug=False, access_log=False)


if __name__ == '__main__':
    start_webserver()
