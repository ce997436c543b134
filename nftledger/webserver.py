from sanic import Sanic
from sanic.response import json, text
from sanic_cors import CORS
from nftledger.server import rpc
from nftledger.logger import get_logger
from nftledger import config

log = get_logger('Webserver')

app = Sanic('nftledger')

CORS(app, automatic_options=True)
client = rpc.client


@app.route("/", methods=["GET",])
async def teapot(request):
    return text("I\'m a teapot", status=418)


@app.route('/ledger', methods=['GET'])
async def get_ledger(request):
    ledger = request.args.get('ledger', config.DEFAULT_LEDGER_NAME)
    response = rpc.get_ledger(ledger=ledger)

    if response.get('status') == rpc.NO_LEDGER:
        return json({'error': '{} does not exist'.format(ledger)}, status=404)
    return json(response, status=200)


@app.route('/tokens/<token_id:int>', methods=['GET'])
async def get_token(request, token_id):
    ledger = request.args.get('ledger', config.DEFAULT_LEDGER_NAME)
    response = rpc.get_token(token_id=token_id, ledger=ledger)

    if response.get('status') == rpc.NO_LEDGER:
        return json({'error': '{} does not exist'.format(ledger)}, status=404)

    if response.get('status') == rpc.NO_TOKEN:
        return json({'error': 'Token {} does not exist'.format(token_id)}, status=404)

    return json(response, status=200)


@app.route('/balances/<account>', methods=['GET'])
async def get_balance(request, account):
    ledger = request.args.get('ledger', config.DEFAULT_LEDGER_NAME)
    response = rpc.get_balance(account=account, ledger=ledger)

    if response.get('status') == rpc.NO_LEDGER:
        return json({'error': '{} does not exist'.format(ledger)}, status=404)
    return json(response, status=200)


@app.route('/ledger/<variable>', methods=['GET'])
async def get_variable(request, variable):
    ledger = request.args.get('ledger', config.DEFAULT_LEDGER_NAME)
    key = request.args.get('key')

    response = rpc.get_var(variable=variable, key=key, ledger=ledger)

    if response.get('status') == rpc.NO_LEDGER:
        return json({'error': '{} does not exist'.format(ledger)}, status=404)

    if response.get('status') == rpc.NO_VARIABLE:
        return json({'value': None}, status=404)

    return json(response, status=200)


# Expects json object such that:
'''
{
    'sender': 'string',
    'function': 'string',
    'kwargs': {},
    'ledger': 'string' (optional)
}
'''
@app.route('/', methods=['POST'])
async def submit_transaction(request):
    payload = request.json

    if not isinstance(payload, dict) or payload.get('sender') is None or payload.get('function') is None:
        return json({'error': 'malformed payload'}, status=400)

    kwargs = payload.get('kwargs') or {}
    if not isinstance(kwargs, dict):
        return json({'error': 'malformed payload'}, status=400)

    response = rpc.run(sender=payload['sender'],
                       function=payload['function'],
                       kwargs=kwargs,
                       ledger=payload.get('ledger', config.DEFAULT_LEDGER_NAME))

    if response['status_code'] == 1:
        log.info('Rejected {} from {}'.format(payload['function'], payload['sender']))
        return json(response, status=400)

    return json(response, status=200)


def start_webserver():
    app.run(host='0.0.0.0', port=config.WEB_SERVER_PORT, workers=config.NUM_WORKERS, debug=False, access_log=False)


if __name__ == '__main__':
    start_webserver()
