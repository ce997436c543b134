from ..client import LedgerClient
from ..exceptions import LedgerError
from .. import config

client = LedgerClient()

NO_LEDGER = 1
NO_VARIABLE = 2
NO_TOKEN = 3


def render_result(result):
    if isinstance(result, Exception):
        name = result.name if isinstance(result, LedgerError) else result.__class__.__name__
        return {
            'error': name,
            'message': str(result)
        }
    return result


def get_ledger(ledger: str = config.DEFAULT_LEDGER_NAME):
    if not client.raw_driver.ledger_exists(ledger):
        return {
            'status': NO_LEDGER
        }

    handle = client.get_ledger(ledger)

    return {
        'ledger': ledger,
        'name': handle.name(),
        'symbol': handle.symbol(),
        'owner': handle.owner(),
        'paused': handle.paused(),
        'max_supply': handle.max_supply(),
        'minted_count': handle.minted_count(),
        'total_supply': handle.total_supply(),
    }


def get_token(token_id: int, ledger: str = config.DEFAULT_LEDGER_NAME):
    handle = client.get_ledger(ledger)

    if handle is None:
        return {
            'status': NO_LEDGER
        }

    if not handle.exists(token_id=token_id):
        return {
            'status': NO_TOKEN
        }

    return {
        'token_id': token_id,
        'owner': handle.owner_of(token_id=token_id),
        'uri': handle.token_uri(token_id=token_id),
        'approved': handle.get_approved(token_id=token_id),
    }


def get_balance(account: str, ledger: str = config.DEFAULT_LEDGER_NAME):
    handle = client.get_ledger(ledger)

    if handle is None:
        return {
            'status': NO_LEDGER
        }

    return {
        'account': account,
        'balance': handle.balance_of(account=account),
        'tokens': handle.tokens_of_owner(account=account),
    }


def get_var(variable: str, key: str = None, ledger: str = config.DEFAULT_LEDGER_NAME):
    if not client.raw_driver.ledger_exists(ledger):
        return {
            'status': NO_LEDGER
        }

    # Multihashes don't work here
    if key is None:
        response = client.get_var(ledger, variable)
    else:
        response = client.get_var(ledger, variable, [key])

    if response is None:
        return {
            'status': NO_VARIABLE
        }

    return {
        'value': response
    }


def run(sender: str, function: str, kwargs: dict = None, ledger: str = config.DEFAULT_LEDGER_NAME):
    output = client.execute(sender=sender, function=function, ledger=ledger, kwargs=kwargs)

    return {
        'status_code': output['status_code'],
        'result': render_result(output['result']),
        'events': output['events'],
    }


def run_all(transactions: list):
    return [run(**tx) for tx in transactions]


# String to callable map for strict RPC capabilities
command_map = {
    'get_ledger': get_ledger,
    'get_token': get_token,
    'get_balance': get_balance,
    'get_var': get_var,
    'run': run,
    'run_all': run_all,
}


# Single function call to map RPC command to an actual Python function. Allows the server to just call this.
def process_json_rpc_command(payload: dict):
    command = payload.get('command')
    arguments = payload.get('arguments')

    if command is None or arguments is None:
        return

    func = command_map.get(command)

    if func is None:
        return

    return func(**arguments)
