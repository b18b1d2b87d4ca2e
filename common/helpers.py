from common.errors import QueryError

import logging
import requests
import web3
import yaml

def load_config(filename='cfg.yaml'):
    with open(filename, 'r') as f:
        config = yaml.safe_load(f)
    return config

def load_contract(contract_address, abi_path, web3):
    with open(abi_path, 'r') as a:
        abi = a.read()
    return web3.eth.contract(address=web3.to_checksum_address(contract_address), abi=abi)

"""
Any of the Web3.py .call() function calls may fail if the network connection is lost,
the node rejects the request or the contract reverts. We do not retry: every failure is
logged and re-raised as a QueryError so that the caller aborts before sending anything.
"""
def query_call_wrapper(f, step):
    try:
        return f.call()
    except web3.exceptions.BadFunctionCallOutput as e:
        logging.error(f'Web3 bad function call output during {step} ({e})! The contract likely does not exist at this address')
        raise QueryError(step, e) from e
    except web3.exceptions.ContractLogicError as e:
        logging.error(f'Contract reverted during {step} ({e})!')
        raise QueryError(step, e) from e
    except web3.exceptions.TimeExhausted as e:
        logging.error(f'Web3 time exhausted during {step} ({e})!')
        raise QueryError(step, e) from e
    except web3.exceptions.Web3Exception as e:
        logging.error(f'Web3 error during {step} ({e})!')
        raise QueryError(step, e) from e

    except requests.exceptions.Timeout as e:
        logging.error(f'Request timed out during {step} ({e})!')
        raise QueryError(step, e) from e
    except requests.exceptions.RequestException as e:
        logging.error(f'Generic request error during {step} ({e})!')
        raise QueryError(step, e) from e

    except Exception as e:
        logging.error(f'Unknown error (catch-all handler) during {step} ({e})!')
        raise QueryError(step, e) from e
