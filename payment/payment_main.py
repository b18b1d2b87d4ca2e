from common.errors import PaymentError
from common.helpers import load_config
from payment.payment_config import PaymentConfig
from payment.payment_context import create_payment_context
from payment.swap_orchestrator import SwapOrchestrator

import json
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format= '[%(asctime)s.%(msecs)03d] %(levelname)s:%(name)s %(message)s | %(pathname)s:%(lineno)d',
    datefmt='%Y%m%d,%H:%M:%S'
)

USAGE = 'Usage: python -m payment.payment_main <swap|deposit|quote> <amount> [slippage_tolerance_percent]'


def run(command, amount, slippage_tolerance=None, config_filename='cfg.yaml'):
    config = PaymentConfig.create_from_dict(load_config(config_filename))
    logging.info(f'Config: {config}')
    orchestrator = SwapOrchestrator(create_payment_context(config))

    if command == 'swap':
        result = orchestrator.swap_for_exact_output(amount, slippage_tolerance)
        print(json.dumps(result.dump(), indent=2))
    elif command == 'deposit':
        result = orchestrator.direct_deposit(amount)
        print(json.dumps(result.dump(), indent=2))
    elif command == 'quote':
        quote = orchestrator.quote_amount_in_max(amount, slippage_tolerance)
        print(quote.amount_in_max.format())
    else:
        raise ValueError(f'Invalid command {command}: must be "swap", "deposit" or "quote"')


def main(argv):
    if len(argv) < 3:
        print(USAGE, file=sys.stderr)
        return 2
    command, amount = argv[1], argv[2]
    slippage_tolerance = argv[3] if len(argv) > 3 else None
    try:
        run(command, amount, slippage_tolerance)
    except PaymentError as e:
        # This is the entry point, so there is nobody to propagate to
        logging.error(f'{type(e).__name__}: {e}')
        return 1
    except (ValueError, ArithmeticError) as e:
        # decimal.InvalidOperation (an unparseable amount) is an ArithmeticError
        logging.error(f'Invalid input: {e}')
        print(USAGE, file=sys.stderr)
        return 2
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
