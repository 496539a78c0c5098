"""Console demo: open accounts, move money, print snapshots and records.

Usage::

    mini-ledger-demo --accounts 2 --seed 42
    python -m mini_ledger.demo --compact --currency USD
"""

import argparse
import logging
import sys

from faker import Faker

from mini_ledger.config import LedgerConfig
from mini_ledger.exceptions import FundsError
from mini_ledger.ids import IdGenerator
from mini_ledger.logging import setup_logging
from mini_ledger.models import CurrentAccount, StandardAccount
from mini_ledger.sinks import ConsoleSink
from mini_ledger.store import LedgerStore

logger = logging.getLogger(__name__)


def open_accounts(
    store: LedgerStore,
    fake: Faker,
    id_generator: IdGenerator,
    config: LedgerConfig,
    currency: str,
    num_owners: int,
) -> list[tuple[StandardAccount, CurrentAccount]]:
    """Open one standard and one current account per generated owner."""
    prefixes = {
        "id_prefix": config.ids.account_prefix,
        "transaction_prefix": config.ids.transaction_prefix,
    }
    pairs = []
    for _ in range(num_owners):
        owner = fake.name()
        standard = StandardAccount(
            owner,
            currency,
            id_generator,
            initial_balance=fake.random_int(min=100, max=1000),
            **prefixes,
        )
        current = CurrentAccount(
            owner,
            currency,
            id_generator,
            overdraft_limit=fake.random_int(min=5, max=20) * 10,
            **prefixes,
        )
        store.add_account(standard)
        store.add_account(current)
        pairs.append((standard, current))
    logger.info("Opened %d accounts for %d owners", len(pairs) * 2, num_owners)
    return pairs


def run_activity(
    store: LedgerStore,
    fake: Faker,
    pairs: list[tuple[StandardAccount, CurrentAccount]],
) -> int:
    """Deposit, withdraw and attempt over-limit withdrawals.

    Returns the number of rejected withdrawals.
    """
    rejected = 0
    for standard, current in pairs:
        store.deposit(standard.id, fake.random_int(min=10, max=500))
        store.withdraw(current.id, current.overdraft_limit)

        attempts = (
            (standard, standard.get_balance() + 1),
            (current, 1),
        )
        for account, amount in attempts:
            try:
                store.withdraw(account.id, amount)
            except FundsError as exc:
                rejected += 1
                logger.warning("Rejected withdrawal of %s from %s: %s", amount, account.id, exc)
    return rejected


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="Run the mini-ledger console demo")
    parser.add_argument(
        "--accounts",
        type=int,
        default=config.demo.num_accounts,
        help=f"Number of owners to create (default: {config.demo.num_accounts})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.demo.seed,
        help="Random seed for reproducible owners and amounts",
    )
    parser.add_argument(
        "--locale",
        type=str,
        default=config.demo.locale,
        help=f"Faker locale for owner names (default: {config.demo.locale})",
    )
    parser.add_argument(
        "--currency",
        type=str,
        default=config.default_currency,
        help=f"Account currency (default: {config.default_currency})",
    )
    parser.add_argument(
        "--compact",
        action="store_true",
        default=not config.demo.pretty,
        help="Print one JSON object per line",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help=f"Log level (default: {config.log_level})",
    )
    args = parser.parse_args(argv)

    if args.accounts < 1:
        parser.error("--accounts must be at least 1")

    setup_logging(level=args.log_level, format_type=config.log_format)

    fake = Faker(args.locale)
    if args.seed is not None:
        fake.seed_instance(args.seed)

    id_generator = config.create_id_generator()
    store = LedgerStore()
    sink = ConsoleSink(pretty=not args.compact)

    pairs = open_accounts(store, fake, id_generator, config, args.currency, args.accounts)
    rejected = run_activity(store, fake, pairs)

    sink.write_batch("accounts", list(store.accounts.values()))
    sink.write_batch("transactions", store.transactions)
    sink.close()

    logger.info(
        "Done: %d transactions recorded, %d withdrawals rejected, last id %d",
        len(store.transactions),
        rejected,
        id_generator.current_value(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
