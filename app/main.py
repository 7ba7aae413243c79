"""
Console Demo for the Personal Ledger

Walks through a fixed sequence of scenarios against a fresh ledger:
1. Set the starting budgets in code
2. Load supplementary budgets from the configured JSON file
3. Add transactions within and beyond a budget
4. Raise a budget and retry the refused transaction
5. Print the final budgets and every stored transaction

The narration goes to stdout. Structured logs go to stderr.
Every error is reported and the walkthrough continues.
"""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

import structlog

from ledger.audit import configure_logging
from ledger.config import get_settings
from ledger.models import Budget, Transaction
from ledger.orchestrator import Ledger, create_ledger
from ledger.validation import LedgerError


logger = structlog.get_logger("ledger.demo")


INITIAL_BUDGETS = [
    Budget(category="Food", limit=Decimal("5000"), period="monthly"),
    Budget(category="Entertainment", limit=Decimal("3000"), period="monthly"),
    Budget(category="Transport", limit=Decimal("2000"), period="monthly"),
]


def print_budgets(ledger: Ledger) -> None:
    for status in ledger.budget_report():
        print(
            f"  {status.category}: limit {status.limit:.2f}, "
            f"spent {status.spent:.2f}, remaining {status.remaining:.2f}"
        )


def try_add(ledger: Ledger, transaction: Transaction, expect_rejection: bool = False) -> bool:
    """Add a transaction and narrate the outcome. Returns True if stored."""
    try:
        stored = ledger.add_transaction(transaction)
    except LedgerError as e:
        logger.warning("transaction_refused", error=str(e))
        marker = "✅ Correctly rejected" if expect_rejection else "❌ Failed to add transaction"
        print(f"{marker}: {e}")
        return False

    if expect_rejection:
        print("❌ Transaction should have been rejected!")
    else:
        print(f"✅ Transaction added: {stored.amount:.2f} for {stored.category} (id {stored.id})")
    return True


def load_supplementary_budgets(ledger: Ledger, path: Path) -> None:
    try:
        count = ledger.load_budgets_file(path)
    except FileNotFoundError as e:
        logger.warning("budgets_file_missing", path=str(path))
        print(f"Warning: could not open {path}: {e.strerror or e}")
    except OSError as e:
        logger.error("budgets_file_unreadable", path=str(path), error=str(e))
        print(f"Error reading budgets file {path}: {e.strerror or e}")
    except LedgerError as e:
        logger.error("budgets_file_rejected", path=str(path), error=str(e))
        print(f"Error loading budgets from file: {e}")
    else:
        print(f"Loaded {count} budgets from {path}")


def run_demo(budgets_file: Optional[Path] = None, ledger: Optional[Ledger] = None) -> Ledger:
    """Run every scenario and return the ledger for inspection."""
    settings = get_settings()
    ledger = ledger or create_ledger(settings)
    budgets_file = budgets_file or settings.ledger.budgets_file

    print("Ledger service started with budget enforcement")

    print("\n1. Setting initial budgets in code...")
    for budget in INITIAL_BUDGETS:
        try:
            ledger.set_budget(budget)
        except LedgerError as e:
            print(f"Error setting budget: {e}")
        else:
            print(f"Budget set: {budget.category} - {budget.limit:.2f}")

    print(f"\n2. Loading supplementary budgets from {budgets_file}...")
    load_supplementary_budgets(ledger, budgets_file)

    print("\n3. Current budgets:")
    print_budgets(ledger)

    print("\n4. Running scenarios...")

    print("\n--- Scenario 1: transaction within budget ---")
    try_add(ledger, Transaction(
        amount=Decimal("1000"),
        category="Food",
        description="Groceries",
        date=datetime.now(),
    ))

    print("\n--- Scenario 2: another transaction within budget ---")
    try_add(ledger, Transaction(
        amount=Decimal("2000"),
        category="Food",
        description="Restaurant",
    ))

    print("\n--- Scenario 3: transaction exceeding budget ---")
    expensive_dinner = Transaction(
        amount=Decimal("2500"),
        category="Food",
        description="Expensive dinner",
    )
    try_add(ledger, expensive_dinner, expect_rejection=True)

    print("\n--- Scenario 4: transaction in a category without a budget ---")
    try_add(ledger, Transaction(
        amount=Decimal("5000"),
        category="Healthcare",
        description="Medical checkup",
    ))

    print("\n--- Scenario 5: zero amount ---")
    try_add(ledger, Transaction(amount=Decimal("0"), category="Test"), expect_rejection=True)

    print("\n--- Scenario 6: raise the budget and retry ---")
    raised = Budget(category="Food", limit=Decimal("6000"), period="monthly")
    try:
        ledger.set_budget(raised)
    except LedgerError as e:
        print(f"Error updating budget: {e}")
    else:
        print(f"Budget updated: {raised.category} - {raised.limit:.2f}")
        try_add(ledger, expensive_dinner)

    print("\n5. Final state:")
    print("Budgets:")
    print_budgets(ledger)

    print("\nAll transactions:")
    transactions = ledger.list_transactions()
    for tx in transactions:
        print(
            f"ID: {tx.id}, Amount: {tx.amount:.2f}, Category: {tx.category}, "
            f"Description: {tx.description}, Date: {tx.date:%Y-%m-%d}"
        )

    print(f"\nTotal transactions: {len(transactions)}")
    return ledger


def main() -> None:
    configure_logging()
    run_demo()


if __name__ == "__main__":
    main()
