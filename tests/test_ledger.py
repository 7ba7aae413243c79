"""
Tests for the Ledger orchestrator

Covers the insertion guard, the budget registry, bulk loading and the
aggregation the guard relies on. Each test works on a fresh Ledger.
"""

import pytest
from decimal import Decimal

from ledger.audit import AuditLogger
from ledger.models import AuditEventType, Budget, Transaction
from ledger.orchestrator import Ledger, create_ledger
from ledger.services.loader import BudgetDecodeError, BudgetLoadError
from ledger.services.storage import InMemoryAuditStorage
from ledger.validation import (
    BudgetExceededError,
    EmptyCategoryError,
    NonPositiveLimitError,
    ZeroAmountError,
)


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def ledger(audit_storage):
    return Ledger(audit_logger=AuditLogger(storage=audit_storage))


def tx(amount, category="Food", description=""):
    return Transaction(amount=Decimal(str(amount)), category=category, description=description)


class TestInsertionGuard:
    """Tests for add_transaction."""

    def test_zero_amount_rejected_without_budget(self, ledger):
        """Test that zero is rejected even when no budget exists."""
        with pytest.raises(ZeroAmountError):
            ledger.add_transaction(tx(0, category="Test"))
        assert ledger.transaction_count() == 0

    def test_zero_amount_rejected_with_budget(self, ledger):
        """Test that zero is rejected regardless of budget headroom."""
        ledger.set_budget(Budget(category="Food", limit=5000))
        with pytest.raises(ZeroAmountError):
            ledger.add_transaction(tx("0.00"))

    def test_unbudgeted_category_accepts_any_amount(self, ledger):
        """Test that categories without a budget are unconstrained."""
        ledger.set_budget(Budget(category="Food", limit=10))
        stored = ledger.add_transaction(tx(1_000_000, category="Healthcare"))
        assert stored.id == 1
        assert ledger.category_total("Healthcare") == Decimal("1000000")

    def test_reaching_limit_exactly_is_allowed(self, ledger):
        """Test T + A == L succeeds."""
        ledger.set_budget(Budget(category="Food", limit=5000))
        ledger.add_transaction(tx(3000))
        ledger.add_transaction(tx(2000))
        assert ledger.category_total("Food") == Decimal("5000")

    def test_exceeding_limit_is_rejected(self, ledger):
        """Test T + A > L fails and leaves the store unchanged."""
        ledger.set_budget(Budget(category="Food", limit=5000))
        ledger.add_transaction(tx(3000))
        before = ledger.list_transactions()

        with pytest.raises(BudgetExceededError) as exc_info:
            ledger.add_transaction(tx(2500))

        error = exc_info.value
        assert error.category == "Food"
        assert error.current_total == Decimal("3000")
        assert error.amount == Decimal("2500")
        assert error.limit == Decimal("5000")
        assert str(error) == (
            "budget exceeded for category 'Food': "
            "current 3000.00 + new 2500.00 > limit 5000.00"
        )
        assert ledger.list_transactions() == before

    def test_negative_amounts_reduce_category_total(self, ledger):
        """Test that negative amounts count toward the total as recorded."""
        ledger.set_budget(Budget(category="Food", limit=100))
        ledger.add_transaction(tx(-50))
        ledger.add_transaction(tx(150))
        assert ledger.category_total("Food") == Decimal("100")
        with pytest.raises(BudgetExceededError):
            ledger.add_transaction(tx("0.01"))

    def test_category_match_is_case_sensitive(self, ledger):
        """Test that 'food' is not guarded by the 'Food' budget."""
        ledger.set_budget(Budget(category="Food", limit=100))
        ledger.add_transaction(tx(500, category="food"))
        assert ledger.category_total("Food") == 0
        assert ledger.category_total("food") == Decimal("500")


class TestIdentifiersAndDates:
    """Tests for identifier assignment and date defaulting."""

    def test_ids_are_sequential_and_skip_failures(self, ledger):
        """Test that failed insertions do not consume an identifier."""
        ledger.set_budget(Budget(category="Food", limit=100))
        first = ledger.add_transaction(tx(60))
        with pytest.raises(BudgetExceededError):
            ledger.add_transaction(tx(60))
        with pytest.raises(ZeroAmountError):
            ledger.add_transaction(tx(0))
        second = ledger.add_transaction(tx(40))
        third = ledger.add_transaction(tx(5, category="Other"))
        assert [first.id, second.id, third.id] == [1, 2, 3]

    def test_candidate_id_is_ignored(self, ledger):
        """Test that the ledger always assigns its own identifier."""
        stored = ledger.add_transaction(Transaction(id=99, amount=10, category="Food"))
        assert stored.id == 1

    def test_missing_date_defaults_to_now(self, ledger):
        """Test that an unset date is filled in on insertion."""
        stored = ledger.add_transaction(tx(10))
        assert stored.date is not None

    def test_explicit_date_is_kept(self, ledger):
        """Test that a given date is stored unchanged."""
        from datetime import datetime

        when = datetime(2024, 1, 15)
        stored = ledger.add_transaction(
            Transaction(amount=Decimal("1500.50"), category="Salary", date=when)
        )
        assert stored.date == when


class TestBudgetRegistry:
    """Tests for set_budget, get_budget and list_budgets."""

    def test_empty_category_rejected(self, ledger):
        """Test that a budget needs a category and the registry is untouched."""
        with pytest.raises(EmptyCategoryError):
            ledger.set_budget(Budget(category="", limit=100))
        assert ledger.list_budgets() == []

    @pytest.mark.parametrize("limit", ["0", "-1"])
    def test_non_positive_limit_rejected(self, ledger, limit):
        """Test that limits must be strictly positive."""
        ledger.set_budget(Budget(category="Food", limit=5000))
        with pytest.raises(NonPositiveLimitError):
            ledger.set_budget(Budget(category="Food", limit=Decimal(limit)))
        assert ledger.get_budget("Food").limit == Decimal("5000")

    def test_get_budget_absent(self, ledger):
        """Test that a missing budget is reported as None."""
        assert ledger.get_budget("Food") is None

    def test_reset_replaces_limit_and_period(self, ledger):
        """Test that setting an existing category overwrites it."""
        ledger.set_budget(Budget(category="Food", limit=5000, period="monthly"))
        ledger.set_budget(Budget(category="Food", limit=6000, period="weekly"))
        budget = ledger.get_budget("Food")
        assert budget.limit == Decimal("6000")
        assert budget.period == "weekly"
        assert len(ledger.list_budgets()) == 1

    def test_list_budgets_sorted_by_category(self, ledger):
        """Test deterministic ordering of the budget listing."""
        for name in ["Transport", "Entertainment", "Food"]:
            ledger.set_budget(Budget(category=name, limit=100))
        assert [b.category for b in ledger.list_budgets()] == [
            "Entertainment", "Food", "Transport",
        ]


class TestSnapshots:
    """Tests that listings are independent copies."""

    def test_transaction_listing_is_a_copy(self, ledger):
        """Test that mutating the returned list does not affect the ledger."""
        ledger.add_transaction(tx(10))
        listing = ledger.list_transactions()
        listing.clear()
        listing.append(tx(999))
        assert len(ledger.list_transactions()) == 1
        assert ledger.category_total("Food") == Decimal("10")

    def test_budget_listing_is_a_copy(self, ledger):
        """Test that mutating the returned budgets does not affect the registry."""
        ledger.set_budget(Budget(category="Food", limit=100))
        listing = ledger.list_budgets()
        listing.pop()
        assert len(ledger.list_budgets()) == 1

    def test_list_transactions_by_category(self, ledger):
        """Test filtering the transaction listing."""
        ledger.add_transaction(tx(10, category="Food"))
        ledger.add_transaction(tx(20, category="Transport"))
        ledger.add_transaction(tx(30, category="Food"))
        assert [t.id for t in ledger.list_transactions(category="Food")] == [1, 3]

    def test_ledgers_are_independent(self):
        """Test that two ledgers share no state."""
        first, second = Ledger(), Ledger()
        first.set_budget(Budget(category="Food", limit=100))
        first.add_transaction(tx(50))
        assert second.get_budget("Food") is None
        assert second.transaction_count() == 0
        assert second.add_transaction(tx(50)).id == 1


class TestFoodScenario:
    """The raise-the-budget-and-retry walkthrough."""

    def test_food_scenario(self, ledger):
        ledger.set_budget(Budget(category="Food", limit=5000))

        ledger.add_transaction(tx(1000))
        assert ledger.category_total("Food") == Decimal("1000")

        ledger.add_transaction(tx(2000))
        assert ledger.category_total("Food") == Decimal("3000")

        dinner = tx(2500, description="Expensive dinner")
        with pytest.raises(BudgetExceededError):
            ledger.add_transaction(dinner)
        assert ledger.category_total("Food") == Decimal("3000")

        ledger.set_budget(Budget(category="Food", limit=6000))
        stored = ledger.add_transaction(dinner)

        assert stored.id == 3
        assert ledger.category_total("Food") == Decimal("5500")
        status = ledger.budget_status("Food")
        assert status.remaining == Decimal("500")


class TestBulkLoad:
    """Tests for load_budgets, load_budgets_json and load_budgets_file."""

    def test_load_budgets_applies_in_order(self, ledger):
        """Test that later records for a category win."""
        count = ledger.load_budgets([
            Budget(category="Food", limit=100),
            Budget(category="Food", limit=200),
            Budget(category="Transport", limit=50),
        ])
        assert count == 3
        assert ledger.get_budget("Food").limit == Decimal("200")

    def test_load_budgets_stops_at_first_failure_without_rollback(self, ledger):
        """Test partial application when a record is refused."""
        with pytest.raises(BudgetLoadError) as exc_info:
            ledger.load_budgets([
                Budget(category="Food", limit=100),
                Budget(category="Travel", limit=0),
                Budget(category="Transport", limit=50),
            ])

        error = exc_info.value
        assert error.category == "Travel"
        assert isinstance(error.__cause__, NonPositiveLimitError)
        assert "Travel" in str(error)
        assert ledger.get_budget("Food") is not None
        assert ledger.get_budget("Transport") is None

    def test_load_budgets_json(self, ledger):
        """Test decoding and applying a JSON array."""
        count = ledger.load_budgets_json(
            '[{"category": "Utilities", "limit": 4000, "period": "monthly"},'
            ' {"category": "Education", "limit": 2500.5, "period": "yearly"}]'
        )
        assert count == 2
        assert ledger.get_budget("Education").limit == Decimal("2500.5")
        assert ledger.get_budget("Education").period == "yearly"

    def test_load_budgets_json_decode_failure_changes_nothing(self, ledger):
        """Test that a malformed document applies no budgets."""
        with pytest.raises(BudgetDecodeError):
            ledger.load_budgets_json('{"category": "Food", "limit": 100}')
        assert ledger.list_budgets() == []

    def test_load_budgets_json_empty_category_is_set_failure(self, ledger):
        """Test that decoded-but-invalid records fail at set time."""
        with pytest.raises(BudgetLoadError) as exc_info:
            ledger.load_budgets_json('[{"category": "", "limit": 10, "period": "monthly"}]')
        assert isinstance(exc_info.value.__cause__, EmptyCategoryError)

    def test_load_budgets_file(self, ledger, tmp_path):
        """Test loading from a file on disk."""
        path = tmp_path / "budgets.json"
        path.write_text('[{"category": "Utilities", "limit": 4000, "period": "monthly"}]')
        assert ledger.load_budgets_file(path) == 1
        assert ledger.get_budget("Utilities").limit == Decimal("4000")

    def test_load_budgets_file_missing(self, ledger, tmp_path):
        """Test that a missing file surfaces as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            ledger.load_budgets_file(tmp_path / "missing.json")


class TestAuditTrail:
    """Tests that ledger operations are audited."""

    def test_added_and_rejected_transactions_are_audited(self, ledger, audit_storage):
        ledger.set_budget(Budget(category="Food", limit=100))
        ledger.add_transaction(tx(100))
        with pytest.raises(BudgetExceededError):
            ledger.add_transaction(tx(1))

        types = [e.event_type for e in reversed(audit_storage.get_recent_events())]
        assert types == [
            AuditEventType.BUDGET_SET,
            AuditEventType.TRANSACTION_ADDED,
            AuditEventType.TRANSACTION_REJECTED,
        ]

    def test_bulk_load_events_share_correlation_id(self, ledger, audit_storage):
        ledger.load_budgets([
            Budget(category="Food", limit=100),
            Budget(category="Transport", limit=50),
        ])
        loaded = audit_storage.get_recent_events(limit=1)[0]
        assert loaded.event_type == AuditEventType.BUDGETS_LOADED
        related = audit_storage.get_events_by_correlation_id(loaded.correlation_id)
        assert len(related) == 3

    def test_failing_audit_storage_does_not_break_ledger(self):
        class BrokenStorage(InMemoryAuditStorage):
            def append_event(self, event):
                raise RuntimeError("disk full")

        ledger = Ledger(audit_logger=AuditLogger(storage=BrokenStorage()))
        assert ledger.add_transaction(tx(10)).id == 1

    def test_create_ledger_respects_audit_setting(self, monkeypatch):
        from ledger.config import get_settings

        get_settings.cache_clear()
        monkeypatch.setenv("LEDGER_AUDIT_TRAIL_ENABLED", "false")
        assert create_ledger().audit.storage is None

        monkeypatch.setenv("LEDGER_AUDIT_TRAIL_ENABLED", "true")
        assert isinstance(create_ledger().audit.storage, InMemoryAuditStorage)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
