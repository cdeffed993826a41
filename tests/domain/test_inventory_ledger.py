"""Unit tests for the InventoryLedger domain service."""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest

from stockroom.domain.exceptions import (
    InsufficientStockError,
    LockTimeoutError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from stockroom.domain.model.product import ProductRecord
from stockroom.domain.model.value_objects import Money
from stockroom.domain.service.inventory_ledger import InventoryLedger
from stockroom.infrastructure.persistence.in_memory_product_repository import (
    InMemoryProductRepository,
)
from tests.fakes import (
    CountingProductRepository,
    FailingProductRepository,
    GatedProductRepository,
    UnreadableProductRepository,
)


def _ledger(*products: ProductRecord) -> tuple[InventoryLedger, InMemoryProductRepository]:
    repo = InMemoryProductRepository(list(products))
    return InventoryLedger(repo), repo


def _product(name: str, quantity: int, price: str = "10.00") -> ProductRecord:
    return ProductRecord(name=name, price=Money.of(price), quantity=quantity)


class TestRestock:

    def test_creates_unknown_product(self):
        ledger, repo = _ledger()
        product = ledger.restock("X", 5, price=10)
        assert product.quantity == 5
        assert product.price == Money.of("10")
        assert repo.get_by_name("X").quantity == 5

    def test_restock_accumulates_and_keeps_price(self):
        ledger, repo = _ledger()
        ledger.restock("X", 5, price=10)
        product = ledger.restock("X", 3, price=999)
        assert product.quantity == 8
        assert product.price == Money.of("10")
        assert repo.get_by_name("X").price == Money.of("10")

    def test_restock_keeps_description_and_image(self):
        ledger, repo = _ledger()
        ledger.restock(
            "X", 1, price="1.00", description="first",
            image_ref="https://cdn.example.com/x.png",
        )
        ledger.restock("X", 1, description="second", image_ref="https://cdn.example.com/y.png")
        stored = repo.get_by_name("X")
        assert stored.description == "first"
        assert stored.image_ref == "https://cdn.example.com/x.png"

    def test_existing_product_needs_no_price(self):
        ledger, _ = _ledger(_product("X", 2))
        assert ledger.restock("X", 3).quantity == 5

    def test_price_required_on_creation(self):
        ledger, repo = _ledger()
        with pytest.raises(ValidationError, match="Price is required"):
            ledger.restock("X", 5)
        assert repo.list_all() == []

    def test_negative_price_rejected(self):
        ledger, repo = _ledger()
        with pytest.raises(ValidationError, match="cannot be negative"):
            ledger.restock("X", 5, price="-1")
        assert repo.list_all() == []

    def test_zero_price_allowed(self):
        ledger, _ = _ledger()
        assert ledger.restock("Freebie", 1, price=0).price.amount == Decimal("0")

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        ledger, repo = _ledger()
        with pytest.raises(ValidationError, match="must be positive"):
            ledger.restock("X", qty, price=1)
        assert repo.list_all() == []

    def test_empty_name_rejected(self):
        ledger, _ = _ledger()
        with pytest.raises(ValidationError, match="name is required"):
            ledger.restock("  ", 1, price=1)

    def test_name_is_stripped(self):
        ledger, repo = _ledger()
        ledger.restock(" Atlas ", 1, price=1)
        ledger.restock("Atlas", 1)
        assert repo.get_by_name("Atlas").quantity == 2

    def test_accepts_money_instance(self):
        ledger, _ = _ledger()
        assert ledger.restock("X", 1, price=Money.of("3.30")).price == Money.of("3.30")


class TestSell:

    def test_sell_decrements(self):
        ledger, repo = _ledger(_product("X", 10))
        assert ledger.sell("X", 4).quantity == 6
        assert repo.get_by_name("X").quantity == 6

    def test_sell_everything(self):
        ledger, _ = _ledger(_product("X", 3))
        assert ledger.sell("X", 3).quantity == 0

    def test_unknown_product(self):
        ledger, _ = _ledger()
        with pytest.raises(NotFoundError, match="Product not found"):
            ledger.sell("Ghost", 1)

    def test_oversell_leaves_quantity_unchanged(self):
        repo = CountingProductRepository([_product("X", 6)])
        ledger = InventoryLedger(repo)
        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.sell("X", 10)
        assert (exc_info.value.available, exc_info.value.requested) == (6, 10)
        assert repo.get_by_name("X").quantity == 6
        assert repo.saves == 0

    @pytest.mark.parametrize("qty", [0, -2])
    def test_non_positive_quantity_rejected(self, qty):
        ledger, repo = _ledger(_product("X", 5))
        with pytest.raises(ValidationError):
            ledger.sell("X", qty)
        assert repo.get_by_name("X").quantity == 5

    def test_sequence_of_sells_never_goes_negative(self):
        ledger, repo = _ledger(_product("X", 7))
        seen = []
        for qty in [3, 3, 3, 1, 1]:
            try:
                seen.append(ledger.sell("X", qty).quantity)
            except InsufficientStockError:
                seen.append(repo.get_by_name("X").quantity)
        assert seen == [4, 1, 1, 0, 0]
        assert all(q >= 0 for q in seen)


class TestGetAll:

    def test_get_all_returns_every_product(self):
        ledger, _ = _ledger(_product("X", 1), _product("Y", 2))
        assert [p.name for p in ledger.get_all()] == ["X", "Y"]


class TestStorageFailures:

    def test_write_failure_propagates_and_leaves_store_unchanged(self):
        repo = FailingProductRepository([_product("X", 5)])
        ledger = InventoryLedger(repo)
        with pytest.raises(StorageError):
            ledger.sell("X", 2)
        with pytest.raises(StorageError):
            ledger.restock("X", 2)
        assert repo.get_by_name("X").quantity == 5

    def test_read_failure_propagates(self):
        ledger = InventoryLedger(UnreadableProductRepository())
        with pytest.raises(StorageError):
            ledger.restock("X", 1, price=1)

    def test_lock_released_after_failure(self):
        repo = FailingProductRepository([_product("X", 5)])
        ledger = InventoryLedger(repo, lock_timeout=0.5)
        for _ in range(3):
            with pytest.raises(StorageError):
                ledger.sell("X", 1)


class TestConcurrency:

    @pytest.mark.parametrize("n", [10, 100, 1000])
    def test_concurrent_sells_lose_no_updates(self, n):
        ledger, repo = _ledger(_product("X", n))
        with ThreadPoolExecutor(max_workers=32) as pool:
            results = list(pool.map(lambda _: ledger.sell("X", 1), range(n)))
        assert len(results) == n
        assert repo.get_by_name("X").quantity == 0
        assert sorted(r.quantity for r in results) == list(range(n))

    def test_concurrent_oversell_sells_exactly_the_stock(self):
        ledger, repo = _ledger(_product("X", 50))
        outcomes = []

        def attempt(_):
            try:
                ledger.sell("X", 1)
                return "sold"
            except InsufficientStockError:
                return "short"

        with ThreadPoolExecutor(max_workers=16) as pool:
            outcomes = list(pool.map(attempt, range(80)))
        assert outcomes.count("sold") == 50
        assert outcomes.count("short") == 30
        assert repo.get_by_name("X").quantity == 0

    def test_concurrent_restocks_and_sells(self):
        ledger, repo = _ledger(_product("X", 100))

        def work(i):
            if i % 2:
                ledger.restock("X", 2)
            else:
                ledger.sell("X", 1)

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(work, range(200)))
        # 100 restocks of 2, 100 sells of 1
        assert repo.get_by_name("X").quantity == 200

    def test_concurrent_first_restocks_create_once(self):
        ledger, repo = _ledger()
        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(lambda _: ledger.restock("New", 1, price="4.00"), range(64)))
        assert repo.get_by_name("New").quantity == 64
        assert len(repo.list_all()) == 1

    def test_other_products_are_not_blocked(self):
        repo = GatedProductRepository("X", [_product("X", 5), _product("Y", 5)])
        ledger = InventoryLedger(repo, lock_timeout=1.0)

        t = threading.Thread(target=ledger.restock, args=("X", 1))
        t.start()
        try:
            assert repo.entered.wait(timeout=5.0)
            # X's critical section is occupied; Y goes straight through.
            assert ledger.sell("Y", 2).quantity == 3
            assert ledger.restock("Y", 4).quantity == 7
        finally:
            repo.gate.set()
            t.join(timeout=5.0)
        assert repo.get_by_name("X").quantity == 6

    def test_same_product_waits_and_times_out(self):
        repo = GatedProductRepository("X", [_product("X", 5)])
        ledger = InventoryLedger(repo, lock_timeout=0.2)

        t = threading.Thread(target=ledger.restock, args=("X", 1))
        t.start()
        try:
            assert repo.entered.wait(timeout=5.0)
            with pytest.raises(LockTimeoutError):
                ledger.sell("X", 1)
        finally:
            repo.gate.set()
            t.join(timeout=5.0)
        assert repo.get_by_name("X").quantity == 6
        # Lock is free again once the holder finished.
        assert ledger.sell("X", 1).quantity == 5

    def test_negative_lock_timeout_rejected(self):
        with pytest.raises(ValidationError):
            InventoryLedger(InMemoryProductRepository(), lock_timeout=-1)


class TestEndToEnd:

    def test_atlas_scenario(self):
        ledger, repo = _ledger()

        created = ledger.restock("Atlas", 10, price=25.0)
        assert (created.name, created.quantity, created.price) == ("Atlas", 10, Money.of("25.0"))

        assert ledger.sell("Atlas", 4).quantity == 6

        with pytest.raises(InsufficientStockError) as exc_info:
            ledger.sell("Atlas", 10)
        assert exc_info.value.available == 6
        assert exc_info.value.requested == 10
        assert repo.get_by_name("Atlas").quantity == 6
