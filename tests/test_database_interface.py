"""Tests for Database interface returning domain models."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from lotledger.database.factories import create_memory_database
from lotledger.domain import entities


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = temp_db.create_account(name="My Brokerage")

        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.id == account_id
        assert account.name == "My Brokerage"
        assert isinstance(account.created_at, datetime)

    def test_missing_rows_return_none(self, temp_db):
        assert temp_db.get_account(99) is None
        assert temp_db.get_account_by_name("nobody") is None
        assert temp_db.get_symbol(99) is None
        assert temp_db.get_symbol_by_ticker("XYZ") is None
        assert temp_db.get_risk_group_by_name("Equities") is None
        assert temp_db.get_deposit_type_by_name("Dividend") is None
        assert temp_db.get_lot(99) is None

    def test_symbol_returns_domain_model(self, temp_db, sample_symbol):
        assert isinstance(sample_symbol, entities.UniverseSymbol)
        assert temp_db.get_symbol_by_ticker("SPY") == sample_symbol
        assert temp_db.get_symbol_by_ticker("spy") is None

    def test_lot_returns_domain_model(self, temp_db, sample_account, sample_symbol):
        lot_id = temp_db.create_lot(
            universe_id=sample_symbol.id,
            account_id=sample_account.id,
            buy=Decimal("450.25"),
            buy_date=date(2026, 2, 15),
            quantity=Decimal("10.5"),
        )

        lot = temp_db.get_lot(lot_id)

        assert isinstance(lot, entities.Lot)
        assert lot.buy == Decimal("450.25")
        assert lot.quantity == Decimal("10.5")
        assert lot.sell == Decimal("0")
        assert lot.sell_date is None
        assert lot.is_open

    def test_find_lot(self, temp_db, sample_account, sample_symbol, make_lot):
        make_lot(10, date(2026, 1, 2))
        make_lot(5, date(2026, 1, 2))

        matches = temp_db.find_lot(
            sample_symbol.id, sample_account.id, Decimal("100"), date(2026, 1, 2)
        )
        exact = temp_db.find_lot(
            sample_symbol.id, sample_account.id, Decimal("100"), date(2026, 1, 2), Decimal("5")
        )

        assert len(matches) == 2
        assert [lot.quantity for lot in exact] == [Decimal("5")]
        assert temp_db.find_lot(
            sample_symbol.id, sample_account.id, Decimal("101"), date(2026, 1, 2)
        ) == []

    def test_open_lots_ordered_by_buy_date(self, temp_db, sample_account, sample_symbol, make_lot):
        late = make_lot(1, date(2026, 2, 1))
        early = make_lot(2, date(2026, 1, 1))
        closed = make_lot(3, date(2025, 12, 1))
        temp_db.update_lot(closed, sell=Decimal("90"), sell_date=date(2026, 1, 20))

        open_lots = temp_db.list_open_lots(sample_symbol.id, sample_account.id)

        assert [lot.id for lot in open_lots] == [early, late]

    def test_list_closed_lots(self, temp_db, sample_account, sample_symbol, make_lot):
        lot_id = make_lot(3, date(2026, 1, 1))
        temp_db.update_lot(lot_id, sell=Decimal("90"), sell_date=date(2026, 1, 20))

        closed = temp_db.list_closed_lots(
            sample_symbol.id, sample_account.id, Decimal("90"), date(2026, 1, 20)
        )

        assert [lot.id for lot in closed] == [lot_id]
        assert temp_db.list_closed_lots(
            sample_symbol.id, sample_account.id, Decimal("91"), date(2026, 1, 20)
        ) == []

    def test_update_lot_quantity(self, temp_db, make_lot):
        lot_id = make_lot(10, date(2026, 1, 1))

        temp_db.update_lot(lot_id, quantity=Decimal("4"))

        lot = temp_db.get_lot(lot_id)
        assert lot.quantity == Decimal("4")
        assert lot.is_open

    def test_update_missing_lot(self, temp_db):
        with pytest.raises(ValueError):
            temp_db.update_lot(42, quantity=Decimal("1"))

    def test_find_deposit_matches_null_symbol(self, temp_db, sample_account, sample_symbol):
        type_id = temp_db.create_deposit_type("Cash Deposit")
        deposit_id = temp_db.create_deposit(
            date(2026, 1, 5), Decimal("500.00"), sample_account.id, type_id, None
        )

        found = temp_db.find_deposit(
            date(2026, 1, 5), Decimal("500.00"), sample_account.id, type_id, None
        )

        assert isinstance(found, entities.Deposit)
        assert found.id == deposit_id
        assert temp_db.find_deposit(
            date(2026, 1, 5), Decimal("500.00"), sample_account.id, type_id, sample_symbol.id
        ) is None

    def test_list_deposits_by_account(self, temp_db, sample_account):
        other = temp_db.create_account("Retirement IRA")
        type_id = temp_db.create_deposit_type("Dividend")
        temp_db.create_deposit(date(2026, 1, 5), Decimal("1"), sample_account.id, type_id)
        temp_db.create_deposit(date(2026, 1, 6), Decimal("2"), other, type_id)

        assert len(temp_db.list_deposits()) == 2
        assert [d.amount for d in temp_db.list_deposits(account_id=other)] == [Decimal("2")]

    def test_memory_database(self):
        db = create_memory_database()
        db.connect()
        db.initialize_schema()
        try:
            account_id = db.create_account("Scratch")
            assert db.get_account(account_id).name == "Scratch"
        finally:
            db.disconnect()

    def test_transaction_commits_together(self, temp_db, sample_account, sample_symbol):
        with temp_db.transaction():
            first = temp_db.create_lot(
                sample_symbol.id, sample_account.id, Decimal("10"), date(2026, 1, 2), Decimal("5")
            )
            temp_db.update_lot(first, quantity=Decimal("3"))

        assert temp_db.get_lot(first).quantity == Decimal("3")

    def test_transaction_rolls_back_on_error(self, temp_db, sample_account, sample_symbol):
        with pytest.raises(RuntimeError):
            with temp_db.transaction():
                temp_db.create_lot(
                    sample_symbol.id, sample_account.id, Decimal("10"), date(2026, 1, 2), Decimal("5")
                )
                with temp_db.transaction():
                    temp_db.create_account("Nested")
                raise RuntimeError("boom")

        assert temp_db.list_lots() == []
        assert temp_db.get_account_by_name("Nested") is None

    def test_split_piece_keeps_parent(self, temp_db, sample_account, sample_symbol, make_lot):
        parent = make_lot(10, date(2026, 1, 2))
        piece = temp_db.create_lot(
            sample_symbol.id,
            sample_account.id,
            Decimal("100"),
            date(2026, 1, 2),
            Decimal("4"),
            sell=Decimal("110"),
            sell_date=date(2026, 2, 1),
            parent_lot_id=parent,
        )

        assert temp_db.get_lot(piece).parent_lot_id == parent
        assert temp_db.get_lot(parent).parent_lot_id is None
