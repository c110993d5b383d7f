"""Category catalogue tests."""

from taxsort.services.categories import (
    get_category_value,
    is_income_category,
    is_neutral_category,
    resolve_category,
)


def test_resolve_category_accepts_keys_values_and_aliases():
    assert resolve_category("OFFICE_EXPENSES") == "Office Expenses"
    assert resolve_category("office expenses") == "Office Expenses"
    assert resolve_category("MEALS_ENTERTAINMENT") == "Meals"
    assert resolve_category("RENT_LEASE_EQUIPMENT") == "Rent or Lease (Vehicles, Machinery, Equipment)"


def test_resolve_category_rejects_unknown():
    assert resolve_category("SPACESHIP_FUEL") is None
    assert resolve_category("") is None
    assert resolve_category(None) is None


def test_get_category_value_passes_unknown_keys_through():
    assert get_category_value("CAR_TRUCK_EXPENSES") == "Car and Truck Expenses"
    assert get_category_value("SOMETHING_ELSE") == "SOMETHING_ELSE"


def test_income_and_neutral_categories():
    assert is_income_category("GROSS_RECEIPTS")
    assert is_income_category("Other Income")
    assert not is_income_category("Office Expenses")
    assert is_neutral_category("Transfer Between Accounts")
    assert not is_neutral_category("Meals")
