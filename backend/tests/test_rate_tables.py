import pytest

from app.data.payment_methods import (
    PAYMENT_METHODS,
    UnknownPaymentMethodError,
    charges,
    get_payment_method,
    total_with_charges,
)
from app.data.travel_classes import class_full_name, flat_rate


def test_flat_rates_per_class():
    assert flat_rate("1A") == 240
    assert flat_rate("2A") == 200
    assert flat_rate("3A") == 180
    assert flat_rate("CC") == 180
    assert flat_rate("SL") == 120
    assert flat_rate("2S") == 60


def test_unknown_class_falls_back_to_cheapest_rate():
    assert flat_rate("XX") == 60
    assert flat_rate("") == 60


def test_class_lookup_ignores_case_and_whitespace():
    assert flat_rate(" sl ") == 120
    assert class_full_name("2a") == "Air-Conditioned Two-Tier Class"
    assert class_full_name("ZZ") == "ZZ"


def test_catalog_order_is_fixed():
    assert [m.name for m in PAYMENT_METHODS] == [
        "UPI",
        "Debit Card",
        "Credit Card",
        "Net Banking",
        "E-Wallet",
        "International Card",
        "EMI / Pay Later",
    ]


@pytest.mark.parametrize("code,amount,expected", [
    ("upi", 3845, 0.0),
    ("debit_card", 2000, 8.0),
    ("debit_card", 3845, 34.605),
    ("credit_card", 3845, 38.45),
    ("net_banking", 3845, 10.0),
    ("net_banking", 50, 10.0),
    ("e_wallet", 1000, 18.0),
    ("international_card", 1000, 35.0),
    ("emi_pay_later", 1000, 35.0),
])
def test_deductions(code, amount, expected):
    assert charges(amount, get_payment_method(code)) == pytest.approx(expected)


def test_lookup_by_display_name():
    assert get_payment_method("Debit Card").code == "debit_card"
    assert get_payment_method("emi / pay later").code == "emi_pay_later"


def test_unknown_payment_method():
    with pytest.raises(UnknownPaymentMethodError):
        get_payment_method("cheque")


def test_total_with_charges():
    assert total_with_charges(1000, get_payment_method("credit_card")) == pytest.approx(1010.0)
