"""Payment method catalog — gateway deductions withheld from a refund.

Every deduction is a pure function of the full booking amount, not of the
refund. The set of methods is closed.
"""

from dataclasses import dataclass
from typing import Callable


class UnknownPaymentMethodError(ValueError):
    """Raised when a payment method is not in the catalog."""


def _percentage(amount: float, percentage: float) -> float:
    return (amount * percentage) / 100


def _debit_card(amount: float) -> float:
    # Lower MDR slab for small transactions
    if amount <= 2000:
        return _percentage(amount, 0.4)
    return _percentage(amount, 0.9)


@dataclass(frozen=True)
class PaymentMethod:
    code: str
    name: str
    charges: Callable[[float], float]


PAYMENT_METHODS: tuple[PaymentMethod, ...] = (
    PaymentMethod("upi", "UPI", lambda amount: 0.0),
    PaymentMethod("debit_card", "Debit Card", _debit_card),
    PaymentMethod("credit_card", "Credit Card", lambda amount: _percentage(amount, 1.0)),
    PaymentMethod("net_banking", "Net Banking", lambda amount: 10.0),
    PaymentMethod("e_wallet", "E-Wallet", lambda amount: _percentage(amount, 1.8)),
    PaymentMethod("international_card", "International Card", lambda amount: _percentage(amount, 3.5)),
    PaymentMethod("emi_pay_later", "EMI / Pay Later", lambda amount: _percentage(amount, 3.5)),
)

DEFAULT_PAYMENT_METHOD = PAYMENT_METHODS[0]

_LOOKUP: dict[str, PaymentMethod] = {}
for _method in PAYMENT_METHODS:
    _LOOKUP[_method.code] = _method
    _LOOKUP[_method.name.lower()] = _method


def get_payment_method(code_or_name: str) -> PaymentMethod:
    """Resolve a payment method by slug ("debit_card") or display name ("Debit Card")."""
    method = _LOOKUP.get(code_or_name.strip().lower())
    if method is None:
        valid = ", ".join(m.code for m in PAYMENT_METHODS)
        raise UnknownPaymentMethodError(
            f"Unknown payment method '{code_or_name}'. Expected one of: {valid}"
        )
    return method


def charges(amount: float, method: PaymentMethod) -> float:
    """Deduction the payment gateway keeps on a transaction of `amount`."""
    return method.charges(amount)


def total_with_charges(amount: float, method: PaymentMethod) -> float:
    """Amount actually debited at booking time, gateway charges included."""
    return amount + charges(amount, method)
