"""
Payment Gateway Fees
"""
from app.schemas.order import PaymentMethod


def calculate_payment_fees(payment_method: PaymentMethod, amount: float) -> float:
    """
    Fee the merchant pays the gateway: (amount x fee% + fixed) plus tax on that.

    `amount` must be the customer total (after shipping, discount and customer fee).
    No rounding; display formatting happens elsewhere.
    """
    gateway_fee = amount * (payment_method.fee_percentage / 100)
    base_fees = gateway_fee + payment_method.fee_fixed
    tax = base_fees * (payment_method.tax_rate / 100)
    return base_fees + tax
