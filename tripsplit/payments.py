"""UPI payment-link formatting for settlement transactions.

Nothing here moves money or checks that a payment happened; it only builds the
deep link a payer's UPI app can open.
"""

import os
import time
from decimal import Decimal
from urllib.parse import quote, urlencode

from tripsplit.errors import InvalidInput
from tripsplit.money import DEFAULT_CURRENCY, round2
from tripsplit.schemas import Participant

QR_SERVICE_URL = "https://api.qrserver.com/v1/create-qr-code/"


def generate_transaction_ref(trip_id: str | None = None) -> str:
    """Reference code the payee sees in their UPI statement."""
    millis = int(time.time() * 1000)
    return f"TRIP_{trip_id or 'ADHOC'}_{millis}"


def validate_upi_id(upi_id: str | None) -> str:
    if not upi_id or "@" not in upi_id:
        raise InvalidInput("Recipient has no valid UPI id")
    return upi_id


def build_upi_link(
    payee_upi_id: str,
    payee_name: str,
    amount: Decimal,
    note: str,
    transaction_ref: str,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    params = {
        "pa": payee_upi_id,
        "pn": payee_name,
        "am": f"{round2(amount, currency):.2f}",
        "cu": currency,
        "tn": note,
        "tr": transaction_ref,
    }
    return "upi://pay?" + urlencode(params, quote_via=quote)


def build_qr_code_url(link: str, size: int = 300) -> str:
    base = os.getenv("QR_SERVICE_URL", QR_SERVICE_URL)
    return f"{base}?" + urlencode({"size": f"{size}x{size}", "data": link}, quote_via=quote)


def _amount_limits() -> tuple[Decimal, Decimal]:
    return (
        Decimal(os.getenv("PAYMENT_MIN_AMOUNT", "1")),
        Decimal(os.getenv("PAYMENT_MAX_AMOUNT", "100000")),
    )


def create_payment_request(
    trip_name: str,
    payer: Participant,
    payee: Participant,
    amount: Decimal,
    transaction_ref: str | None = None,
    trip_id: str | None = None,
) -> dict:
    """Deep link, QR code and manual instructions for one settlement transaction."""
    currency = os.getenv("PAYMENT_CURRENCY", DEFAULT_CURRENCY)
    if payer.id == payee.id:
        raise InvalidInput("Payer and recipient must be different participants")

    upi_id = validate_upi_id(payee.upi_id)
    amount = round2(amount, currency)
    low, high = _amount_limits()
    if amount < low or amount > high:
        raise InvalidInput(f"Invalid amount. Must be between {low} and {high} {currency}")

    ref = transaction_ref or generate_transaction_ref(trip_id)
    note = f"Settlement for {trip_name}"
    link = build_upi_link(upi_id, payee.name, amount, note, ref, currency)
    qr_code = build_qr_code_url(link)

    return {
        "transactionRef": ref,
        "paymentUrl": link,
        "qrCode": qr_code,
        "amount": float(amount),
        "currency": currency,
        "description": note,
        "recipient": {"id": payee.id, "name": payee.name, "upiId": upi_id},
        "instructions": {
            "mobile": "Open the payment link to pay with your UPI app",
            "desktop": "Scan the QR code with any UPI app on your phone",
            "manual": f"Send {currency} {amount:.2f} to UPI ID {upi_id} with reference {ref}",
        },
    }
