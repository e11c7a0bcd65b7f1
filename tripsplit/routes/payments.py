import logging

from fastapi import APIRouter

from tripsplit.payments import create_payment_request
from tripsplit.schemas import PaymentLinkIn

logger = logging.getLogger("tripsplit")

router = APIRouter()


@router.post("/payment-links", status_code=201)
def create_payment_link(data: PaymentLinkIn):
    payment = create_payment_request(
        trip_name=data.trip_name,
        payer=data.from_participant,
        payee=data.to,
        amount=data.amount,
        transaction_ref=data.transaction_ref,
        trip_id=data.trip_id,
    )
    logger.info(
        "Payment link created",
        extra={"extra_data": {
            "transaction_ref": payment["transactionRef"],
            "from": data.from_participant.id,
            "to": data.to.id,
        }},
    )
    return payment
