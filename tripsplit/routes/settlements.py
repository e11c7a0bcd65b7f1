import logging
import os

from fastapi import APIRouter

from tripsplit.balances import settle
from tripsplit.schemas import SettleIn
from tripsplit.serializers import serialize_settlement

logger = logging.getLogger("tripsplit")

router = APIRouter()


def _strict() -> bool:
    return os.getenv("SETTLEMENT_STRICT", "0").lower() in ("1", "true", "yes")


@router.post("/settle")
def compute_settlement(data: SettleIn):
    """Balances and the simplified payment plan for a trip snapshot. Nothing is stored."""
    settlement = settle(data.participants, data.expenses, strict=_strict())
    if data.trip_id:
        logger.info(
            "Trip settled",
            extra={"extra_data": {
                "trip_id": data.trip_id,
                "transaction_count": settlement.summary.total_transactions,
            }},
        )
    return serialize_settlement(settlement)
