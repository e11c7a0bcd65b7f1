from decimal import Decimal


class SettlementError(Exception):
    """Base class for errors raised while computing a settlement."""


class InvalidInput(SettlementError):
    """The participants/expenses snapshot cannot be settled as given.

    Raised before any output is produced: empty participant list, duplicate
    participant ids, negative amounts or an expense paid by someone who is not
    a participant.
    """


class RoundingInconsistency(SettlementError):
    """Debt simplification left more than one minor unit unsettled.

    Indicates a bug in the calculator or simplifier, never bad user input.
    """

    def __init__(self, residuals: dict[str, Decimal]):
        self.residuals = residuals
        detail = ", ".join(f"{pid}: {amount}" for pid, amount in residuals.items())
        super().__init__(f"Unsettled residual after simplification ({detail})")
