from __future__ import annotations

from rateboard.models import RateQuote
from rateboard.schemas import RateQuoteCreate, RateQuoteUpdate
from .versioning import SingletonStore


class RateService(SingletonStore[RateQuote]):
    """Gold/silver rate quotes.

    Every submission becomes a new version; the board shows the active one.
    Corrections through `update` edit a quote in place without re-activating it.
    """

    model = RateQuote
    create_schema = RateQuoteCreate
    update_schema = RateQuoteUpdate
    family = "rate_quote"
