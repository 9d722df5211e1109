from datetime import date
from typing import Any, Dict, Optional

from selami.core import state_machine as sm

CURRENCY_SYMBOL = "৳"
CARD_TITLE = "Eid Mubarak"
CARD_SIGNATURE = "The Collector"
BLESSING = (
    "May this Eid bring you endless joy and prosperity. Wishing you and your family "
    "a blessed day filled with love, laughter, and delicious treats!"
)


def format_card_date(d: date) -> str:
    """'19 October 2026' style (day without padding)."""
    return f"{d.day} {d.strftime('%B')} {d.year}"


def acknowledgment_headline(payer_name: str, amount: str) -> str:
    return f"Thank you, {payer_name}! Your Selami of {CURRENCY_SYMBOL}{amount} has been received."


def build_acknowledgment(state, today: Optional[date] = None) -> Dict[str, Any]:
    """
    Content of the Eid card shown on SUCCESS.
    `message` is None when the payer left it empty (no message block).
    """
    today = today or date.today()
    return {
        "title": CARD_TITLE,
        "greeting": f"Dear {state.payerName},",
        "headline": acknowledgment_headline(state.payerName, state.amount),
        "blessing": BLESSING,
        "message": state.message if state.message else None,
        "date": format_card_date(today),
        "signature": CARD_SIGNATURE,
    }


def build_view(wizard, today: Optional[date] = None) -> Dict[str, Any]:
    """Everything the screen needs to render the active step."""
    view = wizard.snapshot()
    view.update({
        "receiverIdentifier": wizard.receiver_identifier,
        "canAdvance": wizard.can_advance,
        "canConfirm": wizard.can_confirm,
        "card": build_acknowledgment(wizard.state, today) if wizard.step == sm.SUCCESS else None,
    })
    return view
