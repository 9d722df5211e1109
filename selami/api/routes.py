from fastapi import APIRouter, Depends, HTTPException, Query, Request

from selami.api.auth import require_api_key
from selami.api.schemas import (
    AcknowledgmentCard,
    ActionResponse,
    EffectsResponse,
    FormUpdate,
    WizardView,
)
from selami.core import state_machine as sm
from selami.core.wizard import WizardController
from selami.effects.outbox import EffectOutbox
from selami.presentation.card import build_acknowledgment, build_view

router = APIRouter(prefix="/wizard", tags=["wizard"], dependencies=[Depends(require_api_key)])

# Button name on the page -> wizard operation
ACTIONS = {
    "start": "advance_from_landing",
    "next": "advance_from_form",
    "back": "back_to_form",
    "pay": "initiate_external_payment",
    "retry": "retry_external_payment",
    "cancel": "cancel_to_payment",
    "confirm": "confirm_payment",
    "reset": "reset_to_landing",
    "copy": "copy_receiver_identifier",
}


def get_wizard(request: Request) -> WizardController:
    return request.app.state.wizard


def get_outbox(request: Request) -> EffectOutbox:
    return request.app.state.outbox


# Handlers are async on purpose: wizard timers are scheduled on the running
# event loop, which a threadpool-dispatched sync handler would not have.

@router.get("", response_model=WizardView)
async def get_view(wizard: WizardController = Depends(get_wizard)):
    return build_view(wizard)


@router.put("/form", response_model=ActionResponse)
async def update_form(body: FormUpdate, wizard: WizardController = Depends(get_wizard)):
    applied = wizard.update_form(
        payerName=body.payerName,
        amount=None if body.amount is None else str(body.amount),
        message=body.message,
    )
    return {"applied": applied, "view": build_view(wizard)}


@router.post("/actions/{action}", response_model=ActionResponse)
async def run_action(action: str, wizard: WizardController = Depends(get_wizard)):
    op = ACTIONS.get(action)
    if op is None:
        raise HTTPException(status_code=404, detail=f"Unknown action: {action}")
    applied = getattr(wizard, op)()
    return {"applied": applied, "view": build_view(wizard)}


@router.get("/card", response_model=AcknowledgmentCard)
async def get_card(wizard: WizardController = Depends(get_wizard)):
    if wizard.step != sm.SUCCESS:
        raise HTTPException(status_code=409, detail="Card is only available after confirmation")
    return build_acknowledgment(wizard.state)


@router.get("/effects", response_model=EffectsResponse)
async def get_effects(after: int = Query(0, ge=0), outbox: EffectOutbox = Depends(get_outbox)):
    """Side effects recorded after `after`, for the page to execute in order."""
    return {"effects": outbox.pending(after=after), "lastSeq": outbox.last_seq}
