from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

Step = Literal["LANDING", "FORM", "PAYMENT", "INSTRUCTIONS", "SUCCESS"]
EffectKind = Literal["clipboard", "launch", "confetti"]

class FormUpdate(BaseModel):
    payerName: Optional[str] = None
    # <input type="number"> may arrive as a JSON number; kept as typed text
    amount: Optional[Union[str, int, float]] = None
    message: Optional[str] = None

class AcknowledgmentCard(BaseModel):
    title: str
    greeting: str
    headline: str
    blessing: str
    message: Optional[str] = None
    date: str
    signature: str

class WizardView(BaseModel):
    step: Step
    payerName: str
    amount: str
    message: str
    clipboardCopied: bool
    isProcessingConfirmation: bool
    receiverIdentifier: str
    canAdvance: bool
    canConfirm: bool
    card: Optional[AcknowledgmentCard] = None

class ActionResponse(BaseModel):
    applied: bool
    view: WizardView

class Effect(BaseModel):
    seq: int
    kind: EffectKind
    data: Dict[str, Any] = Field(default_factory=dict)
    ts: int

class EffectsResponse(BaseModel):
    effects: List[Effect] = Field(default_factory=list)
    lastSeq: int = 0
