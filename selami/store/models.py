from dataclasses import asdict, dataclass

from selami.core.state_machine import INITIAL_STEP

@dataclass
class WizardState:
    # Current screen (LANDING/FORM/PAYMENT/INSTRUCTIONS/SUCCESS)
    step: str = INITIAL_STEP

    # Form fields (user-entered, unconstrained text)
    payerName: str = ""
    amount: str = ""  # numeric-as-string, exactly as typed
    message: str = ""

    # Transient flags read by the presentation layer
    clipboardCopied: bool = False
    isProcessingConfirmation: bool = False

    # Bumped on every reset; delayed callbacks compare against it before acting
    generation: int = 0

    def snapshot(self) -> dict:
        """Read model for the presentation layer (internal counters excluded)."""
        d = asdict(self)
        d.pop("generation", None)
        return d
