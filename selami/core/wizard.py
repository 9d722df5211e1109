"""
Wizard State Machine
--------------------
Owns the WizardState aggregate and is its only writer.

Every public operation returns True when it was applied and False when the
current step does not allow it. A rejected operation is a pure no-op: no field
changes, no collaborator calls, only a `wizard_op_rejected` log line.

Side effects at transitions:
- PAYMENT -> INSTRUCTIONS fires the wallet deep-link sequence
- confirmation runs a simulated 2s delay, then SUCCESS + celebration
- copying the receiver number raises a cosmetic flag for 2s
"""
from __future__ import annotations

from typing import Callable, Optional

from selami.core import state_machine as sm
from selami.core.deep_link import compose_launch_candidates, launch_sequence
from selami.core.guards import can_advance_from_form
from selami.core.scheduler import LoopScheduler, Timer
from selami.observability.logging import log
from selami.settings import settings
from selami.store.models import WizardState


class WizardController:
    def __init__(
        self,
        *,
        clipboard_write: Callable[[str], None],
        launch: Callable[[str], None],
        celebrate: Callable[[], None],
        scheduler=None,
        state: Optional[WizardState] = None,
        receiver_identifier: Optional[str] = None,
        clipboard_flag_ms: Optional[int] = None,
        confirmation_delay_ms: Optional[int] = None,
        fallback_delay_ms: Optional[int] = None,
        strict_amount: Optional[bool] = None,
    ):
        self.state = state or WizardState()
        self.scheduler = scheduler or LoopScheduler()

        # Read once; fixed for the whole session
        self.receiver_identifier = receiver_identifier or settings.RECEIVER_IDENTIFIER
        self.strict_amount = settings.STRICT_AMOUNT_VALIDATION if strict_amount is None else bool(strict_amount)
        self.fallback_delay_ms = settings.DEEP_LINK_FALLBACK_MS if fallback_delay_ms is None else int(fallback_delay_ms)

        self._clipboard_write = clipboard_write
        self._launch = launch
        self._celebrate = celebrate

        self._clipboard_timer = Timer(
            self.scheduler,
            settings.CLIPBOARD_FLAG_MS if clipboard_flag_ms is None else clipboard_flag_ms,
            self._clear_clipboard_flag,
            name="clipboard_flag",
        )
        self._confirmation_timer = Timer(
            self.scheduler,
            settings.CONFIRMATION_DELAY_MS if confirmation_delay_ms is None else confirmation_delay_ms,
            self._finish_confirmation,
            name="confirmation",
        )
        self._confirmation_generation: Optional[int] = None
        self._launch_handles: list = []

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    @property
    def step(self) -> str:
        return self.state.step

    @property
    def can_advance(self) -> bool:
        return self.state.step == sm.FORM and can_advance_from_form(
            self.state.payerName, self.state.amount, strict_amount=self.strict_amount
        )

    @property
    def can_confirm(self) -> bool:
        return self.state.step in sm.CONFIRMABLE_STEPS and not self.state.isProcessingConfirmation

    def snapshot(self) -> dict:
        return self.state.snapshot()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _reject(self, op: str, reason: str = "invalid_step") -> bool:
        log(event="wizard_op_rejected", op=op, step=self.state.step, reason=reason)
        return False

    def _move(self, target: str, op: str) -> None:
        prev = self.state.step
        if not sm.can_transition(prev, target):
            # Callers check the step first; reaching this is a programming error.
            raise RuntimeError(f"Illegal wizard transition: {prev} -> {target}")
        self.state.step = target
        log(event="wizard_transition", op=op, src=prev, dst=target)

    def _fire_launch(self) -> None:
        candidates = compose_launch_candidates(self.receiver_identifier, self.state.amount)
        # A new sequence supersedes any fallback still pending from the last one
        for h in self._launch_handles:
            h.cancel()
        self._launch_handles = launch_sequence(
            candidates, self._launch, self.scheduler, delay_ms=self.fallback_delay_ms
        )

    def _clear_clipboard_flag(self) -> None:
        self.state.clipboardCopied = False

    def _finish_confirmation(self) -> None:
        st = self.state
        expected = self._confirmation_generation
        self._confirmation_generation = None

        if st.generation != expected or not st.isProcessingConfirmation:
            log(event="confirmation_stale", step=st.step, generation=st.generation)
            return

        st.isProcessingConfirmation = False
        if st.step not in sm.CONFIRMABLE_STEPS:
            # Payer went back to the form while the delay was running.
            log(event="confirmation_dropped", step=st.step)
            return

        self._move(sm.SUCCESS, "confirm_payment")
        try:
            self._celebrate()
        except Exception as e:
            log(event="celebrate_failed", error=str(e))

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def advance_from_landing(self) -> bool:
        if self.state.step != sm.LANDING:
            return self._reject("advance_from_landing")
        self._move(sm.FORM, "advance_from_landing")
        return True

    def update_form(
        self,
        payerName: Optional[str] = None,
        amount: Optional[str] = None,
        message: Optional[str] = None,
    ) -> bool:
        """Field edits; only the FORM screen has inputs. None leaves a field unchanged."""
        if self.state.step != sm.FORM:
            return self._reject("update_form")
        if payerName is not None:
            self.state.payerName = str(payerName)
        if amount is not None:
            self.state.amount = str(amount)
        if message is not None:
            self.state.message = str(message)
        return True

    def advance_from_form(self) -> bool:
        if self.state.step != sm.FORM:
            return self._reject("advance_from_form")
        if not self.can_advance:
            return self._reject("advance_from_form", reason="guard_failed")
        self._move(sm.PAYMENT, "advance_from_form")
        return True

    def back_to_form(self) -> bool:
        if self.state.step != sm.PAYMENT:
            return self._reject("back_to_form")
        self._move(sm.FORM, "back_to_form")
        return True

    def initiate_external_payment(self) -> bool:
        if self.state.step != sm.PAYMENT:
            return self._reject("initiate_external_payment")
        self._move(sm.INSTRUCTIONS, "initiate_external_payment")
        self._fire_launch()
        return True

    def retry_external_payment(self) -> bool:
        if self.state.step != sm.INSTRUCTIONS:
            return self._reject("retry_external_payment")
        self._fire_launch()
        return True

    def cancel_to_payment(self) -> bool:
        if self.state.step != sm.INSTRUCTIONS:
            return self._reject("cancel_to_payment")
        self._move(sm.PAYMENT, "cancel_to_payment")
        return True

    def confirm_payment(self) -> bool:
        """
        Self-reported payment completion (no verification happens).
        At most one confirmation can be in flight.
        """
        if self.state.step not in sm.CONFIRMABLE_STEPS:
            return self._reject("confirm_payment")
        if self.state.isProcessingConfirmation:
            return self._reject("confirm_payment", reason="already_processing")

        self.state.isProcessingConfirmation = True
        self._confirmation_generation = self.state.generation
        self._confirmation_timer.start()
        log(event="confirmation_started", step=self.state.step, delayMs=self._confirmation_timer.delay_ms)
        return True

    def reset_to_landing(self) -> bool:
        if self.state.step != sm.SUCCESS:
            return self._reject("reset_to_landing")
        self._move(sm.LANDING, "reset_to_landing")
        self.state.payerName = ""
        self.state.amount = ""
        # message is kept on purpose
        self.state.generation += 1
        return True

    def copy_receiver_identifier(self) -> bool:
        if self.state.step != sm.PAYMENT:
            return self._reject("copy_receiver_identifier")
        try:
            self._clipboard_write(self.receiver_identifier)
        except Exception as e:
            # No failure path is consumed; the flag is cosmetic.
            log(event="clipboard_write_failed", error=str(e))
        self.state.clipboardCopied = True
        self._clipboard_timer.start()
        return True

    def close(self) -> None:
        """Cancel everything still scheduled (app shutdown)."""
        self._clipboard_timer.cancel()
        self._confirmation_timer.cancel()
        for h in self._launch_handles:
            h.cancel()
        self._launch_handles = []
