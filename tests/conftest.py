import pytest
from unittest.mock import MagicMock

from selami.core import state_machine as sm
from selami.core.wizard import WizardController


class FakeHandle:
    def __init__(self, due: int, order: int, callback):
        self.due = due
        self.order = order
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Virtual clock in milliseconds; callbacks only run inside advance()."""

    def __init__(self):
        self.now = 0
        self._handles = []
        self._order = 0

    def call_later(self, delay_ms, callback):
        self._order += 1
        h = FakeHandle(self.now + int(delay_ms), self._order, callback)
        self._handles.append(h)
        return h

    @property
    def pending(self):
        return [h for h in self._handles if not h.cancelled]

    def advance(self, ms: int) -> None:
        target = self.now + int(ms)
        while True:
            due = [h for h in self._handles if not h.cancelled and h.due <= target]
            if not due:
                break
            h = min(due, key=lambda x: (x.due, x.order))
            self._handles.remove(h)
            self.now = h.due
            h.callback()
        self.now = target
        self._handles = [h for h in self._handles if not h.cancelled]


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def collaborators():
    m = MagicMock()
    m.clipboard_write = MagicMock()
    m.launch = MagicMock()
    m.celebrate = MagicMock()
    return m


@pytest.fixture
def wizard(scheduler, collaborators):
    return WizardController(
        clipboard_write=collaborators.clipboard_write,
        launch=collaborators.launch,
        celebrate=collaborators.celebrate,
        scheduler=scheduler,
        receiver_identifier="01331707930",
        clipboard_flag_ms=2000,
        confirmation_delay_ms=2000,
        fallback_delay_ms=500,
        strict_amount=False,
    )


@pytest.fixture
def walk():
    """Drive a wizard forward to `step` with valid form data."""
    def _walk(w, step, payerName="Ayesha", amount="500", message=""):
        if step == sm.LANDING:
            return w
        w.advance_from_landing()
        if step == sm.FORM:
            return w
        w.update_form(payerName=payerName, amount=amount, message=message)
        w.advance_from_form()
        if step == sm.PAYMENT:
            return w
        if step == sm.INSTRUCTIONS:
            w.initiate_external_payment()
            return w
        raise ValueError(f"walk() cannot reach {step} synchronously")
    return _walk
