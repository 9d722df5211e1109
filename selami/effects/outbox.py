"""
Effect Outbox
-------------
Collaborator implementation for a wizard whose screen lives in a browser.

The server cannot touch the payer's clipboard or open their wallet app, so
every side effect the wizard requests is recorded here with a monotonically
increasing sequence number. The page polls `pending(after=<last seen seq>)`
and performs the effects itself. Old entries fall off once the outbox is full.
"""
import time
from collections import deque
from typing import Any, Dict, List, Optional

from selami.observability.logging import log
from selami.settings import settings

KIND_CLIPBOARD = "clipboard"
KIND_LAUNCH = "launch"
KIND_CONFETTI = "confetti"


class EffectOutbox:
    def __init__(self, limit: Optional[int] = None):
        self._entries: deque = deque(maxlen=int(limit or settings.EFFECT_OUTBOX_LIMIT))
        self._seq = 0

    @property
    def last_seq(self) -> int:
        return self._seq

    def record(self, kind: str, **data: Any) -> Dict[str, Any]:
        self._seq += 1
        entry = {"seq": self._seq, "kind": kind, "data": data, "ts": int(time.time() * 1000)}
        self._entries.append(entry)
        if kind != KIND_CONFETTI:
            # Bursts arrive dozens per celebration; not worth a line each
            log(event="effect_recorded", kind=kind, seq=self._seq)
        return entry

    def pending(self, after: int = 0) -> List[Dict[str, Any]]:
        return [e for e in self._entries if e["seq"] > after]

    # Collaborator callables handed to WizardController
    def clipboard_write(self, text: str) -> None:
        self.record(KIND_CLIPBOARD, text=text)

    def launch(self, uri: str) -> None:
        self.record(KIND_LAUNCH, uri=uri)

    def confetti(self, burst: Dict[str, Any]) -> None:
        self.record(KIND_CONFETTI, **burst)
