"""
Deep-Link Composer
------------------
Builds the wallet-app URIs for a transfer and fires them best-effort.

There is no completion signal from the platform: both candidates are always
attempted, the second one after a short delay, and a failing launcher never
interrupts the wizard.
"""
from typing import Callable, List, Optional
from urllib.parse import quote

from selami.observability.logging import log
from selami.settings import settings


def _q(value: str) -> str:
    # Percent-encoded but otherwise untouched (no trimming)
    return quote(str(value), safe="")


def compose_launch_candidates(
    receiver_identifier: str,
    amount: str,
    scheme: Optional[str] = None,
    android_package: Optional[str] = None,
) -> List[str]:
    """
    Return the ordered launch candidates for a transfer:
      1) Android intent URI resolved through the wallet's package name
      2) custom-scheme URI for iOS and everything else (fallback)
    """
    scheme = scheme or settings.WALLET_SCHEME
    android_package = android_package or settings.WALLET_ANDROID_PACKAGE
    query = f"receiver={_q(receiver_identifier)}&amount={_q(amount)}"

    android_link = f"intent://pay?{query}#Intent;scheme={scheme};package={android_package};end"
    ios_link = f"{scheme}://pay?{query}"
    return [android_link, ios_link]


def _safe_launch(launch: Callable[[str], None], uri: str, attempt: int) -> None:
    try:
        launch(uri)
        log(event="deep_link_launched", attempt=attempt, uri=uri)
    except Exception as e:
        log(event="deep_link_launch_failed", attempt=attempt, uri=uri, error=str(e))


def launch_sequence(candidates: List[str], launch: Callable[[str], None], scheduler, delay_ms: Optional[int] = None) -> list:
    """
    Fire-and-forget launch of every candidate in order.

    Candidate 1 goes out immediately; each following one `delay_ms` after the
    previous, regardless of whether the earlier attempt "worked".
    Returns the scheduler handles of the delayed attempts.
    """
    if delay_ms is None:
        delay_ms = settings.DEEP_LINK_FALLBACK_MS

    handles = []
    for i, uri in enumerate(candidates):
        if i == 0:
            _safe_launch(launch, uri, 1)
            continue
        handles.append(
            scheduler.call_later(i * delay_ms, lambda u=uri, n=i + 1: _safe_launch(launch, u, n))
        )
    return handles
