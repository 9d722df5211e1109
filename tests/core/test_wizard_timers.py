from unittest.mock import patch

from selami.core import state_machine as sm


def test_copy_flag_restarts_on_repeated_copy(wizard, walk, scheduler, collaborators):
    walk(wizard, sm.PAYMENT)

    assert wizard.copy_receiver_identifier() is True  # t=0
    assert wizard.state.clipboardCopied is True
    scheduler.advance(1000)
    assert wizard.copy_receiver_identifier() is True  # t=1000

    scheduler.advance(999)  # t=1999
    assert wizard.state.clipboardCopied is True
    scheduler.advance(1)  # t=2000, first copy's window would have ended here
    assert wizard.state.clipboardCopied is True
    scheduler.advance(999)  # t=2999
    assert wizard.state.clipboardCopied is True
    scheduler.advance(1)  # t=3000
    assert wizard.state.clipboardCopied is False

    assert collaborators.clipboard_write.call_count == 2
    collaborators.clipboard_write.assert_called_with("01331707930")


def test_copy_flag_clears_after_single_window(wizard, walk, scheduler):
    walk(wizard, sm.PAYMENT)
    wizard.copy_receiver_identifier()
    scheduler.advance(2000)
    assert wizard.state.clipboardCopied is False


@patch("selami.core.wizard.log")
def test_copy_still_flags_when_clipboard_write_raises(mock_log, wizard, walk, collaborators):
    walk(wizard, sm.PAYMENT)
    collaborators.clipboard_write.side_effect = RuntimeError("permission denied")
    assert wizard.copy_receiver_identifier() is True
    assert wizard.state.clipboardCopied is True
    events = [c.kwargs["event"] for c in mock_log.call_args_list]
    assert "clipboard_write_failed" in events


def test_confirmation_is_exclusive_within_window(wizard, walk, scheduler, collaborators):
    walk(wizard, sm.PAYMENT)

    assert wizard.confirm_payment() is True
    assert wizard.state.isProcessingConfirmation is True
    assert wizard.can_confirm is False
    scheduler.advance(1000)
    assert wizard.confirm_payment() is False

    scheduler.advance(999)
    assert wizard.step == sm.PAYMENT
    scheduler.advance(1)
    assert wizard.step == sm.SUCCESS
    assert wizard.state.isProcessingConfirmation is False

    scheduler.advance(10000)
    collaborators.celebrate.assert_called_once()


def test_confirm_from_instructions(wizard, walk, scheduler, collaborators):
    walk(wizard, sm.INSTRUCTIONS)
    assert wizard.confirm_payment() is True
    scheduler.advance(2000)
    assert wizard.step == sm.SUCCESS
    collaborators.celebrate.assert_called_once()


def test_cancel_during_processing_still_completes(wizard, walk, scheduler):
    walk(wizard, sm.INSTRUCTIONS)
    wizard.confirm_payment()
    scheduler.advance(500)
    assert wizard.cancel_to_payment() is True
    scheduler.advance(1500)
    assert wizard.step == sm.SUCCESS


def test_back_to_form_during_processing_drops_confirmation(wizard, walk, scheduler, collaborators):
    walk(wizard, sm.PAYMENT)
    wizard.confirm_payment()
    assert wizard.back_to_form() is True
    scheduler.advance(2000)

    assert wizard.step == sm.FORM
    assert wizard.state.isProcessingConfirmation is False
    collaborators.celebrate.assert_not_called()


def test_confirmation_from_older_generation_is_ignored(wizard, walk, scheduler, collaborators):
    walk(wizard, sm.PAYMENT)
    wizard.confirm_payment()
    # Session restarted underneath the pending callback
    wizard.state.generation += 1
    scheduler.advance(2000)

    assert wizard.step == sm.PAYMENT
    collaborators.celebrate.assert_not_called()


@patch("selami.core.wizard.log")
def test_celebration_failure_does_not_block_success(mock_log, wizard, walk, scheduler, collaborators):
    collaborators.celebrate.side_effect = RuntimeError("canvas missing")
    walk(wizard, sm.PAYMENT)
    wizard.confirm_payment()
    scheduler.advance(2000)
    assert wizard.step == sm.SUCCESS
    assert mock_log.call_args.kwargs["event"] == "celebrate_failed"
