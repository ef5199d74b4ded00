import pytest

from app.core.registration.errors import WizardUsageError
from app.core.registration.submission import (
    PASSWORD_MISMATCH_MESSAGE,
    Severity,
    SubmissionStatus,
)


@pytest.mark.asyncio
async def test_mismatch_notifies_and_forwards_nothing(filled_wizard, notifier, sink):
    filled_wizard.set_value("password", "abc123")
    filled_wizard.set_value("confirmPassword", "abc124")

    result = await filled_wizard.submit()

    assert result.status is SubmissionStatus.MISMATCH
    assert dict(filled_wizard.get_errors()) == {}
    assert notifier.notifications == [(PASSWORD_MISMATCH_MESSAGE, Severity.DESTRUCTIVE)]
    assert sink.payloads == []
    assert filled_wizard.values()["confirmPassword"] == "abc124"
    assert not filled_wizard.consumed


@pytest.mark.asyncio
async def test_matching_passwords_forward_payload_once(filled_wizard, profile_values, notifier, sink):
    filled_wizard.set_value("password", "abc123")
    filled_wizard.set_value("confirmPassword", "abc123")

    result = await filled_wizard.submit()

    expected = dict(profile_values, password="abc123", confirmPassword="abc123")
    assert result.accepted
    assert result.payload == expected
    assert sink.payloads == [expected]
    assert notifier.notifications == []


@pytest.mark.asyncio
async def test_invalid_fields_abort_without_notification(filled_wizard, notifier, sink):
    filled_wizard.set_value("password", "abc123")

    result = await filled_wizard.submit()

    assert result.status is SubmissionStatus.INVALID
    assert set(filled_wizard.get_errors()) == {"confirmPassword"}
    assert notifier.notifications == []
    assert sink.payloads == []


@pytest.mark.asyncio
async def test_submit_revalidates_earlier_steps(profile_values, notifier, sink):
    from app.core.registration.wizard import RegistrationWizard

    values = dict(profile_values, year="9", password="abc123", confirmPassword="abc123")
    wizard = RegistrationWizard.restore({"values": values, "cursor": 1}, notifier, sink)

    result = await wizard.submit()

    assert result.status is SubmissionStatus.INVALID
    assert set(wizard.get_errors()) == {"year"}
    assert sink.payloads == []


@pytest.mark.asyncio
async def test_submit_outside_terminal_step_is_a_caller_error(wizard, sink):
    with pytest.raises(WizardUsageError):
        await wizard.submit()
    assert sink.payloads == []


@pytest.mark.asyncio
async def test_sink_failure_propagates_and_keeps_session_open(profile_values, notifier):
    from app.core.registration.wizard import RegistrationWizard

    async def broken_sink(payload):
        raise ConnectionError("sink unavailable")

    wizard = RegistrationWizard(notifier, broken_sink)
    for field, value in dict(profile_values, password="pw", confirmPassword="pw").items():
        wizard.set_value(field, value)
    assert wizard.advance()

    with pytest.raises(ConnectionError):
        await wizard.submit()
    assert not wizard.consumed
