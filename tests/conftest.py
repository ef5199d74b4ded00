from __future__ import annotations

import pytest

from app.core.messaging.service import MessageService
from app.core.registration.wizard import RegistrationWizard


@pytest.fixture
def fake_bot():
    class _Bot:
        def __init__(self):
            self.sent_messages = []

        async def send_message(self, chat_id, text, **kwargs):
            self.sent_messages.append(
                {"chat_id": chat_id, "text": text, "kwargs": kwargs}
            )

    return _Bot()


@pytest.fixture
def message_service(fake_bot):
    return MessageService(fake_bot)


@pytest.fixture
def notifier():
    class _Notifier:
        def __init__(self):
            self.notifications = []

        async def notify(self, message, severity):
            self.notifications.append((message, severity))

    return _Notifier()


@pytest.fixture
def sink():
    class _Sink:
        def __init__(self):
            self.payloads = []

        async def __call__(self, payload):
            self.payloads.append(payload)

    return _Sink()


@pytest.fixture
def wizard(notifier, sink):
    return RegistrationWizard(notifier, sink)


@pytest.fixture
def profile_values():
    return {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "studentId": "S123",
        "year": "11",
    }


@pytest.fixture
def filled_wizard(wizard, profile_values):
    """Wizard that has passed the first step."""
    for field, value in profile_values.items():
        wizard.set_value(field, value)
    assert wizard.advance()
    return wizard
