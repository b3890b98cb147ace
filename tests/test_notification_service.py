import smtplib

from app.extensions import mail
from app.services.notification_service import NotificationService, QR_CONTENT_ID
from app.services.qr_service import QRService


def _qr_code(attendee):
    return QRService().generate(attendee)[1]


def test_send_delivers_inline_qr_to_attendee(app, outbox, attendee):
    notifier = app.extensions['notification_service']
    result   = notifier.send(attendee, _qr_code(attendee))

    assert result['success'] is True
    assert result['messageId']
    assert len(outbox) == 1

    msg = outbox[0]
    assert msg.recipients == ['jane@x.com']
    assert msg.subject == app.config['MAIL_CONFIRMATION_SUBJECT']
    assert msg.sender == app.config['MAIL_DEFAULT_SENDER']
    assert f'cid:{QR_CONTENT_ID}' in msg.html
    assert 'Jane Doe' in msg.html
    assert f'src="cid:{QR_CONTENT_ID}"' in msg.html

    attachment = msg.attachments[0]
    assert attachment.content_type == 'image/png'
    assert attachment.disposition == 'inline'
    assert attachment.data.startswith(b'\x89PNG')
    assert f'<{QR_CONTENT_ID}>' in msg.as_string()


def test_send_reports_provider_failure_without_raising(app, attendee, monkeypatch):
    def broken_send(message):
        raise smtplib.SMTPServerDisconnected('connection closed')
    monkeypatch.setattr(mail, 'send', broken_send)

    result = app.extensions['notification_service'].send(attendee, _qr_code(attendee))

    assert result == {'success': False, 'error': 'Network error while sending email'}


def test_send_rejects_bad_image_without_raising(app, outbox, attendee):
    result = app.extensions['notification_service'].send(attendee, 'not-a-data-url')

    assert result['success'] is False
    assert result['error']
    assert outbox == []


def test_from_config_uses_configured_sender(app):
    notifier = NotificationService.from_config(mail, app.config)
    assert notifier.sender == app.config['MAIL_DEFAULT_SENDER']
    assert notifier.subject == 'Event Registration Confirmation'
