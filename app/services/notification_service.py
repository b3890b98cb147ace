import base64
import binascii
import logging

from flask import render_template
from flask_mail import Message

from app.services.qr_service import PNG_DATA_URL_PREFIX


logger = logging.getLogger(__name__)

QR_CONTENT_ID = 'qr-code-image'


class NotificationService:
    """Registration confirmation emails with the QR code embedded inline."""

    def __init__(self, mail, sender, subject='Event Registration Confirmation'):
        self.mail    = mail
        self.sender  = sender
        self.subject = subject

    @classmethod
    def from_config(cls, mail, app_config):
        return cls(
            mail,
            sender=app_config['MAIL_DEFAULT_SENDER'],
            subject=app_config.get('MAIL_CONFIRMATION_SUBJECT',
                                   'Event Registration Confirmation'),
        )

    def send(self, attendee, qr_code):
        """
        Send the confirmation email to the attendee.

        Never raises: every failure comes back as
        ``{'success': False, 'error': ...}`` so a completed registration is
        never undone by a mail problem.
        """
        try:
            msg = self.build_message(attendee, qr_code)
        except Exception:
            logger.error("Could not build confirmation email for %s",
                         attendee.get('email'), exc_info=True)
            return {'success': False, 'error': 'Failed to build email'}

        try:
            self.mail.send(msg)
        except Exception:
            logger.error("Email delivery failed to %s | subject='%s'",
                         msg.recipients, msg.subject, exc_info=True)
            return {'success': False, 'error': 'Network error while sending email'}

        logger.info("Email sent to %s | subject='%s'", msg.recipients, msg.subject)
        return {'success': True, 'messageId': msg.msgId}

    def build_message(self, attendee, qr_code):
        image = self._decode_png(qr_code)

        msg = Message(
            subject=self.subject,
            sender=self.sender,
            recipients=[attendee['email']],
        )
        msg.body = (
            f"Dear {attendee['firstName']} {attendee['lastName']},\n\n"
            "Thank you for registering for our event! Your registration has been confirmed.\n"
            "Your QR code is attached; present it at the event entrance.\n\n"
            f"Name:  {attendee['firstName']} {attendee['lastName']}\n"
            f"Email: {attendee['email']}\n"
            f"Phone: {attendee['phone']}\n"
        )
        msg.html = render_template(
            'emails/registration_confirmation.html',
            attendee=attendee,
            content_id=QR_CONTENT_ID,
        )
        msg.attach(
            'qr-code.png',
            'image/png',
            image,
            'inline',
            headers={
                'Content-ID':      f'<{QR_CONTENT_ID}>',
                'X-Attachment-Id': QR_CONTENT_ID,
            }
        )
        return msg

    @staticmethod
    def _decode_png(qr_code):
        if not qr_code or not qr_code.startswith(PNG_DATA_URL_PREFIX):
            raise ValueError('QR code is not a PNG data URL')
        try:
            return base64.b64decode(qr_code[len(PNG_DATA_URL_PREFIX):], validate=True)
        except binascii.Error as e:
            raise ValueError('QR code data URL is not valid base64') from e
