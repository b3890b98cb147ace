import logging
import uuid

from app.models import AttendeeRegistration
from app.services.qr_service import EncodingError
from app.services.registration_store import (
    DuplicateKeyError, RegistrationNotFound, StoreError,
)
from app.services.results import Err, ErrorKind, Ok
from app.utils.validators import clean_registration_data, validate_registration


logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = (
    'Registration successful! Your QR code has been generated and sent to your email.'
)
VALIDATION_MESSAGE = 'Please correct the errors below'
DUPLICATE_EMAIL_MESSAGE = (
    'A registration with this email already exists. Please use a different email '
    'or contact support if you believe this is an error.'
)
FAILURE_MESSAGE = 'Registration failed. Please try again.'


class RegistrationService:
    """
    Registration write path.

    validate -> check email -> generate QR -> persist -> notify

    The database is the source of truth: once the row is committed the
    registration has succeeded, whatever happens to the email.
    """

    def __init__(self, store, qr_service, notifier):
        self.store      = store
        self.qr_service = qr_service
        self.notifier   = notifier

    def register(self, form_data):
        data   = clean_registration_data(form_data)
        errors = validate_registration(data)
        if errors:
            return Err(ErrorKind.VALIDATION, VALIDATION_MESSAGE, errors)

        # ── Uniqueness pre-check ──────────────────────────────────────────────
        try:
            self.store.find_by_email(data['email'])
        except RegistrationNotFound:
            pass
        except StoreError as e:
            logger.error("Email lookup failed during registration: %s", e)
            return Err(ErrorKind.DEPENDENCY, FAILURE_MESSAGE)
        else:
            logger.info("Duplicate registration attempt: %s", data['email'])
            return Err(ErrorKind.CONFLICT, DUPLICATE_EMAIL_MESSAGE)

        # ── QR code ───────────────────────────────────────────────────────────
        try:
            payload, qr_code = self.qr_service.generate(data)
        except EncodingError as e:
            logger.error("QR generation failed for %s: %s", data['email'], e)
            return Err(ErrorKind.DEPENDENCY, FAILURE_MESSAGE)
        logger.debug("QR payload generated | length=%d", len(payload))

        # ── Persist ───────────────────────────────────────────────────────────
        registration = AttendeeRegistration(
            id=str(uuid.uuid4()),
            first_name=data['firstName'],
            last_name=data['lastName'],
            email=data['email'],
            phone=data['phone'],
            qr_code=qr_code,
        )
        try:
            self.store.insert(registration)
        except DuplicateKeyError:
            # Lost the race with a concurrent submission for the same email
            logger.info("Duplicate email rejected by store: %s", data['email'])
            return Err(ErrorKind.CONFLICT, DUPLICATE_EMAIL_MESSAGE)
        except StoreError as e:
            logger.error("Registration insert failed for %s: %s", data['email'], e)
            return Err(ErrorKind.DEPENDENCY, FAILURE_MESSAGE)

        # ── Notify (best-effort) ──────────────────────────────────────────────
        email_result = self.notifier.send(data, qr_code)
        if not email_result.get('success'):
            logger.warning("Email sending failed for registration %s: %s",
                           registration.id, email_result.get('error'))

        return Ok(
            {
                'id':               registration.id,
                'qrCode':           qr_code,
                'qrPayload':        payload,
                'registrationData': data,
                'emailSent':        bool(email_result.get('success')),
            },
            message=SUCCESS_MESSAGE,
        )
