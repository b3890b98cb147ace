import logging
from datetime import timedelta

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.models import AttendeeRegistration
from app.utils.helpers import day_window, utcnow


logger = logging.getLogger(__name__)

COUNT_BUCKETS = ('all', 'today', 'thisWeek')


class StoreError(Exception):
    """The registration table could not be read or written."""


class DuplicateKeyError(StoreError):
    """Insert violated the unique constraint on email."""


class RegistrationNotFound(Exception):
    pass


class RegistrationStore:
    """Single-table persistence for attendee registrations."""

    def __init__(self, db, default_limit=50, max_limit=200):
        self.db            = db
        self.default_limit = default_limit
        self.max_limit     = max_limit

    # ── Write ─────────────────────────────────────────────────────────────────

    def insert(self, record):
        try:
            self.db.session.add(record)
            self.db.session.commit()
        except IntegrityError as e:
            self.db.session.rollback()
            if self._is_email_violation(e):
                raise DuplicateKeyError(record.email) from e
            raise StoreError(str(e.orig)) from e
        except SQLAlchemyError as e:
            self.db.session.rollback()
            raise StoreError(str(e)) from e

        logger.info("Registration stored: %s", record.id)
        return record

    @staticmethod
    def _is_email_violation(error):
        # SQLite:   "UNIQUE constraint failed: attendee_registrations.email"
        # Postgres: "duplicate key value violates unique constraint ..._email_key"
        message = str(error.orig).lower()
        return 'email' in message and ('unique' in message or 'duplicate' in message)

    # ── Point lookups ─────────────────────────────────────────────────────────

    def find_by_id(self, registration_id):
        return self._first(AttendeeRegistration.query.filter_by(id=registration_id))

    def find_by_email(self, email):
        return self._first(AttendeeRegistration.query.filter_by(email=email))

    def exists(self, first_name, last_name, email):
        """True if a registration matches all three of name and email."""
        try:
            return AttendeeRegistration.query.filter_by(
                first_name=first_name, last_name=last_name, email=email
            ).first() is not None
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def _first(self, query):
        try:
            record = query.first()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e
        if record is None:
            raise RegistrationNotFound('Registration not found')
        return record

    # ── Listing ───────────────────────────────────────────────────────────────

    def list(self, email=None, first_name=None, last_name=None, limit=None, offset=0):
        """Substring-filtered registrations, newest first. % and _ match literally."""
        query = AttendeeRegistration.query

        if email:
            query = query.filter(AttendeeRegistration.email.contains(email, autoescape=True))
        if first_name:
            query = query.filter(AttendeeRegistration.first_name.contains(first_name, autoescape=True))
        if last_name:
            query = query.filter(AttendeeRegistration.last_name.contains(last_name, autoescape=True))

        limit  = min(max(int(limit or self.default_limit), 1), self.max_limit)
        offset = max(int(offset or 0), 0)

        try:
            return (
                query
                .order_by(AttendeeRegistration.created_at.desc(),
                          AttendeeRegistration.id.desc())
                .limit(limit)
                .offset(offset)
                .all()
            )
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    # ── Counts ────────────────────────────────────────────────────────────────

    def count_approx(self, bucket='all', now=None):
        """
        Dashboard counts. Not taken in a transaction with concurrent inserts.

        today    - created since midnight (UTC)
        thisWeek - created in the last 7 days
        """
        if bucket not in COUNT_BUCKETS:
            raise ValueError(f"Unknown count bucket: {bucket}")

        now = now or utcnow()
        today_start, tomorrow_start = day_window(now)
        query = AttendeeRegistration.query

        if bucket == 'today':
            query = query.filter(
                AttendeeRegistration.created_at >= today_start,
                AttendeeRegistration.created_at < tomorrow_start,
            )
        elif bucket == 'thisWeek':
            query = query.filter(
                AttendeeRegistration.created_at >= now - timedelta(days=7),
                AttendeeRegistration.created_at < tomorrow_start,
            )

        try:
            return query.count()
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def stats(self, now=None):
        now = now or utcnow()
        return {
            'total':    self.count_approx('all', now=now),
            'today':    self.count_approx('today', now=now),
            'thisWeek': self.count_approx('thisWeek', now=now),
        }
