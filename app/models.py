from app.extensions import db
from app.utils.helpers import utcnow


class AttendeeRegistration(db.Model):
    __tablename__ = 'attendee_registrations'

    id         = db.Column(db.String(36), primary_key=True)   # uuid4 text
    first_name = db.Column(db.String(100), nullable=False)
    last_name  = db.Column(db.String(100), nullable=False)
    email      = db.Column(db.String(255), unique=True, nullable=False, index=True)
    phone      = db.Column(db.String(20), nullable=False)
    qr_code    = db.Column(db.Text)                          # data:image/png;base64,...
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False, index=True)
    # Set once at insert; registrations have no update path
    updated_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'

    def to_dict(self, include_qr=True):
        data = {
            'id':        self.id,
            'firstName': self.first_name,
            'lastName':  self.last_name,
            'email':     self.email,
            'phone':     self.phone,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }
        if include_qr:
            data['qrCode'] = self.qr_code
        return data

    def __repr__(self):
        return f'<AttendeeRegistration {self.email}>'
