import os


class Config:
    SECRET_KEY                     = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    SQLALCHEMY_DATABASE_URI        = os.getenv('DATABASE_URL', 'sqlite:///registrations.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False


    # ── Email ──────────────────────────────────────────────────────────────────
    MAIL_SERVER               = os.getenv('MAIL_SERVER', 'smtp.resend.com')
    MAIL_PORT                 = int(os.getenv('MAIL_PORT', 587))
    MAIL_USE_TLS              = os.getenv('MAIL_USE_TLS', 'True') == 'True'
    MAIL_USERNAME             = os.getenv('MAIL_USERNAME')
    MAIL_PASSWORD             = os.getenv('MAIL_PASSWORD')
    MAIL_DEFAULT_SENDER       = os.getenv(
        'MAIL_DEFAULT_SENDER', 'Event Registration <noreply@example.com>'
    )
    MAIL_CONFIRMATION_SUBJECT = os.getenv(
        'MAIL_CONFIRMATION_SUBJECT', 'Event Registration Confirmation'
    )


    # ── QR codes ───────────────────────────────────────────────────────────────
    # Version 8 is 49 modules: (49 + 2 * border) * box_size ≈ 200px
    QR_VERSION          = int(os.getenv('QR_VERSION', 8))
    QR_BOX_SIZE         = int(os.getenv('QR_BOX_SIZE', 4))
    QR_BORDER           = int(os.getenv('QR_BORDER', 1))
    QR_ERROR_CORRECTION = os.getenv('QR_ERROR_CORRECTION', 'L')


    # ── Listing & limits ───────────────────────────────────────────────────────
    REGISTRATIONS_PAGE_SIZE = 50
    MAX_PAGE_SIZE           = 200
    REGISTRATION_RATE_LIMIT = os.getenv('REGISTRATION_RATE_LIMIT', '10 per minute')
    RATELIMIT_ENABLED       = True
    RATELIMIT_STORAGE_URI   = 'memory://'


    # ── Logging ────────────────────────────────────────────────────────────────
    LOG_DIR          = os.getenv('LOG_DIR', 'logs')
    LOG_LEVEL        = os.getenv('LOG_LEVEL', 'INFO')
    LOG_MAX_BYTES    = int(os.getenv('LOG_MAX_BYTES', 10 * 1024 * 1024))
    LOG_BACKUP_COUNT = int(os.getenv('LOG_BACKUP_COUNT', 3))


class DevelopmentConfig(Config):
    DEBUG   = True
    TESTING = False


class ProductionConfig(Config):
    DEBUG   = False
    TESTING = False


class TestingConfig(Config):
    TESTING                 = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'

    # Flask-Mail still fires email_dispatched, so record_messages() works
    MAIL_SUPPRESS_SEND  = True
    MAIL_DEFAULT_SENDER = 'noreply@example.com'

    RATELIMIT_ENABLED = False


config = {
    'development': DevelopmentConfig,
    'production':  ProductionConfig,
    'testing':     TestingConfig,
    'default':     DevelopmentConfig
}
