import click
from flask import Flask, render_template, request, jsonify

from config import config
from app.extensions import db, mail, migrate, limiter


def create_app(config_name='default'):
    """Application factory. config_name is a key of config.config or a config class."""
    app = Flask(__name__)

    config_class = config[config_name] if isinstance(config_name, str) else config_name
    app.config.from_object(config_class)

    initialize_extensions(app)
    initialize_services(app)
    register_blueprints(app)
    register_error_handlers(app)
    register_context_processors(app)
    register_commands(app)

    if not app.testing:
        from app.logging.logger import setup_logging
        setup_logging(app)

    with app.app_context():
        from app.models import AttendeeRegistration
        db.create_all()

    return app


def initialize_extensions(app):
    """Initialize Flask extensions"""
    db.init_app(app)
    mail.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)


def initialize_services(app):
    """
    Build the registration collaborators once per app and wire them into
    the workflow. Routes reach them through app.extensions.
    """
    from app.services.notification_service import NotificationService
    from app.services.qr_service import QRService
    from app.services.registration_service import RegistrationService
    from app.services.registration_store import RegistrationStore
    from app.services.scan_service import ScanService

    store = RegistrationStore(
        db,
        default_limit=app.config['REGISTRATIONS_PAGE_SIZE'],
        max_limit=app.config['MAX_PAGE_SIZE'],
    )
    qr_service = QRService.from_config(app.config)
    notifier   = NotificationService.from_config(mail, app.config)

    app.extensions['registration_store']   = store
    app.extensions['qr_service']           = qr_service
    app.extensions['notification_service'] = notifier
    app.extensions['scan_service']         = ScanService()
    app.extensions['registration_service'] = RegistrationService(store, qr_service, notifier)


def register_blueprints(app):
    from app.registration.routes import registration_bp
    from app.admin.routes        import admin_bp
    from app.scanner.routes      import scanner_bp

    app.register_blueprint(registration_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(scanner_bp)


def _wants_json():
    return request.path.startswith('/api/') or request.is_json


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found_error(error):
        if _wants_json():
            return jsonify({'success': False, 'error': 'Not found'}), 404
        return render_template('errors/404.html'), 404

    @app.errorhandler(429)
    def rate_limited_error(error):
        message = 'Too many registration attempts. Please wait a minute and try again.'
        if _wants_json():
            return jsonify({'success': False, 'message': message}), 429
        return render_template('errors/429.html', message=message), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        if _wants_json():
            return jsonify({
                'success': False,
                'message': 'An unexpected error occurred. Please try again.'
            }), 500
        return render_template('errors/500.html'), 500


def register_context_processors(app):
    @app.context_processor
    def utility_processor():
        from app.utils.helpers import format_datetime, get_time_ago
        return dict(
            format_datetime=format_datetime,
            get_time_ago=get_time_ago
        )

    @app.context_processor
    def inject_now():
        from app.utils.helpers import utcnow
        return {'now': utcnow()}


def register_commands(app):
    @app.cli.command()
    def init_db():
        """Initialize the database"""
        db.create_all()
        print("Database initialized!")

    @app.cli.command()
    def reset_db():
        """Reset the database"""
        db.drop_all()
        db.create_all()
        print("Database reset!")

    @app.cli.command()
    def seed_db():
        """Seed the database with sample registrations"""
        import uuid
        from app.models import AttendeeRegistration
        from app.services.registration_store import DuplicateKeyError

        store      = app.extensions['registration_store']
        qr_service = app.extensions['qr_service']

        samples = [
            ('Jane', 'Doe', 'jane@example.com', '5551234567'),
            ('John', 'Smith', 'john.smith@example.com', '5559876543'),
            ('Ada', 'Lovelace', 'ada@example.org', '5550001111'),
        ]
        for first_name, last_name, email, phone in samples:
            attendee = {'firstName': first_name, 'lastName': last_name,
                        'email': email, 'phone': phone}
            _, qr_code = qr_service.generate(attendee)
            try:
                store.insert(AttendeeRegistration(
                    id=str(uuid.uuid4()), first_name=first_name, last_name=last_name,
                    email=email, phone=phone, qr_code=qr_code,
                ))
                print(f"Added {email}")
            except DuplicateKeyError:
                print(f"{email} already registered, skipped")
        print("Database seeded!")

    @app.cli.command('registration-stats')
    def registration_stats():
        """Print registration counts"""
        stats = app.extensions['registration_store'].stats()
        for key, value in stats.items():
            print(f"{key:<10} {value}")

    @app.cli.command('decode-scan')
    @click.argument('text')
    def decode_scan(text):
        """Show what the scanner page displays for TEXT"""
        record = app.extensions['scan_service'].to_display_record(text)
        for key, value in record.items():
            print(f"{key:<10} {value}")
