# scripts/test_registration_email.py
# Run from project root: python scripts/test_registration_email.py you@example.com
import sys, os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from dotenv import load_dotenv
load_dotenv()

from app import create_app

if len(sys.argv) < 2:
    print("Usage: python scripts/test_registration_email.py <recipient-email>")
    sys.exit(1)

app = create_app('development')

with app.app_context():
    attendee = {
        'firstName': 'Test',
        'lastName':  'Attendee',
        'email':     sys.argv[1],
        'phone':     '5551234567',
    }
    qr_service = app.extensions['qr_service']
    notifier   = app.extensions['notification_service']

    print(f"\n=== Registration Confirmation ===")
    print(f"To: {attendee['email']} | Server: {app.config['MAIL_SERVER']}")

    _, qr_code = qr_service.generate(attendee)
    result = notifier.send(attendee, qr_code)

    if result['success']:
        print(f"✅ Sent — message id {result['messageId']}")
    else:
        print(f"❌ Failed: {result['error']} (see logs/error.log)")
        sys.exit(1)
