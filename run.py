from dotenv import load_dotenv
load_dotenv()   # ← Must be FIRST, before config.py reads os.getenv()

import os

from app import create_app, db
from app.models import AttendeeRegistration

app = create_app(os.getenv('FLASK_CONFIG', 'development'))


@app.shell_context_processor
def make_shell_context():
    """Make database models and services available in shell"""
    return {
        'db': db,
        'AttendeeRegistration': AttendeeRegistration,
        'store': app.extensions['registration_store'],
        'registrations': app.extensions['registration_service'],
    }


if __name__ == '__main__':
    app.run(debug=False, host='0.0.0.0', port=5000)
