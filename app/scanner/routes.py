from flask import Blueprint, render_template, current_app


scanner_bp = Blueprint('scanner', __name__)


@scanner_bp.route('/scanner')
def scan():
    """Door scanner. Decoding happens in the browser; nothing is sent back here."""
    scan_service = current_app.extensions['scan_service']
    return render_template('scanner/scan.html',
                           field_aliases=scan_service.aliases_json(),
                           optional_fields=scan_service.optional_fields_json())
