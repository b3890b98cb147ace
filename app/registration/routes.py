from flask import Blueprint, render_template, request, jsonify, current_app

from app.extensions import limiter
from app.services.qr_service import EncodingError


registration_bp = Blueprint('registration', __name__)


def _wants_json_response():
    if request.is_json:
        return True
    accept = request.accept_mimetypes
    return accept.accept_json and not accept.accept_html


# ── Form ──────────────────────────────────────────────────────────────────────

@registration_bp.route('/')
@registration_bp.route('/register')
def register_form():
    return render_template('registration/form.html', form={}, errors={})


# ── Submit ────────────────────────────────────────────────────────────────────

@registration_bp.route('/register', methods=['POST'])
@limiter.limit(lambda: current_app.config['REGISTRATION_RATE_LIMIT'])
def submit_registration():
    if request.is_json:
        form_data = request.get_json(silent=True)
        if not isinstance(form_data, dict):
            form_data = {}
    else:
        form_data = request.form

    service = current_app.extensions['registration_service']
    result  = service.register(form_data)

    if _wants_json_response():
        return jsonify(result.to_response())

    if not result.success:
        return render_template('registration/form.html',
                               form=form_data,
                               errors=result.field_errors,
                               message=result.message)

    qr_svg = None
    try:
        qr_service = current_app.extensions['qr_service']
        qr_svg = qr_service.render_as_vector(result.payload['qrPayload'])
    except EncodingError as e:
        # The PNG version is still shown
        current_app.logger.warning("Inline SVG render failed: %s", e)

    return render_template('registration/success.html',
                           message=result.message,
                           attendee=result.payload['registrationData'],
                           qr_code=result.payload['qrCode'],
                           qr_svg=qr_svg)
