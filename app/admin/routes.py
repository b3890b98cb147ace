from flask import Blueprint, render_template, request, jsonify, current_app

from app.services.registration_store import RegistrationNotFound, StoreError
from app.utils.helpers import parse_int


admin_bp = Blueprint('admin', __name__)


def _store():
    return current_app.extensions['registration_store']


def _store_failure(action, error):
    current_app.logger.error("Failed to %s: %s", action, error)
    return jsonify({'success': False, 'error': f'Failed to {action}'}), 500


# ── Dashboard ─────────────────────────────────────────────────────────────────

@admin_bp.route('/admin/registrations')
def registrations_dashboard():
    filters = _filters_from_args()
    try:
        registrations = _store().list(**filters)
        stats         = _store().stats()
    except StoreError as e:
        current_app.logger.error("Dashboard query failed: %s", e)
        registrations, stats = [], None

    return render_template('admin/registrations.html',
                           registrations=registrations,
                           stats=stats,
                           filters=filters)


# ── JSON API ──────────────────────────────────────────────────────────────────

def _filters_from_args():
    max_limit = current_app.config['MAX_PAGE_SIZE']
    return {
        'email':      request.args.get('email', '').strip() or None,
        'first_name': request.args.get('firstName', '').strip() or None,
        'last_name':  request.args.get('lastName', '').strip() or None,
        'limit':      parse_int(request.args.get('limit'),
                                current_app.config['REGISTRATIONS_PAGE_SIZE'],
                                minimum=1, maximum=max_limit),
        'offset':     parse_int(request.args.get('offset'), 0, minimum=0),
    }


@admin_bp.route('/api/registrations')
def list_registrations():
    try:
        registrations = _store().list(**_filters_from_args())
    except StoreError as e:
        return _store_failure('retrieve registrations', e)

    return jsonify({
        'success': True,
        'data':    [r.to_dict() for r in registrations],
        'count':   len(registrations),
    })


@admin_bp.route('/api/registrations/stats')
def registration_stats():
    try:
        stats = _store().stats()
    except StoreError as e:
        return _store_failure('retrieve registration statistics', e)
    return jsonify({'success': True, 'data': stats})


@admin_bp.route('/api/registrations/lookup')
def lookup_registration():
    email = request.args.get('email', '').strip()
    if not email:
        return jsonify({'success': False, 'error': 'email is required'}), 400

    first_name = request.args.get('firstName', '').strip()
    last_name  = request.args.get('lastName', '').strip()

    try:
        if first_name and last_name:
            # Full identity check: name and email must all match
            if not _store().exists(first_name, last_name, email):
                raise RegistrationNotFound('Registration not found')
        registration = _store().find_by_email(email)
    except RegistrationNotFound:
        return jsonify({'success': False, 'error': 'Registration not found'}), 404
    except StoreError as e:
        return _store_failure('retrieve registration', e)

    return jsonify({'success': True, 'data': registration.to_dict()})


@admin_bp.route('/api/registrations/<registration_id>')
def get_registration(registration_id):
    try:
        registration = _store().find_by_id(registration_id)
    except RegistrationNotFound:
        return jsonify({'success': False, 'error': 'Registration not found'}), 404
    except StoreError as e:
        return _store_failure('retrieve registration', e)

    return jsonify({'success': True, 'data': registration.to_dict()})
