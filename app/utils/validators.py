import re


REGISTRATION_FIELDS = ('firstName', 'lastName', 'email', 'phone')

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def validate_email(email):
    """Validate email format"""
    return re.match(EMAIL_PATTERN, email or '') is not None


def validate_phone(phone):
    """At least 10 characters; the format itself is not checked."""
    return len(phone or '') >= 10


def validate_name(name):
    return len(name or '') >= 2


def clean_registration_data(raw):
    """Pick the four registration fields out of a form/JSON mapping as stripped strings."""
    cleaned = {}
    for field in REGISTRATION_FIELDS:
        value = raw.get(field) if raw else None
        cleaned[field] = str(value).strip() if value is not None else ''
    return cleaned


def validate_registration(data):
    """
    Validate the registration form.

    Returns a dict mapping each violated field to a list of messages;
    an empty dict means the data is valid.
    """
    errors = {}

    if not validate_name(data.get('firstName')):
        errors['firstName'] = ['First name must be at least 2 characters']

    if not validate_name(data.get('lastName')):
        errors['lastName'] = ['Last name must be at least 2 characters']

    if not validate_email(data.get('email')):
        errors['email'] = ['Please enter a valid email address']

    if not validate_phone(data.get('phone')):
        errors['phone'] = ['Please enter a valid phone number']

    return errors
