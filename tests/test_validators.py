import pytest

from app.utils.validators import (
    clean_registration_data, validate_email, validate_phone, validate_registration,
)


VALID = {'firstName': 'Jane', 'lastName': 'Doe', 'email': 'jane@x.com', 'phone': '5551234567'}


def test_valid_registration_has_no_errors():
    assert validate_registration(VALID) == {}


@pytest.mark.parametrize('field, value', [
    ('firstName', 'J'),
    ('lastName', ''),
    ('email', 'not-an-email'),
    ('phone', '555123'),
])
def test_single_violation_reports_only_that_field(field, value):
    errors = validate_registration(dict(VALID, **{field: value}))
    assert list(errors) == [field]
    assert errors[field]


def test_all_fields_missing():
    errors = validate_registration(clean_registration_data({}))
    assert set(errors) == {'firstName', 'lastName', 'email', 'phone'}


def test_phone_format_is_not_checked():
    assert validate_phone('+1 (555) 12')
    assert validate_phone('abcdefghij')
    assert not validate_phone('123456789')


@pytest.mark.parametrize('email', ['a@b.co', 'first.last+tag@sub.example.org'])
def test_valid_emails(email):
    assert validate_email(email)


@pytest.mark.parametrize('email', ['', None, 'a@b', '@example.com', 'a b@example.com'])
def test_invalid_emails(email):
    assert not validate_email(email)


def test_clean_registration_data_strips_and_ignores_extra_keys():
    cleaned = clean_registration_data({'firstName': '  Jane ', 'phone': 5551234567, 'role': 'admin'})
    assert cleaned == {'firstName': 'Jane', 'lastName': '', 'email': '', 'phone': '5551234567'}
