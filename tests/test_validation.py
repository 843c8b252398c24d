"""
Tests for form validation
"""
import pytest

from teamhub.enums import Role
from teamhub import validation
from teamhub.validation import (
    is_blank, is_valid_email, is_valid_role,
    validate_member_form, validate_organization_form, validate_team_form,
)


@pytest.mark.parametrize("value", [None, '', '   ', '\t\n'])
def test_is_blank(value):
    assert is_blank(value)


def test_is_blank_false_for_text():
    assert not is_blank(' a ')


@pytest.mark.parametrize("email", ['a@b.co', 'first.last@sub.example.org', ' x@y.z '])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", [
    None, 'not-an-email', 'a@b', '@b.co', 'a@.co', 'a@b.', 'a b@c.de', 'a@@b.co', 'a@b@c.de',
])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_role_membership():
    assert is_valid_role('Developer')
    assert is_valid_role('Product Owner')
    assert is_valid_role(Role.tester)
    assert not is_valid_role('developer')
    assert not is_valid_role('CEO')
    assert not is_valid_role(None)


def test_organization_form_reports_every_field():
    errors = validate_organization_form(' ', ' ')
    assert errors == {
        'name': validation.ORGANIZATION_NAME_REQUIRED,
        'description': validation.DESCRIPTION_REQUIRED,
    }


def test_organization_form_valid():
    assert validate_organization_form('Acme', 'Rockets') == {}


def test_team_form_messages():
    assert validate_team_form('', 'ok') == {'name': validation.TEAM_NAME_REQUIRED}
    assert validate_team_form('Core', None) == {'description': validation.DESCRIPTION_REQUIRED}


def test_member_form_reports_all_failures_together():
    errors = validate_member_form('', 'nope', '')
    assert errors == {
        'name': validation.NAME_REQUIRED,
        'email': validation.EMAIL_INVALID,
        'role': validation.ROLE_REQUIRED,
    }


def test_member_form_email_required_and_role_unknown():
    errors = validate_member_form('Ada', '  ', 'Astronaut')
    assert errors == {'email': validation.EMAIL_REQUIRED, 'role': validation.ROLE_INVALID}


def test_member_form_valid():
    assert validate_member_form('Ada', 'a@b.co', 'Developer') == {}


def test_non_string_values_are_field_errors():
    assert not is_valid_email(123)
    assert is_blank(42)
    errors = validate_member_form('Ada', 123, 'Developer')
    assert errors == {'email': validation.EMAIL_INVALID}
    assert validate_member_form(None, None, None) == {
        'name': validation.NAME_REQUIRED,
        'email': validation.EMAIL_REQUIRED,
        'role': validation.ROLE_REQUIRED,
    }
