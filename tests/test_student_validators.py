from datetime import date

import pytest
from dateutil.relativedelta import relativedelta

from student_validators import StudentValidator, ValidationError, format_validation_error


def valid_form(**overrides):
    form = {
        'first_name': 'jean-pierre',
        'last_name': "o'neil",
        'email': '  JP.ONeil@Example.com ',
        'phone': '06 12 34 56 78',
        'date_of_birth': (date.today() - relativedelta(years=12)).strftime('%Y-%m-%d'),
        'class_level_id': '3',
        'password': 'long enough',
    }
    form.update(overrides)
    return form


def test_validate_all_student_data_cleans_values():
    validated = StudentValidator.validate_all_student_data(valid_form())

    assert validated['first_name'] == 'Jean-Pierre'
    assert validated['last_name'] == "O'Neil"
    assert validated['email'] == 'jp.oneil@example.com'
    assert validated['phone'] == '0612345678'
    assert validated['class_level_id'] == 3
    assert validated['password'] == 'long enough'


def test_optional_fields_may_be_blank():
    validated = StudentValidator.validate_all_student_data(
        valid_form(phone='', date_of_birth='', class_level_id='')
    )

    assert validated['phone'] is None
    assert validated['date_of_birth'] is None
    assert validated['class_level_id'] is None


def test_edit_form_has_no_password():
    validated = StudentValidator.validate_all_student_data(valid_form(password=None), require_password=False)

    assert 'password' not in validated


@pytest.mark.parametrize("overrides, field", [
    ({'first_name': ''}, 'First Name'),
    ({'last_name': 'X'}, 'Last Name'),
    ({'first_name': 'R2D2'}, 'First Name'),
    ({'email': 'not-an-email'}, 'Email'),
    ({'phone': '12345'}, 'Phone'),
    ({'date_of_birth': '2010/01/01'}, 'Date of Birth'),
    ({'date_of_birth': (date.today() + relativedelta(days=1)).strftime('%Y-%m-%d')}, 'Date of Birth'),
    ({'class_level_id': 'abc'}, 'Class Level'),
    ({'password': 'short'}, 'Password'),
    ({'password': ''}, 'Password'),
])
def test_invalid_fields(overrides, field):
    with pytest.raises(ValidationError) as exc:
        StudentValidator.validate_all_student_data(valid_form(**overrides))

    assert exc.value.field == field


def test_format_validation_error():
    assert format_validation_error(ValidationError("Email", "is required")) == "Email is required"
