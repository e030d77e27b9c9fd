import pytest

from models import Student, Professor, PreviousPassword
from password_hasher import PasswordHasher, DEFAULT_METHOD


def test_default_method_when_nothing_configured():
    assert PasswordHasher().method_for(Student()) == DEFAULT_METHOD


def test_method_is_picked_by_identity_class():
    hasher = PasswordHasher({
        'default': 'pbkdf2:sha256:1000',
        'PreviousPassword': 'pbkdf2:sha512:1000',
    })
    student = Student()

    assert hasher.method_for(student) == 'pbkdf2:sha256:1000'
    assert hasher.method_for(PreviousPassword(student)) == 'pbkdf2:sha512:1000'


def test_method_lookup_walks_the_class_hierarchy():
    hasher = PasswordHasher({'default': 'pbkdf2:sha256:1000', 'User': 'pbkdf2:sha512:1000'})

    assert hasher.method_for(Student()) == 'pbkdf2:sha512:1000'
    assert hasher.method_for(Professor()) == 'pbkdf2:sha512:1000'


def test_identity_context_changes_encoding_not_the_password():
    hasher = PasswordHasher({
        'default': 'pbkdf2:sha256:1000',
        'PreviousPassword': 'pbkdf2:sha512:1000',
    })
    student = Student()
    record = PreviousPassword(student)

    student.password_hash = hasher.hash_password(student, 's3cret-pass')
    record.password_hash = hasher.hash_password(record, 's3cret-pass')

    assert student.password_hash.startswith('pbkdf2:sha256:1000$')
    assert record.password_hash.startswith('pbkdf2:sha512:1000$')
    assert hasher.is_password_valid(student, 's3cret-pass')
    assert hasher.is_password_valid(record, 's3cret-pass')


def test_same_password_hashed_twice_differs():
    hasher = PasswordHasher({'default': 'pbkdf2:sha256:1000'})
    student = Student()

    assert hasher.hash_password(student, 'same-password') != hasher.hash_password(student, 'same-password')


def test_empty_password_is_rejected():
    with pytest.raises(ValueError):
        PasswordHasher().hash_password(Student(), '')


def test_is_password_valid_without_hash():
    assert PasswordHasher().is_password_valid(Student(), 'anything') is False
