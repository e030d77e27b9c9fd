"""
Pytest fixtures: a testing app on in-memory SQLite plus a wired StudentService.
"""
import pytest

from csrf_tokens import CsrfTokenManager
from db_single import get_session, EntityStore
from main import create_app
from models import ClassLevel, Grade, Professor, ROLE_PROFESSOR
from password_hasher import PasswordHasher
from student_service import StudentService


@pytest.fixture
def app():
    return create_app('testing')


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def session(app):
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def hasher(app):
    return PasswordHasher.from_config(app.config)


@pytest.fixture
def csrf_tokens(app):
    return CsrfTokenManager.from_config(app.config)


@pytest.fixture
def service(session, hasher, csrf_tokens):
    return StudentService(EntityStore(session), hasher, csrf_tokens)


@pytest.fixture
def profile():
    return {
        'first_name': 'Alice',
        'last_name': 'Martin',
        'email': 'alice.martin@example.com',
    }


def add_class_level(session, name):
    class_level = ClassLevel(name=name)
    session.add(class_level)
    session.commit()
    return class_level


def add_professor(session, hasher, email, last_name, class_levels):
    professor = Professor(
        email=email,
        first_name='Prof',
        last_name=last_name,
        roles=[ROLE_PROFESSOR],
        subject='Mathematics',
    )
    professor.password_hash = hasher.hash_password(professor, 'professor-pass')
    professor.class_levels = list(class_levels)
    session.add(professor)
    session.commit()
    return professor


def add_grades(session, student, values):
    for value in values:
        session.add(Grade(student=student, value=value))
    session.commit()
