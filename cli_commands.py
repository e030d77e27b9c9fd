"""
Flask CLI commands for the Student Records module
"""

import click
from flask import Flask, current_app
from db_single import get_session, EntityStore, PersistenceError
from init_db import run_on_startup
from models import Student, Professor, ClassLevel, Grade, ROLE_PROFESSOR
from csrf_tokens import CsrfTokenManager
from password_hasher import PasswordHasher
from student_service import StudentService
from student_validators import StudentValidator, ValidationError, format_validation_error
import logging

logger = logging.getLogger(__name__)


def _find_class_level(session, name):
    class_level = session.query(ClassLevel).filter_by(name=name).first()
    if not class_level:
        raise click.ClickException(f"Class level '{name}' not found")
    return class_level


def register_cli_commands(app: Flask):
    """Register CLI commands with the Flask app"""

    @app.cli.command("setup-db")
    def setup_db_command():
        """Create database and tables"""
        click.echo("🚀 Setting up database...")
        if run_on_startup():
            click.echo("✅ Database setup completed successfully!")
        else:
            click.echo("❌ Database setup failed!")

    @app.cli.command("add-class-level")
    @click.option("--name", required=True, help="Class level name (e.g., '6e')")
    def add_class_level_command(name):
        """Add a class level"""
        session = get_session()
        try:
            if session.query(ClassLevel).filter_by(name=name).first():
                click.echo(f"❌ Class level '{name}' already exists")
                return

            class_level = ClassLevel(name=name)
            store = EntityStore(session)
            store.persist(class_level)
            store.flush()
            click.echo(f"✅ Class level '{name}' created (id={class_level.id})")
        except PersistenceError as e:
            click.echo(f"❌ Failed to create class level: {e}")
        finally:
            session.close()

    @app.cli.command("add-professor")
    @click.option("--email", required=True, help="Professor email")
    @click.option("--first-name", required=True, help="First name")
    @click.option("--last-name", required=True, help="Last name")
    @click.option("--password", required=True, help="Password")
    @click.option("--subject", default=None, help="Subject taught")
    @click.option("--class-level", "class_levels", multiple=True, help="Class level name (repeatable)")
    def add_professor_command(email, first_name, last_name, password, subject, class_levels):
        """Create a professor teaching the given class levels"""
        session = get_session()
        try:
            professor = Professor(
                email=StudentValidator.validate_email(email),
                first_name=StudentValidator.validate_name(first_name, 'First Name'),
                last_name=StudentValidator.validate_name(last_name, 'Last Name'),
                subject=subject,
                roles=[ROLE_PROFESSOR],
            )
            professor.password_hash = PasswordHasher.from_config(current_app.config).hash_password(
                professor, StudentValidator.validate_password(password)
            )
            professor.class_levels = [_find_class_level(session, name) for name in class_levels]

            store = EntityStore(session)
            store.persist(professor)
            store.flush()
            click.echo(f"✅ Professor {professor.full_name} created (id={professor.id})")
        except ValidationError as e:
            click.echo(f"❌ {format_validation_error(e)}")
        except PersistenceError as e:
            click.echo(f"❌ Failed to create professor: {e}")
        finally:
            session.close()

    @app.cli.command("create-student")
    @click.option("--email", required=True, help="Student email")
    @click.option("--first-name", required=True, help="First name")
    @click.option("--last-name", required=True, help="Last name")
    @click.option("--password", required=True, help="Password")
    @click.option("--class-level", default=None, help="Class level name")
    def create_student_command(email, first_name, last_name, password, class_level):
        """Register a student with password history"""
        session = get_session()
        try:
            form_data = {
                'email': email,
                'first_name': first_name,
                'last_name': last_name,
                'password': password,
                'class_level_id': _find_class_level(session, class_level).id if class_level else None,
            }
            validated = StudentValidator.validate_all_student_data(form_data)
            service = StudentService(
                EntityStore(session),
                PasswordHasher.from_config(current_app.config),
                CsrfTokenManager.from_config(current_app.config),
            )
            password = validated.pop('password')
            student = service.create(validated, password)
            click.echo(f"✅ Student {student.full_name} created (id={student.id})")
        except ValidationError as e:
            click.echo(f"❌ {format_validation_error(e)}")
        except PersistenceError as e:
            click.echo(f"❌ Failed to create student: {e}")
        finally:
            session.close()

    @app.cli.command("add-grade")
    @click.option("--student-id", required=True, type=int, help="Student id")
    @click.option("--value", required=True, type=float, help="Grade value")
    @click.option("--label", default=None, help="What the grade is for")
    def add_grade_command(student_id, value, label):
        """Record a grade for a student"""
        session = get_session()
        try:
            store = EntityStore(session)
            student = store.find(Student, student_id)
            if not student:
                click.echo(f"❌ Student {student_id} not found")
                return

            store.persist(Grade(student=student, value=value, label=label))
            store.flush()
            click.echo(f"✅ Grade {value} recorded for {student.full_name}")
        except PersistenceError as e:
            click.echo(f"❌ Failed to record grade: {e}")
        finally:
            session.close()

    @app.cli.command("list-students")
    def list_students_command():
        """List all students with their average"""
        session = get_session()
        try:
            students = EntityStore(session).find_all(Student)
            if not students:
                click.echo("📭 No students found")
                return

            click.echo("🎓 Students:")
            click.echo("-" * 60)
            for student in students:
                average = StudentService.compute_average(grade.value for grade in student.grades)
                click.echo(f"  [{student.id}] {student.full_name} <{student.email}>")
                click.echo(f"    Class level: {student.class_level.name if student.class_level else '-'}")
                click.echo(f"    Average: {'-' if average is None else f'{average:.2f}'}")
                click.echo("-" * 60)
        finally:
            session.close()
