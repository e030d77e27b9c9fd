"""
Student Routes
CRUD pages for students, their grades and their professors
"""

from flask import Blueprint, render_template, request, redirect, url_for, flash, abort, current_app
import logging

from csrf_tokens import CsrfTokenManager
from db_single import get_session, EntityStore, NotFoundError
from models import ClassLevel
from password_hasher import PasswordHasher
from student_service import StudentService
from student_validators import StudentValidator, ValidationError, format_validation_error

logger = logging.getLogger(__name__)

student_bp = Blueprint('student', __name__, url_prefix='/etudiant')

HTTP_SEE_OTHER = 303


def build_student_service(session_db):
    """Wire a StudentService for one request's session"""
    return StudentService(
        EntityStore(session_db),
        PasswordHasher.from_config(current_app.config),
        CsrfTokenManager.from_config(current_app.config),
    )


def _class_levels(session_db):
    return session_db.query(ClassLevel).order_by(ClassLevel.name).all()


@student_bp.route('/', methods=['GET'])
def index():
    """List all students"""
    session_db = get_session()
    try:
        service = build_student_service(session_db)
        return render_template('student/index.html', students=service.list_students())
    finally:
        session_db.close()


@student_bp.route('/new', methods=['GET', 'POST'])
def new():
    """Student registration form"""
    session_db = get_session()
    try:
        service = build_student_service(session_db)
        form_data = request.form if request.method == 'POST' else {}

        if request.method == 'POST':
            try:
                validated = StudentValidator.validate_all_student_data(request.form)
                password = validated.pop('password')
                service.create(validated, password)
                flash('Student created successfully', 'success')
                return redirect(url_for('student.index'), code=HTTP_SEE_OTHER)
            except ValidationError as e:
                session_db.rollback()
                flash(format_validation_error(e), 'error')
                return render_template(
                    'student/new.html',
                    form_data=form_data,
                    class_levels=_class_levels(session_db),
                ), 422

        return render_template('student/new.html', form_data=form_data, class_levels=_class_levels(session_db))
    finally:
        session_db.close()


@student_bp.route('/<int:id>', methods=['GET'])
def show(id):
    session_db = get_session()
    try:
        student = build_student_service(session_db).get_student(id)
        return render_template('student/show.html', student=student)
    except NotFoundError:
        abort(404)
    finally:
        session_db.close()


@student_bp.route('/<int:id>/edit', methods=['GET', 'POST'])
def edit(id):
    """Profile edit form; the password is not part of it"""
    session_db = get_session()
    try:
        service = build_student_service(session_db)
        student = service.get_student(id)

        if request.method == 'POST':
            try:
                validated = StudentValidator.validate_all_student_data(request.form, require_password=False)
                service.update(id, validated)
                flash('Student updated successfully', 'success')
                return redirect(url_for('student.index'), code=HTTP_SEE_OTHER)
            except ValidationError as e:
                session_db.rollback()
                flash(format_validation_error(e), 'error')
                return render_template(
                    'student/edit.html',
                    student=student,
                    form_data=request.form,
                    class_levels=_class_levels(session_db),
                ), 422

        return render_template(
            'student/edit.html',
            student=student,
            form_data=student.to_form_data(),
            class_levels=_class_levels(session_db),
        )
    except NotFoundError:
        abort(404)
    finally:
        session_db.close()


@student_bp.route('/<int:id>', methods=['POST'])
def delete(id):
    session_db = get_session()
    try:
        service = build_student_service(session_db)
        if service.delete(id, request.form.get('_token')):
            flash('Student deleted', 'success')
        else:
            flash('Student was not deleted: the form has expired, please try again', 'warning')
        return redirect(url_for('student.index'), code=HTTP_SEE_OTHER)
    except NotFoundError:
        abort(404)
    finally:
        session_db.close()


@student_bp.route('/<int:id>/notes', methods=['GET', 'POST'])
def notes(id):
    """Grades of one student with their average"""
    session_db = get_session()
    try:
        report = build_student_service(session_db).grade_report(id)
        return render_template(
            'student/mygrades.html',
            student=report['student'],
            grades=report['grades'],
            average=report['average'],
        )
    except NotFoundError:
        abort(404)
    finally:
        session_db.close()


@student_bp.route('/<int:id>/prof', methods=['GET', 'POST'])
def prof(id):
    """Professors teaching the student's class level"""
    session_db = get_session()
    try:
        service = build_student_service(session_db)
        student = service.get_student(id)
        professors = service.list_professors_for_class_level(id)
        return render_template('student/myprof.html', student=student, professors=professors)
    except NotFoundError:
        abort(404)
    finally:
        session_db.close()
