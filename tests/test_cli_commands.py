from db_single import get_session
from models import Student, Professor, ClassLevel


def test_setup_db(app):
    result = app.test_cli_runner().invoke(args=['setup-db'])

    assert 'Database setup completed successfully' in result.output


def test_add_class_level_and_duplicate(app):
    runner = app.test_cli_runner()

    first = runner.invoke(args=['add-class-level', '--name', '6e'])
    second = runner.invoke(args=['add-class-level', '--name', '6e'])

    assert "Class level '6e' created" in first.output
    assert 'already exists' in second.output
    s = get_session()
    try:
        assert s.query(ClassLevel).count() == 1
    finally:
        s.close()


def test_add_professor_with_class_levels(app):
    runner = app.test_cli_runner()
    runner.invoke(args=['add-class-level', '--name', '6e'])
    runner.invoke(args=['add-class-level', '--name', '5e'])

    result = runner.invoke(args=[
        'add-professor', '--email', 'prof@example.com', '--first-name', 'Marie',
        '--last-name', 'Curie', '--password', 'radium-1898', '--subject', 'Physics',
        '--class-level', '6e', '--class-level', '5e',
    ])

    assert 'Professor Marie Curie created' in result.output
    s = get_session()
    try:
        professor = s.query(Professor).one()
        assert sorted(level.name for level in professor.class_levels) == ['5e', '6e']
        assert professor.roles == ['ROLE_PROFESSOR']
    finally:
        s.close()


def test_add_professor_unknown_class_level(app):
    result = app.test_cli_runner().invoke(args=[
        'add-professor', '--email', 'prof@example.com', '--first-name', 'Marie',
        '--last-name', 'Curie', '--password', 'radium-1898', '--class-level', 'CP',
    ])

    assert result.exit_code != 0
    assert "Class level 'CP' not found" in result.output


def test_create_student_grades_and_listing(app):
    runner = app.test_cli_runner()
    runner.invoke(args=['add-class-level', '--name', '6e'])

    result = runner.invoke(args=[
        'create-student', '--email', 'leo@example.com', '--first-name', 'Leo',
        '--last-name', 'Petit', '--password', 'long enough', '--class-level', '6e',
    ])
    assert 'Student Leo Petit created' in result.output

    s = get_session()
    try:
        student = s.query(Student).one()
        student_id = student.id
        assert len(student.previous_passwords) == 1
    finally:
        s.close()

    for value in ('12', '15', '9'):
        runner.invoke(args=['add-grade', '--student-id', str(student_id), '--value', value])

    listing = runner.invoke(args=['list-students'])

    assert 'Leo Petit <leo@example.com>' in listing.output
    assert 'Class level: 6e' in listing.output
    assert 'Average: 12.00' in listing.output


def test_create_student_invalid_password(app):
    result = app.test_cli_runner().invoke(args=[
        'create-student', '--email', 'leo@example.com', '--first-name', 'Leo',
        '--last-name', 'Petit', '--password', 'short',
    ])

    assert 'Password must be at least 8 characters' in result.output


def test_add_grade_unknown_student(app):
    result = app.test_cli_runner().invoke(args=['add-grade', '--student-id', '42', '--value', '10'])

    assert 'Student 42 not found' in result.output


def test_list_students_empty(app):
    result = app.test_cli_runner().invoke(args=['list-students'])

    assert 'No students found' in result.output
