"""
Student Service
Business logic for student records: registration with password history,
profile edits, token-guarded deletion, grade averages and professor lookup
"""

import logging

from models import User, Student, Professor, ClassLevel, PreviousPassword, ROLE_STUDENT
from student_validators import ValidationError

logger = logging.getLogger(__name__)

# Fields the generic edit form may change; credentials and roles are never here
EDITABLE_FIELDS = ('first_name', 'last_name', 'email', 'phone', 'date_of_birth', 'class_level_id')


def delete_token_id(student_id):
    return f"delete{student_id}"


class StudentService:
    """
    Operates on students through an EntityStore (persist/remove/flush),
    a PasswordHasher and a CsrfTokenManager.
    """

    def __init__(self, store, hasher, csrf_tokens):
        self.store = store
        self.hasher = hasher
        self.csrf_tokens = csrf_tokens

    # ===== READ =====

    def list_students(self):
        return self.store.find_all(Student)

    def get_student(self, student_id):
        return self.store.find_or_fail(Student, student_id)

    # ===== WRITE =====

    def create(self, profile_data, plain_password):
        """
        Register a new student.

        The password is hashed once for the student and once more for the
        history record, each under its own identity, and both rows are
        committed in a single flush.
        """
        if not plain_password:
            raise ValidationError("Password", "is required")

        student = Student()
        self._apply_profile(student, profile_data)
        student.roles = [ROLE_STUDENT]
        student.password_hash = self.hasher.hash_password(student, plain_password)

        previous_password = PreviousPassword(student)
        previous_password.password_hash = self.hasher.hash_password(previous_password, plain_password)
        student.add_previous_password(previous_password)

        self.store.persist(student)
        self.store.persist(previous_password)
        self.store.flush()

        logger.info(f"Created student {student.id} ({student.email})")
        return student

    def update(self, student_id, profile_data):
        """Apply a profile changeset; password and roles are ignored"""
        student = self.get_student(student_id)
        self._apply_profile(student, profile_data)
        self.store.flush()

        logger.info(f"Updated student {student.id}")
        return student

    def delete(self, student_id, token):
        """
        Remove the student when ``token`` matches its delete token.
        Returns True if removed; a mismatched token changes nothing and returns False.
        """
        student = self.get_student(student_id)

        if not self.csrf_tokens.is_token_valid(delete_token_id(student.id), token):
            logger.warning(f"Rejected delete of student {student.id}: invalid token")
            return False

        self.store.remove(student)
        self.store.flush()
        logger.info(f"Deleted student {student_id}")
        return True

    # ===== GRADES =====

    @staticmethod
    def compute_average(grades):
        """Arithmetic mean of the grade values, or None when there are none"""
        grades = list(grades)
        if not grades:
            return None
        return sum(grades) / len(grades)

    def grade_report(self, student_id):
        student = self.get_student(student_id)
        values = [grade.value for grade in student.grades]
        return {
            'student': student,
            'grades': student.grades,
            'values': values,
            'average': self.compute_average(values),
        }

    # ===== PROFESSORS =====

    def list_professors_for_class_level(self, student_id):
        student = self.get_student(student_id)
        if student.class_level_id is None:
            return []

        return (
            self.store.query(Professor)
            .join(Professor.class_levels)
            .filter(ClassLevel.id == student.class_level_id)
            .all()
        )

    # ===== HELPERS =====

    def _ensure_email_available(self, email, student):
        existing = self.store.query(User).filter(User.email == email).first()
        if existing is not None and existing is not student:
            raise ValidationError("Email", "is already registered")

    def _apply_profile(self, student, profile_data):
        # Every lookup runs before the first attribute is set
        if profile_data.get('email'):
            self._ensure_email_available(profile_data['email'], student)
        if 'class_level_id' in profile_data:
            class_level = self._resolve_class_level(profile_data['class_level_id'])

        for field in EDITABLE_FIELDS:
            if field not in profile_data:
                continue
            if field == 'class_level_id':
                student.class_level = class_level
            else:
                setattr(student, field, profile_data[field])

    def _resolve_class_level(self, class_level_id):
        if class_level_id is None:
            return None
        class_level = self.store.find(ClassLevel, class_level_id)
        if class_level is None:
            raise ValidationError("Class Level", "does not exist")
        return class_level
