"""
Student Records Models
Users (students and professors), class levels, grades and password history
"""

from sqlalchemy import Column, Integer, String, DateTime, Date, Float, ForeignKey, JSON, Table, Index
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime

Base = declarative_base()

ROLE_STUDENT = 'ROLE_STUDENT'
ROLE_PROFESSOR = 'ROLE_PROFESSOR'


# ===== ASSOCIATION TABLES =====

professor_class_levels = Table(
    'professor_class_levels',
    Base.metadata,
    Column('professor_id', Integer, ForeignKey('professors.id', ondelete='CASCADE'), primary_key=True),
    Column('class_level_id', Integer, ForeignKey('class_levels.id', ondelete='CASCADE'), primary_key=True),
)


# ===== USER MODEL =====
class User(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    type = Column(String(20), nullable=False)
    email = Column(String(180), unique=True, nullable=False)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    roles = Column(JSON, nullable=False, default=list)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __mapper_args__ = {
        'polymorphic_on': type,
        'polymorphic_identity': 'user',
    }

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self):
        return f'<User {self.email} {self.roles}>'


class Student(User):
    __tablename__ = 'students'

    id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    date_of_birth = Column(Date, nullable=True)
    phone = Column(String(20), nullable=True)
    class_level_id = Column(Integer, ForeignKey('class_levels.id', ondelete='SET NULL'), nullable=True)

    # Relationships
    class_level = relationship("ClassLevel", back_populates="students")
    grades = relationship("Grade", back_populates="student", cascade="all, delete-orphan",
                          order_by="Grade.id")
    previous_passwords = relationship("PreviousPassword", back_populates="owner", cascade="all, delete-orphan",
                                      order_by="PreviousPassword.id")

    __mapper_args__ = {
        'polymorphic_identity': 'student',
    }

    def add_previous_password(self, previous_password):
        if previous_password not in self.previous_passwords:
            self.previous_passwords.append(previous_password)
        return self

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'full_name': self.full_name,
            'class_level': self.class_level.name if self.class_level else None,
            'roles': list(self.roles or []),
        }

    def to_form_data(self):
        """Current values as the edit form expects them"""
        return {
            'first_name': self.first_name,
            'last_name': self.last_name,
            'email': self.email,
            'phone': self.phone or '',
            'date_of_birth': self.date_of_birth.strftime('%Y-%m-%d') if self.date_of_birth else '',
            'class_level_id': str(self.class_level_id) if self.class_level_id else '',
        }

    def __repr__(self):
        return f'<Student {self.full_name} ({self.email})>'


class Professor(User):
    __tablename__ = 'professors'

    id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    subject = Column(String(100), nullable=True)

    # Relationships
    class_levels = relationship("ClassLevel", secondary=professor_class_levels, back_populates="professors")

    __mapper_args__ = {
        'polymorphic_identity': 'professor',
    }

    def __repr__(self):
        return f'<Professor {self.full_name} ({self.subject})>'


# ===== CLASS LEVEL MODEL =====
class ClassLevel(Base):
    __tablename__ = 'class_levels'

    id = Column(Integer, primary_key=True)
    name = Column(String(50), unique=True, nullable=False)  # e.g., "6e", "Terminale"
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    students = relationship("Student", back_populates="class_level")
    professors = relationship("Professor", secondary=professor_class_levels, back_populates="class_levels")

    def __repr__(self):
        return f'<ClassLevel {self.name}>'


# ===== GRADE MODEL =====
class Grade(Base):
    __tablename__ = 'grades'
    __table_args__ = (
        Index('idx_grade_student', 'student_id'),
    )

    id = Column(Integer, primary_key=True)
    student_id = Column(Integer, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    value = Column(Float, nullable=False)
    label = Column(String(100), nullable=True)  # e.g., "Mathematics - Term 1"
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    student = relationship("Student", back_populates="grades")

    def __repr__(self):
        return f'<Grade student_id={self.student_id} value={self.value}>'


# ===== PASSWORD HISTORY MODEL =====
class PreviousPassword(Base):
    """Append-only record of a password hash a user has held"""
    __tablename__ = 'previous_passwords'
    __table_args__ = (
        Index('idx_prev_password_user', 'user_id'),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey('students.id', ondelete='CASCADE'), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    owner = relationship("Student", back_populates="previous_passwords")

    def __init__(self, owner, **kwargs):
        super().__init__(**kwargs)
        self.owner = owner

    def __repr__(self):
        return f"<PreviousPassword user_id={self.user_id} created_at={self.created_at}>"
