"""
Student Form Validation Utilities
Provides validation for student registration and profile edit forms
"""

import re
from datetime import datetime, date
from dateutil.relativedelta import relativedelta


class ValidationError(Exception):
    """Custom exception for validation errors"""
    def __init__(self, field, message):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class StudentValidator:
    """Validates student form data"""

    MIN_PASSWORD_LENGTH = 8

    @staticmethod
    def validate_phone(phone, field_name="Phone"):
        """
        Validate phone number - must be exactly 10 digits
        Args:
            phone: Phone number string
            field_name: Name of the field for error messages
        Returns:
            Cleaned phone number (digits only), or None when empty
        Raises:
            ValidationError if invalid
        """
        if not phone or not phone.strip():
            return None  # Optional field

        # Remove common formatting characters
        cleaned = re.sub(r'[\s\-\(\)\+\.]', '', phone.strip())

        if not cleaned.isdigit():
            raise ValidationError(field_name, "must contain only digits")

        if len(cleaned) != 10:
            raise ValidationError(field_name, "must be exactly 10 digits")

        return cleaned

    @staticmethod
    def validate_email(email):
        """
        Validate email format
        Returns:
            Cleaned email (lowercase)
        Raises:
            ValidationError if invalid
        """
        if not email or not email.strip():
            raise ValidationError("Email", "is required")

        email = email.strip().lower()

        pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
        if not re.match(pattern, email):
            raise ValidationError("Email", "is not a valid email address")

        if len(email) > 180:
            raise ValidationError("Email", "must not exceed 180 characters")

        return email

    @staticmethod
    def validate_date_of_birth(dob_str, min_age=3, max_age=30):
        """
        Validate an optional date of birth (YYYY-MM-DD)
        Returns:
            date object, or None when empty
        Raises:
            ValidationError if invalid
        """
        if not dob_str or not dob_str.strip():
            return None

        try:
            dob = datetime.strptime(dob_str.strip(), '%Y-%m-%d').date()
        except ValueError:
            raise ValidationError("Date of Birth", "must be in YYYY-MM-DD format")

        today = date.today()
        if dob >= today:
            raise ValidationError("Date of Birth", "cannot be in the future")

        age = relativedelta(today, dob).years

        if age < min_age:
            raise ValidationError("Date of Birth", f"student must be at least {min_age} years old")

        if age > max_age:
            raise ValidationError("Date of Birth", f"student cannot be more than {max_age} years old")

        return dob

    @staticmethod
    def validate_name(name, field_name="Name", min_length=2, max_length=50):
        """
        Validate name fields
        Returns:
            Cleaned name (title case)
        Raises:
            ValidationError if invalid
        """
        if not name or not name.strip():
            raise ValidationError(field_name, "is required")

        cleaned = name.strip()

        if len(cleaned) < min_length:
            raise ValidationError(field_name, f"must be at least {min_length} characters")

        if len(cleaned) > max_length:
            raise ValidationError(field_name, f"must not exceed {max_length} characters")

        # Letters (accented too), spaces, hyphens, apostrophes
        if not re.match(r"^[^\W\d_]+(?:[\s\-'\.][^\W\d_]+)*\.?$", cleaned):
            raise ValidationError(field_name, "must contain only letters, spaces, hyphens, and apostrophes")

        return cleaned.title()

    @staticmethod
    def validate_password(password):
        if not password:
            raise ValidationError("Password", "is required")

        if len(password) < StudentValidator.MIN_PASSWORD_LENGTH:
            raise ValidationError("Password", f"must be at least {StudentValidator.MIN_PASSWORD_LENGTH} characters")

        return password

    @staticmethod
    def validate_class_level_id(value):
        if value is None or str(value).strip() == '':
            return None
        try:
            class_level_id = int(str(value).strip())
        except ValueError:
            raise ValidationError("Class Level", "is not a valid selection")
        if class_level_id <= 0:
            raise ValidationError("Class Level", "is not a valid selection")
        return class_level_id

    @staticmethod
    def validate_all_student_data(form_data, require_password=True):
        """
        Validate all student form data at once
        Args:
            form_data: Mapping of submitted form fields
            require_password: False for the edit form, which has no password field
        Returns:
            Dictionary of validated and cleaned data
        Raises:
            ValidationError on first validation failure
        """
        validated = {}

        validated['first_name'] = StudentValidator.validate_name(
            form_data.get('first_name'), 'First Name'
        )
        validated['last_name'] = StudentValidator.validate_name(
            form_data.get('last_name'), 'Last Name'
        )
        validated['email'] = StudentValidator.validate_email(
            form_data.get('email')
        )
        validated['phone'] = StudentValidator.validate_phone(
            form_data.get('phone', '')
        )
        validated['date_of_birth'] = StudentValidator.validate_date_of_birth(
            form_data.get('date_of_birth', '')
        )
        validated['class_level_id'] = StudentValidator.validate_class_level_id(
            form_data.get('class_level_id')
        )

        if require_password:
            validated['password'] = StudentValidator.validate_password(
                form_data.get('password')
            )

        return validated


def format_validation_error(error):
    """
    Format ValidationError for user-friendly display
    """
    return f"{error.field} {error.message}"
