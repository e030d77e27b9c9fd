"""
Password hashing for students and their password history.

The hashing method is chosen from the identity the hash belongs to: the
``PASSWORD_HASH_METHODS`` mapping is looked up by class name along the
subject's MRO, falling back to ``'default'``. Werkzeug salts every hash, so
hashing the same password twice gives two different strings that both
verify against it.
"""

from werkzeug.security import generate_password_hash, check_password_hash
import logging

logger = logging.getLogger(__name__)

DEFAULT_METHOD = 'scrypt'


class PasswordHasher:

    def __init__(self, methods=None):
        self.methods = dict(methods or {})

    @classmethod
    def from_config(cls, app_config):
        return cls(app_config.get('PASSWORD_HASH_METHODS'))

    def method_for(self, subject):
        for klass in type(subject).__mro__:
            if klass.__name__ in self.methods:
                return self.methods[klass.__name__]
        return self.methods.get('default', DEFAULT_METHOD)

    def hash_password(self, subject, plain_password):
        """Hash ``plain_password`` for ``subject`` (a Student, PreviousPassword, ...)"""
        if not plain_password:
            raise ValueError("Cannot hash an empty password")
        return generate_password_hash(plain_password, method=self.method_for(subject))

    def is_password_valid(self, subject, plain_password):
        if not subject.password_hash or plain_password is None:
            return False
        return check_password_hash(subject.password_hash, plain_password)
