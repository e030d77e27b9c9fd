"""
Per-action anti-forgery tokens
A token is an HMAC of the token id (e.g. "delete42") under the app secret key
"""

import hmac
import hashlib


class CsrfTokenManager:
    """
    Issues and checks anti-forgery tokens scoped to a single action.

    Tokens are deterministic: the same id under the same secret always gives
    the same token, so a form rendered earlier still validates on submit.
    """

    def __init__(self, secret_key):
        if not secret_key:
            raise ValueError("A secret key is required to issue CSRF tokens")
        self._secret = secret_key.encode('utf-8') if isinstance(secret_key, str) else secret_key

    @classmethod
    def from_config(cls, app_config):
        """Build a manager keyed on the app's ``SECRET_KEY``"""
        return cls(app_config['SECRET_KEY'])

    def get_token(self, token_id):
        """
        Return the token for ``token_id``.

        Args:
            token_id: Action identifier, e.g. ``"delete42"``

        Returns:
            str: Hex-encoded HMAC-SHA256 digest
        """
        return hmac.new(self._secret, str(token_id).encode('utf-8'), hashlib.sha256).hexdigest()

    def is_token_valid(self, token_id, value):
        """
        Check a submitted token against the one issued for ``token_id``.

        Missing or non-string values are rejected; the comparison itself
        runs in constant time.

        Returns:
            bool: True only when ``value`` is the token for ``token_id``
        """
        if not value or not isinstance(value, str):
            return False
        return hmac.compare_digest(self.get_token(token_id).encode('utf-8'), value.encode('utf-8'))
