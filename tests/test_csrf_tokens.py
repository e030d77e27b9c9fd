import pytest

from csrf_tokens import CsrfTokenManager


@pytest.fixture
def tokens():
    return CsrfTokenManager('unit-test-secret')


def test_token_is_deterministic(tokens):
    assert tokens.get_token('delete1') == tokens.get_token('delete1')


def test_token_depends_on_token_id(tokens):
    assert tokens.get_token('delete1') != tokens.get_token('delete2')
    assert tokens.get_token('delete1') != tokens.get_token('edit1')


def test_token_depends_on_secret():
    assert CsrfTokenManager('a').get_token('delete1') != CsrfTokenManager('b').get_token('delete1')


def test_valid_token(tokens):
    assert tokens.is_token_valid('delete7', tokens.get_token('delete7'))


@pytest.mark.parametrize("value", [None, '', 'garbage', 'éàü', 42])
def test_invalid_tokens(tokens, value):
    assert tokens.is_token_valid('delete7', value) is False


def test_secret_is_required():
    with pytest.raises(ValueError):
        CsrfTokenManager('')


def test_from_config_uses_secret_key():
    tokens = CsrfTokenManager.from_config({'SECRET_KEY': 'unit-test-secret'})

    assert tokens.get_token('delete3') == CsrfTokenManager('unit-test-secret').get_token('delete3')
