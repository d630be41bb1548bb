import os
from decimal import Decimal

from cryptography.fernet import Fernet

# must be in place before the first EncryptedTextField access
os.environ.setdefault("FERNET_KEYS", Fernet.generate_key().decode("utf-8"))

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from bank_accounts.models import BankAccount
from bank_accounts.search import BankAccountSearchRepository

User = get_user_model()


@pytest.fixture
def api_client():
    """Client DRF prêt à l’emploi pour tester les vues."""
    return APIClient()


@pytest.fixture
def user(db):
    return User.objects.create_user(
        username="user",
        email="user@example.com",
        password="Pass12345",
    )


@pytest.fixture
def auth_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client


@pytest.fixture
def search_repository():
    return BankAccountSearchRepository()


@pytest.fixture
def make_account(db, search_repository):
    """Create a BankAccount and index it, like the REST resource does."""

    def _make(name="Main account", balance="100.00", iban=None, index=True, **extra):
        account = BankAccount(name=name, balance=Decimal(balance), **extra)
        if iban:
            account.set_iban(iban)
        account.save()
        if index:
            search_repository.save(account)
        return account

    return _make
