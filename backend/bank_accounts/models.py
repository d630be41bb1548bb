# bank_accounts/models.py
"""
BankAccount, BankAccountDocument and BankAudit models.

- BankAccount is the primary store; its id is assigned by the database on first save.
- BankAccountDocument is the search-index entry kept in sync with BankAccount
  (see bank_accounts.search). It is a separate table so it can be rebuilt.
- EncryptedTextField stores the IBAN encrypted at-rest; only the masked value
  is ever exposed or indexed.
"""

from typing import Optional

from django.contrib.postgres.indexes import GinIndex
from django.contrib.postgres.search import SearchVectorField
from django.db import models
from django.utils import timezone

from .fields import EncryptedTextField


def _mask_value(value: Optional[str]) -> str:
    if not value:
        return ""
    s = str(value).strip()
    if len(s) <= 8:
        if len(s) <= 4:
            return s
        return s[:2] + "*" * max(0, len(s) - 4) + s[-2:]
    return s[:4] + "*" * max(6, len(s) - 8) + s[-4:]


def _normalize_iban(iban: Optional[str]) -> Optional[str]:
    if not iban:
        return None
    return "".join([c for c in str(iban).upper() if c.isalnum()])


class BankAccount(models.Model):
    """
    A bank account.
    - `iban_encrypted` stores the encrypted IBAN; set it through set_iban().
    - `iban_normalized` and `masked_account` are derived in save().
    """

    name = models.CharField(max_length=120)
    balance = models.DecimalField(max_digits=18, decimal_places=2)
    currency = models.CharField(max_length=8, blank=True, default="EUR")
    bank_name = models.CharField(max_length=120, blank=True)

    iban_encrypted = EncryptedTextField(blank=True, null=True)
    iban_normalized = models.CharField(max_length=64, blank=True, null=True, db_index=True)
    masked_account = models.CharField(max_length=64, blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "bank_account"
        ordering = ["id"]

    def __str__(self) -> str:
        display = self.masked_account or self.bank_name or "no iban"
        return f"{self.name} - {display}"

    def set_iban(self, iban: Optional[str]) -> None:
        """Store the IBAN plaintext (encrypted on save) and refresh the derived values."""
        if not iban:
            self.iban_encrypted = None
            self.iban_normalized = None
            self.masked_account = ""
            return
        self.iban_encrypted = iban
        self.iban_normalized = _normalize_iban(iban)
        self.masked_account = _mask_value(self.iban_normalized)

    def save(self, *args, **kwargs):
        if self.currency:
            self.currency = self.currency.upper()
        normalized = _normalize_iban(self.iban_encrypted)
        if normalized != self.iban_normalized:
            self.iban_normalized = normalized
        self.masked_account = _mask_value(normalized)
        super().save(*args, **kwargs)


class BankAccountDocument(models.Model):
    """
    Search-index entry for one BankAccount.
    `document` is the JSON body returned to search clients, `search_vector`
    the PostgreSQL tsvector computed from it (see bank_accounts.search).
    """

    id = models.BigIntegerField(primary_key=True)
    document = models.JSONField(default=dict)
    search_vector = SearchVectorField(null=True, editable=False)
    indexed_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "bank_account_search_index"
        ordering = ["id"]
        indexes = [
            GinIndex(fields=["search_vector"], name="bank_search_vector_idx"),
        ]

    def __str__(self) -> str:
        return f"BankAccountDocument({self.id})"


class BankAudit(models.Model):
    """
    Audit trail for bank-account writes.
    Store identifiers and non-sensitive metadata only.
    """

    action = models.CharField(max_length=128)  # bank_account.create / .update / .delete
    target_type = models.CharField(max_length=64, blank=True, null=True)
    target_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(blank=True, null=True)  # must not contain secrets
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        db_table = "bank_account_audit"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["action"], name="bank_audit_action_idx"),
            models.Index(fields=["target_type", "target_id"], name="bank_audit_target_idx"),
            models.Index(fields=["created_at"], name="bank_audit_created_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} target={self.target_type}:{self.target_id} at {self.created_at}"
