# bank_accounts/signals.py
from django.db.models.signals import pre_save, post_save, post_delete
from django.dispatch import receiver
from django.db import transaction
import logging

from .models import BankAccount, BankAudit

logger = logging.getLogger(__name__)

# encrypted values only ever show up as this placeholder in audit diffs
SECRET_PLACEHOLDER = "***"
SECRET_FIELDS = {"iban_encrypted"}


def _fields_of_interest():
    # champs à surveiller pour produire un diff utile
    return [
        "name",
        "balance",
        "currency",
        "bank_name",
        "iban_encrypted",
        "masked_account",
    ]


def _display(field, value):
    if value is None:
        return None
    if field in SECRET_FIELDS:
        return SECRET_PLACEHOLDER
    return str(value)


def _serialize_diff(old, new):
    diff = {}
    for f in _fields_of_interest():
        old_v = getattr(old, f, None) if old is not None else None
        new_v = getattr(new, f, None)
        if old_v != new_v:
            diff[f] = {"old": _display(f, old_v), "new": _display(f, new_v)}
    return diff


def _audit_create(action, instance, detail):
    """Write a BankAudit row; failures are logged, never raised into the request."""
    try:
        # savepoint: a failed audit write must not poison the caller's transaction
        with transaction.atomic():
            BankAudit.objects.create(
                action=f"bank_account.{action}",
                target_type="BankAccount",
                target_id=str(instance.pk),
                detail=detail,
            )
    except Exception:
        logger.exception("Failed to write BankAudit %s for BankAccount %s", action, instance.pk)


@receiver(pre_save, sender=BankAccount)
def _bankaccount_pre_save(sender, instance, **kwargs):
    """
    Snapshot previous state for later comparison in post_save.
    """
    instance._pre_save_obj = None
    if instance.pk:
        try:
            instance._pre_save_obj = BankAccount.objects.filter(pk=instance.pk).first()
        except Exception:
            logger.exception("pre_save snapshot failed for BankAccount %s", instance.pk)


@receiver(post_save, sender=BankAccount)
def bankaccount_post_save(sender, instance, created, **kwargs):
    """
    Record a create, or an update that changed at least one watched field.
    """
    old = getattr(instance, "_pre_save_obj", None)
    diff = _serialize_diff(old, instance)
    if not created and not diff:
        return
    action = "create" if created else "update"
    _audit_create(action, instance, {"action": action, "diff": diff})


@receiver(post_delete, sender=BankAccount)
def bankaccount_post_delete(sender, instance, **kwargs):
    detail = {
        "action": "delete",
        "name": instance.name,
        "masked_account": instance.masked_account,
    }
    _audit_create("delete", instance, detail)
