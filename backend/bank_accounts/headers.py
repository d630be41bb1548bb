# bank_accounts/headers.py
"""
Response headers announcing the outcome of a write to the SPA.

    X-<app>-alert   translation key of the message, e.g. bankAccountsApp.bankAccount.created
    X-<app>-params  parameter for the message (the entity id)
    Failure         human readable reason a request was refused
"""
from typing import Dict

from django.conf import settings


def _app_name() -> str:
    return getattr(settings, "APPLICATION_NAME", "bankAccountsApp")


def create_alert(message: str, param: str) -> Dict[str, str]:
    app = _app_name()
    return {f"X-{app}-alert": message, f"X-{app}-params": param}


def create_entity_creation_alert(entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(f"{_app_name()}.{entity_name}.created", param)


def create_entity_update_alert(entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(f"{_app_name()}.{entity_name}.updated", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> Dict[str, str]:
    return create_alert(f"{_app_name()}.{entity_name}.deleted", param)


def create_failure_alert(entity_name: str, error_key: str, message: str) -> Dict[str, str]:
    app = _app_name()
    return {
        "Failure": message,
        f"X-{app}-error": f"error.{error_key}",
        f"X-{app}-params": entity_name,
    }
