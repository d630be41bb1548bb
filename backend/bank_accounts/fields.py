# bank_accounts/fields.py
"""
EncryptedTextField backed by cryptography.fernet Fernet keys.
- Keys come from settings.FERNET_KEYS (list) or the FERNET_KEYS environment
  variable (JSON list or a single key).
- The first key encrypts; every key is tried for decryption (rotation support).
- Raises RuntimeError when no usable key is configured.
"""
import json
import os
from typing import List, Optional
from django.conf import settings
from django.db import models
from cryptography.fernet import Fernet, InvalidToken

# loaded lazily, reset by reset_key_cache() when settings change
_FERNET_CACHE: List[Fernet] = []
_PRIMARY_FERNET: Optional[Fernet] = None


def _load_raw_keys() -> List[str]:
    raw = getattr(settings, "FERNET_KEYS", None)
    if raw is None:
        raw = os.environ.get("FERNET_KEYS")
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [str(x) for x in raw if x]
    s = str(raw).strip()
    if s.startswith("["):
        try:
            parsed = json.loads(s)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(x) for x in parsed if x]
    return [s] if s else []


def _ensure_fernets_loaded() -> None:
    global _PRIMARY_FERNET
    if _FERNET_CACHE:
        return
    raw_keys = _load_raw_keys()
    if not raw_keys:
        raise RuntimeError(
            "FERNET_KEYS is not configured. Set settings.FERNET_KEYS or the environment variable FERNET_KEYS."
        )
    loaded = []
    for k in raw_keys:
        try:
            loaded.append(Fernet(k.encode("utf-8")))
        except ValueError as exc:
            raise RuntimeError(f"Invalid Fernet key provided: {exc}") from exc
    _FERNET_CACHE.extend(loaded)
    _PRIMARY_FERNET = _FERNET_CACHE[0]


def reset_key_cache() -> None:
    """Forget loaded keys so the next access re-reads the configuration."""
    global _PRIMARY_FERNET
    _FERNET_CACHE.clear()
    _PRIMARY_FERNET = None


def encrypt_value(value: str) -> str:
    _ensure_fernets_loaded()
    return _PRIMARY_FERNET.encrypt(value.encode("utf-8")).decode("utf-8")  # type: ignore


def decrypt_value(value: str) -> str:
    """Decrypt with any configured key; values that are not tokens come back unchanged."""
    _ensure_fernets_loaded()
    for f in _FERNET_CACHE:
        try:
            return f.decrypt(value.encode("utf-8")).decode("utf-8")
        except InvalidToken:
            continue
    return value


class EncryptedTextField(models.TextField):
    description = "Text field encrypted with Fernet"

    def get_prep_value(self, value):
        value = super().get_prep_value(value)
        if value is None or value == "":
            return value
        return encrypt_value(value)

    def from_db_value(self, value, expression, connection):
        if value is None or value == "":
            return value
        return decrypt_value(value)

    def to_python(self, value):
        if isinstance(value, str) and value:
            return decrypt_value(value)
        return value
