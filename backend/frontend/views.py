# frontend/views.py
"""
Serves the HTML shell of the single page application.

The compiled bundle (settings.FRONTEND_BUNDLE) registers ``window.BankAccountsApp``;
the shell switches it to production mode outside DEBUG, accepts hot updates
from the dev server in DEBUG, then boots it.
"""
import logging

from django.conf import settings
from django.shortcuts import render
from django.views.decorators.http import require_GET

logger = logging.getLogger(__name__)


def build_app_config() -> dict:
    return {
        "production": not settings.DEBUG,
        "hotReload": bool(settings.DEBUG and getattr(settings, "FRONTEND_HOT_RELOAD", False)),
        "apiBase": "/api",
        "appName": getattr(settings, "APPLICATION_NAME", "bankAccountsApp"),
    }


@require_GET
def index(request):
    config = build_app_config()
    logger.debug("Serving application shell (production=%s)", config["production"])
    return render(
        request,
        "frontend/index.html",
        {"app_config": config, "bundle": settings.FRONTEND_BUNDLE},
    )
