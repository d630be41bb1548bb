from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path("admin/", admin.site.urls),

    # Bank accounts API
    path("api/", include(("bank_accounts.urls", "bank_accounts"), namespace="bank_accounts")),

    # JWT tokens
    path("api/token", TokenObtainPairView.as_view(), name="token_obtain_pair"),
    path("api/token/refresh", TokenRefreshView.as_view(), name="token_refresh"),

    # Single page application shell
    path("", include(("frontend.urls", "frontend"), namespace="frontend")),
]
