from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

from django.conf import settings
from django.urls import include, path

# Domain modules mounted according to SERVICE_NAME
SERVICE_URLS = {
    "products": ["modules.products.urls"],
    "orders": ["modules.orders.urls"],
    "all": ["modules.products.urls", "modules.orders.urls"],
}

urlpatterns = [
    path("", include("modules.core.urls")),
    *[
        path("api/", include(module))
        for module in SERVICE_URLS.get(settings.SERVICE_NAME, SERVICE_URLS["all"])
    ],
    # OpenAPI schema & docs (public)
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
]
