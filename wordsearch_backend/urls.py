from django.urls import path, include
from rest_framework.renderers import JSONOpenAPIRenderer
from rest_framework.schemas import get_schema_view

from minigames.views import api_root, health

urlpatterns = [
    path("", api_root, name="api-root"),
    path("health/", health, name="health"),

    # App APIs
    path("api/", include("minigames.urls")),

    # OpenAPI Documentation
    path(
        "api/schema/",
        get_schema_view(
            title="Word Search API",
            description="Word search puzzle generation",
            version="1.0.0",
            renderer_classes=[JSONOpenAPIRenderer],
        ),
        name="openapi-schema",
    ),
]
