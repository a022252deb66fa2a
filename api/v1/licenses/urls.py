"""
URL configuration for license management endpoints.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "licenses"

urlpatterns = [
    path("licenses", views.LicenseListView.as_view(), name="license-list"),
    path("licenses/generate-key", views.GenerateLicenseKeyView.as_view(), name="generate-key"),
    path("licenses/<uuid:license_id>", views.LicenseDetailView.as_view(), name="license-detail"),
    path(
        "licenses/<uuid:license_id>/extend",
        views.ExtendLicenseView.as_view(),
        name="extend-license",
    ),
]
