"""
URL configuration for the public verification endpoint.
"""

from django.urls import path

from api.v1.verification import views

app_name = "verification"

urlpatterns = [
    path("verify-license", views.VerifyLicenseView.as_view(), name="verify-license"),
]
