"""URL configuration for the hotel bookings project.

The `urlpatterns` list routes URLs to views. It includes the Django admin,
the visitor booking flow, the staff back office and the API schema.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('user/', include('apps.users.urls')),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('', include('apps.reservations.urls')),
]
