"""
Health check URLs.
"""
from django.urls import path
from core.views import health_check

urlpatterns = [
    path('', health_check, name='health-check'),
]
