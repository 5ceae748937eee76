"""
System settings URLs.
"""
from django.urls import path
from core.views import setting_update, settings_list

urlpatterns = [
    path('', settings_list, name='settings-list'),
    path('<str:key>/', setting_update, name='setting-update'),
]
