"""
Backup and data administration URLs.
"""
from django.urls import path

from . import views

app_name = 'datastore'

urlpatterns = [
    path('admin/clean-demo-data/', views.clean_demo_data, name='clean-demo-data'),
    path('admin/export-data/', views.export_data, name='export-data'),
    path('backup/files/', views.backup_files, name='backup-files'),
    path('backup/create/', views.create_backup, name='backup-create'),
    path('backup/restore/', views.restore_backup, name='backup-restore'),
    path('backup/download/<str:name>/', views.download_backup, name='backup-download'),
    path('backup/delete/<str:name>/', views.delete_backup, name='backup-delete'),
]
