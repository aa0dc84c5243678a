from django.urls import path
from . import views

app_name = 'sync'

urlpatterns = [
    path('push/', views.sync_push, name='push'),
    path('pull/', views.sync_pull, name='pull'),
    path('status/', views.sync_status, name='status'),
]
