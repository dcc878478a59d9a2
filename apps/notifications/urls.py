"""
URL configuration for notifications app.
"""

from django.urls import path
from . import views

app_name = 'notifications'

urlpatterns = [
    path('trigger/', views.trigger_notifications, name='trigger'),
]
