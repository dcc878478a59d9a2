"""
URL configuration for family_planner project.
"""

from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),

    # App URLs
    path('notifications/', include('apps.notifications.urls', namespace='notifications')),
]

# Admin site customization
admin.site.site_header = 'Family Planner Administration'
admin.site.site_title = 'Family Planner Admin'
admin.site.index_title = 'Welcome to Family Planner Admin'
