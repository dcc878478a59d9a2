"""
Admin configuration for events app.
"""

from django.contrib import admin
from .models import CalendarEvent


@admin.register(CalendarEvent)
class CalendarEventAdmin(admin.ModelAdmin):
    """Admin for CalendarEvent model."""

    list_display = ('title', 'family', 'start_time', 'end_time', 'assignee_list')
    list_filter = ('family', 'start_time')
    search_fields = ('title', 'description')
    ordering = ('-start_time',)
    date_hierarchy = 'start_time'

    readonly_fields = ('created_at', 'updated_at')

    def assignee_list(self, obj):
        """Comma separated assignees, or the family-wide marker."""
        return ', '.join(obj.assignees) if obj.assignees else 'Everyone'
    assignee_list.short_description = 'Assignees'

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('family')
