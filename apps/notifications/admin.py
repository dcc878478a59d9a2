"""
Admin configuration for notifications app.
"""

from django.contrib import admin
from .models import Notification, NotificationPreference


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    """Read-only view of the notification ledger."""

    list_display = (
        'user', 'type', 'title', 'message_preview',
        'correlation_id', 'is_read', 'created_at'
    )
    list_filter = ('type', 'is_read', 'created_at')
    search_fields = (
        'title', 'message', 'correlation_id',
        'user__email', 'user__first_name', 'user__last_name'
    )
    ordering = ('-created_at',)
    date_hierarchy = 'created_at'

    readonly_fields = (
        'family', 'user', 'type', 'title', 'message', 'data',
        'correlation_id', 'is_read', 'read_at', 'created_at'
    )

    def message_preview(self, obj):
        """Show truncated message."""
        return obj.message[:80] + '...' if len(obj.message) > 80 else obj.message
    message_preview.short_description = 'Message'

    def has_add_permission(self, request):
        """The dispatcher is the only writer."""
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user', 'family')


@admin.register(NotificationPreference)
class NotificationPreferenceAdmin(admin.ModelAdmin):
    """Admin for NotificationPreference model."""

    list_display = (
        'user', 'family', 'event_reminders', 'reminder_advance_minutes',
        'task_due_reminders', 'task_assignments', 'daily_summary'
    )
    list_filter = ('event_reminders', 'task_due_reminders', 'task_assignments', 'family')
    search_fields = ('user__email', 'user__first_name', 'user__last_name')

    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('user', 'family')
        }),
        ('Reminders', {
            'fields': (
                'event_reminders', 'reminder_advance_minutes',
                'task_due_reminders', 'task_assignments', 'daily_summary'
            )
        }),
        ('Delivery', {
            'fields': ('email_notifications', 'browser_notifications'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('user', 'family')
