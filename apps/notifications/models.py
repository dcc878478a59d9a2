"""
Notification models.

Models:
- NotificationPreference: per (user, family) reminder switches and lead time
- Notification: append-only ledger of everything the dispatcher has emitted
"""

from django.db import models
from django.db.models import Q
from django.conf import settings
from django.utils import timezone


class NotificationPreference(models.Model):
    """
    Reminder settings for one user inside one family.

    Created lazily with defaults the first time the settings panel
    (or any other reader) asks for it. The dispatcher only reads it.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notification_preferences',
    )
    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='notification_preferences',
    )

    task_assignments = models.BooleanField(default=True)
    task_due_reminders = models.BooleanField(default=True)
    event_reminders = models.BooleanField(default=True)
    daily_summary = models.BooleanField(default=False)
    email_notifications = models.BooleanField(default=False)
    browser_notifications = models.BooleanField(default=False)

    reminder_advance_minutes = models.PositiveIntegerField(
        null=True,
        blank=True,
        default=15,
        help_text='Minutes before an event starts. Blank uses the site default.'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'notification preference'
        verbose_name_plural = 'notification preferences'
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'family'],
                name='unique_preference_per_family',
            ),
        ]
        indexes = [
            models.Index(fields=['event_reminders', 'reminder_advance_minutes'], name='pref_event_advance_idx'),
        ]

    def __str__(self):
        return f"Preferences of {self.user} in {self.family.name}"

    @classmethod
    def default_for(cls, field_name):
        """Default value of a preference switch, used when no row exists."""
        return cls._meta.get_field(field_name).default


class Notification(models.Model):
    """
    A notification owed to a user.

    Rows are only ever appended by the dispatcher. `correlation_id` copies
    the entity id carried in `data` (eventId or taskId) so dedup lookups
    hit an index instead of the JSON payload.
    """

    class Type(models.TextChoices):
        TASK_ASSIGNED = 'task_assigned', 'Task Assigned'
        EVENT_REMINDER = 'event_reminder', 'Event Reminder'
        TASK_DUE_SOON = 'task_due_soon', 'Task Due Soon'
        TASK_OVERDUE = 'task_overdue', 'Task Overdue'

    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='notifications',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='notifications',
        help_text='User who receives this notification'
    )
    type = models.CharField(
        max_length=20,
        choices=Type.choices,
        db_index=True,
    )
    title = models.CharField(max_length=200)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)
    correlation_id = models.CharField(
        max_length=64,
        help_text='Id of the event or task this notification is about'
    )

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = 'notification'
        verbose_name_plural = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user', 'type', 'correlation_id'], name='notif_user_type_corr_idx'),
            models.Index(fields=['user', 'is_read'], name='notif_user_is_read_idx'),
        ]
        constraints = [
            # An event reminder is owed at most once per user
            models.UniqueConstraint(
                fields=['user', 'type', 'correlation_id'],
                condition=Q(type='event_reminder'),
                name='unique_event_reminder_per_user',
            ),
        ]

    def __str__(self):
        return f"{self.user} | {self.type} | {self.title}"
