"""
Calendar event model.

Assignees are stored as the display names picked in the event form.
An empty list means the event concerns the whole family.
"""

from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError


class CalendarEvent(models.Model):
    """
    A dated entry on the family calendar.
    """

    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='events',
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    start_time = models.DateTimeField(db_index=True)
    end_time = models.DateTimeField()
    assignees = models.JSONField(
        default=list,
        blank=True,
        help_text='Display names of the members this event is for'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_events',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'calendar event'
        verbose_name_plural = 'calendar events'
        ordering = ['start_time']
        indexes = [
            models.Index(fields=['family', 'start_time'], name='event_family_start_idx'),
        ]

    def __str__(self):
        return f"{self.title} @ {self.start_time:%Y-%m-%d %H:%M}"

    def clean(self):
        if self.start_time and self.end_time and self.end_time < self.start_time:
            raise ValidationError({'end_time': 'End time cannot be before start time.'})

    @property
    def is_family_wide(self):
        """True when no assignee was picked."""
        return not self.assignees
