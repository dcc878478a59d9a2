"""
Task model for the family board.

Status workflow: todo → progress → done
Only tasks in todo with an assignee and a due date take part in
due/overdue reminders.
"""

from django.db import models
from django.conf import settings


class Task(models.Model):
    """
    A chore or to-do shared inside one family.
    """

    class Status(models.TextChoices):
        TODO = 'todo', 'To Do'
        PROGRESS = 'progress', 'In Progress'
        DONE = 'done', 'Done'

    class Priority(models.TextChoices):
        LOW = 'low', 'Low'
        MEDIUM = 'medium', 'Medium'
        HIGH = 'high', 'High'

    family = models.ForeignKey(
        'families.Family',
        on_delete=models.CASCADE,
        related_name='tasks',
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    # Relationships
    assignee = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='assigned_tasks',
        help_text='Family member responsible for this task'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_tasks',
    )

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.TODO,
        db_index=True,
    )
    priority = models.CharField(
        max_length=10,
        choices=Priority.choices,
        default=Priority.MEDIUM,
    )
    due_date = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', 'assignee'], name='task_status_assignee_idx'),
            models.Index(fields=['due_date', 'status'], name='task_due_date_status_idx'),
            models.Index(fields=['family', 'status'], name='task_family_status_idx'),
        ]

    def __str__(self):
        return self.title
