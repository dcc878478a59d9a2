"""
Real-time task assignment notifications.

pre_save records whether the assignee changed; post_save notifies the
new assignee.
"""

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone

from apps.tasks.models import Task
from .services import notify_task_assigned


@receiver(pre_save, sender=Task)
def track_assignee_change(sender, instance, **kwargs):
    if not instance.pk:
        instance._assignee_changed = True
        return

    previous = (
        Task.objects
        .filter(pk=instance.pk)
        .values_list('assignee_id', flat=True)
        .first()
    )
    instance._assignee_changed = previous != instance.assignee_id


@receiver(post_save, sender=Task)
def handle_task_assignment(sender, instance, created, **kwargs):
    if not instance.assignee_id:
        return
    if not created and not getattr(instance, '_assignee_changed', False):
        return

    notify_task_assigned(instance, timezone.now())
