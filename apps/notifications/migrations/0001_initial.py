from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('families', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='NotificationPreference',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('task_assignments', models.BooleanField(default=True)),
                ('task_due_reminders', models.BooleanField(default=True)),
                ('event_reminders', models.BooleanField(default=True)),
                ('daily_summary', models.BooleanField(default=False)),
                ('email_notifications', models.BooleanField(default=False)),
                ('browser_notifications', models.BooleanField(default=False)),
                ('reminder_advance_minutes', models.PositiveIntegerField(blank=True, default=15, help_text='Minutes before an event starts. Blank uses the site default.', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('family', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notification_preferences', to='families.family')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notification_preferences', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'notification preference',
                'verbose_name_plural': 'notification preferences',
                'indexes': [models.Index(fields=['event_reminders', 'reminder_advance_minutes'], name='pref_event_advance_idx')],
                'constraints': [models.UniqueConstraint(fields=('user', 'family'), name='unique_preference_per_family')],
            },
        ),
        migrations.CreateModel(
            name='Notification',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('type', models.CharField(choices=[('task_assigned', 'Task Assigned'), ('event_reminder', 'Event Reminder'), ('task_due_soon', 'Task Due Soon'), ('task_overdue', 'Task Overdue')], db_index=True, max_length=20)),
                ('title', models.CharField(max_length=200)),
                ('message', models.TextField()),
                ('data', models.JSONField(blank=True, default=dict)),
                ('correlation_id', models.CharField(help_text='Id of the event or task this notification is about', max_length=64)),
                ('is_read', models.BooleanField(db_index=True, default=False)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('family', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to='families.family')),
                ('user', models.ForeignKey(help_text='User who receives this notification', on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'notification',
                'verbose_name_plural': 'notifications',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'type', 'correlation_id'], name='notif_user_type_corr_idx'),
                    models.Index(fields=['user', 'is_read'], name='notif_user_is_read_idx'),
                ],
                'constraints': [models.UniqueConstraint(condition=models.Q(('type', 'event_reminder')), fields=('user', 'type', 'correlation_id'), name='unique_event_reminder_per_user')],
            },
        ),
    ]
