"""
Family and membership models.

A family is the sharing scope for tasks and calendar events.
Members are resolved by display name when an event lists its assignees.
"""

import secrets

from django.db import models
from django.conf import settings


def generate_invite_code():
    """Short uppercase code that other members use to join."""
    return secrets.token_hex(4).upper()


class Family(models.Model):
    """
    Represents a household sharing one board and one calendar.
    """

    name = models.CharField(max_length=100)
    invite_code = models.CharField(
        max_length=16,
        unique=True,
        default=generate_invite_code,
        help_text='Code shared with relatives to join this family'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_families',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'family'
        verbose_name_plural = 'families'
        ordering = ['name']

    def __str__(self):
        return f"{self.name} ({self.invite_code})"

    def save(self, *args, **kwargs):
        # Ensure code is uppercase
        if self.invite_code:
            self.invite_code = self.invite_code.upper()
        super().save(*args, **kwargs)

    @property
    def member_count(self):
        """Return the number of members in this family."""
        return self.members.count()


class FamilyMember(models.Model):
    """
    Membership of a user in a family.
    """

    class Role(models.TextChoices):
        PARENT = 'parent', 'Parent'
        CHILD = 'child', 'Child'
        MEMBER = 'member', 'Member'

    family = models.ForeignKey(
        Family,
        on_delete=models.CASCADE,
        related_name='members',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='family_memberships',
    )
    role = models.CharField(
        max_length=10,
        choices=Role.choices,
        default=Role.MEMBER,
    )
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'family member'
        verbose_name_plural = 'family members'
        ordering = ['joined_at']
        constraints = [
            models.UniqueConstraint(
                fields=['family', 'user'],
                name='unique_family_membership',
            ),
        ]

    def __str__(self):
        return f"{self.display_name or self.user.email} in {self.family.name}"

    @property
    def display_name(self):
        """Name shown in assignee pickers: "first last" trimmed."""
        return self.user.display_name
