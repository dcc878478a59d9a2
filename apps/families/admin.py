"""
Admin configuration for families app.
"""

from django.contrib import admin
from .models import Family, FamilyMember


class FamilyMemberInline(admin.TabularInline):
    """Inline admin for members on family detail."""
    model = FamilyMember
    extra = 0
    autocomplete_fields = ('user',)
    readonly_fields = ('joined_at',)


@admin.register(Family)
class FamilyAdmin(admin.ModelAdmin):
    """Admin for Family model."""

    list_display = ('name', 'invite_code', 'created_by', 'member_count', 'created_at')
    list_filter = ('created_at',)
    search_fields = ('name', 'invite_code')
    ordering = ('name',)

    readonly_fields = ('created_at', 'updated_at')

    fieldsets = (
        (None, {
            'fields': ('name', 'invite_code', 'created_by')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [FamilyMemberInline]

    def get_queryset(self, request):
        """Optimize with select_related."""
        return super().get_queryset(request).select_related('created_by')
