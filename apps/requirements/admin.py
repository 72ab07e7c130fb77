from django.contrib import admin

from .models import Requirement


@admin.register(Requirement)
class RequirementAdmin(admin.ModelAdmin):
    list_display = ('user', 'user_type', 'location', 'type', 'fee', 'fee_type', 'is_active', 'created_at')
    list_filter = ('user_type', 'type', 'fee_type', 'is_active', 'created_at')
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'location', 'city', 'description')
    ordering = ('-created_at',)
    readonly_fields = ('created_at',)
    autocomplete_fields = ('user',)
