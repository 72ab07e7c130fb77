from django.contrib import admin

from .models import Message, SupportMessage


# ---------------- Message Admin ----------------
@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ['from_user', 'to_user', 'content_preview', 'attachment_type', 'is_read', 'is_liked', 'created_at', 'expires_at']
    list_filter = ['is_read', 'is_liked', 'attachment_type', 'created_at']
    search_fields = ['content', 'from_user__email', 'to_user__email']
    readonly_fields = ['created_at']
    date_hierarchy = 'created_at'
    autocomplete_fields = ['from_user', 'to_user']

    def content_preview(self, obj):
        return obj.content[:60]
    content_preview.short_description = 'Content'


# ---------------- SupportMessage Admin ----------------
@admin.register(SupportMessage)
class SupportMessageAdmin(admin.ModelAdmin):
    list_display = ['subject', 'user_name', 'user_email', 'status', 'created_at', 'replied_at']
    list_filter = ['status', 'created_at']
    search_fields = ['subject', 'message', 'user_name', 'user_email']
    readonly_fields = ['created_at', 'replied_at']
    date_hierarchy = 'created_at'
