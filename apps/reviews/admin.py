from django.contrib import admin

from .models import Review


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('from_user', 'to_user', 'rating', 'created_at')
    list_filter = ('rating', 'created_at')
    search_fields = ('from_user__email', 'to_user__email', 'comment')
    ordering = ('-created_at',)
    readonly_fields = ('created_at',)
    autocomplete_fields = ('from_user', 'to_user')
