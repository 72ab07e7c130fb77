# users/admin.py
from django.contrib import admin, messages
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from apps.students.models import StudentProfile
from apps.teachers.models import TeacherProfile

from .models import User


class StudentProfileInline(admin.StackedInline):
    """Inline StudentProfile in User admin"""
    model = StudentProfile
    can_delete = False
    verbose_name_plural = "Student profile"
    fk_name = "user"


class TeacherProfileInline(admin.StackedInline):
    """Inline TeacherProfile in User admin"""
    model = TeacherProfile
    can_delete = False
    verbose_name_plural = "Teacher profile"
    fk_name = "user"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Custom User admin"""
    model = User
    list_display = (
        "email",
        "get_full_name",
        "role",
        "city",
        "is_location_verified",
        "is_online",
        "is_banned",
        "last_seen",
        "created_at",
    )
    list_filter = (
        "role",
        "is_location_verified",
        "is_live_sharing",
        "is_online",
        "is_banned",
        "is_staff",
        "created_at",
    )
    search_fields = ("email", "first_name", "last_name", "mobile", "city", "pin_code")
    ordering = ("-created_at",)
    readonly_fields = ("last_login", "last_seen", "live_location_updated_at", "created_at", "updated_at")
    actions = ["unban_users"]

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (_("Personal info"), {"fields": ("first_name", "last_name", "mobile", "profile_image")}),
        (_("Location"), {"fields": (
            "is_location_verified", "latitude", "longitude", "full_address",
            "street", "city", "state", "pin_code",
            "is_live_sharing", "live_location_updated_at",
        )}),
        (_("Presence"), {"fields": ("is_online", "last_seen")}),
        (_("Moderation"), {"fields": ("is_banned", "ban_reason")}),
        (_("Roles & Permissions"), {"fields": ("role", "is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        (_("Important dates"), {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("email", "first_name", "last_name", "role", "password1", "password2"),
        }),
    )

    def get_inlines(self, request, obj):
        if obj is None:
            return []
        if obj.is_student:
            return [StudentProfileInline]
        if obj.is_teacher:
            return [TeacherProfileInline]
        return []

    @admin.action(description="Lift ban on selected users")
    def unban_users(self, request, queryset):
        count = 0
        for user in queryset.filter(is_banned=True):
            user.unban()
            count += 1
        self.message_user(request, f"{count} user(s) unbanned.", messages.SUCCESS)
