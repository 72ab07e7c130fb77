# students/admin.py
from django.contrib import admin

from .models import StudentProfile


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "student_class", "school_name", "city", "state", "budget_min", "budget_max", "created_at")
    list_filter = ("student_class", "state", "created_at")
    search_fields = ("user__email", "user__first_name", "user__last_name", "school_name", "city", "pin_code")
    readonly_fields = ("created_at", "updated_at")
    autocomplete_fields = ("user",)
