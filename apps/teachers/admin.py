from django.contrib import admin, messages

from .models import KycDocument, TeacherProfile
from .services import update_kyc_status


# Inline for KycDocument in TeacherProfile Admin
class KycDocumentInline(admin.TabularInline):
    model = KycDocument
    extra = 0
    fields = ('aadhaar_card', 'pan_card', 'selfie', 'status', 'submitted_at', 'reviewed_at')
    readonly_fields = ('submitted_at', 'reviewed_at')
    ordering = ('-submitted_at',)


@admin.register(TeacherProfile)
class TeacherProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'qualification', 'city', 'kyc_status', 'is_verified', 'rating', 'student_count', 'monthly_fee')
    list_filter = ('kyc_status', 'is_verified', 'gender', 'state')
    search_fields = ('user__email', 'user__first_name', 'user__last_name', 'qualification', 'city', 'pin_code')
    ordering = ('-created_at',)
    inlines = [KycDocumentInline]
    readonly_fields = ('rating', 'created_at', 'updated_at')
    autocomplete_fields = ('user',)
    fieldsets = (
        ("Professional Information", {
            'fields': ('user', 'subjects', 'bio', 'qualification', 'experience', 'monthly_fee')
        }),
        ("Personal Information", {
            'fields': ('age', 'gender', 'street', 'village', 'city', 'state', 'pin_code')
        }),
        ("Verification", {
            'fields': ('kyc_status', 'is_verified', 'rating', 'student_count')
        }),
        ("System Info", {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(KycDocument)
class KycDocumentAdmin(admin.ModelAdmin):
    list_display = ('teacher', 'status', 'submitted_at', 'reviewed_at')
    list_filter = ('status', 'submitted_at')
    search_fields = ('teacher__user__email', 'teacher__user__first_name', 'teacher__user__last_name')
    ordering = ('-submitted_at',)
    readonly_fields = ('submitted_at', 'reviewed_at')
    actions = ['approve_kyc', 'reject_kyc']

    def _review(self, request, queryset, status):
        teachers = {doc.teacher for doc in queryset.select_related('teacher')}
        for teacher in teachers:
            update_kyc_status(teacher, status)
        self.message_user(request, f"{len(teachers)} teacher(s) marked {status}.", messages.SUCCESS)

    @admin.action(description="Approve KYC for selected documents")
    def approve_kyc(self, request, queryset):
        self._review(request, queryset, 'approved')

    @admin.action(description="Reject KYC for selected documents")
    def reject_kyc(self, request, queryset):
        self._review(request, queryset, 'rejected')
