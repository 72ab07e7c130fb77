import django_filters

from apps.core.utils import any_overlap_ci, split_csv

from .models import Requirement


class RequirementFilter(django_filters.FilterSet):
    """Filters for the requirement board; subjects match on any overlap."""
    userType = django_filters.ChoiceFilter(field_name='user_type', choices=Requirement.USER_TYPE_CHOICES)
    location = django_filters.CharFilter(field_name='location', lookup_expr='icontains')
    subjects = django_filters.CharFilter(method='filter_subjects')

    class Meta:
        model = Requirement
        fields = ['userType', 'location', 'subjects']

    def filter_subjects(self, queryset, name, value):
        wanted = split_csv(value)
        if not wanted:
            return queryset
        matching = [r.pk for r in queryset if any_overlap_ci(r.subjects, wanted)]
        return queryset.filter(pk__in=matching)
