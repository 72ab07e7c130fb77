from rest_framework import serializers

from .utils import split_csv


class StringListField(serializers.ListField):
    """
    List of strings that also accepts a comma separated string, which is how
    the registration and requirement forms post multi-value fields.
    """
    child = serializers.CharField(allow_blank=False)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = split_csv(data)
        return super().to_internal_value(data)


class ClassFieldMixin:
    """
    Exposes the `studentClass` field under the JSON key `class`, which is a
    reserved word and cannot be declared as a serializer attribute.
    """

    def get_fields(self):
        fields = super().get_fields()
        if 'studentClass' in fields:
            fields['class'] = fields.pop('studentClass')
        return fields
