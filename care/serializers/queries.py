from rest_framework import serializers

from care import constants as c

MAX_RANGE_DAYS = 62


class CommaListField(serializers.Field):
    """``a,b,c`` (or a repeated query parameter) as a list of strings."""

    def get_value(self, dictionary):
        # QueryDict.get only returns the last of repeated parameters
        if hasattr(dictionary, 'getlist') and self.field_name in dictionary:
            return dictionary.getlist(self.field_name)
        return super().get_value(dictionary)

    def to_internal_value(self, data):
        if isinstance(data, (list, tuple)):
            raw = ','.join(str(v) for v in data)
        else:
            raw = str(data or '')
        return [v.strip() for v in raw.split(',') if v.strip()]

    def to_representation(self, value):
        return ','.join(value)


class DailyRecordsQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    recordTypes = CommaListField(required=False)
    includeNextMorning = serializers.BooleanField(required=False, default=False)


class MedicationQuerySerializer(serializers.Serializer):
    recordDate = serializers.DateField(required=False)
    timing = serializers.ChoiceField(choices=list(c.TIMING_SLOTS) + [c.TIMING_ALL], required=False, default=c.TIMING_ALL)
    floor = serializers.CharField(max_length=20, required=False, default='all')
    type = serializers.ChoiceField(choices=list(c.MEDICATION_TYPES), required=False, default=c.MEDICATION_TYPE_ORAL)


class MedicationRangeQuerySerializer(MedicationQuerySerializer):
    dateFrom = serializers.DateField()
    dateTo = serializers.DateField()

    def validate(self, attrs):
        if attrs['dateTo'] < attrs['dateFrom']:
            raise serializers.ValidationError('dateTo must not be before dateFrom')
        if (attrs['dateTo'] - attrs['dateFrom']).days >= MAX_RANGE_DAYS:
            raise serializers.ValidationError(f'range must be shorter than {MAX_RANGE_DAYS} days')
        return attrs


class RecordListQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    residentId = serializers.UUIDField(required=False)


class ResidentListQuerySerializer(serializers.Serializer):
    floor = serializers.CharField(max_length=20, required=False)
    includeInactive = serializers.BooleanField(required=False, default=False)


class CommunicationQuerySerializer(serializers.Serializer):
    residentId = serializers.UUIDField(required=False)
    startDate = serializers.DateField(required=False)
    endDate = serializers.DateField(required=False)


class RoundRecordQuerySerializer(serializers.Serializer):
    recordDate = serializers.DateField(required=False)


class JournalEntryQuerySerializer(serializers.Serializer):
    dateFrom = serializers.DateField(required=False)
    dateTo = serializers.DateField(required=False)
    recordType = serializers.ChoiceField(choices=list(c.JOURNAL_TYPES), required=False)
    floor = serializers.CharField(max_length=20, required=False)
