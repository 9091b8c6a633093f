"""
Serializers for the backend's JSON envelopes.
Responses are validated here before anything reaches the controller.
"""
from rest_framework import serializers


class PaginationSerializer(serializers.Serializer):
    """Pagination block: { total, page, limit, totalPages }"""
    total = serializers.IntegerField(min_value=0, required=False, default=0)
    page = serializers.IntegerField(min_value=1)
    limit = serializers.IntegerField(min_value=0, required=False, default=0)
    totalPages = serializers.IntegerField(min_value=0, required=False)
    hasMore = serializers.BooleanField(required=False)

    def validate(self, attrs):
        # Some endpoints only report hasMore
        if 'totalPages' not in attrs:
            attrs['totalPages'] = attrs['page'] + 1 if attrs.get('hasMore') else attrs['page']
        return attrs


class ListEnvelopeSerializer(serializers.Serializer):
    """List response: { success, data: [...], pagination }"""
    success = serializers.BooleanField(required=False, default=True)
    data = serializers.ListField(child=serializers.DictField(), allow_empty=True)
    pagination = PaginationSerializer(required=False, allow_null=True)


class ResourceEnvelopeSerializer(serializers.Serializer):
    """Single resource response: { success, data }"""
    success = serializers.BooleanField(required=False, default=True)
    data = serializers.JSONField(required=False, allow_null=True)
    message = serializers.CharField(required=False, allow_blank=True)


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField(required=False, allow_blank=True)
    details = serializers.JSONField(required=False, allow_null=True)


class ErrorEnvelopeSerializer(serializers.Serializer):
    """Error response: { success: false, statusCode, message, error, timestamp, path }"""
    success = serializers.BooleanField(required=False, default=False)
    statusCode = serializers.IntegerField(required=False)
    message = serializers.JSONField(required=False, allow_null=True)
    error = ErrorDetailSerializer(required=False, allow_null=True)
    timestamp = serializers.CharField(required=False, allow_blank=True)
    path = serializers.CharField(required=False, allow_blank=True)
