from django.core.validators import RegexValidator
from rest_framework import serializers

from .config import MAX_GRID_SIZE

letters_only = RegexValidator(r'^[A-Za-z]+$', "Words may only contain the letters A-Z.")


class GridOptionsSerializer(serializers.Serializer):
    grid_size = serializers.IntegerField(min_value=1, max_value=MAX_GRID_SIZE, required=False)
    seed = serializers.IntegerField(required=False)


class GenerateWordSearchSerializer(GridOptionsSerializer):
    topic = serializers.CharField(required=False, allow_blank=True, trim_whitespace=False)
    words = serializers.ListField(child=serializers.CharField(validators=[letters_only]), required=False)

    def validate(self, attrs):
        if "words" not in attrs and "topic" not in attrs:
            raise serializers.ValidationError("Provide either 'topic' or 'words'.")
        return attrs


class RandomWordSearchSerializer(GridOptionsSerializer):
    recent_topics = serializers.ListField(child=serializers.CharField(), required=False, default=list)


class CellSerializer(serializers.Serializer):
    row = serializers.IntegerField()
    col = serializers.IntegerField()


class PlacementSerializer(serializers.Serializer):
    word = serializers.CharField()
    row = serializers.IntegerField()
    col = serializers.IntegerField()
    dr = serializers.IntegerField(min_value=-1, max_value=1)
    dc = serializers.IntegerField(min_value=-1, max_value=1)

    def validate(self, attrs):
        if attrs["dr"] == 0 and attrs["dc"] == 0:
            raise serializers.ValidationError("Direction cannot be (0, 0).")
        return attrs


class CheckSelectionSerializer(serializers.Serializer):
    placements = PlacementSerializer(many=True)
    start = CellSerializer()
    end = CellSerializer()
    found_words = serializers.ListField(child=serializers.CharField(), required=False, default=list)
