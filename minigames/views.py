import logging
import random
import re

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .config import DEFAULT_GRID_SIZE, MAX_PLACEMENT_ATTEMPTS
from .game_logic.selection import build_path, match_path
from .game_logic.wordsearch import InvalidGridSize, generate_word_search
from .helpers.llm_utils import LLMServiceError
from .helpers.word_source import InvalidTopic, WordSourceError, build_puzzle, select_topic
from .serializers import (
    CheckSelectionSerializer,
    GenerateWordSearchSerializer,
    RandomWordSearchSerializer,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
HTML_TAG_PATTERN = re.compile(r'<[^>]*>')


def clean_error_message(error, default="Failed to generate word search"):
    # Upstream errors can carry HTML pages; keep the JSON body plain text
    return HTML_TAG_PATTERN.sub('', str(error) or '').strip() or default


def _grid_options(data):
    grid_size = data.get("grid_size") or getattr(settings, "WORDSEARCH_GRID_SIZE", DEFAULT_GRID_SIZE)
    max_attempts = getattr(settings, "WORDSEARCH_MAX_ATTEMPTS", MAX_PLACEMENT_ATTEMPTS)
    seed = data.get("seed")
    rng = random.Random(seed) if seed is not None else random.Random()
    return grid_size, max_attempts, rng


@api_view(["GET"])
@permission_classes([AllowAny])
def api_root(request):
    return Response({
        "message": "Word Search Generator API",
        "version": API_VERSION,
        "status": "ok",
        "endpoint": "POST /api/wordsearch/generate/",
    })


@api_view(["GET"])
@permission_classes([AllowAny])
def health(request):
    return Response({"status": "ok", "timestamp": timezone.now().isoformat()})


class GenerateWordSearch(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = GenerateWordSearchSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        grid_size, max_attempts, rng = _grid_options(data)

        try:
            if "words" in data:
                result = generate_word_search(data["words"], grid_size=grid_size, rng=rng, max_attempts=max_attempts)
                puzzle = result.to_dict()
                missing = result.missing_words(data["words"])
                logger.info(f"Placed {len(result.words)} words, {len(missing)} did not fit")
            else:
                puzzle = build_puzzle(data["topic"], grid_size=grid_size, rng=rng, max_attempts=max_attempts)
        except (InvalidTopic, InvalidGridSize) as e:
            return Response({"error": str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except (LLMServiceError, WordSourceError) as e:
            logger.error(f"Error generating word search: {e}")
            return Response({"error": clean_error_message(e)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(puzzle)


class RandomWordSearch(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = RandomWordSearchSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        grid_size, max_attempts, rng = _grid_options(data)
        topic = select_topic(data["recent_topics"], rng=rng)

        try:
            puzzle = build_puzzle(topic, grid_size=grid_size, rng=rng, max_attempts=max_attempts)
        except (LLMServiceError, WordSourceError) as e:
            logger.error(f"Error generating word search for topic {topic}: {e}")
            return Response({"error": clean_error_message(e)}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(puzzle)


class CheckWordSelection(APIView):
    permission_classes = [AllowAny]

    def post(self, request):
        serializer = CheckSelectionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response({"error": serializer.errors}, status=status.HTTP_400_BAD_REQUEST)

        data = serializer.validated_data
        path = build_path(
            (data["start"]["row"], data["start"]["col"]),
            (data["end"]["row"], data["end"]["col"]),
        )
        placement = match_path(data["placements"], path, data["found_words"])
        if placement is None:
            return Response({"word": None, "cells": []})

        return Response({
            "word": placement.word,
            "cells": [{"row": r, "col": c} for r, c in placement.cells()],
        })
