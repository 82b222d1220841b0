from django.urls import path
from .views import GenerateWordSearch, RandomWordSearch, CheckWordSelection


urlpatterns = [
    # ──────────────── WordSearch ────────────────
    path("wordsearch/generate/", GenerateWordSearch.as_view(), name="generate-wordsearch"),
    path("wordsearch/random/", RandomWordSearch.as_view(), name="random-wordsearch"),
    path("wordsearch/check/", CheckWordSelection.as_view(), name="check-wordsearch-selection"),
]
