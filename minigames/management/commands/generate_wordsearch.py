from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
import json
import random
import re

from minigames.config import DEFAULT_GRID_SIZE, MAX_PLACEMENT_ATTEMPTS
from minigames.game_logic.wordsearch import DIRECTIONS, InvalidGridSize, generate_word_search
from minigames.helpers.llm_utils import LLMServiceError
from minigames.helpers.word_source import WordSourceError, build_puzzle

LETTERS_ONLY = re.compile(r'^[A-Za-z]+$')
DIRECTION_NAMES = {(dr, dc): name for name, dr, dc in DIRECTIONS}


class Command(BaseCommand):
    help = 'Generate a word search puzzle from a word list (or a topic) and print it.'

    def add_arguments(self, parser):
        parser.add_argument('words', nargs='*', help='Words to hide in the grid')
        parser.add_argument('--topic', type=str, default=None, help='Ask the LLM for words about this topic instead')
        parser.add_argument('--size', type=int, default=None, help='Grid size (default from settings)')
        parser.add_argument('--seed', type=int, default=None, help='Seed for reproducible grids')
        parser.add_argument('--json', action='store_true', help='Print the puzzle as JSON')

    def handle(self, *args, **options):
        words = options['words']
        topic = options['topic']
        if not words and not topic:
            raise CommandError('Give at least one word or --topic')
        if words and topic:
            raise CommandError('Give either words or --topic, not both')
        bad = [w for w in words if not LETTERS_ONLY.match(w)]
        if bad:
            raise CommandError(f"Words may only contain the letters A-Z: {', '.join(bad)}")

        size = options['size']
        if size is None:
            size = getattr(settings, 'WORDSEARCH_GRID_SIZE', DEFAULT_GRID_SIZE)
        max_attempts = getattr(settings, 'WORDSEARCH_MAX_ATTEMPTS', MAX_PLACEMENT_ATTEMPTS)
        rng = random.Random(options['seed'])

        try:
            if topic:
                puzzle = build_puzzle(topic, grid_size=size, rng=rng, max_attempts=max_attempts)
            else:
                puzzle = generate_word_search(words, grid_size=size, rng=rng, max_attempts=max_attempts).to_dict()
        except (InvalidGridSize, LLMServiceError, WordSourceError) as e:
            raise CommandError(str(e))

        if options['json']:
            self.stdout.write(json.dumps(puzzle, indent=2))
            return

        for row in puzzle['grid']:
            self.stdout.write(' '.join(row))
        self.stdout.write('')
        for p in puzzle['placements']:
            name = DIRECTION_NAMES[(p['dr'], p['dc'])]
            self.stdout.write(f"{p['word']:<10} row={p['row']:<3} col={p['col']:<3} {name}")

        missing = sorted({w.upper() for w in words} - set(puzzle['words']))
        if missing:
            self.stdout.write(self.style.WARNING(f"Not placed: {', '.join(missing)}"))
