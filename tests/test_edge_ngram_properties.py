from __future__ import annotations

import random
import string
from typing import List

import pytest

from edge_ngram_filter.edge_ngram import EdgeNGramTokenFilter, Side
from edge_ngram_filter.models import Token
from edge_ngram_filter.tokenization import ListTokenSource

SEEDS = range(25)


def _random_tokens(rng: random.Random) -> List[Token]:
    tokens: List[Token] = []
    offset = 0
    for _ in range(rng.randint(0, 12)):
        length = rng.randint(0, 8)
        text = "".join(rng.choice(string.ascii_letters) for _ in range(length))
        tokens.append(
            Token(
                text=text,
                start_offset=offset,
                end_offset=offset + length,
                position_increment=rng.randint(0, 4),
            )
        )
        offset += length + rng.randint(1, 3)
    return tokens


def _expected_grams(
    tokens: List[Token], side: Side, min_gram: int, max_gram: int, preserve: bool
) -> List[Token]:
    expected: List[Token] = []
    carried = 0
    for token in tokens:
        sizes = range(min_gram, min(max_gram, len(token.text)) + 1)
        if not sizes:
            if preserve:
                carried += token.position_increment
            continue
        for index, size in enumerate(sizes):
            start = 0 if side is Side.FRONT else len(token.text) - size
            if not preserve:
                increment = 1
            elif index == 0:
                increment = token.position_increment + carried
                carried = 0
            else:
                increment = 0
            expected.append(
                Token(
                    text=token.text[start : start + size],
                    start_offset=token.start_offset + start,
                    end_offset=token.start_offset + start + size,
                    position_increment=increment,
                )
            )
    return expected


def _random_filter_args(rng: random.Random):
    min_gram = rng.randint(1, 4)
    max_gram = min_gram + rng.randint(0, 4)
    side = rng.choice([Side.FRONT, Side.BACK])
    preserve = rng.choice([True, False])
    return side, min_gram, max_gram, preserve


@pytest.mark.parametrize("seed", SEEDS)
def test_output_matches_reference_model(seed: int):
    rng = random.Random(seed)
    tokens = _random_tokens(rng)
    side, min_gram, max_gram, preserve = _random_filter_args(rng)
    ngrams = EdgeNGramTokenFilter(
        ListTokenSource(tokens), side, min_gram, max_gram, preserve
    )
    assert list(ngrams) == _expected_grams(tokens, side, min_gram, max_gram, preserve)


@pytest.mark.parametrize("seed", SEEDS)
def test_gram_lengths_stay_within_range(seed: int):
    rng = random.Random(seed)
    tokens = _random_tokens(rng)
    side, min_gram, max_gram, preserve = _random_filter_args(rng)
    longest = max((len(t.text) for t in tokens), default=0)
    for gram in EdgeNGramTokenFilter(
        ListTokenSource(tokens), side, min_gram, max_gram, preserve
    ):
        assert min_gram <= len(gram.text) <= max_gram
        assert len(gram.text) <= longest
        assert gram.end_offset - gram.start_offset == len(gram.text)


@pytest.mark.parametrize("seed", SEEDS)
def test_preserved_gaps_are_never_lost(seed: int):
    """Emitted increments sum to the source increments up to the last emitting token."""
    rng = random.Random(seed)
    tokens = _random_tokens(rng)
    side, min_gram, max_gram, _ = _random_filter_args(rng)
    grams = list(
        EdgeNGramTokenFilter(ListTokenSource(tokens), side, min_gram, max_gram, True)
    )
    emitting = [i for i, t in enumerate(tokens) if len(t.text) >= min_gram]
    expected_total = (
        sum(t.position_increment for t in tokens[: emitting[-1] + 1]) if emitting else 0
    )
    assert sum(g.position_increment for g in grams) == expected_total


@pytest.mark.parametrize("seed", SEEDS)
def test_unpreserved_positions_are_always_one(seed: int):
    rng = random.Random(seed)
    tokens = _random_tokens(rng)
    side, min_gram, max_gram, _ = _random_filter_args(rng)
    grams = list(
        EdgeNGramTokenFilter(ListTokenSource(tokens), side, min_gram, max_gram, False)
    )
    assert all(g.position_increment == 1 for g in grams)


@pytest.mark.parametrize("seed", SEEDS)
def test_reset_reproduces_output(seed: int):
    rng = random.Random(seed)
    tokens = _random_tokens(rng)
    side, min_gram, max_gram, preserve = _random_filter_args(rng)
    source = ListTokenSource(tokens)
    ngrams = EdgeNGramTokenFilter(source, side, min_gram, max_gram, preserve)
    first = list(ngrams)
    source.reset()
    ngrams.reset()
    assert list(ngrams) == first
