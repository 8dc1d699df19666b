"""
edge_ngram_filter package exports convenience helpers for library consumers.
"""

from __future__ import annotations

from .analyzer import Analyzer, build_analyzer_from_config, token_positions
from .config import AnalyzerConfig, config_from_dict, config_from_yaml, load_config
from .edge_ngram import ConfigurationError, EdgeNGramTokenFilter, Side
from .models import Token
from .tokenization import KeywordTokenizer, ListTokenSource, TokenStream, WhitespaceTokenizer

__all__ = [
    "Analyzer",
    "AnalyzerConfig",
    "ConfigurationError",
    "EdgeNGramTokenFilter",
    "KeywordTokenizer",
    "ListTokenSource",
    "Side",
    "Token",
    "TokenStream",
    "WhitespaceTokenizer",
    "build_analyzer_from_config",
    "config_from_dict",
    "config_from_yaml",
    "load_config",
    "token_positions",
]

__version__ = "0.1.0"
