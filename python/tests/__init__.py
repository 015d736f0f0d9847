"""
Test suite for the tag search engine.

Test Categories:
- Unit tests: tags, validator, parser, evaluator, highlights, vocabulary,
  suggestions, filters, configuration and logging
- Integration tests: the TagSearchEngine facade end to end, including a
  randomized run over malformed input
"""
