"""Spis Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - voice/: Transcript parsing (numbers, tokenizer, normalizer, commands,
    code mode, router, config)

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/voice/
"""
