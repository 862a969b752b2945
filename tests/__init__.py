"""sheetcal Test Suite

Test organization:
- unit/: Unit tests for individual modules
  - sheets/: mapper, A1 helpers, in-memory and Google backends
  - test_config.py: YAML/environment configuration and backend selection
- integration/: /api/event and /api/health through the FastAPI app

Running tests:
    # All tests
    pytest

    # Specific module
    pytest tests/unit/sheets/
"""
