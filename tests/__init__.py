"""
Automated tests (pytest).

To run all tests:
    pytest tests/ -v
"""
