"""
Test suite for ADO Import Mapper.

Run all tests: pytest
Run unit tests only: pytest tests/unit/
Run specific file: pytest tests/unit/test_csv_generator.py -v
"""
