"""
Integration tests for the Association Validator.

Test components together:
- Full pipeline on fixtures and generated datasets
- Client + pipeline + CLI against an in-memory fake API
"""
