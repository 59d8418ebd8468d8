"""
Unit tests for the Association Validator.

Test individual components in isolation:
- Data models (aliases, strict types, immutability)
- Validation stages (each stage with positive/negative cases)
- Pipeline orchestration and metrics
- API client (fake transport, retries, schema errors)
- CLI argument handling
"""
