"""
Test fixtures for the Association Validator.

Contains sample data for testing:
- sample_dataset.json: Dataset exercising every rule (wire format, camelCase)
- sample_expected_result.json: ValidationResult expected for sample_dataset.json
"""
