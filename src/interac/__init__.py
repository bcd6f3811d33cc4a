"""
Domain layer for INTERAC e-Transfer notification parsing.

This layer contains:
- Token dictionary (per-language marker phrases)
- Subject and body analyzers (pure functions)
- Cross-validation and record assembly
- The S3/SES processing pipeline built on top of them
"""
