"""
Models package

- models.domain: storage-agnostic dataclasses (Website, Element, Variant, Condition)
- models.api: pydantic request/response models for the HTTP layer
"""
