"""
Utility functions
"""
from .id_generator import generate_id, validate_id, generate_api_key

__all__ = ['generate_id', 'validate_id', 'generate_api_key']
