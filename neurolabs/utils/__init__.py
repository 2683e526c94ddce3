"""
Simple utilities shared across the labs.
"""
from .logging import get_level, get_logger, set_level
