"""
Content Factory - multi-stage LLM content production service.
"""

__version__ = "1.0.0"
