"""Pipeline module for orchestrating the full extraction flow."""

from .extraction_pipeline import HematologyPipeline, ExtractionResult

__all__ = ['HematologyPipeline', 'ExtractionResult']
