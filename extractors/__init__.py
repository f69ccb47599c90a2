from .base_extractor import BaseDataExtractor, parse_path, to_text
from .extraction_config import ExtractionConfig, ExtractionRule
from .extractor_grade import Grade, GradeExtractor
from .record_normalizer import RecordNormalizer

__all__ = [
    "BaseDataExtractor",
    "parse_path",
    "to_text",
    "ExtractionConfig",
    "ExtractionRule",
    "Grade",
    "GradeExtractor",
    "RecordNormalizer",
]
