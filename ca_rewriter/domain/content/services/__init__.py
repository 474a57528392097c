"""Content generation domain services."""

from ca_rewriter.domain.content.services.analyze_content import AnalyzeContent
from ca_rewriter.domain.content.services.generate_mcq_batch import GenerateMCQBatch
from ca_rewriter.domain.content.services.regenerate_mcq import RegenerateMCQ

__all__ = ["AnalyzeContent", "GenerateMCQBatch", "RegenerateMCQ"]
