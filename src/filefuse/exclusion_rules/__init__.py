"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreChain, GitIgnoreExclusionRules
from .pattern_rules import CustomPatternRules, IgnorePattern, compile_pattern

__all__ = [
    "BaseExclusionRules",
    "CustomPatternRules",
    "GitIgnoreChain",
    "GitIgnoreExclusionRules",
    "IgnorePattern",
    "compile_pattern",
]
