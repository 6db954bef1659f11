"""Derived security lookups and attack path extraction."""

from .attack_path import AttackPath, find_attack_path, should_trace
from .findings import FindingIndex

__all__ = ["AttackPath", "FindingIndex", "find_attack_path", "should_trace"]
