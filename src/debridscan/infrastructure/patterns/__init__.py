from .cache import HostPatternCache
from .parser import Pattern, parse_pattern, parse_patterns

__all__ = ["HostPatternCache", "Pattern", "parse_pattern", "parse_patterns"]
