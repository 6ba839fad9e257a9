"""Static analysis of component bodies.

- script: identifier analysis of embedded JavaScript fragments
- usage: ``$props`` / ``$attrs`` keys a component declares
- scope: declared, referenced and external identifiers
- visitor: shared child-traversal rules
"""

from pugtail.analysis.scope import ScopeAnalyzer, is_allowed_identifier
from pugtail.analysis.script import Destructuring, FragmentAnalysis, analyze_fragment
from pugtail.analysis.usage import detect_usage
from pugtail.analysis.visitor import CHILD_ATTRS, iter_children, walk

__all__ = [
    "CHILD_ATTRS",
    "Destructuring",
    "FragmentAnalysis",
    "ScopeAnalyzer",
    "analyze_fragment",
    "detect_usage",
    "is_allowed_identifier",
    "iter_children",
    "walk",
]
