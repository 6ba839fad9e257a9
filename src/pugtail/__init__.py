"""pugtail: build-time components and slots for Pug templates.

Authors define reusable components with named content holes and call them
like functions. pugtail inlines every call into plain Pug AST nodes before
Pug's own code generator runs, so nothing component-related survives to
runtime.

Quickstart:
    >>> from pugtail import expand, from_json, to_json
    >>> ast = from_json(pug_parser_output)
    >>> pure = expand(ast, filename="page.pug")
    >>> pug_code_gen_input = to_json(pure)

Template syntax::

    component Card()
      - const { title } = $props
      .card
        h2= title
        slot(body)
          p Nothing here yet

    Card(title="Hello", class="wide")
      slot(body)
        p Custom body

Architecture:
Pug source → pug-lexer/pug-parser/pug-load → AST → pugtail → pug-code-gen

Pipeline stages (each a Traverser pass):
1. **Detect**: register ``component`` definitions, their slots, the
   ``$props``/``$attrs`` keys they declare and their scope analysis
2. **Expand**: replace each call with a clone of the body, with bindings
   injected, attributes forwarded and slots filled, recursively
3. **Remove**: drop the definitions
4. **Flatten**: inline resolved include/extends files

Thread-Safety:
Each expand() call builds its own registry and call stack. Separate
templates can be expanded on separate threads without coordination.
"""

from pugtail._types import NodeLocation
from pugtail.compiler import REMOVE, Transformer, Traverser, VisitorMethods, expand
from pugtail.config import DEFAULT_CONFIG, ExpansionConfig, ScopeIsolation
from pugtail.definitions import (
    ComponentDefinition,
    ComponentUsage,
    ScopeAnalysisResult,
    SlotDefinition,
)
from pugtail.exceptions import (
    ComponentNotFoundError,
    DuplicateComponentError,
    DuplicateSlotDefinitionError,
    DuplicateSlotProvidedError,
    ErrorCode,
    ErrorReporter,
    ExpansionDepthError,
    ExternalVariableReferenceError,
    InvalidComponentDefinitionError,
    PugTailError,
    RecursiveComponentCallError,
    SlotNotDefinedError,
    TraversalError,
    UnexpectedNodeTypeError,
)
from pugtail.nodes import from_dict, from_json, to_dict, to_json
from pugtail.registry import ComponentRegistry
from pugtail.utils.clone import deep_clone

__version__ = "0.3.0"

__all__ = [
    "DEFAULT_CONFIG",
    "REMOVE",
    "ComponentDefinition",
    "ComponentNotFoundError",
    "ComponentRegistry",
    "ComponentUsage",
    "DuplicateComponentError",
    "DuplicateSlotDefinitionError",
    "DuplicateSlotProvidedError",
    "ErrorCode",
    "ErrorReporter",
    "ExpansionConfig",
    "ExpansionDepthError",
    "ExternalVariableReferenceError",
    "InvalidComponentDefinitionError",
    "NodeLocation",
    "PugTailError",
    "RecursiveComponentCallError",
    "ScopeAnalysisResult",
    "ScopeIsolation",
    "SlotDefinition",
    "SlotNotDefinedError",
    "Transformer",
    "TraversalError",
    "Traverser",
    "UnexpectedNodeTypeError",
    "VisitorMethods",
    "__version__",
    "deep_clone",
    "expand",
    "from_dict",
    "from_json",
    "to_dict",
    "to_json",
]
