"""
Exception hierarchy for model transformer errors.

All of these signal programmer or configuration mistakes. Nothing in the
package retries or recovers from them.
"""


class TransformerError(Exception):
    """Base exception for all transformer errors."""

    pass


class TransformerNotFoundError(TransformerError):
    """Raised when no transformer can be determined for an object."""

    pass


class InvalidTransformerError(TransformerError):
    """Raised when a resolved value is not a Transformer instance."""

    pass


class UnknownTransformationError(TransformerError):
    """Raised when an alternate transformation is not defined on a transformer."""

    pass


class ResolutionError(TransformerError):
    """Raised when a class cannot be imported or instantiated."""

    def __init__(self, message: str, target=None, original_error: Exception | None = None):
        super().__init__(message)
        self.target = target
        self.original_error = original_error


class TransformerConfigurationError(TransformerError):
    """Raised when settings or transformer class definitions are invalid."""

    pass


class RelationCycleOrDepthExceeded(TransformerError):
    """Base for errors raised by the relation recursion guard."""

    pass


class RelationDepthExceededError(RelationCycleOrDepthExceeded):
    """Raised when nested relations go deeper than the configured maximum."""

    def __init__(self, path: str, max_depth: int):
        self.path = path
        self.max_depth = max_depth
        super().__init__(
            f"Relation path '{path}' exceeds the maximum nesting depth of {max_depth}"
        )


class RelationCycleError(RelationCycleOrDepthExceeded):
    """Raised when the same object and relation are visited twice on one path."""

    def __init__(self, relation: str, obj):
        self.relation = relation
        self.obj = obj
        super().__init__(
            f"Cyclic relation detected: '{relation}' on {type(obj).__name__} "
            f"was already expanded higher up the same relation path"
        )
