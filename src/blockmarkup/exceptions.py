"""Custom exceptions for blockmarkup."""


class BlockMarkupError(Exception):
    """Base exception for all blockmarkup errors."""

    pass


class ValidationError(BlockMarkupError):
    """Raised when document validation fails."""

    pass


class DepthError(ValidationError):
    """Raised when a list item is more than one level deeper than the block before it."""

    def __init__(self, block_key: str, depth: int, parent_depth: int) -> None:
        self.block_key = block_key
        self.depth = depth
        self.parent_depth = parent_depth
        super().__init__(
            f"Block '{block_key}' has depth {depth} but follows a block at depth "
            f"{parent_depth}; nested list items must be exactly one level deeper"
        )


class ParseError(BlockMarkupError):
    """Raised when a raw document or config file cannot be parsed."""

    pass
