"""Progress use cases."""

from .post_count import PostCountRequest, PostCountResponse, PostCountUseCase, parse_count

__all__ = ["PostCountRequest", "PostCountResponse", "PostCountUseCase", "parse_count"]
