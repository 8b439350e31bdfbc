"""Session builder modules for review practice."""

from vocab_srs.session_builders.pool_types import (
    PresentationMode,
    ReviewItem,
    ReviewPools,
)
from vocab_srs.session_builders.review_builder import (
    build_review_pools,
    compose_session,
    create_review_session,
)

__all__ = [
    "PresentationMode",
    "ReviewItem",
    "ReviewPools",
    "build_review_pools",
    "compose_session",
    "create_review_session",
]
