"""Split workflows."""

from lightsplit.application.splits.preview import SplitRequest, build_split_preview

__all__ = [
    "SplitRequest",
    "build_split_preview",
]
