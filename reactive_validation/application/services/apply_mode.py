"""ApplyMode enum for writing property results into the message store."""

from enum import Enum


class ApplyMode(Enum):
    """How new messages are combined with the stored ones.

    REPLACE: New messages replace the stored set (validation passes).
    MERGE: New messages are added to the stored set (manual messages).
    REMOVE_ONLY: Stored messages no longer reported are dropped, nothing
        new is added.
    """

    REPLACE = "replace"
    MERGE = "merge"
    REMOVE_ONLY = "remove_only"
