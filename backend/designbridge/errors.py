"""Exception types raised by the design-to-code engine.

Analysis itself never fails on scene content; malformed nodes degrade to
defaults. These cover the few control-flow conditions callers must handle.
"""


class DesignBridgeError(Exception):
    """Base error for the design-to-code engine."""


class AnalysisCancelled(DesignBridgeError):
    """Raised when a batched analysis is cancelled between batches.

    No partial components are returned alongside it.
    """

    def __init__(self, processed: int, total: int):
        self.processed = processed
        self.total = total
        super().__init__(f"Analysis cancelled after {processed}/{total} top-level nodes")
