class SnapshotError(Exception):
    """Base class for portfolio snapshot errors"""
    pass

class SnapshotLoadError(SnapshotError):
    """Raised when a snapshot file cannot be read or fails validation"""
    pass
