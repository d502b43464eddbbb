class NetwardenError(Exception):
    """base class for exceptions in Netwarden."""
    pass

class ProfileError(NetwardenError):
    """raised when a profile operation is given an unknown or invalid profile."""
    def __init__(self, message: str, scoped_id: str = None):
        self.scoped_id = scoped_id
        super().__init__(message)
