from abc import ABC, abstractmethod
from typing import Tuple


class Connection(ABC):
    """
    Administrative session to the storage cluster.

    One connection belongs to one request and must be shut down by its
    owner; use it as a context manager.
    """

    def connect(self) -> None:
        """Open the session. Raises ConnectionFailedError."""

    @abstractmethod
    def mon_command(self, args: bytes) -> Tuple[bytes, str]:
        """
        Send a JSON-encoded monitor command.

        Returns:
            (output buffer, informational status string)

        Raises:
            CommandFailedError: the cluster rejected the command
            ConnectionFailedError: the session broke
        """

    def shutdown(self) -> None:
        """Release the session."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
        return False


class ConnectionFactory(ABC):
    """Produces unopened connections for a cluster/user pair"""

    @abstractmethod
    def new_conn_with_cluster_and_user(self, cluster_name: str, user: str) -> Connection:
        """Build a connection; the caller opens it with connect()."""
