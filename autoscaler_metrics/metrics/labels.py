"""Well-known label values for the control loop series.

Any string is accepted as a phase or failure type; these only keep call sites
from drifting apart on spelling.
"""

from enum import Enum


class LoopPhase(str, Enum):
    """Control loop fragments timed under the ``main`` label."""

    MAIN = "main"
    UPDATE_CLUSTER_STATE = "updateClusterState"
    SCALE_UP = "scaleUp"
    FIND_UNNEEDED = "findUnneeded"
    SCALE_DOWN = "scaleDown"

    def __str__(self) -> str:
        return self.value


class FailureType(str, Enum):
    """Reasons a node group scaling attempt failed."""

    CLOUD_PROVIDER_ERROR = "cloudProviderError"
    API_CALL_ERROR = "apiCallError"
    TIMEOUT = "timeout"
    QUOTA = "quota"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value
