"""Runtime configuration read from the environment."""
import os

# Active-balance counts at which the solver switches strategy.
SMALL_GROUP_MAX_USERS = int(os.getenv("SETTLE_SMALL_GROUP_MAX", "6"))
MEDIUM_GROUP_MAX_USERS = int(os.getenv("SETTLE_MEDIUM_GROUP_MAX", "12"))

# Magnitude bands used by the clustering strategy.
CLUSTER_COUNT = int(os.getenv("SETTLE_CLUSTER_COUNT", "3"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

_origins_env = os.getenv("ALLOWED_ORIGINS", "")
ALLOWED_ORIGINS = [o.strip() for o in _origins_env.split(",") if o.strip()] if _origins_env else ["*"]
