"""Application constants and configuration values."""

# Database field lengths
MAX_STRING_LENGTH = 255
UUID_LENGTH = 36

# Database connection settings
DB_POOL_RECYCLE_SECONDS = 300  # 5 minutes

# Access control object/requester names stored in permissions rows
ACO_RESOURCE = "Resource"
ARO_USER = "User"
ARO_GROUP = "Group"

# Permission types
PERMISSION_READ = 1
PERMISSION_UPDATE = 7
PERMISSION_OWNER = 15

# Permission history actions
PERMISSION_HISTORY_ACTIONS = ("create", "update", "delete")

# Nightly cleanup job
CLEANUP_SCHEDULER_JOB_ID = "database_cleanup"
CLEANUP_MISFIRE_GRACE_SECONDS = 3600  # Allow 1 hour grace time if server was down
