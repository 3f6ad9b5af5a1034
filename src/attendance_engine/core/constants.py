"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_MAX_TEACHING_WEEKS = 18
DEFAULT_LOG_FORMAT = "%(asctime)s - [%(name)s] - %(levelname)s - %(message)s"
LOG_FILE_MAX_BYTES = 5 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 5

# Permission refusal reasons returned by validate_approval_permission.
REASON_NOT_FOUND = "application not found"
REASON_NOT_PENDING = "application is not pending"
REASON_NOT_ASSIGNED = "not an assigned approver"
REASON_ALREADY_DECIDED = "already decided"
REASON_WAITING_EARLIER = "waiting for an earlier approver"
