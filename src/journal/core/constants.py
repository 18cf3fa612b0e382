"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_ROLE_NAME_LENGTH = 100
MAX_CAPABILITY_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 255

# Password requirements
MIN_PASSWORD_LENGTH = 12
MAX_PASSWORD_LENGTH = 128
BCRYPT_ROUNDS = 12

# Role names
MIN_ROLE_NAME_LENGTH = 2
SUPER_ADMIN_ROLE = "Super Admin"

# Pagination defaults
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Secret key requirements
MIN_SECRET_KEY_LENGTH = 32
DEFAULT_INSECURE_SECRET = "change-me-in-production"
