"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_MOBILE_LENGTH = 50
MAX_STATUS_LENGTH = 50
MAX_CODE_LENGTH = 100

# Password hashing
BCRYPT_ROUNDS = 12
DEFAULT_PASSWORD_SUFFIX = "@123"

# Invites
DEFAULT_INVITE_EXPIRY_HOURS = 48
INVITE_TOKEN_BYTES = 32

# GSTIN verification
GSTIN_LENGTH = 15
DEMO_GSTIN = "36AAACH7409R116"
DEFAULT_GST_API_BASE_URL = "https://sheet.gstincheck.co.in"
GST_RATE_LIMIT_REQUESTS = 10
GST_RATE_LIMIT_WINDOW_SECONDS = 60
GST_CACHE_TTL_SECONDS = 24 * 60 * 60

# Visitor check-in codes (I, O, 0 and 1 are left out)
VISITOR_CODE_PREFIX = "VIS-"
VISITOR_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
VISITOR_CODE_LENGTH = 8
VISITOR_CODE_MAX_ATTEMPTS = 10

# Coupons
COUPON_SUFFIX_LENGTH = 6
COUPON_MAX_ATTEMPTS = 5
COUPON_PREFIX_MAX_LENGTH = 8

# Phone matching
PHONE_SUFFIX_LENGTH = 10

# QR images
QR_IMAGE_SIZE = 300
QR_BORDER = 2

# Pagination defaults
DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 500

# Ground layout uploads
GROUND_LAYOUT_PREFIX = "ground-layout-"
GROUND_LAYOUT_CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".pdf": "application/pdf",
}
MAX_UPLOAD_BYTES = 10 * 1024 * 1024
