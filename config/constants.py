"""
Application Constants

Centralizes magic numbers used by the dictionary services and routers.

Usage:
    from config.constants import SCORE_EXACT_MATCH, DEFAULT_PAGE_SIZE
"""

# =============================================================================
# Roles
# =============================================================================

ROLE_ADMIN = "admin"
ROLE_CONTRIBUTOR = "contributor"

# Roles allowed to manage dictionary entries
DICTIONARY_MANAGER_ROLES = frozenset({ROLE_ADMIN, ROLE_CONTRIBUTOR})

# Roles allowed to manage user accounts
USER_MANAGER_ROLES = frozenset({ROLE_ADMIN})


# =============================================================================
# Search Relevance Scores
# =============================================================================

SCORE_EXACT_MATCH = 100        # query equals the word
SCORE_PREFIX_MATCH = 80        # word starts with the query
SCORE_WORD_SUBSTRING = 60      # query inside the word
SCORE_DEFINITION_MATCH = 40    # query inside the definition
SCORE_SHORT_DESC_MATCH = 20    # query inside the short description


# =============================================================================
# Pagination
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

SORT_ALPHABETICAL = "alphabetical"
SORT_CREATED = "created"


# =============================================================================
# Input Validation
# =============================================================================

PASSWORD_MIN_LENGTH = 6
USERNAME_MAX_LENGTH = 50
WORD_MAX_LENGTH = 100


# =============================================================================
# Rate Limits
# =============================================================================

RATE_LIMIT_AUTH = "10/minute"       # login / register / resend
RATE_LIMIT_SMILE = "30/minute"      # smile actions
RATE_LIMIT_DEFAULT = "200/minute"   # everything else
