# Lambda response error / log event codes
CONFIGURATION_ERROR = 'CONFIGURATION_ERROR'
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
MISSING_URL = 'MISSING_URL'
INVALID_URL = 'INVALID_URL'
INVALID_EXPIRES_AT = 'INVALID_EXPIRES_AT'
CODE_SPACE_EXHAUSTED = 'CODE_SPACE_EXHAUSTED'
SHORT_URL_CREATED = 'SHORT_URL_CREATED'
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
INVALID_LIMIT = 'INVALID_LIMIT'
EXPIRED_CLEANUP = 'EXPIRED_CLEANUP'
