# Log event codes
SHORT_URL_CREATED = 'SHORT_URL_CREATED'
SHORT_URL_REUSED = 'SHORT_URL_REUSED'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
SHORTCODE_CLAIM_LOST = 'SHORTCODE_CLAIM_LOST'
CODE_SPACE_EXHAUSTED = 'CODE_SPACE_EXHAUSTED'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
SHORT_URL_EXPIRED = 'SHORT_URL_EXPIRED'
SHORT_URL_RESOLVED = 'SHORT_URL_RESOLVED'
EXPIRED_CLEANUP = 'EXPIRED_CLEANUP'
