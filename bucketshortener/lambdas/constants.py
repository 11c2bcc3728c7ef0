# Log event identifiers shared by the lambda handlers
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
MISSING_LONG_URL = 'MISSING_LONG_URL'
MISSING_SHORT_URL = 'MISSING_SHORT_URL'
MISSING_TOKEN = 'MISSING_TOKEN'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
STORAGE_UNAVAILABLE = 'STORAGE_UNAVAILABLE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
EXPAND_SUCCESS = 'EXPAND_SUCCESS'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
