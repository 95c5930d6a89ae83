"""
Service configuration loaded from environment variables.
"""

import os


LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# 60 requests per minute per API key
RATE_LIMIT_PER_MINUTE = int(os.getenv('RATE_LIMIT_PER_MINUTE', '60'))

# Upper bound for combination enumeration over HTTP
MAX_COMBINATIONS = int(os.getenv('MAX_COMBINATIONS', '1000'))

REDIS_HOST = os.getenv('REDIS_HOST', 'localhost')
REDIS_PORT = int(os.getenv('REDIS_PORT', '6379'))
REDIS_DB = int(os.getenv('REDIS_DB', '0'))
REDIS_PASSWORD = os.getenv('REDIS_PASSWORD', None)
