"""
Example configuration file for the Shinden client
Copy this file to config.py and fill in your actual values
"""

# === Site Configuration ===
SHINDEN_URL = 'https://shinden.pl'
REQUEST_TIMEOUT = 30  # Seconds

# Value of an already logged-in session cookie (optional).
# Leave empty to browse anonymously; never commit a real value.
SHINDEN_SESSION_COOKIE = ''

# === Logging Configuration ===
LOG_LEVEL = 'INFO'  # Options: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_FILE = 'logs/shinden_client.log'
MAPPING_TRACE = False  # True logs every field that failed to map (DEBUG level)
