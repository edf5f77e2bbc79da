DEFAULT_MANIFEST_FILE = 'marathon.json'
DEFAULT_CONFIG_FILE = 'marathon-deploy.conf'
DEFAULT_CONFIG_SECTION = 'marathon'

APPS_RESOURCE = 'v2/apps'

HTTP_CONNECT_TIMEOUT = 5.0
HTTP_READ_TIMEOUT = 10.0
HTTP_TIMEOUTS = (HTTP_CONNECT_TIMEOUT, HTTP_READ_TIMEOUT)

# Number of attempts, including the first one.
DEFAULT_RETRIES = 1
DEFAULT_RETRY_INTERVAL = 1.0
