"""Header names used by Azure Blob Storage requests and responses."""

# Standard HTTP headers
CONTENT_LENGTH = "Content-Length"
CONTENT_TYPE = "Content-Type"
CONTENT_ENCODING = "Content-Encoding"
CONTENT_LANGUAGE = "Content-Language"
CONTENT_MD5 = "Content-MD5"
CACHE_CONTROL = "Cache-Control"
DATE = "Date"
ETAG = "ETag"
LAST_MODIFIED = "Last-Modified"

# Azure specific headers
VERSION = "x-ms-version"
MS_DATE = "x-ms-date"
CLIENT_REQUEST_ID = "x-ms-client-request-id"
REQUEST_ID = "x-ms-request-id"
META_PREFIX = "x-ms-meta-"
BLOB_PUBLIC_ACCESS = "x-ms-blob-public-access"
HAS_IMMUTABILITY_POLICY = "x-ms-has-immutability-policy"
HAS_LEGAL_HOLD = "x-ms-has-legal-hold"
BLOB_TYPE = "x-ms-blob-type"
ACCESS_TIER = "x-ms-access-tier"
CREATION_TIME = "x-ms-creation-time"
SERVER_ENCRYPTED = "x-ms-server-encrypted"
REQUEST_SERVER_ENCRYPTED = "x-ms-request-server-encrypted"

# Lease headers
LEASE_ID = "x-ms-lease-id"
LEASE_ACTION = "x-ms-lease-action"
LEASE_DURATION = "x-ms-lease-duration"
LEASE_STATE = "x-ms-lease-state"
LEASE_STATUS = "x-ms-lease-status"
LEASE_TIME = "x-ms-lease-time"
LEASE_BREAK_PERIOD = "x-ms-lease-break-period"
PROPOSED_LEASE_ID = "x-ms-proposed-lease-id"
