"""Labels, reserved names and defaults of the client configuration."""

# Proxy types
PROXY_TYPE_TCP = "tcp"
PROXY_TYPE_UDP = "udp"
PROXY_TYPE_XTCP = "xtcp"
PROXY_TYPE_STCP = "stcp"
PROXY_TYPE_SUDP = "sudp"
PROXY_TYPE_TCPMUX = "tcpmux"
PROXY_TYPE_HTTP = "http"
PROXY_TYPE_HTTPS = "https"

PROXY_TYPES = (
    PROXY_TYPE_TCP,
    PROXY_TYPE_UDP,
    PROXY_TYPE_XTCP,
    PROXY_TYPE_STCP,
    PROXY_TYPE_SUDP,
    PROXY_TYPE_TCPMUX,
    PROXY_TYPE_HTTP,
    PROXY_TYPE_HTTPS,
)

# Proxy types that can be published as a secret tunnel and reached by a visitor
VISITOR_PROXY_TYPES = (PROXY_TYPE_XTCP, PROXY_TYPE_STCP, PROXY_TYPE_SUDP)

# Proxy types whose ports may be written as a range
RANGE_PROXY_TYPES = (PROXY_TYPE_TCP, PROXY_TYPE_UDP)

ROLE_SERVER = "server"
ROLE_VISITOR = "visitor"

# Authentication methods
AUTH_TOKEN = "token"
AUTH_OIDC = "oidc"

TOKEN_SOURCE_FILE = "file"

# Plugin kinds
PLUGIN_HTTP2HTTPS = "http2https"
PLUGIN_HTTP2HTTP = "http2http"
PLUGIN_HTTPS2HTTPS = "https2https"
PLUGIN_HTTPS2HTTP = "https2http"
PLUGIN_TLS2RAW = "tls2raw"
PLUGIN_HTTP_PROXY = "http_proxy"
PLUGIN_SOCKS5 = "socks5"
PLUGIN_STATIC_FILE = "static_file"
PLUGIN_UNIX_DOMAIN_SOCKET = "unix_domain_socket"

# Health check kinds
HEALTH_CHECK_TCP = "tcp"
HEALTH_CHECK_HTTP = "http"

# Transport protocols
PROTO_TCP = "tcp"
PROTO_KCP = "kcp"
PROTO_QUIC = "quic"
PROTO_WEBSOCKET = "websocket"
PROTO_WSS = "wss"

# Auto delete methods
DELETE_ABSOLUTE = "absolute"
DELETE_RELATIVE = "relative"

DELETE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Log levels
LOG_LEVEL_TRACE = "trace"
LOG_LEVEL_DEBUG = "debug"
LOG_LEVEL_INFO = "info"
LOG_LEVEL_WARN = "warn"
LOG_LEVEL_ERROR = "error"

DEFAULT_SERVER_PORT = 7000
DEFAULT_LOG_MAX_DAYS = 3

# Section prefix that marks a range proxy in the legacy format
RANGE_PREFIX = "range:"

# Reserved blocks holding the client-common settings
LEGACY_COMMON_SECTION = "common"
MODERN_COMMON_TABLE = "client"
MODERN_PROXIES_TABLE = "proxies"

# Side-map key prefixes
META_PREFIX = "meta_"
HEADER_PREFIX = "header_"
RESPONSE_HEADER_PREFIX = "response_header_"
PLUGIN_HEADER_PREFIX = "plugin_header_"
HEALTH_CHECK_HEADER_PREFIX = "health_check_header_"
OIDC_ADDITIONAL_PREFIX = "oidc_additional_"

EXT_LEGACY = ".ini"
EXT_MODERN = ".toml"
