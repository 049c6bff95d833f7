"""File layout and defaults of a toolkit checkout."""

VERSION_PATTERN = r"\d+\.\d+\.\d+(-RC)?"

CONFIG_DIR = "config"
LIB_DIR = "lib"
SEED_DIR = "lib/config-seed"

RC_FILE = "config/overleaf.rc"
VERSION_FILE = "config/version"
OLD_VERSION_FILE = "config/__old-version"
SEED_VERSION_FILE = "lib/config-seed/version"
SEED_FILES = ("overleaf.rc", "variables.env", "version")
CHANGELOG_FILE = "CHANGELOG.md"

BASE_OVERLAY = "lib/docker-compose.base.yml"
OVERRIDE_OVERLAY = "config/docker-compose.override.yml"

# Merge order matters: later overlays override earlier ones.
FEATURE_OVERLAYS = (
    ("REDIS_ENABLED", "lib/docker-compose.redis.yml"),
    ("MONGO_ENABLED", "lib/docker-compose.mongo.yml"),
    ("SIBLING_CONTAINERS_ENABLED", "lib/docker-compose.sibling-containers.yml"),
    ("NGINX_ENABLED", "lib/docker-compose.nginx.yml"),
)

DEFAULT_PROJECT_NAME = "overleaf"
COMMUNITY_IMAGE = "sharelatex/sharelatex"
SERVER_PRO_IMAGE = "quay.io/sharelatex/sharelatex-pro"
DEFAULT_MONGO_IMAGE = "mongo:4.4"
DEFAULT_REDIS_IMAGE = "redis:6.2"
DEFAULT_DOCKER_SOCKET_PATH = "/var/run/docker.sock"
DEFAULT_LISTEN_IP = "0.0.0.0"
DEFAULT_PORT = "80"

RELEASE_NOTES_URL = "https://github.com/overleaf/overleaf/wiki#release-notes"
