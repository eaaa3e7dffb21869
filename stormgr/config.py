import os


def _int_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = str(os.getenv(name, "")).strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


API_PORT = _int_env("STORMGR_API_PORT", 8124)
BIND_HOST = str(os.getenv("STORMGR_BIND_HOST", "0.0.0.0")).strip()
STORE_URL = str(os.getenv("STORMGR_STORE_URL", "sqlite:///./stormgr/data/store.db")).strip()

CLUSTER_NAME = str(os.getenv("STORMGR_CLUSTER_NAME", "ceph")).strip()
ADMIN_USER = str(os.getenv("STORMGR_ADMIN_USER", "admin")).strip()

CEPH_RESTFUL_URL = str(os.getenv("STORMGR_CEPH_RESTFUL_URL", "https://127.0.0.1:8003")).strip()
CEPH_RESTFUL_KEY = str(os.getenv("STORMGR_CEPH_RESTFUL_KEY", "")).strip()
CEPH_VERIFY_TLS = _bool_env("STORMGR_CEPH_VERIFY_TLS", False)
COMMAND_TIMEOUT_SECONDS = _float_env("STORMGR_COMMAND_TIMEOUT", 30.0)

CONNECT_ATTEMPTS = _int_env("STORMGR_CONNECT_ATTEMPTS", 5)
CONNECT_RETRY_DELAY_SECONDS = _float_env("STORMGR_CONNECT_RETRY_DELAY", 1.0)
METRICS_RETRY_DELAY_SECONDS = _float_env("STORMGR_METRICS_RETRY_DELAY", 10.0)

DEFAULT_PG_COUNT = _int_env("STORMGR_DEFAULT_PG_COUNT", 100)
HEARTBEAT_TIMEOUT_SECONDS = _int_env("STORMGR_HEARTBEAT_TIMEOUT", 60)
INVENTORY_INTERVAL_SECONDS = _int_env("STORMGR_INVENTORY_INTERVAL", 30)
