"""
stormgr API Service Launcher

Starts the control plane HTTP API (nodes, monitors, pools, client access).

Usage:
    python scripts/run_api_service.py --host 0.0.0.0 --port 8124

Environment Variables:
    STORMGR_API_PORT: API port (default: 8124)
    STORMGR_BIND_HOST: Bind address (default: 0.0.0.0)
    STORMGR_STORE_URL: Coordination store database URL
    STORMGR_CEPH_RESTFUL_URL / STORMGR_CEPH_RESTFUL_KEY: ceph-mgr restful endpoint and API key
"""
import argparse
import os
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from shared.logging_config import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the stormgr control plane API")
    parser.add_argument("--host", default=os.getenv("STORMGR_BIND_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.getenv("STORMGR_API_PORT", "8124")))
    parser.add_argument("--log-level", default=os.getenv("STORMGR_LOG_LEVEL", "INFO"))
    parser.add_argument("--log-file", default=os.getenv("STORMGR_LOG_FILE"))
    args = parser.parse_args()

    # config.py reads these at import time
    os.environ["STORMGR_API_PORT"] = str(args.port)
    os.environ["STORMGR_BIND_HOST"] = args.host

    logger = setup_logging("api", level=args.log_level, log_file=args.log_file)
    logger.info(f"API address: {args.host}:{args.port}")

    uvicorn.run("stormgr.service:create_app_from_env", factory=True, host=args.host, port=args.port, reload=False)


if __name__ == "__main__":
    main()
