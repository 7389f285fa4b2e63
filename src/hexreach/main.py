"""Distance server entry point.

Loads the engine configuration and serves the REST API with uvicorn.

Usage:
    python -m hexreach.main [--config config/engine.yaml] [--host H] [--port P]
    # or via entry point:
    hexreach
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional

import uvicorn

from hexreach.loaders.config_loader import DEFAULT_ENGINE_CONFIG_PATH, load_engine_config
from hexreach.network.rest_api import create_app

log = logging.getLogger(__name__)


def _parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hexreach", description="Hex map distance server")
    parser.add_argument("--config", default=DEFAULT_ENGINE_CONFIG_PATH,
                        help="engine config YAML (default: %(default)s)")
    parser.add_argument("--host", default=None, help="bind address (overrides config)")
    parser.add_argument("--port", type=int, default=None, help="REST port (overrides config)")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> None:
    """Entry point for the distance server."""
    args = _parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    log.info("=== Distance server starting ===")

    config = load_engine_config(args.config)
    host = args.host or config.host
    port = args.port or config.rest_port

    app = create_app(config)
    log.info("REST API on http://%s:%d (max distance %d)", host, port, config.max_distance)
    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    main()
