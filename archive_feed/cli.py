"""
Command-line entry point: serve podcast feeds for Internet Archive items
"""
import argparse
import logging
import os
from typing import Tuple

import uvicorn

from .config import Config
from .web.app import create_app

logger = logging.getLogger(__name__)


def parse_bind_address(value: str) -> Tuple[str, int]:
    """Split a bind address such as ``":8080"`` or ``"127.0.0.1:8080"``.

    An empty host binds every interface; a bare port is accepted too.
    Raises ``ValueError`` for a missing or out-of-range port.
    """
    value = str(value or '').strip()
    host, sep, port = value.rpartition(':')
    if not sep:
        host, port = '', value
    host = host.strip('[]') or '0.0.0.0'

    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port in address {value!r}")
    if not 0 < port_number < 65536:
        raise ValueError(f"port out of range in address {value!r}")
    return host, port_number


def main(argv=None):
    """Main CLI function"""
    parser = argparse.ArgumentParser(description='Podcast RSS feeds for Internet Archive items')
    parser.add_argument('address', nargs='?', help="Address to listen on, e.g. ':8080' or '127.0.0.1:8080'")
    parser.add_argument('--config', type=str, help='Path to the YAML configuration file')
    args = parser.parse_args(argv)

    # Without --config, fall back to config.yml or config.yaml in the working directory
    default_config_path = None
    if not args.config:
        cwd = os.getcwd()
        candidates = [
            os.path.join(cwd, 'config.yml'),
            os.path.join(cwd, 'config.yaml'),
        ]
        for candidate in candidates:
            if os.path.exists(candidate):
                default_config_path = candidate
                break
    config = Config(config_file=args.config or default_config_path)

    # CLI arguments take precedence
    config.update_from_args({
        'listen': args.address,
    })

    log_level = str(config.get('log_level', 'INFO')).upper()
    logging.basicConfig(level=log_level)

    try:
        host, port = parse_bind_address(config.get('listen'))
    except ValueError as e:
        parser.error(str(e))

    app = create_app(config)
    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=log_level.lower())


if __name__ == '__main__':
    main()
