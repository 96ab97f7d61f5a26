'''
Start the document search MCP servers listed in a YAML configuration.

Used by ``docsearch --serve``. Each enabled server entry is imported by
module path and its ``run()`` is called in a worker process.
'''

import os
import yaml
import time
from multiprocessing import Pool
from typing import List, NamedTuple
import logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)
logger.setLevel(logging.ERROR)

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), "configs", "default.yaml")
DEFAULT_TRANSPORT = 'streamable-http'
DEFAULT_HOST = '0.0.0.0'
DEFAULT_PORT = 3000
DEFAULT_PATH = '/mcp'
POLL_SECONDS = 10


class ServerArgs(NamedTuple):
    name: str
    transport: str
    host: str
    port: int
    path: str
    module: str
    options: dict


def resolve_module(module: str) -> str:
    """Expand the ``tasks.`` shorthand to a full module path under this package."""
    if module.startswith("docsearch."):
        return module
    if module.startswith("tasks."):
        return f"docsearch.mcp.servers.{module}"
    return module  # third-party absolute module path


def run_server(name: str,
               transport: str,
               host: str,
               port: int,
               path: str,
               module: str,
               options: dict = {}) -> bool:
    """
    Import a server module and block in its ``run()``.

    Returns:
        bool: True once the server exits cleanly, False if it could not be
        imported or raised while running.
    """
    if not module:
        logger.error(f"No module specified for server {name}")
        return False

    where = "stdio" if 'stdio' in transport else f"{host}:{port}{path} ({transport})"
    logger.info(f"Starting {name} on {where}")

    try:
        server_module = __import__(resolve_module(module), fromlist=['run'])
    except ImportError as e:
        logger.error(f"Failed to import module {module} for server {name}: {e}")
        return False

    try:
        server_module.run(transport=transport, host=host, port=port, path=path, options=options)
    except Exception as e:
        logger.error(f"Server {name} stopped with an error: {e}")
        return False

    logger.info(f"Server {name} exited")
    return True


def _read_yaml(path: str, label: str) -> dict:
    if not os.path.exists(path):
        raise FileNotFoundError(f"{label} not found at {path}")
    try:
        with open(path, 'r') as f:
            return yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        logger.error(f"Error parsing {label.lower()} {path}: {e}")
        raise


def load_config(config_path=None, extra_configs=None):
    """
    Load the server list, appending the ``servers`` of any extra files.

    Args:
        config_path (str, optional): Base configuration. Defaults to the
            bundled ``configs/default.yaml``.
        extra_configs (list[str], optional): More YAML files to merge.

    Returns:
        dict: Configuration with a ``servers`` list.
    """
    config = _read_yaml(config_path or DEFAULT_CONFIG, "Configuration file")
    for extra_path in (extra_configs or []):
        extra = _read_yaml(extra_path, "Extra config file")
        config.setdefault('servers', []).extend(extra.get('servers', []))
    return config


def prepare_server_args(config) -> List[ServerArgs]:
    """Turn the enabled, complete server entries into ``ServerArgs``."""
    server_args = []
    for entry in config.get('servers', []):
        name, module = entry.get('name'), entry.get('module')
        if not name or not module:
            logger.warning(f"Skipping server entry without a name or module: {entry}")
            continue
        if not entry.get('enabled', True):
            logger.info(f"Server {name} is disabled")
            continue
        server_args.append(ServerArgs(
            name=name,
            transport=entry.get('transport', DEFAULT_TRANSPORT),
            host=entry.get('host', DEFAULT_HOST),
            port=entry.get('port', DEFAULT_PORT),
            path=entry.get('path', DEFAULT_PATH),
            module=module,
            options=entry.get('options') or {},
        ))
    return server_args


def run_servers(config_path=None, extra_configs=None, log_level='INFO') -> List[str]:
    """
    Run every enabled server and wait until all of them have exited.

    A server that fails is reported once. Returns the names of the servers
    that failed.
    """
    logging.getLogger().setLevel(getattr(logging, log_level))
    logger.setLevel(getattr(logging, log_level))

    server_args = prepare_server_args(load_config(config_path, extra_configs=extra_configs))
    if not server_args:
        logger.warning("No enabled servers found in configuration")
        return []

    failed = []
    with Pool(processes=len(server_args)) as pool:
        running = {args.name: pool.apply_async(run_server, args) for args in server_args}
        logger.info(f"Started {len(running)} server(s): {', '.join(running)}")
        try:
            while running:
                for name, result in list(running.items()):
                    if not result.ready():
                        continue
                    del running[name]
                    if not result.get():
                        logger.error(f"Server {name} failed to start or crashed")
                        failed.append(name)
                if running:
                    time.sleep(POLL_SECONDS)
        except KeyboardInterrupt:
            logger.info("Received KeyboardInterrupt, terminating all servers...")
    return failed
