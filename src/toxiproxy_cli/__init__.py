"""toxiproxy-cli — command-line administration for a Toxiproxy server.

Lists, inspects, creates, deletes and toggles proxies, and manages the
toxics attached to their upstream and downstream streams.
"""

from loguru import logger

from toxiproxy_cli.version import __version__

# Library default: stay silent until the CLI opts in via configure_logging().
logger.disable("toxiproxy_cli")

__all__: list[str] = ["__version__"]
