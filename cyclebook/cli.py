"""
The entry point for the CLI tool
"""

import uvloop
from aiohttp import web

from cyclebook import logger
from cyclebook.app import build_app
from cyclebook.config import host, port
from cyclebook.version import __version__, name


def run():
    """Builds the app and serves it on the configured port."""
    uvloop.install()
    logger.info(f'Starting {name} %s!', __version__)
    web.run_app(build_app(), host=host, port=port)


if __name__ == '__main__':
    run()
