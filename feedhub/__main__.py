import os
import sys
import signal

from feedhub.app import create_app, shutdown
from feedhub.logger import logger


def sigint_handler(*_):
    logger.info('Stopping feed service...')
    shutdown()
    sys.exit(0)


signal.signal(signal.SIGINT, sigint_handler)
signal.signal(signal.SIGTERM, sigint_handler)

app = create_app()
app.run(host=os.environ.get('HOST', '127.0.0.1'), port=int(os.environ.get('PORT', '3000')))
