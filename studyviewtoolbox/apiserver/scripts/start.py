"""Start the study view API server."""
from argparse import ArgumentParser

import uvicorn

from studyviewtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger('svt apiserver start')


if __name__=='__main__':
    parser = ArgumentParser(
        prog='svt apiserver start',
        description='Serve the study view aggregation API with uvicorn.',
    )
    parser.add_argument('--host', type=str, default='0.0.0.0')
    parser.add_argument('--port', type=int, default=8080)
    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='Number of worker processes. Each request opens its own database connection.',
    )
    args = parser.parse_args()
    logger.info('Starting API server on %s:%s.', args.host, args.port)
    uvicorn.run(
        'studyviewtoolbox.apiserver.app.main:app',
        host=args.host,
        port=args.port,
        workers=args.workers,
        root_path='/api',
    )
