import multiprocessing
import os
import sys

from starlette.config import Config
from starlette.datastructures import CommaSeparatedStrings

config = Config('.env') if os.path.exists('.env') else Config()

CPU_COUNT = multiprocessing.cpu_count()

DEBUG = config('DEBUG', cast=bool, default=False) or '--debug' in sys.argv
LOG_LEVEL = config('LOG_LEVEL', default='INFO')

# fetching source documents
FETCH_TIMEOUT = config('FETCH_TIMEOUT', cast=int, default=30)
ACCEPT_HEADER = config(
    'ACCEPT_HEADER',
    default='application/n-triples, text/plain;q=0.9, text/html;q=0.5, */*;q=0.1',
)
HTML_CONTENT_TYPES = config(
    'HTML_CONTENT_TYPES',
    cast=CommaSeparatedStrings,
    default='text/html,application/xhtml+xml',
)

# serving
BIND = config('BIND', default='0.0.0.0:8000')
WORKERS = config('WORKERS', cast=int, default=min(4, CPU_COUNT))

# documents with more statement lines than this are parsed in a process pool
PARALLEL_THRESHOLD = config('PARALLEL_THRESHOLD', cast=int, default=50_000)
